from sra2otu.cli import main

main()
