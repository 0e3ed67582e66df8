# src/sra2otu/tools/biom.py
from __future__ import annotations

from pathlib import Path

from sra2otu.utils.runner import run_tool


def convert_to_tsv(
    *,
    input_biom: Path,
    output_tsv: Path,
    executable: str = "biom",
    dry_run: bool = False,
    show_stdout: bool = False,
) -> None:
    cmd: list[str] = [
        executable, "convert",
        "-i", str(input_biom),
        "-o", str(output_tsv),
        "--to-tsv",
    ]
    run_tool("biom convert", cmd, dry_run=dry_run, show_stdout=show_stdout)
