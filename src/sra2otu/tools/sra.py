# src/sra2otu/tools/sra.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from sra2otu.utils.runner import run_tool


def prefetch(
    accession: str,
    *,
    output_dir: Path,
    executable: str = "prefetch",
    dry_run: bool = False,
    show_stdout: bool = False,
) -> None:
    """Download <output_dir>/<accession>/<accession>.sra."""
    cmd: list[str] = [
        executable, accession,
        "--output-directory", str(output_dir),
    ]
    run_tool(f"prefetch {accession}", cmd, dry_run=dry_run, show_stdout=show_stdout, cwd=output_dir)


def fasterq_dump(
    archive: Path,
    *,
    outdir: Path,
    executable: str = "fasterq-dump",
    threads: Optional[int] = None,
    dry_run: bool = False,
    show_stdout: bool = False,
) -> None:
    """Split an .sra archive into <acc>_1.fastq / <acc>_2.fastq (singletons to <acc>.fastq)."""
    cmd: list[str] = [
        executable,
        "--split-3",
        "--outdir", str(outdir),
    ]
    if threads:
        cmd += ["--threads", str(threads)]
    cmd.append(str(archive))
    run_tool(f"fasterq-dump {archive.stem}", cmd, dry_run=dry_run, show_stdout=show_stdout, cwd=outdir.parent)
