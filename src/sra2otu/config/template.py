# src/sra2otu/config/template.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

TEMPLATE = """\
# sra2otu configuration
# Relative paths are resolved against the directory holding this file.

# Executables; bare names are looked up on PATH.
prefetch: prefetch
fasterq_dump: fasterq-dump
qiime: qiime
biom: biom

# Working directory; every output lands here.
work_dir: {work_dir}
# One run accession per line. Unset means <work_dir>/srr.txt; a relative
# path given here is relative to this file, not to work_dir.
{accession_list_line}
# Pre-trained classify-sklearn classifier (.qza).
classifier: {classifier}

# Parallel downloads, DADA2 threads and classifier jobs.
cpu: {cpu}
# fasterq_threads: 6

# DADA2 trimming/truncation; 0 disables.
trim_left_f: 0
trim_left_r: 0
trunc_len_f: 0
trunc_len_r: 0

# Fail if a manifest row points at missing or empty FASTQs.
strict_manifest: false
# Continue past failed downloads (failures are reported together).
keep_going: false
# Skip downloads whose reads exist and steps whose outputs exist.
resume: false
"""


def render_template(
    *,
    work_dir: str = ".",
    accession_list: Optional[str] = None,
    classifier: str = "gg-13-8-99-nb-classifier.qza",
    cpu: int = 4,
) -> str:
    return TEMPLATE.format(
        work_dir=work_dir,
        accession_list_line=(
            f"accession_list: {accession_list}" if accession_list else "# accession_list: srr.txt"
        ),
        classifier=classifier,
        cpu=cpu,
    )


def write_config_template(path: Path, *, force: bool = False, **values) -> Path:
    if path.exists() and not force:
        raise FileExistsError(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_template(**values), encoding="utf-8")
    return path
