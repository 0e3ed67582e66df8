# src/sra2otu/tools/qiime.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from sra2otu.utils.runner import run_tool


# ---------------------------
# Import / export
# ---------------------------

def import_data(
    input_path: Path,
    output_path: Path,
    import_type: str = "SampleData[PairedEndSequencesWithQuality]",
    input_format: Optional[str] = "PairedEndFastqManifestPhred33V2",
    *,
    executable: str = "qiime",
    dry_run: bool = False,
    show_stdout: bool = False,
) -> None:
    cmd: list[str] = [
        executable, "tools", "import",
        "--type", import_type,
        "--input-path", str(input_path),
        "--output-path", str(output_path),
    ]
    if input_format:
        cmd += ["--input-format", input_format]
    run_tool("qiime tools import", cmd, dry_run=dry_run, show_stdout=show_stdout)


def export_data(
    input_path: Path,
    output_path: Path,
    *,
    executable: str = "qiime",
    dry_run: bool = False,
    show_stdout: bool = False,
) -> None:
    cmd: list[str] = [
        executable, "tools", "export",
        "--input-path", str(input_path),
        "--output-path", str(output_path),
    ]
    run_tool("qiime tools export", cmd, dry_run=dry_run, show_stdout=show_stdout)


# ---------------------------
# DADA2
# ---------------------------

def dada2_denoise_paired(
    *,
    input_seqs: Path,
    output_table: Path,
    output_rep_seqs: Path,
    output_stats: Path,
    trim_left_f: int = 0,
    trim_left_r: int = 0,
    trunc_len_f: int = 0,
    trunc_len_r: int = 0,
    n_threads: int = 1,
    executable: str = "qiime",
    dry_run: bool = False,
    show_stdout: bool = False,
) -> None:
    cmd: list[str] = [
        executable, "dada2", "denoise-paired",
        "--i-demultiplexed-seqs", str(input_seqs),
        "--p-trim-left-f", str(trim_left_f),
        "--p-trim-left-r", str(trim_left_r),
        "--p-trunc-len-f", str(trunc_len_f),
        "--p-trunc-len-r", str(trunc_len_r),
        "--o-table", str(output_table),
        "--o-representative-sequences", str(output_rep_seqs),
        "--o-denoising-stats", str(output_stats),
        "--p-n-threads", str(n_threads),
    ]
    run_tool("qiime dada2 denoise-paired", cmd, dry_run=dry_run, show_stdout=show_stdout)


# ---------------------------
# Classification
# ---------------------------

def classify_sklearn(
    *,
    input_reads: Path,
    input_classifier: Path,
    output_classification: Path,
    n_jobs: int = 1,
    executable: str = "qiime",
    dry_run: bool = False,
    show_stdout: bool = False,
) -> None:
    cmd: list[str] = [
        executable, "feature-classifier", "classify-sklearn",
        "--i-classifier", str(input_classifier),
        "--i-reads", str(input_reads),
        "--o-classification", str(output_classification),
        "--p-n-jobs", str(n_jobs),
    ]
    run_tool("qiime feature-classifier classify-sklearn", cmd, dry_run=dry_run, show_stdout=show_stdout)
