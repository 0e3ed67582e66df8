# src/sra2otu/plan/types.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class Artifacts:
    work_dir: Path
    manifest: Path
    demux_qza: Path          # imported paired-end reads
    table_qza: Path
    rep_seqs_qza: Path
    stats_qza: Path          # DADA2 denoising stats
    taxonomy_qza: Path
    otu_dir: Path
    table_export_dir: Path
    taxonomy_export_dir: Path
    table_biom: Path         # written by `tools export` into table_export_dir
    taxonomy_tsv: Path       # written by `tools export` into taxonomy_export_dir
    otu_table_tsv: Path

    @classmethod
    def from_work_dir(cls, work_dir: Path) -> "Artifacts":
        w = work_dir
        otu = w / "otu"
        return cls(
            work_dir=w,
            manifest=w / "samples.manifest",
            demux_qza=w / "data.qza",
            table_qza=w / "table.qza",
            rep_seqs_qza=w / "rep-seqs.qza",
            stats_qza=w / "stats.qza",
            taxonomy_qza=w / "taxonomy.qza",
            otu_dir=otu,
            table_export_dir=otu / "table",
            taxonomy_export_dir=otu / "taxonomy",
            table_biom=otu / "table" / "feature-table.biom",
            taxonomy_tsv=otu / "taxonomy" / "taxonomy.tsv",
            otu_table_tsv=otu / "otu_table.tsv",
        )


def read_paths(work_dir: Path, accession: str) -> Tuple[Path, Path]:
    """Forward/reverse FASTQ paths fasterq-dump --split-3 writes for one accession."""
    d = work_dir / accession
    return d / f"{accession}_1.fastq", d / f"{accession}_2.fastq"


def archive_path(work_dir: Path, accession: str) -> Path:
    return work_dir / accession / f"{accession}.sra"


@dataclass(frozen=True)
class Step:
    name: str
    title: str
    inputs: Tuple[Path, ...]
    outputs: Tuple[Path, ...]

    def outputs_exist(self) -> bool:
        return bool(self.outputs) and all(p.exists() for p in self.outputs)

    def missing_inputs(self) -> Tuple[Path, ...]:
        return tuple(p for p in self.inputs if not p.exists())


@dataclass(frozen=True)
class Plan:
    work_dir: Path
    artifacts: Artifacts
    steps: Tuple[Step, ...]

    def step(self, name: str) -> Step:
        for s in self.steps:
            if s.name == name:
                return s
        raise KeyError(name)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self.steps)
