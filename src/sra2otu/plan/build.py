# src/sra2otu/plan/build.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from sra2otu.config.schema import Settings
from sra2otu.plan.types import Artifacts, Plan, Step

STEP_ORDER = ("fetch", "manifest", "import", "denoise", "classify", "export", "convert")


def _present(*paths: Optional[Path]) -> Tuple[Path, ...]:
    return tuple(p for p in paths if p is not None)


def build_plan(settings: Settings) -> Plan:
    """Ordered steps with their declared artifact contracts (inputs → outputs)."""
    a = Artifacts.from_work_dir(settings.work_dir)
    steps = (
        Step("fetch", "downloading and converting SRA runs to FASTQ",
             inputs=(settings.accession_list,), outputs=()),
        Step("manifest", "generating QIIME 2 manifest file",
             inputs=(), outputs=(a.manifest,)),
        Step("import", "importing FASTQ files to QIIME 2",
             inputs=(a.manifest,), outputs=(a.demux_qza,)),
        Step("denoise", "denoising with DADA2",
             inputs=(a.demux_qza,), outputs=(a.table_qza, a.rep_seqs_qza, a.stats_qza)),
        Step("classify", "classifying representative sequences",
             inputs=_present(settings.classifier, a.rep_seqs_qza), outputs=(a.taxonomy_qza,)),
        Step("export", "exporting feature table and taxonomy",
             inputs=(a.table_qza, a.taxonomy_qza), outputs=(a.table_biom, a.taxonomy_tsv)),
        Step("convert", "converting feature table to TSV",
             inputs=(a.table_biom,), outputs=(a.otu_table_tsv,)),
    )
    return Plan(work_dir=settings.work_dir, artifacts=a, steps=steps)
