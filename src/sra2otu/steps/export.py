# src/sra2otu/steps/export.py
from __future__ import annotations

from sra2otu.config.schema import Settings
from sra2otu.plan.types import Artifacts
from sra2otu.tools import biom, qiime
from sra2otu.utils.logger import get_logger

LOG = get_logger("export")


def export_artifacts(settings: Settings, a: Artifacts) -> None:
    """Feature table → otu/table (BIOM), taxonomy → otu/taxonomy (TSV)."""
    if not settings.dry_run:
        a.table_export_dir.mkdir(parents=True, exist_ok=True)
        a.taxonomy_export_dir.mkdir(parents=True, exist_ok=True)
    for src, dest in ((a.table_qza, a.table_export_dir), (a.taxonomy_qza, a.taxonomy_export_dir)):
        qiime.export_data(
            input_path=src,
            output_path=dest,
            executable=settings.qiime,
            dry_run=settings.dry_run,
            show_stdout=settings.show_tools,
        )


def convert_table(settings: Settings, a: Artifacts) -> None:
    # drop output from an earlier run
    if not settings.dry_run:
        a.otu_table_tsv.unlink(missing_ok=True)
    biom.convert_to_tsv(
        input_biom=a.table_biom,
        output_tsv=a.otu_table_tsv,
        executable=settings.biom,
        dry_run=settings.dry_run,
        show_stdout=settings.show_tools,
    )
    LOG.info("OTU table written → %s", a.otu_table_tsv)
