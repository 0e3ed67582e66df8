# src/sra2otu/steps/driver.py
from __future__ import annotations

from sra2otu.config.schema import Settings
from sra2otu.errors import ConfigurationError, ManifestError
from sra2otu.plan.types import Artifacts
from sra2otu.tools import qiime
from sra2otu.utils.logger import get_logger
from sra2otu.utils.manifest import read_manifest_sample_ids

LOG = get_logger("driver")


def import_reads(settings: Settings, a: Artifacts) -> None:
    if not settings.dry_run:
        ids = read_manifest_sample_ids(a.manifest)
        if not ids:
            raise ManifestError(f"Manifest has no samples: {a.manifest}")
        if len(set(ids)) != len(ids):
            raise ManifestError(f"Manifest repeats sample ids: {a.manifest}")
        LOG.info("Manifest lists %d sample(s)", len(ids))
    qiime.import_data(
        input_path=a.manifest,
        output_path=a.demux_qza,
        import_type=settings.import_type,
        input_format=settings.input_format,
        executable=settings.qiime,
        dry_run=settings.dry_run,
        show_stdout=settings.show_tools,
    )
    LOG.info("Import complete → %s", a.demux_qza)


def denoise(settings: Settings, a: Artifacts) -> None:
    qiime.dada2_denoise_paired(
        input_seqs=a.demux_qza,
        output_table=a.table_qza,
        output_rep_seqs=a.rep_seqs_qza,
        output_stats=a.stats_qza,
        trim_left_f=settings.trim_left_f,
        trim_left_r=settings.trim_left_r,
        trunc_len_f=settings.trunc_len_f,
        trunc_len_r=settings.trunc_len_r,
        n_threads=settings.cpu,
        executable=settings.qiime,
        dry_run=settings.dry_run,
        show_stdout=settings.show_tools,
    )
    LOG.info("DADA2 complete → %s, %s", a.table_qza, a.rep_seqs_qza)


def classify(settings: Settings, a: Artifacts) -> None:
    if settings.classifier is None:
        raise ConfigurationError("classifier is not configured; set it in the config file or pass --classifier")
    qiime.classify_sklearn(
        input_reads=a.rep_seqs_qza,
        input_classifier=settings.classifier,
        output_classification=a.taxonomy_qza,
        n_jobs=settings.cpu,
        executable=settings.qiime,
        dry_run=settings.dry_run,
        show_stdout=settings.show_tools,
    )
    LOG.info("Classification complete → %s", a.taxonomy_qza)
