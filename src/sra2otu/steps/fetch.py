# src/sra2otu/steps/fetch.py
from __future__ import annotations

import shutil
from pathlib import Path

from sra2otu.config.schema import Settings
from sra2otu.errors import FetchError
from sra2otu.plan.types import archive_path, read_paths
from sra2otu.tools import sra
from sra2otu.utils.accessions import read_accessions
from sra2otu.utils.logger import get_logger
from sra2otu.utils.pool import PoolReport, run_bounded

LOG = get_logger("fetch")


def remove_archive(archive: Path, *, dry_run: bool = False) -> None:
    if dry_run:
        LOG.debug("[dry-run] would remove %s", archive)
        return
    try:
        archive.unlink()
        LOG.debug("Removed %s", archive)
    except FileNotFoundError:
        pass


def reads_present(work_dir: Path, accession: str) -> bool:
    """True when both mates of a run exist and are non-empty."""
    return all(p.is_file() and p.stat().st_size > 0 for p in read_paths(work_dir, accession))


def fetch_accession(accession: str, settings: Settings) -> None:
    """prefetch → fasterq-dump --split-3 → drop the .sra, for one run."""
    work = settings.work_dir
    if settings.resume and reads_present(work, accession):
        LOG.info("%s: reads present, skipping download", accession)
        return
    archive = archive_path(work, accession)
    try:
        sra.prefetch(
            accession,
            output_dir=work,
            executable=settings.prefetch,
            dry_run=settings.dry_run,
            show_stdout=settings.show_tools,
        )
        sra.fasterq_dump(
            archive,
            outdir=work / accession,
            executable=settings.fasterq_dump,
            threads=settings.fasterq_threads,
            dry_run=settings.dry_run,
            show_stdout=settings.show_tools,
        )
    finally:
        remove_archive(archive, dry_run=settings.dry_run)


def discard_failed(work_dir: Path, accessions, *, dry_run: bool = False) -> None:
    """Remove the folders of failed runs so the manifest scan cannot pick them up."""
    for acc in accessions:
        d = work_dir / acc
        if dry_run:
            LOG.debug("[dry-run] would remove %s", d)
            continue
        if d.is_dir():
            shutil.rmtree(d)
            LOG.debug("Removed partial download %s", d)


def fetch_all(settings: Settings) -> PoolReport:
    accessions = read_accessions(settings.accession_list)
    LOG.info("Fetching %d accession(s) with %d parallel job(s)", len(accessions), min(settings.cpu, len(accessions)))

    report = run_bounded(
        accessions,
        lambda acc: fetch_accession(acc, settings),
        max_workers=settings.cpu,
    )

    if report.ok:
        LOG.info("Fetched %d/%d accession(s)", len(report.succeeded), report.total)
        return report
    if not settings.keep_going:
        raise FetchError(report.failed)
    discard_failed(settings.work_dir, report.failed, dry_run=settings.dry_run)
    LOG.warning(
        "%d of %d accession(s) failed and were left out: %s",
        len(report.failed), report.total, ", ".join(report.failed),
    )
    return report
