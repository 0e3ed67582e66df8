# src/sra2otu/commands/run.py
from __future__ import annotations

from sra2otu.commands.common import settings_from_args
from sra2otu.plan.types import Artifacts
from sra2otu.steps.runner import run_pipeline
from sra2otu.utils.logger import get_logger

LOG = get_logger("run")


def setup_parser(subparsers, parent) -> None:
    p = subparsers.add_parser(
        "run", parents=[parent],
        help="End-to-end: fetch → manifest → import → DADA2 → classify → export → TSV.",
        description=(
            "Download every accession in the SRR list with prefetch/fasterq-dump, "
            "build a PairedEndFastqManifestPhred33V2 manifest, import, denoise with DADA2, "
            "classify with a pre-trained sklearn classifier and export an OTU table."
        ),
    )
    p.set_defaults(func=run)


def run(args) -> None:
    settings = settings_from_args(args)
    executed = run_pipeline(settings)
    LOG.debug("Executed steps: %s", ", ".join(executed))
    print(f"[ok] OTU table → {Artifacts.from_work_dir(settings.work_dir).otu_table_tsv}")
