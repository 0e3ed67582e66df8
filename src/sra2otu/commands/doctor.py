# src/sra2otu/commands/doctor.py
from __future__ import annotations

import shutil
import sys
from typing import List, Tuple

from sra2otu.commands.common import settings_from_args
from sra2otu.config.schema import Settings
from sra2otu.utils.logger import get_logger

LOG = get_logger("doctor")


def setup_parser(subparsers, parent) -> None:
    p = subparsers.add_parser(
        "doctor", parents=[parent],
        help="Preflight checks: executables, SRR list, classifier.",
    )
    p.set_defaults(func=run)


def _ok(x: bool) -> str:
    return "OK" if x else "MISSING"


def check(settings: Settings) -> List[Tuple[str, bool, str]]:
    """(label, ok, detail) for every external dependency of a run."""
    results: List[Tuple[str, bool, str]] = []
    for label, exe in (
        ("prefetch", settings.prefetch),
        ("fasterq-dump", settings.fasterq_dump),
        ("qiime", settings.qiime),
        ("biom", settings.biom),
    ):
        found = shutil.which(exe)
        results.append((label, bool(found), found or exe))
    results.append(("SRR list", settings.accession_list.is_file(), str(settings.accession_list)))
    if settings.classifier is None:
        results.append(("classifier", False, "not configured"))
    else:
        results.append(("classifier", settings.classifier.is_file(), str(settings.classifier)))
    return results


def run(args) -> None:
    settings = settings_from_args(args)
    bad = []
    for label, ok, detail in check(settings):
        print(f"[check] {label}: {_ok(ok)} ({detail})")
        if not ok:
            bad.append(label)
    if bad:
        LOG.error("Missing: %s", ", ".join(bad))
        print("error: missing " + ", ".join(bad), file=sys.stderr)
        sys.exit(2)
    print("[ok] environment looks good.")
