# src/sra2otu/utils/manifest.py
from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Dict, List

from sra2otu.errors import ManifestError
from sra2otu.plan.types import read_paths
from sra2otu.utils.logger import get_logger

LOG = get_logger("manifest")

FIELDNAMES = [
    "sample-id",
    "forward-absolute-filepath",
    "reverse-absolute-filepath",
]


def discover_accession_dirs(work_dir: Path, pattern: str) -> List[Path]:
    """Immediate subdirectories whose name matches pattern, sorted by name."""
    if not work_dir.is_dir():
        raise NotADirectoryError(work_dir)
    rx = re.compile(pattern)
    return sorted(
        (d for d in work_dir.iterdir() if d.is_dir() and rx.fullmatch(d.name)),
        key=lambda d: d.name,
    )


def _problems(fwd: Path, rev: Path) -> List[str]:
    out = []
    for p in (fwd, rev):
        if not p.is_file():
            out.append(f"missing {p.name}")
        elif p.stat().st_size == 0:
            out.append(f"empty {p.name}")
    return out


def build_rows(work_dir: Path, pattern: str, *, strict: bool = False) -> List[Dict[str, str]]:
    """
    One row per accession folder. Paths follow the fasterq-dump naming
    convention and are only checked when strict=True.
    """
    base = work_dir.resolve()
    rows: List[Dict[str, str]] = []
    bad: Dict[str, List[str]] = {}
    for d in discover_accession_dirs(base, pattern):
        sid = d.name
        fwd, rev = read_paths(base, sid)
        if strict:
            issues = _problems(fwd, rev)
            if issues:
                bad[sid] = issues
                continue
        rows.append({
            "sample-id": sid,
            "forward-absolute-filepath": str(fwd),
            "reverse-absolute-filepath": str(rev),
        })
    if bad:
        detail = "; ".join(f"{k}: {', '.join(v)}" for k, v in bad.items())
        raise ManifestError(f"{len(bad)} accession folder(s) lack usable paired reads ({detail})")
    return rows


def generate_manifest(
    work_dir: Path,
    manifest_path: Path,
    *,
    pattern: str = r"^[SED]RR\d+$",
    strict: bool = False,
) -> Path:
    rows = build_rows(work_dir, pattern, strict=strict)
    if not rows:
        raise ManifestError(f"No accession folders matching {pattern!r} found under {work_dir}")

    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    with manifest_path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.DictWriter(
            fh,
            fieldnames=FIELDNAMES,
            delimiter="\t",
            lineterminator="\n",
        )
        writer.writeheader()
        writer.writerows(rows)

    LOG.info("Manifest written → %s (%d rows)", manifest_path, len(rows))
    return manifest_path


def read_manifest_sample_ids(manifest_path: Path) -> List[str]:
    with manifest_path.open("r", encoding="utf-8") as fh:
        lines = [ln.rstrip("\n") for ln in fh if ln.strip()]
    if not lines:
        raise ManifestError(f"Manifest is empty: {manifest_path}")
    header = [h.strip() for h in lines[0].split("\t")]
    try:
        idx = header.index("sample-id")
    except ValueError as e:
        raise ManifestError("Manifest missing 'sample-id' header.") from e
    return [ln.split("\t")[idx].strip() for ln in lines[1:]]
