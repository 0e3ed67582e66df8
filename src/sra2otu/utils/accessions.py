# src/sra2otu/utils/accessions.py
from __future__ import annotations

from pathlib import Path
from typing import List

from sra2otu.errors import ConfigurationError
from sra2otu.utils.logger import get_logger

LOG = get_logger("accessions")


def read_accessions(path: Path) -> List[str]:
    """
    One accession per line. Blank lines and '#' comments are skipped;
    duplicates keep their first position.
    """
    if not path.is_file():
        raise ConfigurationError(f"SRR list file not found: {path}")

    seen: set[str] = set()
    out: List[str] = []
    with path.open("r", encoding="utf-8") as fh:
        for ln in fh:
            acc = ln.strip()
            if not acc or acc.startswith("#"):
                continue
            if acc in seen:
                LOG.warning("Duplicate accession %s in %s (ignored)", acc, path)
                continue
            seen.add(acc)
            out.append(acc)

    if not out:
        raise ConfigurationError(f"SRR list file is empty: {path}")
    LOG.debug("Read %d accession(s) from %s", len(out), path)
    return out
