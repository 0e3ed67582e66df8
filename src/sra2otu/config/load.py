# src/sra2otu/config/load.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from sra2otu.config.schema import Settings
from sra2otu.errors import ConfigurationError
from sra2otu.utils.logger import get_logger

LOG = get_logger("config")

_PATH_KEYS = ("work_dir", "accession_list", "classifier", "log_file")
_TOOL_KEYS = ("prefetch", "fasterq_dump", "qiime", "biom")


def read_mapping(path: Path) -> Dict[str, Any]:
    """Read a YAML (or JSON, a YAML subset) mapping."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigurationError(f"config file not found: {path}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"cannot parse {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level.")
    # accept both a flat file and one nested under 'settings'
    nested = data.get("settings")
    return dict(nested) if isinstance(nested, dict) else data


def _anchor_paths(data: Dict[str, Any], base: Path) -> Dict[str, Any]:
    """Relative paths in a config file are relative to that file, not to the CWD."""
    out = dict(data)
    for key in _PATH_KEYS:
        v = out.get(key)
        if v is None:
            continue
        p = Path(str(v)).expanduser()
        out[key] = p if p.is_absolute() else base / p
    for key in _TOOL_KEYS:
        v = out.get(key)
        if isinstance(v, str) and os.sep in v and not Path(v).expanduser().is_absolute():
            out[key] = str(base / v)
    return out


def load_settings(
    path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    create_work_dir: bool = True,
) -> Settings:
    """
    Merge the config file (if any) with CLI overrides and validate once.

    Overrides whose value is None are ignored so argparse defaults never mask
    the file. The working directory is created unless create_work_dir=False.
    """
    data: Dict[str, Any] = {}
    if path is not None:
        data = _anchor_paths(read_mapping(path), path.resolve().parent)
        LOG.debug("Loaded config from %s: %r", path, data)

    for k, v in (overrides or {}).items():
        if v is not None:
            data[k] = v

    try:
        settings = Settings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration:\n{e}") from e

    if create_work_dir:
        settings.work_dir.mkdir(parents=True, exist_ok=True)
    return settings
