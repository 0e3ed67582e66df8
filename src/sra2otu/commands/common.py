# src/sra2otu/commands/common.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from sra2otu.config.load import load_settings
from sra2otu.config.schema import Settings
from sra2otu.utils.logger import add_file_handler, get_logger

LOG = get_logger("cli")

DEFAULT_CONFIG = Path("sra2otu.yaml")

# argparse dest -> Settings field; None means "not given on the command line"
_OVERRIDES = (
    "work_dir",
    "accession_list",
    "classifier",
    "cpu",
    "dry_run",
    "show_tools",
    "resume",
    "keep_going",
    "strict_manifest",
)


def build_parent_parser() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("--config", type=Path, default=None,
                        help=f"YAML/JSON settings file (default: ./{DEFAULT_CONFIG} when present).")
    parent.add_argument("--work-dir", type=Path, default=None, help="Override work_dir.")
    parent.add_argument("--accession-list", type=Path, default=None, help="Override accession_list.")
    parent.add_argument("--classifier", type=Path, default=None, help="Override classifier (.qza).")
    parent.add_argument("--cpu", type=int, default=None, help="Override cpu (parallel jobs / threads).")
    parent.add_argument("--dry-run", action="store_true", default=None,
                        help="Log commands without executing them.")
    parent.add_argument("--show-tools", dest="show_tools", action="store_true",
                        help="Stream external tool output live to console (default).")
    parent.add_argument("--no-show-tools", dest="show_tools", action="store_false",
                        help="Capture external tool output (printed on error).")
    parent.add_argument("--resume", action="store_true", default=None,
                        help="Skip steps whose outputs already exist.")
    parent.add_argument("--keep-going", action="store_true", default=None,
                        help="Continue past failed downloads; report them together.")
    parent.add_argument("--strict-manifest", action="store_true", default=None,
                        help="Refuse manifest rows whose FASTQs are missing or empty.")
    parent.add_argument("-v", "--verbose", action="store_true", help="DEBUG output on the console.")
    parent.set_defaults(show_tools=None)
    return parent


def resolve_config_path(args: argparse.Namespace) -> Optional[Path]:
    path = getattr(args, "config", None)
    if path is not None:
        return path
    return DEFAULT_CONFIG if DEFAULT_CONFIG.is_file() else None


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    return {k: getattr(args, k, None) for k in _OVERRIDES}


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Load the immutable Settings for this invocation and start the run log."""
    settings = load_settings(resolve_config_path(args), overrides_from_args(args))
    add_file_handler(settings.log_file)
    LOG.debug("Settings: %r", settings)
    return settings
