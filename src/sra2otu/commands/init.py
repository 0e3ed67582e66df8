# src/sra2otu/commands/init.py
from __future__ import annotations

import sys
from pathlib import Path

from sra2otu.config.template import write_config_template
from sra2otu.utils.logger import get_logger

LOG = get_logger("init")


def setup_parser(subparsers, parent) -> None:
    p = subparsers.add_parser(
        "init",
        help="Write a commented settings template (sra2otu.yaml).",
    )
    p.add_argument("--output-file", type=Path, default=Path("sra2otu.yaml"))
    p.add_argument("--work-dir", type=str, default=".")
    p.add_argument("--accession-list", type=str, default=None,
                   help="Written as-is (relative to the config file); default <work-dir>/srr.txt.")
    p.add_argument("--classifier", type=str, default="gg-13-8-99-nb-classifier.qza")
    p.add_argument("--cpu", type=int, default=4)
    p.add_argument("--force", action="store_true", help="Overwrite an existing file.")
    p.set_defaults(func=run)


def run(args) -> None:
    try:
        path = write_config_template(
            args.output_file,
            force=args.force,
            work_dir=args.work_dir,
            accession_list=args.accession_list,
            classifier=args.classifier,
            cpu=args.cpu,
        )
    except FileExistsError:
        print(f"error: {args.output_file} exists (use --force to overwrite).", file=sys.stderr)
        sys.exit(2)
    LOG.info("Settings template written → %s", path)
    print(f"[ok] settings → {path}")
