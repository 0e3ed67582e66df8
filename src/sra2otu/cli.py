# src/sra2otu/cli.py
from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from sra2otu import __version__
from sra2otu.errors import PipelineError
from sra2otu.utils.logger import get_logger, setup_logger

from sra2otu.commands import init as cmd_init
from sra2otu.commands import doctor as cmd_doctor
from sra2otu.commands import single_step as cmd_step
from sra2otu.commands import run as cmd_run
from sra2otu.commands.common import build_parent_parser

LOG = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sra2otu",
        description="SRA accessions → QIIME 2 (DADA2 + sklearn) → OTU table.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parent = build_parent_parser()

    subparsers = parser.add_subparsers(dest="command", required=True)

    cmd_init.setup_parser(subparsers, parent)
    cmd_doctor.setup_parser(subparsers, parent)
    cmd_step.setup_parser(subparsers, parent)
    cmd_run.setup_parser(subparsers, parent)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logger(verbose=getattr(args, "verbose", False))
    LOG.debug("Parsed args: %r", args)
    try:
        args.func(args)
    except PipelineError as e:
        LOG.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
