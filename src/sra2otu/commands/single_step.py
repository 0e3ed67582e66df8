# src/sra2otu/commands/single_step.py
from __future__ import annotations

from typing import Tuple

from sra2otu.commands.common import settings_from_args
from sra2otu.steps.runner import run_pipeline

# command -> (plan steps, help)
COMMANDS: dict[str, Tuple[Tuple[str, ...], str]] = {
    "fetch": (("fetch",), "Download and split every accession in the SRR list (parallel)."),
    "manifest": (("manifest",), "Write samples.manifest from the accession folders in work_dir."),
    "import": (("import",), "qiime tools import the manifest → data.qza."),
    "denoise": (("denoise",), "qiime dada2 denoise-paired → table.qza, rep-seqs.qza, stats.qza."),
    "classify": (("classify",), "qiime feature-classifier classify-sklearn → taxonomy.qza."),
    "export": (("export", "convert"), "Export table/taxonomy to otu/ and convert to otu/otu_table.tsv."),
}


def setup_parser(subparsers, parent) -> None:
    for name, (steps, help_text) in COMMANDS.items():
        p = subparsers.add_parser(name, parents=[parent], help=help_text)
        p.set_defaults(func=run, steps=steps)


def run(args) -> None:
    settings = settings_from_args(args)
    run_pipeline(settings, only=args.steps)
    print(f"[ok] {args.command} → {settings.work_dir}")
