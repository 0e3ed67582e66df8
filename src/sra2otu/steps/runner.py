# src/sra2otu/steps/runner.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from sra2otu.config.schema import Settings
from sra2otu.errors import ConfigurationError, MissingArtifactError
from sra2otu.plan.build import build_plan
from sra2otu.plan.types import Artifacts, Plan, Step
from sra2otu.steps import driver, export
from sra2otu.steps.fetch import fetch_all
from sra2otu.utils.logger import get_logger
from sra2otu.utils.manifest import generate_manifest

LOG = get_logger("pipeline")

# fetch resumes per accession; the manifest is rebuilt from whatever fetch left
ALWAYS_RUN = frozenset({"fetch", "manifest"})

StepFn = Callable[[Settings, Artifacts], None]


def _fetch(settings: Settings, a: Artifacts) -> None:
    fetch_all(settings)


def _manifest(settings: Settings, a: Artifacts) -> None:
    if settings.dry_run:
        LOG.info("[dry-run] would write manifest → %s", a.manifest)
        return
    generate_manifest(
        settings.work_dir,
        a.manifest,
        pattern=settings.accession_pattern,
        strict=settings.strict_manifest,
    )


STEP_FUNCS: Dict[str, StepFn] = {
    "fetch": _fetch,
    "manifest": _manifest,
    "import": driver.import_reads,
    "denoise": driver.denoise,
    "classify": driver.classify,
    "export": export.export_artifacts,
    "convert": export.convert_table,
}


def _check_inputs(step: Step) -> None:
    # fetch reports its own (configuration) error for a missing accession list
    if step.name == "fetch":
        return
    missing = step.missing_inputs()
    if missing:
        raise MissingArtifactError(step.name, missing)


def run_pipeline(
    settings: Settings,
    *,
    only: Optional[Iterable[str]] = None,
    plan: Optional[Plan] = None,
    funcs: Optional[Dict[str, StepFn]] = None,
) -> List[str]:
    """
    Run the plan's steps in order, fail-fast. Returns the names of steps executed.

    only restricts execution to the named steps (order still follows the plan).
    """
    plan = plan or build_plan(settings)
    funcs = funcs or STEP_FUNCS
    wanted = set(only) if only is not None else None
    if wanted is not None:
        unknown = wanted - set(plan.names)
        if unknown:
            raise ValueError(f"unknown step(s): {', '.join(sorted(unknown))}")

    if settings.classifier is None and (wanted is None or "classify" in wanted):
        raise ConfigurationError("classifier is not configured; set it in the config file or pass --classifier")

    executed: List[str] = []
    for n, step in enumerate(plan.steps, start=1):
        if wanted is not None and step.name not in wanted:
            continue
        LOG.info("Step %d: %s", n, step.title)
        if settings.resume and step.name not in ALWAYS_RUN and step.outputs_exist():
            LOG.info("Step %d: outputs present, skipping (%s)", n, ", ".join(p.name for p in step.outputs))
            continue
        if not settings.dry_run:
            _check_inputs(step)
        funcs[step.name](settings, plan.artifacts)
        executed.append(step.name)

    if wanted is None:
        LOG.info("Pipeline completed. Results saved in: %s", plan.artifacts.otu_dir)
    return executed
