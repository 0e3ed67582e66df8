# src/sra2otu/errors.py
"""Exception hierarchy; every error maps to a process exit code."""
from __future__ import annotations

from typing import Dict, Optional, Sequence


class PipelineError(Exception):
    exit_code: int = 1


class ConfigurationError(PipelineError):
    """Bad or missing operator input (config file, accession list). Not retryable."""


class ManifestError(PipelineError):
    pass


class ToolNotFoundError(PipelineError):
    exit_code = 127

    def __init__(self, executable: str, step: Optional[str] = None) -> None:
        self.executable = executable
        self.step = step
        where = f" (step: {step})" if step else ""
        super().__init__(f"executable not found: {executable}{where}")


class ToolError(PipelineError):
    """An external invocation returned non-zero; exit status is passed through."""

    def __init__(self, step: str, cmd: Sequence[str], returncode: int) -> None:
        self.step = step
        self.cmd = list(cmd)
        self.returncode = returncode
        if returncode > 0:
            self.exit_code = returncode
        elif returncode < 0:
            # killed by a signal; report it the way a shell would
            self.exit_code = 128 - returncode
        else:
            self.exit_code = 1
        super().__init__(f"{step} failed with exit code {returncode}: {' '.join(self.cmd)}")


class FetchError(PipelineError):
    def __init__(self, failures: Dict[str, BaseException]) -> None:
        self.failures = dict(failures)
        ids = ", ".join(sorted(self.failures))
        super().__init__(f"{len(self.failures)} accession(s) failed to download: {ids}")


class MissingArtifactError(PipelineError):
    def __init__(self, step: str, missing: Sequence[object]) -> None:
        self.step = step
        self.missing = list(missing)
        paths = ", ".join(str(p) for p in self.missing)
        super().__init__(f"cannot run {step}: missing input(s): {paths}")
