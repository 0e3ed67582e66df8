# src/sra2otu/utils/runner.py
from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from sra2otu.errors import ToolError, ToolNotFoundError
from sra2otu.utils.logger import get_logger

LOG = get_logger("runner")


def format_command(cmd: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(c)) for c in cmd)


def run_tool(
    step: str,
    cmd: Sequence[str],
    *,
    dry_run: bool = False,
    show_stdout: bool = True,
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> subprocess.CompletedProcess[str]:
    """
    Run one external tool invocation belonging to a pipeline step.

    show_stdout=False buffers the tool's output and logs it only on failure.
    A non-zero exit raises ToolError (exit status preserved); a missing
    executable raises ToolNotFoundError. Nothing runs under dry_run.
    """
    argv = [str(c) for c in cmd]
    LOG.info("[%s] %s", step, format_command(argv))
    if dry_run:
        LOG.debug("[dry-run] command not executed")
        return subprocess.CompletedProcess(argv, 0, "", "")

    env_dict = os.environ.copy()
    if env:
        env_dict.update({str(k): str(v) for k, v in env.items()})

    try:
        result = subprocess.run(
            argv,
            check=True,
            cwd=str(cwd) if cwd else None,
            env=env_dict,
            text=True,
            capture_output=not show_stdout,
        )
    except FileNotFoundError as e:
        LOG.error("[%s] executable not found: %s (PATH=%s)", step, argv[0], env_dict.get("PATH", ""))
        raise ToolNotFoundError(argv[0], step) from e
    except subprocess.CalledProcessError as e:
        if e.stdout:
            LOG.error("[%s] STDOUT:\n%s", step, e.stdout.strip())
        if e.stderr:
            LOG.error("[%s] STDERR:\n%s", step, e.stderr.strip())
        raise ToolError(step, argv, e.returncode) from e

    LOG.debug("[%s] completed", step)
    if result.stdout:
        LOG.debug("[%s] captured STDOUT:\n%s", step, result.stdout.strip())
    return result
