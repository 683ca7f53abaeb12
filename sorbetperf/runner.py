from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from sorbetperf.config import AnalyzerSettings
from sorbetperf.errors import CheckerNotFoundError
from sorbetperf.logutil import get_logger
from sorbetperf.types import CheckerRun
from sorbetperf.utils import as_text, monotonic_ms, resolve_binary

logger = get_logger(__name__)

TIMEOUT_EXIT_CODE = 124


def build_command(binary: str, project_path: Path, settings: AnalyzerSettings) -> list[str]:
    return [binary, *settings.sorbet_args, str(project_path)]


def run_checker(project_path: Path, settings: AnalyzerSettings, echo: bool = True) -> CheckerRun:
    """Run the checker with counters enabled and capture its combined output."""
    binary = resolve_binary(settings.sorbet_bin)
    if binary is None:
        raise CheckerNotFoundError(settings.sorbet_bin)

    command = build_command(binary, project_path, settings)
    logger.debug("running %s", " ".join(command))
    start_ms = monotonic_ms()

    timed_out = False
    try:
        completed = subprocess.run(
            command,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=settings.timeout_s,
        )
        exit_code = completed.returncode
        output = completed.stdout or ""
    except subprocess.TimeoutExpired as exc:
        timed_out = True
        exit_code = TIMEOUT_EXIT_CODE
        output = as_text(exc.stdout)
        logger.warning("checker timed out after %ss; using partial output", settings.timeout_s)

    if exit_code != 0 and not timed_out:
        # Type errors make the checker exit non-zero; counters are still printed.
        logger.warning("checker exited with status %d", exit_code)

    if echo and output:
        sys.stdout.write(output)
        if not output.endswith("\n"):
            sys.stdout.write("\n")

    return CheckerRun(
        command=command,
        output=output,
        exit_code=exit_code,
        timed_out=timed_out,
        duration_ms=max(0, monotonic_ms() - start_ms),
    )
