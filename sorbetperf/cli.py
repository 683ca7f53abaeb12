from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from sorbetperf import __version__
from sorbetperf.capacity import recommend_capacities
from sorbetperf.config import AnalyzerSettings
from sorbetperf.counters import extract_snapshot
from sorbetperf.errors import CheckerNotFoundError
from sorbetperf.logutil import get_logger, setup_logging
from sorbetperf.models.enums import OutputFormat
from sorbetperf.report import render_json, render_text
from sorbetperf.runner import run_checker

app = typer.Typer(help="Recommend Sorbet table capacities from --counters output")
console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def _settings(**overrides: object) -> AnalyzerSettings:
    try:
        return AnalyzerSettings.from_env(**overrides)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _emit(output: str, settings: AnalyzerSettings, fmt: OutputFormat) -> None:
    snapshot = extract_snapshot(output)
    report = recommend_capacities(snapshot, settings)

    if fmt is OutputFormat.JSON:
        typer.echo(render_json(snapshot, report, settings))
    else:
        render_text(console, snapshot, report, settings)

    if not report.ok:
        raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """sorbet-perf CLI"""


@app.command("analyze")
def analyze(
    project: Annotated[Path, typer.Argument(help="Project to type-check")] = Path("."),
    sorbet_bin: Annotated[
        str | None, typer.Option("--sorbet-bin", help="Checker binary (default: $SORBET_BIN or sorbet)")
    ] = None,
    timeout: Annotated[float | None, typer.Option("--timeout", help="Timeout in seconds")] = None,
    cache_dir: Annotated[str | None, typer.Option("--cache-dir", help="Recommended cache dir")] = None,
    echo: Annotated[bool, typer.Option("--echo/--no-echo", help="Show checker output")] = True,
    fmt: Annotated[OutputFormat, typer.Option("--format", "-f", help="text|json")] = OutputFormat.TEXT,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors")] = False,
) -> None:
    """Run the checker with counters enabled and recommend table capacities."""
    setup_logging(verbose=verbose, quiet=quiet)
    settings = _settings(sorbet_bin=sorbet_bin, timeout_s=timeout, cache_dir=cache_dir)

    if fmt is OutputFormat.TEXT:
        console.print(f"Analyzing: {project}", highlight=False, markup=False, soft_wrap=True)
    try:
        run = run_checker(project, settings, echo=echo and fmt is OutputFormat.TEXT)
    except CheckerNotFoundError as exc:
        err_console.print(f"[red]Error:[/red] {exc}", highlight=False)
        raise typer.Exit(code=1) from exc

    logger.debug("checker finished in %d ms with status %d", run.duration_ms, run.exit_code)
    _emit(run.output, settings, fmt)


@app.command("recommend")
def recommend_cmd(
    input_path: Annotated[
        str, typer.Option("--input", "-i", help="Captured counters output, or - for stdin")
    ] = "-",
    cache_dir: Annotated[str | None, typer.Option("--cache-dir", help="Recommended cache dir")] = None,
    fmt: Annotated[OutputFormat, typer.Option("--format", "-f", help="text|json")] = OutputFormat.TEXT,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors")] = False,
) -> None:
    """Recommend table capacities from previously captured counters output."""
    setup_logging(verbose=verbose, quiet=quiet)
    settings = _settings(cache_dir=cache_dir)

    if input_path == "-":
        output = sys.stdin.read()
    else:
        try:
            output = Path(input_path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            err_console.print(f"[red]Error:[/red] cannot read {input_path}: {exc}", highlight=False)
            raise typer.Exit(code=1) from exc

    _emit(output, settings, fmt)


if __name__ == "__main__":
    app()
