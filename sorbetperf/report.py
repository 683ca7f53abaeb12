from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from rich.rule import Rule
from rich.table import Table

from sorbetperf.config import AnalyzerSettings
from sorbetperf.types import CapacityFailure, CapacityReport, MetricSnapshot, TableCapacity

PERFORMANCE_TIPS = [
    "Enable caching: --cache-dir={cache_dir}",
    "For memory-constrained systems: --threads=2",
    "For large codebases: Use the reserve-*-table-capacity options above",
    "For LSP mode: Tune --lsp-max-files-on-fast-path (default: 50)",
]


class AnalysisDocument(BaseModel):
    """Machine-readable form of a full analysis."""

    model_config = ConfigDict(extra="forbid")

    snapshot: MetricSnapshot
    recommendations: list[TableCapacity] = Field(default_factory=list)
    failures: list[CapacityFailure] = Field(default_factory=list)
    config_lines: list[str] = Field(default_factory=list)


def config_lines(report: CapacityReport, cache_dir: str) -> list[str]:
    """Lines to add to a sorbet/config file, cache dir first."""
    return [f"--cache-dir={cache_dir}", *report.flags()]


def performance_tips(cache_dir: str) -> list[str]:
    return [tip.format(cache_dir=cache_dir) for tip in PERFORMANCE_TIPS]


def metrics_table(snapshot: MetricSnapshot) -> Table:
    table = Table(title="Key Metrics")
    table.add_column("metric")
    table.add_column("value", justify="right")
    table.add_row("Total files", str(snapshot.file_count))
    table.add_row("Classes/Modules", str(snapshot.class_module_count))
    table.add_row("Methods", str(snapshot.method_count))
    return table


def _plain(console: Console, text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def render_text(
    console: Console,
    snapshot: MetricSnapshot,
    report: CapacityReport,
    settings: AnalyzerSettings,
) -> None:
    console.print(metrics_table(snapshot))

    console.print(Rule("Recommended Configuration"))
    _plain(console, "Based on your codebase analysis, here are recommended settings:")
    _plain(console, "# Add these to your sorbet/config file:")
    for line in config_lines(report, settings.cache_dir):
        _plain(console, line)

    for failure in report.failures:
        console.print(
            f"[red]Could not size {failure.kind.value}:[/red] {failure.reason}",
            highlight=False,
            soft_wrap=True,
        )

    console.print(Rule("Quick Performance Tips"))
    for index, tip in enumerate(performance_tips(settings.cache_dir), start=1):
        _plain(console, f"{index}. {tip}")
    _plain(console, "")
    _plain(console, "See PERFORMANCE_OPTIMIZATIONS.md for detailed guidance.")


def render_json(snapshot: MetricSnapshot, report: CapacityReport, settings: AnalyzerSettings) -> str:
    document = AnalysisDocument(
        snapshot=snapshot,
        recommendations=report.recommendations,
        failures=report.failures,
        config_lines=config_lines(report, settings.cache_dir),
    )
    return document.model_dump_json(indent=2)
