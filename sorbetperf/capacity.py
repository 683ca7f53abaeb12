from __future__ import annotations

from sorbetperf.config import AnalyzerSettings
from sorbetperf.errors import CapacityOverflowError
from sorbetperf.logutil import get_logger
from sorbetperf.models.enums import TableKind
from sorbetperf.types import (
    CapacityFailure,
    CapacityReport,
    Count,
    KnownCount,
    MetricSnapshot,
    TableCapacity,
)

logger = get_logger(__name__)

# Largest power of two a u32 capacity flag can hold.
MAX_CAPACITY = 1 << 31


def next_power_of_two(value: int) -> int:
    """Smallest power of two >= value (value >= 1), in exact integer math."""
    if value < 1:
        raise ValueError("value must be positive")
    return 1 << (value - 1).bit_length()


def recommend(count: int, floor: int, limit: int = MAX_CAPACITY) -> int:
    """Smallest power of two that is >= max(count * 2, floor)."""
    if count < 0:
        raise ValueError("count must be non-negative")
    if floor < 1:
        raise ValueError("floor must be positive")

    target = max(count * 2, floor)
    if target > limit:
        raise CapacityOverflowError(count=count, floor=floor, limit=limit)
    return next_power_of_two(target)


def _table_counts(snapshot: MetricSnapshot, settings: AnalyzerSettings) -> list[tuple[TableKind, Count, int]]:
    return [
        (TableKind.CLASS_TABLE, snapshot.class_module_count, settings.class_table_floor),
        (TableKind.METHOD_TABLE, snapshot.method_count, settings.method_table_floor),
    ]


def recommend_capacities(
    snapshot: MetricSnapshot,
    settings: AnalyzerSettings | None = None,
) -> CapacityReport:
    """Recommend capacities for every table whose count is known."""
    settings = settings or AnalyzerSettings()
    report = CapacityReport()

    for kind, count, floor in _table_counts(snapshot, settings):
        if not isinstance(count, KnownCount):
            logger.info("no %s counter in output; skipping %s", kind.value, kind.flag_name)
            continue
        try:
            capacity = recommend(count.value, floor)
        except CapacityOverflowError as exc:
            logger.debug("cannot size %s: %s", kind.value, exc)
            report.failures.append(CapacityFailure(kind=kind, count=count.value, reason=str(exc)))
            continue
        report.recommendations.append(TableCapacity(kind=kind, capacity=capacity))

    return report
