from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from sorbetperf.logutil import get_logger
from sorbetperf.types import UNKNOWN, Count, CounterLine, KnownCount, MetricSnapshot

logger = get_logger(__name__)

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class CounterFamily:
    """A named set of counter-name predicates whose values belong together."""

    name: str
    patterns: tuple[re.Pattern[str], ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, name: str, *name_patterns: str) -> CounterFamily:
        """Build a family from regexes anchored at the start of the counter name."""
        return cls(name=name, patterns=tuple(re.compile(item) for item in name_patterns))

    def matches(self, counter_name: str) -> bool:
        return any(pattern.match(counter_name) for pattern in self.patterns)


FILES = CounterFamily.of("files", r"types\.input\.files")
CLASSES_AND_MODULES = CounterFamily.of("classes_modules", r"types\.input\.(classes|modules)")
METHODS = CounterFamily.of("methods", r"types\.input\.methods")

# Longer values already overflow every table capacity.
MAX_COUNT_DIGITS = 19
COUNT_CEILING = 10**MAX_COUNT_DIGITS


def _to_count(raw_value: str) -> int:
    digits = raw_value.lstrip("0") or "0"
    if len(digits) > MAX_COUNT_DIGITS:
        logger.debug("clamping %d-digit counter value to %d", len(digits), COUNT_CEILING)
        return COUNT_CEILING
    return int(digits)


def parse_counter_line(line: str) -> CounterLine | None:
    """Parse `name value`; anything else (log noise, bad numbers) yields None.

    Values too long to matter are clamped to COUNT_CEILING, which no table
    capacity can hold, so the recommender reports them as overflowing.
    """
    parts = line.split()
    if len(parts) < 2:
        return None

    name = parts[0].rstrip(":")
    raw_value = parts[-1]
    if not name or not _DIGITS.fullmatch(raw_value):
        return None
    return CounterLine(name=name, value=_to_count(raw_value))


def _iter_lines(source: str | Iterable[str]) -> Iterable[str]:
    if isinstance(source, str):
        return source.splitlines()
    return source


def _matching(lines: Iterable[str], family: CounterFamily) -> Iterator[CounterLine]:
    for line in lines:
        parts = line.split(maxsplit=1)
        if not parts or not family.matches(parts[0].rstrip(":")):
            continue
        counter = parse_counter_line(line)
        if counter is None:
            logger.debug("skipping malformed counter line: %r", line)
            continue
        yield counter


def extract_first_count(source: str | Iterable[str], family: CounterFamily) -> Count:
    for counter in _matching(_iter_lines(source), family):
        return KnownCount(value=counter.value)
    return UNKNOWN


def extract_file_count(source: str | Iterable[str]) -> Count:
    """Value of the first file-input counter, or unknown."""
    return extract_first_count(source, FILES)


def extract_method_count(source: str | Iterable[str]) -> Count:
    """Value of the first method counter, or unknown."""
    return extract_first_count(source, METHODS)


def extract_aggregate_count(
    source: str | Iterable[str],
    family: CounterFamily = CLASSES_AND_MODULES,
) -> Count:
    """Sum every counter in the family.

    Zero matching lines means unknown rather than zero: a missing counter
    usually means the run stopped before reaching that instrumentation point.
    """
    matched = list(_matching(_iter_lines(source), family))
    if not matched:
        return UNKNOWN
    return KnownCount(value=sum(counter.value for counter in matched))


def extract_snapshot(source: str | Iterable[str]) -> MetricSnapshot:
    lines = list(_iter_lines(source))
    snapshot = MetricSnapshot(
        file_count=extract_file_count(lines),
        class_module_count=extract_aggregate_count(lines, CLASSES_AND_MODULES),
        method_count=extract_method_count(lines),
    )
    logger.debug(
        "extracted files=%s classes_modules=%s methods=%s",
        snapshot.file_count,
        snapshot.class_module_count,
        snapshot.method_count,
    )
    return snapshot
