from __future__ import annotations


class SorbetPerfError(Exception):
    """Base class for errors raised by sorbet-perf."""


class CheckerNotFoundError(SorbetPerfError):
    """The type-checker binary could not be resolved."""

    def __init__(self, binary: str) -> None:
        self.binary = binary
        super().__init__(f"{binary} not found. Set SORBET_BIN environment variable.")


class CapacityOverflowError(SorbetPerfError, OverflowError):
    """A count is too large to produce a capacity the checker accepts."""

    def __init__(self, count: int, floor: int, limit: int) -> None:
        self.count = count
        self.floor = floor
        self.limit = limit
        super().__init__(
            f"count {count} needs a capacity above the maximum of {limit} (floor {floor})"
        )
