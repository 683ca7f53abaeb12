from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from sorbetperf.models.enums import TableKind


class CounterLine(BaseModel):
    """A single `name value` pair read from checker counter output."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    value: int = Field(ge=0)


class KnownCount(BaseModel):
    """A count that was observed in the counter output (possibly zero)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["known"] = "known"
    value: int = Field(ge=0)

    def __str__(self) -> str:
        return str(self.value)


class UnknownCount(BaseModel):
    """No counter line backed this metric."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["unknown"] = "unknown"

    def __str__(self) -> str:
        return "unknown"


Count = Annotated[Union[KnownCount, UnknownCount], Field(discriminator="kind")]

UNKNOWN = UnknownCount()


class MetricSnapshot(BaseModel):
    """Symbol table cardinalities pulled from one checker run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    file_count: Count = UNKNOWN
    class_module_count: Count = UNKNOWN
    method_count: Count = UNKNOWN


class TableCapacity(BaseModel):
    """Recommended pre-allocation for one checker table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: TableKind
    capacity: int = Field(gt=0)

    @property
    def flag(self) -> str:
        return f"--{self.kind.flag_name}={self.capacity}"


class CapacityFailure(BaseModel):
    """A table kind whose recommendation could not be produced."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: TableKind
    count: int
    reason: str


class CapacityReport(BaseModel):
    """Ordered recommendations (class table first) plus any failures."""

    model_config = ConfigDict(extra="forbid")

    recommendations: list[TableCapacity] = Field(default_factory=list)
    failures: list[CapacityFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def as_pairs(self) -> list[tuple[str, int]]:
        return [(item.kind.flag_name, item.capacity) for item in self.recommendations]

    def flags(self) -> list[str]:
        return [item.flag for item in self.recommendations]


class CheckerRun(BaseModel):
    """Captured output of a single checker invocation."""

    model_config = ConfigDict(extra="forbid")

    command: list[str]
    output: str
    exit_code: int
    timed_out: bool
    duration_ms: int
