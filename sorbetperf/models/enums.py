from __future__ import annotations

from enum import Enum


class TableKind(str, Enum):
    CLASS_TABLE = "class-table"
    METHOD_TABLE = "method-table"

    @property
    def flag_name(self) -> str:
        """Checker option that pre-sizes this table."""
        return f"reserve-{self.value}-capacity"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
