from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SORBET_BIN = "sorbet"
DEFAULT_SORBET_ARGS = ["--counters", "--typed=strict", "--silence-dev-message"]
DEFAULT_CACHE_DIR = ".sorbet-cache"

# Never recommend below the checker's own default table sizes.
CLASS_TABLE_FLOOR = 1024
METHOD_TABLE_FLOOR = 4096

ENV_SORBET_BIN = "SORBET_BIN"
ENV_TIMEOUT = "SORBET_PERF_TIMEOUT"


class AnalyzerSettings(BaseModel):
    """Runtime settings for a single analysis."""

    model_config = ConfigDict(extra="forbid")

    sorbet_bin: str = DEFAULT_SORBET_BIN
    sorbet_args: list[str] = Field(default_factory=lambda: list(DEFAULT_SORBET_ARGS))
    timeout_s: float | None = None
    class_table_floor: int = CLASS_TABLE_FLOOR
    method_table_floor: int = METHOD_TABLE_FLOOR
    cache_dir: str = DEFAULT_CACHE_DIR

    @field_validator("sorbet_bin", mode="before")
    @classmethod
    def _normalize_sorbet_bin(cls, value: Any) -> str:
        if value is None or str(value).strip() == "":
            return DEFAULT_SORBET_BIN
        return str(value).strip()

    @field_validator("timeout_s", mode="before")
    @classmethod
    def _normalize_timeout(cls, value: Any) -> float | None:
        if value in (None, ""):
            return None
        timeout = float(value)
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        return timeout

    @field_validator("class_table_floor", "method_table_floor")
    @classmethod
    def _require_positive_floor(cls, value: int) -> int:
        if value < 1:
            raise ValueError("table floor must be positive")
        return value

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, **overrides: Any) -> AnalyzerSettings:
        """Build settings from the environment, letting non-None overrides win."""
        source = os.environ if env is None else env
        values: dict[str, Any] = {}
        if source.get(ENV_SORBET_BIN):
            values["sorbet_bin"] = source[ENV_SORBET_BIN]
        if source.get(ENV_TIMEOUT):
            values["timeout_s"] = source[ENV_TIMEOUT]
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(values)
