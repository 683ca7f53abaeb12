from __future__ import annotations

import shutil
import time


def monotonic_ms() -> int:
    """Return monotonic clock in milliseconds."""
    return int(time.monotonic() * 1000)


def resolve_binary(binary: str) -> str | None:
    """Return an executable path for binary, looking it up on PATH if needed."""
    return shutil.which(binary)


def as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
