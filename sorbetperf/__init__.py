from __future__ import annotations

from importlib import metadata as _metadata

__all__ = ["__version__"]

_FALLBACK_VERSION = "0.1.0"

try:
    __version__ = _metadata.version("sorbet-perf")
except _metadata.PackageNotFoundError:
    __version__ = _FALLBACK_VERSION
