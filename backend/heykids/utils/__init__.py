from __future__ import annotations

from heykids.utils.log_format import configure_logging, format_kv  # noqa: F401

__all__ = [
    "configure_logging",
    "format_kv",
]
