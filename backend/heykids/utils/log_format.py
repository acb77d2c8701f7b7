from __future__ import annotations

import json
import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Union
from uuid import UUID

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return json.dumps(str(value.value), ensure_ascii=False)
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, str):
        # Quote strings so titles with spaces stay unambiguous
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (list, tuple, set, frozenset)):
        return json.dumps([_plain(v) for v in value], ensure_ascii=False)
    if isinstance(value, dict):
        return json.dumps({str(_plain(k)): _plain(v) for k, v in value.items()}, ensure_ascii=False)
    return json.dumps(str(value), ensure_ascii=False)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


def format_kv(**fields: Any) -> str:
    """
    Render a compact single-line key=value log string.

    Example:
      movie_id=3f2a... title="Moana" watchlist_size=4
    """
    parts: list[str] = []
    for key, value in fields.items():
        if value is None:
            continue
        parts.append(f"{key}={_format_value(value)}")
    return " ".join(parts)


def configure_logging(level: Union[int, str] = logging.INFO, *, fmt: str = _DEFAULT_FORMAT) -> None:
    """Attach a stream handler to the ``heykids`` logger tree (idempotent)."""
    root = logging.getLogger("heykids")
    if isinstance(level, str):
        name = level.strip().upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {name!r}")
    root.setLevel(level)
    if not any(getattr(h, "_heykids_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        handler._heykids_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
