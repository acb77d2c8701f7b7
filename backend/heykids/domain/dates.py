from __future__ import annotations

from datetime import datetime


def comparable(value: datetime) -> datetime:
    """Aware local-time copy of ``value`` so naive and aware datetimes order together.

    Naive values are read as local time.
    """
    return value.astimezone()
