from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from heykids.domain.movie import MovieView


@dataclass(frozen=True)
class CalendarResult:
    success: bool
    event_id: Optional[str] = None
    error: Optional[str] = None


class CalendarPort(Protocol):
    """Platform calendar collaborator. Only the contract lives here."""

    def create_movie_night(self, movie: MovieView, start: datetime) -> CalendarResult:
        ...
