from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from heykids.application.ports.calendar_port import CalendarPort, CalendarResult
from heykids.domain.dates import comparable
from heykids.domain.movie import MovieView
from heykids.utils import format_kv

logger = logging.getLogger(__name__)

DEFAULT_DURATION = timedelta(hours=2)


@dataclass(frozen=True)
class MovieNightEvent:
    event_id: str
    movie_id: UUID
    title: str
    start: datetime
    end: datetime


class InMemoryCalendar(CalendarPort):
    """Calendar stand-in that keeps events in a list.

    ``fail_with`` makes every call fail with that message, for exercising
    error paths.
    """

    def __init__(self, *, duration: timedelta = DEFAULT_DURATION, fail_with: Optional[str] = None) -> None:
        self.duration = duration
        self.fail_with = fail_with
        self.events: list[MovieNightEvent] = []

    def create_movie_night(self, movie: MovieView, start: datetime) -> CalendarResult:
        if self.fail_with:
            return CalendarResult(success=False, error=self.fail_with)
        event = MovieNightEvent(
            event_id=str(uuid4()),
            movie_id=movie.id,
            title=f"Movie Night: {movie.title}",
            start=start,
            end=start + self.duration,
        )
        self.events.append(event)
        logger.debug("calendar event created %s", format_kv(event_id=event.event_id, start=start))
        return CalendarResult(success=True, event_id=event.event_id)

    def upcoming(self, now: datetime, limit: int = 1) -> list[MovieNightEvent]:
        future = sorted(
            (e for e in self.events if comparable(e.start) >= comparable(now)),
            key=lambda e: comparable(e.start),
        )
        return future[:limit]
