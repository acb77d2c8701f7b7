from __future__ import annotations

import logging
import random
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from heykids.application.movie_service import MovieService
from heykids.application.ports.calendar_port import CalendarPort, CalendarResult
from heykids.application.save_result import SaveResult
from heykids.application.view_models.load_state import LoadingMixin
from heykids.domain.dates import comparable
from heykids.domain.movie import MovieView, WatchlistStatistics
from heykids.utils import format_kv

logger = logging.getLogger(__name__)


class WatchlistSortOrder(str, Enum):
    DATE_ADDED = "date_added"
    RATING = "rating"
    TITLE = "title"
    AGE_GROUP = "age_group"


class WatchlistViewModel(LoadingMixin):
    def __init__(
        self,
        movie_service: MovieService,
        calendar: Optional[CalendarPort] = None,
        rng: Optional[random.Random] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.movie_service = movie_service
        self.calendar = calendar
        self._rng = rng or random.Random()
        self._clock = clock
        self.watchlist_movies: list[MovieView] = []
        self.search_text: str = ""
        self.sort_order: WatchlistSortOrder = WatchlistSortOrder.DATE_ADDED
        self.error_message: Optional[str] = None
        self.load_watchlist()

    def load_watchlist(self) -> list[MovieView]:
        with self._loading():
            self.watchlist_movies = self.movie_service.get_watchlist_movies()
            self.error_message = None
        return self.watchlist_movies

    @property
    def filtered_watchlist(self) -> list[MovieView]:
        query = self.search_text.strip().lower()
        movies = [m for m in self.watchlist_movies if query in m.title.lower()] if query else list(self.watchlist_movies)
        match WatchlistSortOrder(self.sort_order):
            case WatchlistSortOrder.RATING:
                return sorted(movies, key=lambda m: m.rating or 0.0, reverse=True)
            case WatchlistSortOrder.TITLE:
                return sorted(movies, key=lambda m: m.title)
            case WatchlistSortOrder.AGE_GROUP:
                return sorted(movies, key=lambda m: m.age_group.rank)
            case _:
                # watchlist insertion order
                return movies

    @property
    def statistics(self) -> Optional[WatchlistStatistics]:
        if not self.watchlist_movies:
            return None
        return self.movie_service.get_watchlist_statistics()

    def _result(self, result: SaveResult) -> SaveResult:
        self.error_message = None if result.ok else str(result.error)
        message = self.error_message
        self.load_watchlist()
        self.error_message = message
        return result

    def remove_from_watchlist(self, movie: MovieView) -> SaveResult:
        return self._result(self.movie_service.remove_from_watchlist(movie.id))

    def mark_as_watched(self, movie: MovieView, date: Optional[datetime] = None) -> SaveResult:
        return self._result(self.movie_service.mark_as_watched(movie.id, date))

    def clear_watchlist(self) -> SaveResult:
        return self._result(self.movie_service.clear_watchlist())

    def random_movie(self) -> Optional[MovieView]:
        if not self.watchlist_movies:
            return None
        return self._rng.choice(self.watchlist_movies)

    def schedule_movie_night(self, movie: MovieView, when: datetime) -> CalendarResult:
        """Create the calendar event first, then record the schedule on the movie.

        Without a calendar collaborator only the schedule is recorded.
        """
        if self.calendar is not None:
            outcome = self.calendar.create_movie_night(movie, when)
            if not outcome.success:
                self.error_message = outcome.error or "Could not create calendar event"
                logger.warning(
                    "movie night not created %s",
                    format_kv(title=movie.title, start=when, error=self.error_message),
                )
                return outcome
        else:
            outcome = CalendarResult(success=True)
        saved = self.movie_service.schedule_movie(movie.id, when)
        self._result(saved)
        logger.info("movie night scheduled %s", format_kv(title=movie.title, start=when, event_id=outcome.event_id))
        return outcome

    @property
    def next_movie_night(self) -> Optional[MovieView]:
        now = comparable(self._clock())
        upcoming = [
            m
            for m in self.movie_service.get_scheduled_movies()
            if m.scheduled_date is not None and comparable(m.scheduled_date) >= now
        ]
        return min(upcoming, key=lambda m: comparable(m.scheduled_date), default=None)
