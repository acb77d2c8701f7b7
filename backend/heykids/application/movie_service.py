from __future__ import annotations

import logging
from collections import Counter
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Optional, Union
from uuid import UUID

from heykids.application.ports.movie_data_provider_port import MovieDataProviderPort
from heykids.application.save_result import SaveResult, write_through
from heykids.domain.age_group import AgeGroup
from heykids.domain.errors import StorageError
from heykids.domain.movie import Movie, MovieSortCriteria, MovieView, WatchlistStatistics
from heykids.utils import format_kv

logger = logging.getLogger(__name__)


class MovieService:
    """Single source of truth for the catalog and its watchlist/watched/scheduled state.

    Every read joins the catalog with the current annotations and returns fresh
    ``MovieView`` projections; callers never see the internal collections.

    Mutators never raise for unknown ids. A mutation that changes state is
    written through the data provider immediately; a failed write is logged,
    kept in ``last_save_error`` and returned in the ``SaveResult``. With
    ``raise_on_save_error=True`` the ``StorageError`` propagates instead.
    """

    def __init__(
        self,
        *,
        data_provider: MovieDataProviderPort,
        validate_watchlist_ids: bool = False,
        raise_on_save_error: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._provider = data_provider
        self._validate_watchlist_ids = bool(validate_watchlist_ids)
        self._raise_on_save_error = bool(raise_on_save_error)
        self._clock = clock
        self._movies: list[Movie] = list(data_provider.load_movies())
        # dict keys double as an insertion-ordered set
        self._watchlist: dict[UUID, None] = dict.fromkeys(data_provider.load_watchlist())
        self._watched: dict[UUID, datetime] = dict(data_provider.load_watched_movies())
        self.last_save_error: Optional[StorageError] = None
        # collections whose latest write failed; storage holds an older copy
        self._unsaved: set[str] = set()
        logger.info(
            "movie service initialized %s",
            format_kv(movies=len(self._movies), watchlist=len(self._watchlist), watched=len(self._watched)),
        )

    # ----- projections -----

    def _view(self, movie: Movie) -> MovieView:
        return MovieView(
            movie=movie,
            is_in_watchlist=movie.id in self._watchlist,
            is_watched=movie.id in self._watched,
            watched_date=self._watched.get(movie.id),
        )

    def _find_index(self, movie_id: UUID) -> Optional[int]:
        for idx, movie in enumerate(self._movies):
            if movie.id == movie_id:
                return idx
        return None

    def _save(self, what: str, action: Callable[[], None]) -> SaveResult:
        try:
            result = write_through(
                action,
                what=what,
                logger=logger,
                raise_on_error=self._raise_on_save_error,
            )
        except StorageError as exc:
            self.last_save_error = exc
            self._unsaved.add(what)
            raise
        self.last_save_error = result.error
        if result.ok:
            self._unsaved.discard(what)
        else:
            self._unsaved.add(what)
        return result

    def _save_watchlist(self) -> SaveResult:
        return self._save("watchlist", lambda: self._provider.save_watchlist(list(self._watchlist)))

    def _save_watched(self) -> SaveResult:
        return self._save("watched_movies", lambda: self._provider.save_watched_movies(dict(self._watched)))

    def _save_movies(self) -> SaveResult:
        return self._save("movies", lambda: self._provider.save_movies(list(self._movies)))

    # ----- catalog reads -----

    def get_all_movies(self) -> list[MovieView]:
        return [self._view(m) for m in self._movies]

    def get_movie(self, movie_id: UUID) -> Optional[MovieView]:
        idx = self._find_index(movie_id)
        return None if idx is None else self._view(self._movies[idx])

    def get_movies(self, age_group: AgeGroup) -> list[MovieView]:
        return [v for v in self.get_all_movies() if v.age_group == age_group]

    def search_movies(self, query: str) -> list[MovieView]:
        q = (query or "").strip().lower()
        if not q:
            return self.get_all_movies()
        return [
            v
            for v in self.get_all_movies()
            if q in v.title.lower() or q in v.genre.lower() or q in (v.notes or "").lower()
        ]

    def get_movies_by_genre(self, genre: str) -> list[MovieView]:
        return [v for v in self.get_all_movies() if v.genre == genre]

    def get_movies_by_streaming_service(self, streaming_service: str) -> list[MovieView]:
        return [v for v in self.get_all_movies() if streaming_service in v.streaming_services]

    def get_movies_sorted(self, criteria: Union[MovieSortCriteria, str]) -> list[MovieView]:
        criteria = MovieSortCriteria(criteria)
        views = self.get_all_movies()
        match criteria:
            case MovieSortCriteria.YEAR:
                return sorted(views, key=lambda v: v.year)
            case MovieSortCriteria.RATING:
                return sorted(views, key=lambda v: v.rating or 0.0, reverse=True)
            case MovieSortCriteria.DATE_ADDED:
                # No added-at timestamp is recorded for catalog movies; title order stands in.
                return sorted(views, key=lambda v: v.title)
            case _:
                return sorted(views, key=lambda v: v.title)

    # ----- watchlist -----

    @property
    def watchlist(self) -> tuple[UUID, ...]:
        return tuple(self._watchlist)

    def is_in_watchlist(self, movie_id: UUID) -> bool:
        return movie_id in self._watchlist

    def get_watchlist_movies(self) -> list[MovieView]:
        by_id = {m.id: m for m in self._movies}
        return [self._view(by_id[mid]) for mid in self._watchlist if mid in by_id]

    def _accepts_watchlist_id(self, movie_id: UUID) -> bool:
        if not self._validate_watchlist_ids:
            return True
        return self._find_index(movie_id) is not None

    def add_to_watchlist(self, movie_id: UUID) -> SaveResult:
        if movie_id in self._watchlist:
            logger.debug("watchlist add skipped (already present) %s", format_kv(movie_id=movie_id))
            return SaveResult.unchanged()
        if not self._accepts_watchlist_id(movie_id):
            logger.info("watchlist add rejected (unknown movie) %s", format_kv(movie_id=movie_id))
            return SaveResult.unchanged()
        self._watchlist[movie_id] = None
        logger.info("added to watchlist %s", format_kv(movie_id=movie_id, watchlist_size=len(self._watchlist)))
        return self._save_watchlist()

    def remove_from_watchlist(self, movie_id: UUID) -> SaveResult:
        if movie_id not in self._watchlist:
            logger.debug("watchlist remove skipped (not present) %s", format_kv(movie_id=movie_id))
            return SaveResult.unchanged()
        del self._watchlist[movie_id]
        logger.info("removed from watchlist %s", format_kv(movie_id=movie_id, watchlist_size=len(self._watchlist)))
        return self._save_watchlist()

    def add_multiple_to_watchlist(self, movie_ids: Iterable[UUID]) -> SaveResult:
        added = 0
        for movie_id in movie_ids:
            if movie_id in self._watchlist or not self._accepts_watchlist_id(movie_id):
                continue
            self._watchlist[movie_id] = None
            added += 1
        if not added:
            return SaveResult.unchanged()
        logger.info("bulk added to watchlist %s", format_kv(added=added, watchlist_size=len(self._watchlist)))
        return self._save_watchlist()

    def clear_watchlist(self) -> SaveResult:
        previous = len(self._watchlist)
        if not previous:
            return SaveResult.unchanged()
        self._watchlist.clear()
        logger.info("cleared watchlist %s", format_kv(removed=previous))
        return self._save_watchlist()

    def get_watchlist_statistics(self) -> WatchlistStatistics:
        movies = self.get_watchlist_movies()
        rating_sum = sum(v.rating for v in movies if v.rating is not None)
        return WatchlistStatistics(
            total_count=len(self._watchlist),
            average_rating=rating_sum / max(len(movies), 1),
            age_group_breakdown=dict(Counter(v.age_group for v in movies)),
            total_watched_from_watchlist=sum(1 for v in movies if v.is_watched),
        )

    # ----- watched -----

    def mark_as_watched(self, movie_id: UUID, date: Optional[datetime] = None) -> SaveResult:
        when = date if date is not None else self._clock()
        self._watched[movie_id] = when
        logger.info("marked watched %s", format_kv(movie_id=movie_id, watched_at=when))
        return self._save_watched()

    def unmark_watched(self, movie_id: UUID) -> SaveResult:
        if self._watched.pop(movie_id, None) is None:
            return SaveResult.unchanged()
        logger.info("unmarked watched %s", format_kv(movie_id=movie_id))
        return self._save_watched()

    def is_watched(self, movie_id: UUID) -> bool:
        return movie_id in self._watched

    def get_watched_date(self, movie_id: UUID) -> Optional[datetime]:
        return self._watched.get(movie_id)

    def get_watched_movies(self) -> list[MovieView]:
        return [v for v in self.get_all_movies() if v.is_watched]

    # ----- scheduling -----

    def schedule_movie(self, movie_id: UUID, date: datetime) -> SaveResult:
        idx = self._find_index(movie_id)
        if idx is None:
            logger.debug("schedule skipped (unknown movie) %s", format_kv(movie_id=movie_id))
            return SaveResult.unchanged()
        self._movies[idx] = replace(self._movies[idx], scheduled_date=date)
        logger.info("scheduled movie %s", format_kv(movie_id=movie_id, scheduled_for=date))
        return self._save_movies()

    def unschedule_movie(self, movie_id: UUID) -> SaveResult:
        idx = self._find_index(movie_id)
        if idx is None or self._movies[idx].scheduled_date is None:
            return SaveResult.unchanged()
        self._movies[idx] = replace(self._movies[idx], scheduled_date=None)
        logger.info("unscheduled movie %s", format_kv(movie_id=movie_id))
        return self._save_movies()

    def get_scheduled_movies(self) -> list[MovieView]:
        return [v for v in self.get_all_movies() if v.is_scheduled]

    def is_scheduled(self, movie_id: UUID) -> bool:
        return self.get_scheduled_date(movie_id) is not None

    def get_scheduled_date(self, movie_id: UUID) -> Optional[datetime]:
        idx = self._find_index(movie_id)
        return None if idx is None else self._movies[idx].scheduled_date

    # ----- storage -----

    def refresh_from_storage(self) -> None:
        """Re-read the watchlist and watched map.

        A collection whose latest write failed keeps its in-memory state.
        """
        if "watchlist" not in self._unsaved:
            self._watchlist = dict.fromkeys(self._provider.load_watchlist())
        if "watched_movies" not in self._unsaved:
            self._watched = dict(self._provider.load_watched_movies())
        logger.debug(
            "refreshed from storage %s",
            format_kv(
                watchlist=len(self._watchlist),
                watched=len(self._watched),
                kept_unsaved=",".join(sorted(self._unsaved)) or None,
            ),
        )
