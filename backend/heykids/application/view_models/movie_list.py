from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from heykids.application.movie_service import MovieService
from heykids.application.save_result import SaveResult
from heykids.application.view_models.load_state import LoadingMixin
from heykids.domain.age_group import AgeGroup
from heykids.domain.movie import MovieView
from heykids.utils import format_kv

logger = logging.getLogger(__name__)


class MovieListViewModel(LoadingMixin):
    """Discover-screen state: a catalog snapshot plus UI-local filters.

    ``filtered_movies`` is recomputed on every access. Mutations go to the
    service and the snapshot is re-read afterwards.
    """

    def __init__(self, movie_service: MovieService) -> None:
        self.movie_service = movie_service
        self.movies: list[MovieView] = []
        self.search_text: str = ""
        self.selected_age_group: Optional[AgeGroup] = None
        self.selected_genre: Optional[str] = None
        self.selected_streaming_service: Optional[str] = None
        self.load_movies()

    def load_movies(self) -> list[MovieView]:
        with self._loading():
            self.movie_service.refresh_from_storage()
            self.movies = self.movie_service.get_all_movies()
        logger.debug("movie list loaded %s", format_kv(count=len(self.movies)))
        return self.movies

    def _refresh(self) -> None:
        self.movies = self.movie_service.get_all_movies()

    # ----- filtering -----

    @property
    def filtered_movies(self) -> list[MovieView]:
        result = self.movies
        query = self.search_text.strip().lower()
        if query:
            result = [
                m
                for m in result
                if query in m.title.lower() or query in m.genre.lower() or query in (m.notes or "").lower()
            ]
        if self.selected_age_group is not None:
            result = [m for m in result if m.age_group == self.selected_age_group]
        if self.selected_genre is not None:
            result = [m for m in result if m.genre == self.selected_genre]
        if self.selected_streaming_service is not None:
            result = [m for m in result if self.selected_streaming_service in m.streaming_services]
        return list(result)

    @property
    def available_genres(self) -> list[str]:
        return sorted({m.genre for m in self.movies})

    @property
    def available_streaming_services(self) -> list[str]:
        return sorted({s for m in self.movies for s in m.streaming_services})

    @property
    def active_filter_count(self) -> int:
        return sum(
            (
                bool(self.search_text.strip()),
                self.selected_age_group is not None,
                self.selected_genre is not None,
                self.selected_streaming_service is not None,
            )
        )

    @property
    def has_active_filters(self) -> bool:
        return self.active_filter_count > 0

    def clear_all_filters(self) -> None:
        self.search_text = ""
        self.selected_age_group = None
        self.selected_genre = None
        self.selected_streaming_service = None

    def apply_quick_filter(self, age_group: AgeGroup) -> None:
        self.clear_all_filters()
        self.selected_age_group = age_group

    # ----- intents -----

    def is_in_watchlist(self, movie: MovieView) -> bool:
        return self.movie_service.is_in_watchlist(movie.id)

    def is_watched(self, movie: MovieView) -> bool:
        return self.movie_service.is_watched(movie.id)

    def toggle_watchlist(self, movie: MovieView) -> SaveResult:
        if self.movie_service.is_in_watchlist(movie.id):
            result = self.movie_service.remove_from_watchlist(movie.id)
        else:
            result = self.movie_service.add_to_watchlist(movie.id)
        self._refresh()
        return result

    def mark_as_watched(self, movie: MovieView, date: Optional[datetime] = None) -> SaveResult:
        if self.movie_service.is_watched(movie.id):
            logger.debug("already watched %s", format_kv(title=movie.title))
            return SaveResult.unchanged()
        result = self.movie_service.mark_as_watched(movie.id, date)
        self._refresh()
        return result

    def schedule_movie(self, movie: MovieView, date: datetime) -> SaveResult:
        result = self.movie_service.schedule_movie(movie.id, date)
        self._refresh()
        return result

    @property
    def watchlist_count(self) -> int:
        return len(self.movie_service.watchlist)

    def get_watchlist_movies(self) -> list[MovieView]:
        return self.movie_service.get_watchlist_movies()

    def clear_watchlist(self) -> SaveResult:
        result = self.movie_service.clear_watchlist()
        self._refresh()
        return result
