from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from heykids.domain.movie import Movie


class MovieDataProviderPort(Protocol):
    """Durable backing for the movie catalog and its per-user annotations.

    Loads never raise: they return an empty value when nothing is stored.
    Saves raise ``StorageError`` so the owning service can surface failures.
    Each save is an independent write; there is no multi-key transaction.
    """

    def load_movies(self) -> list[Movie]:
        ...

    def save_movies(self, movies: list[Movie]) -> None:
        ...

    def load_watchlist(self) -> list[UUID]:
        ...

    def save_watchlist(self, watchlist: list[UUID]) -> None:
        ...

    def load_watched_movies(self) -> dict[UUID, datetime]:
        ...

    def save_watched_movies(self, watched: dict[UUID, datetime]) -> None:
        ...
