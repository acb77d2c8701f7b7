from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from heykids.application.ports.key_value_store_port import KeyValueStorePort
from heykids.application.ports.movie_data_provider_port import MovieDataProviderPort
from heykids.domain.errors import DecodingFailedError, StorageError
from heykids.domain.movie import Movie
from heykids.infrastructure.storage import codec
from heykids.utils import format_kv

logger = logging.getLogger(__name__)

MOVIES_KEY = "movies"
WATCHLIST_KEY = "stored_watchlist"
WATCHED_KEY = "stored_watched_movies"

CatalogLoader = Callable[[], list[Movie]]


class MovieDataProvider(MovieDataProviderPort):
    """Key-value persistence for the catalog, watchlist and watched map.

    The catalog is seeded from ``catalog_loader`` the first time it is read
    and whenever the stored copy cannot be decoded. Any other read failure
    serves the seed for this session without overwriting what is stored.
    """

    def __init__(self, store: KeyValueStorePort, catalog_loader: Optional[CatalogLoader] = None) -> None:
        self._store = store
        self._catalog_loader = catalog_loader or (lambda: [])

    def _read(self, key: str):
        try:
            return self._store.load(key)
        except StorageError as exc:
            logger.warning("stored data unreadable %s", format_kv(key=key, error=str(exc)))
            return None

    def load_movies(self) -> list[Movie]:
        try:
            raw = self._store.load(MOVIES_KEY)
            if raw is not None:
                return codec.decode_movies(raw)
        except DecodingFailedError as exc:
            logger.warning("stored movies undecodable, reseeding %s", format_kv(error=str(exc)))
        except StorageError as exc:
            logger.warning("stored movies unreadable, serving seed unsaved %s", format_kv(error=str(exc)))
            return self._seed(persist=False)
        return self._seed()

    def _seed(self, *, persist: bool = True) -> list[Movie]:
        movies = list(self._catalog_loader())
        logger.info("seeding movies from catalog %s", format_kv(count=len(movies), persist=persist))
        if not persist:
            return movies
        try:
            self.save_movies(movies)
        except StorageError as exc:
            # the seed is still usable for this session
            logger.warning("could not persist seeded catalog %s", format_kv(error=str(exc)))
        return movies

    def save_movies(self, movies: list[Movie]) -> None:
        self._store.save(MOVIES_KEY, codec.encode_movies(movies))

    def load_watchlist(self) -> list[UUID]:
        raw = self._read(WATCHLIST_KEY)
        if raw is None:
            return []
        try:
            return codec.decode_watchlist(raw)
        except StorageError as exc:
            logger.warning("stored watchlist undecodable %s", format_kv(error=str(exc)))
            return []

    def save_watchlist(self, watchlist: list[UUID]) -> None:
        self._store.save(WATCHLIST_KEY, codec.encode_watchlist(watchlist))

    def load_watched_movies(self) -> dict[UUID, datetime]:
        raw = self._read(WATCHED_KEY)
        if raw is None:
            return {}
        try:
            return codec.decode_watched(raw)
        except StorageError as exc:
            logger.warning("stored watched movies undecodable %s", format_kv(error=str(exc)))
            return {}

    def save_watched_movies(self, watched: dict[UUID, datetime]) -> None:
        self._store.save(WATCHED_KEY, codec.encode_watched(watched))
