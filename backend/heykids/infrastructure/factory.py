"""Wiring for services from settings.

Every builder takes explicit overrides so tests and host apps can skip the
environment entirely.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Optional

from heykids.application.memory_service import MemoryService
from heykids.application.movie_service import MovieService
from heykids.application.ports.key_value_store_port import KeyValueStorePort
from heykids.config.settings import Settings, get_settings
from heykids.infrastructure.catalog import load_catalog
from heykids.infrastructure.storage import (
    APP_FOLDER,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    MemoryDataProvider,
    MovieDataProvider,
)
from heykids.utils import format_kv

logger = logging.getLogger(__name__)


def create_key_value_store(
    backend: Optional[str] = None,
    *,
    data_dir: Optional[Path] = None,
    settings: Optional[Settings] = None,
) -> KeyValueStorePort:
    """Build the store named by ``backend`` (``memory`` or ``file``).

    Raises:
        ValueError: If an unsupported backend is specified.
    """
    settings = settings or get_settings()
    backend = (backend if backend is not None else settings.storage_backend).strip().lower()

    match backend:
        case "memory":
            return InMemoryKeyValueStore()
        case "file":
            directory = Path(data_dir or settings.data_dir) / APP_FOLDER
            logger.info("using file store %s", format_kv(directory=directory))
            return JsonFileKeyValueStore(directory)
        case _:
            raise ValueError(f"Unsupported storage backend: {backend!r}. Expected one of: memory, file")


def create_movie_service(
    store: Optional[KeyValueStorePort] = None,
    *,
    settings: Optional[Settings] = None,
) -> MovieService:
    settings = settings or get_settings()
    store = store if store is not None else create_key_value_store(settings=settings)
    provider = MovieDataProvider(store, partial(load_catalog, settings.catalog_path))
    return MovieService(
        data_provider=provider,
        validate_watchlist_ids=settings.validate_watchlist_ids,
        raise_on_save_error=settings.raise_on_save_error,
    )


def create_memory_service(
    store: Optional[KeyValueStorePort] = None,
    *,
    settings: Optional[Settings] = None,
) -> MemoryService:
    settings = settings or get_settings()
    store = store if store is not None else create_key_value_store(settings=settings)
    return MemoryService(
        data_provider=MemoryDataProvider(store),
        raise_on_save_error=settings.raise_on_save_error,
    )


@dataclass(frozen=True)
class Services:
    store: KeyValueStorePort
    movies: MovieService
    memories: MemoryService


def create_services(settings: Optional[Settings] = None) -> Services:
    """Both services over one shared store."""
    settings = settings or get_settings()
    store = create_key_value_store(settings=settings)
    return Services(
        store=store,
        movies=create_movie_service(store, settings=settings),
        memories=create_memory_service(store, settings=settings),
    )
