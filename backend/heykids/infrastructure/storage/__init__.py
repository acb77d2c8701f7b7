from .file_storage import APP_FOLDER, FileStorage, StorageDirectory
from .key_value_store import InMemoryKeyValueStore, JsonFileKeyValueStore
from .memory_data_provider import MemoryDataProvider
from .movie_data_provider import MovieDataProvider

__all__ = [
    "APP_FOLDER",
    "FileStorage",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "MemoryDataProvider",
    "MovieDataProvider",
    "StorageDirectory",
]
