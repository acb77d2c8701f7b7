from .calendar_port import CalendarPort, CalendarResult
from .key_value_store_port import KeyValueStorePort
from .memory_data_provider_port import MemoryDataProviderPort
from .movie_data_provider_port import MovieDataProviderPort

__all__ = [
    "CalendarPort",
    "CalendarResult",
    "KeyValueStorePort",
    "MemoryDataProviderPort",
    "MovieDataProviderPort",
]
