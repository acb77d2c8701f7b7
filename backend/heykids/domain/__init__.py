from .age_group import AgeGroup
from .dates import comparable
from .discussion import (
    DEFAULT_QUESTIONS,
    DiscussionQuestion,
    QuestionCategory,
    QuestionDifficulty,
)
from .errors import (
    CatalogError,
    DecodingFailedError,
    DirectoryCreationFailedError,
    DiskFullError,
    EncodingFailedError,
    FileNotFoundStorageError,
    InvalidPathError,
    StorageError,
    WritePermissionDeniedError,
)
from .memory import (
    Coordinate,
    DiscussionAnswer,
    LocationContext,
    MemoryPhoto,
    MemorySortCriteria,
    WatchMemory,
    WeatherContext,
)
from .movie import (
    Movie,
    MovieSortCriteria,
    MovieView,
    ValidationResult,
    WatchlistStatistics,
    validate_movie,
    validate_movie_collection,
)

__all__ = [
    "AgeGroup",
    "CatalogError",
    "Coordinate",
    "DEFAULT_QUESTIONS",
    "DecodingFailedError",
    "DirectoryCreationFailedError",
    "DiscussionAnswer",
    "DiscussionQuestion",
    "DiskFullError",
    "EncodingFailedError",
    "FileNotFoundStorageError",
    "InvalidPathError",
    "LocationContext",
    "MemoryPhoto",
    "MemorySortCriteria",
    "Movie",
    "MovieSortCriteria",
    "MovieView",
    "QuestionCategory",
    "QuestionDifficulty",
    "StorageError",
    "ValidationResult",
    "WatchMemory",
    "WatchlistStatistics",
    "WeatherContext",
    "WritePermissionDeniedError",
    "comparable",
    "validate_movie",
    "validate_movie_collection",
]
