from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

MIN_MEMORY_RATING = 1
MAX_MEMORY_RATING = 5
DEFAULT_COMPRESSION_QUALITY = 0.8


@dataclass(frozen=True)
class DiscussionAnswer:
    """A child's answer to a post-movie discussion question."""

    question_id: UUID
    response: str
    child_age: int
    id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True)
class MemoryPhoto:
    image_data: bytes
    caption: Optional[str] = None
    capture_date: datetime = field(default_factory=datetime.now)
    compression_quality: float = DEFAULT_COMPRESSION_QUALITY
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if not (0.0 <= float(self.compression_quality) <= 1.0):
            raise ValueError("compression_quality must be between 0.0 and 1.0")

    @property
    def estimated_file_size(self) -> int:
        return len(self.image_data)


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationContext:
    # e.g. "Home", "Regal Cinema"
    name: str
    coordinate: Optional[Coordinate] = None


@dataclass(frozen=True)
class WeatherContext:
    temperature: str
    condition: str
    icon: str


@dataclass(frozen=True)
class WatchMemory:
    """A family's record of actually watching a movie.

    Memories are replaced wholesale; there is no partial update.
    """

    movie_id: UUID
    watch_date: datetime
    rating: int
    notes: Optional[str] = None
    discussion_answers: tuple[DiscussionAnswer, ...] = ()
    photos: tuple[MemoryPhoto, ...] = ()
    location: Optional[LocationContext] = None
    weather_context: Optional[WeatherContext] = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if isinstance(self.rating, bool) or not isinstance(self.rating, int):
            raise ValueError(f"rating must be an integer, got {self.rating!r}")
        if not (MIN_MEMORY_RATING <= self.rating <= MAX_MEMORY_RATING):
            raise ValueError(
                f"rating must be between {MIN_MEMORY_RATING} and {MAX_MEMORY_RATING}, got {self.rating}"
            )
        if not isinstance(self.discussion_answers, tuple):
            object.__setattr__(self, "discussion_answers", tuple(self.discussion_answers))
        if not isinstance(self.photos, tuple):
            object.__setattr__(self, "photos", tuple(self.photos))


class MemorySortCriteria(str, Enum):
    DATE = "date"
    RATING = "rating"
    MOVIE_TITLE = "movie_title"
