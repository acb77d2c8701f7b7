from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional
from uuid import UUID, uuid4

from heykids.domain.age_group import AgeGroup

MIN_YEAR_EXCLUSIVE = 1900
MIN_RATING = 0.0
MAX_RATING = 5.0


@dataclass(frozen=True)
class Movie:
    """A catalog entry. Identity and metadata never change after seeding."""

    title: str
    year: int
    age_group: AgeGroup
    genre: str
    emoji: str = "🎬"
    streaming_services: tuple[str, ...] = ()
    rating: Optional[float] = None
    notes: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if self.rating is not None and not (MIN_RATING <= float(self.rating) <= MAX_RATING):
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}, got {self.rating}")
        # Accept any iterable of names but keep the record hashable.
        if not isinstance(self.streaming_services, tuple):
            object.__setattr__(self, "streaming_services", tuple(self.streaming_services))


@dataclass(frozen=True)
class MovieView:
    """A catalog movie joined with the caller's current annotations."""

    movie: Movie
    is_in_watchlist: bool = False
    is_watched: bool = False
    watched_date: Optional[datetime] = None

    @property
    def id(self) -> UUID:
        return self.movie.id

    @property
    def title(self) -> str:
        return self.movie.title

    @property
    def year(self) -> int:
        return self.movie.year

    @property
    def age_group(self) -> AgeGroup:
        return self.movie.age_group

    @property
    def genre(self) -> str:
        return self.movie.genre

    @property
    def emoji(self) -> str:
        return self.movie.emoji

    @property
    def streaming_services(self) -> tuple[str, ...]:
        return self.movie.streaming_services

    @property
    def rating(self) -> Optional[float]:
        return self.movie.rating

    @property
    def notes(self) -> Optional[str]:
        return self.movie.notes

    @property
    def scheduled_date(self) -> Optional[datetime]:
        return self.movie.scheduled_date

    @property
    def is_scheduled(self) -> bool:
        return self.movie.scheduled_date is not None


class MovieSortCriteria(str, Enum):
    TITLE = "title"
    ALPHABETICAL = "alphabetical"
    YEAR = "year"
    RATING = "rating"
    DATE_ADDED = "date_added"


@dataclass(frozen=True)
class WatchlistStatistics:
    total_count: int = 0
    average_rating: float = 0.0
    age_group_breakdown: dict[AgeGroup, int] = field(default_factory=dict)
    total_watched_from_watchlist: int = 0

    @property
    def completion_percentage(self) -> float:
        if self.total_count <= 0:
            return 0.0
        return self.total_watched_from_watchlist / self.total_count * 100


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, errors: Iterable[str]) -> "ValidationResult":
        return cls(is_valid=False, errors=tuple(errors))


def validate_movie(movie: Movie, *, current_year: Optional[int] = None) -> ValidationResult:
    """Check the catalog invariants for a single movie.

    The rating range is enforced when the ``Movie`` is constructed.
    """
    year_cap = current_year if current_year is not None else datetime.now().year
    errors: list[str] = []

    if not (movie.title or "").strip():
        errors.append("title cannot be empty")
    if not (MIN_YEAR_EXCLUSIVE < int(movie.year) <= year_cap):
        errors.append(f"year {movie.year} is outside ({MIN_YEAR_EXCLUSIVE}, {year_cap}]")
    if not isinstance(movie.age_group, AgeGroup):
        errors.append(f"age_group {movie.age_group!r} is not a known age group")

    return ValidationResult.invalid(errors) if errors else ValidationResult.valid()


def _dedupe_key(movie: Movie) -> str:
    return f"{' '.join((movie.title or '').lower().split())}|{movie.year}"


def find_duplicate_movies(movies: Iterable[Movie]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for movie in movies:
        key = _dedupe_key(movie)
        if key in seen:
            duplicates.append(f"{movie.title} ({movie.year})")
            continue
        seen.add(key)
    return duplicates


def validate_movie_collection(
    movies: Iterable[Movie],
    *,
    current_year: Optional[int] = None,
) -> ValidationResult:
    movies = list(movies)
    errors: list[str] = []

    duplicates = find_duplicate_movies(movies)
    if duplicates:
        errors.append(f"duplicate movies found: {', '.join(duplicates)}")

    for movie in movies:
        result = validate_movie(movie, current_year=current_year)
        if not result.is_valid:
            errors.append(f"movie {movie.title!r} ({movie.year}): {', '.join(result.errors)}")

    return ValidationResult.invalid(errors) if errors else ValidationResult.valid()
