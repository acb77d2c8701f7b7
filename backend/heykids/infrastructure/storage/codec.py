"""pydantic records for the persisted JSON shapes.

Keys are camelCase to stay compatible with data written by the mobile app;
either spelling is accepted on load. Every ``decode_*`` helper raises
``DecodingFailedError`` and every ``encode_*`` helper returns plain
JSON-compatible values.
"""

from __future__ import annotations

import base64
import binascii
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from heykids.domain.age_group import AgeGroup
from heykids.domain.errors import DecodingFailedError, EncodingFailedError
from heykids.domain.memory import (
    Coordinate,
    DiscussionAnswer,
    LocationContext,
    MemoryPhoto,
    WatchMemory,
    WeatherContext,
)
from heykids.domain.movie import Movie


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def dump(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class MovieRecord(_Record):
    id: UUID
    title: str
    year: int
    age_group: AgeGroup
    genre: str
    emoji: str = "🎬"
    streaming_services: list[str] = Field(default_factory=list)
    rating: Optional[float] = None
    notes: Optional[str] = None
    scheduled_date: Optional[datetime] = None

    @classmethod
    def from_domain(cls, movie: Movie) -> "MovieRecord":
        return cls(
            id=movie.id,
            title=movie.title,
            year=movie.year,
            age_group=movie.age_group,
            genre=movie.genre,
            emoji=movie.emoji,
            streaming_services=list(movie.streaming_services),
            rating=movie.rating,
            notes=movie.notes,
            scheduled_date=movie.scheduled_date,
        )

    def to_domain(self) -> Movie:
        return Movie(
            id=self.id,
            title=self.title,
            year=self.year,
            age_group=self.age_group,
            genre=self.genre,
            emoji=self.emoji,
            streaming_services=tuple(self.streaming_services),
            rating=self.rating,
            notes=self.notes,
            scheduled_date=self.scheduled_date,
        )


class DiscussionAnswerRecord(_Record):
    id: UUID
    question_id: UUID
    response: str
    child_age: int

    @classmethod
    def from_domain(cls, answer: DiscussionAnswer) -> "DiscussionAnswerRecord":
        return cls(id=answer.id, question_id=answer.question_id, response=answer.response, child_age=answer.child_age)

    def to_domain(self) -> DiscussionAnswer:
        return DiscussionAnswer(id=self.id, question_id=self.question_id, response=self.response, child_age=self.child_age)


class MemoryPhotoRecord(_Record):
    id: UUID
    # base64 of the raw image bytes
    image_data: str
    caption: Optional[str] = None
    capture_date: datetime
    compression_quality: float = 0.8

    @classmethod
    def from_domain(cls, photo: MemoryPhoto) -> "MemoryPhotoRecord":
        return cls(
            id=photo.id,
            image_data=base64.b64encode(photo.image_data).decode("ascii"),
            caption=photo.caption,
            capture_date=photo.capture_date,
            compression_quality=photo.compression_quality,
        )

    def to_domain(self) -> MemoryPhoto:
        try:
            raw = base64.b64decode(self.image_data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodingFailedError(f"photo {self.id}: invalid base64 image data") from exc
        return MemoryPhoto(
            id=self.id,
            image_data=raw,
            caption=self.caption,
            capture_date=self.capture_date,
            compression_quality=self.compression_quality,
        )


class CoordinateRecord(_Record):
    latitude: float
    longitude: float


class LocationRecord(_Record):
    name: str
    coordinate: Optional[CoordinateRecord] = None


class WeatherRecord(_Record):
    temperature: str
    condition: str
    icon: str


class WatchMemoryRecord(_Record):
    id: UUID
    movie_id: UUID
    watch_date: datetime
    rating: int
    notes: Optional[str] = None
    discussion_answers: list[DiscussionAnswerRecord] = Field(default_factory=list)
    photos: list[MemoryPhotoRecord] = Field(default_factory=list)
    location: Optional[LocationRecord] = None
    weather_context: Optional[WeatherRecord] = None

    @classmethod
    def from_domain(cls, memory: WatchMemory) -> "WatchMemoryRecord":
        location = None
        if memory.location is not None:
            coord = memory.location.coordinate
            location = LocationRecord(
                name=memory.location.name,
                coordinate=None if coord is None else CoordinateRecord(latitude=coord.latitude, longitude=coord.longitude),
            )
        weather = memory.weather_context
        return cls(
            id=memory.id,
            movie_id=memory.movie_id,
            watch_date=memory.watch_date,
            rating=memory.rating,
            notes=memory.notes,
            discussion_answers=[DiscussionAnswerRecord.from_domain(a) for a in memory.discussion_answers],
            photos=[MemoryPhotoRecord.from_domain(p) for p in memory.photos],
            location=location,
            weather_context=None
            if weather is None
            else WeatherRecord(temperature=weather.temperature, condition=weather.condition, icon=weather.icon),
        )

    def to_domain(self) -> WatchMemory:
        location = None
        if self.location is not None:
            coord = self.location.coordinate
            location = LocationContext(
                name=self.location.name,
                coordinate=None if coord is None else Coordinate(latitude=coord.latitude, longitude=coord.longitude),
            )
        weather = self.weather_context
        return WatchMemory(
            id=self.id,
            movie_id=self.movie_id,
            watch_date=self.watch_date,
            rating=self.rating,
            notes=self.notes,
            discussion_answers=tuple(a.to_domain() for a in self.discussion_answers),
            photos=tuple(p.to_domain() for p in self.photos),
            location=location,
            weather_context=None
            if weather is None
            else WeatherContext(temperature=weather.temperature, condition=weather.condition, icon=weather.icon),
        )


_MOVIES = TypeAdapter(list[MovieRecord])
_MEMORIES = TypeAdapter(list[WatchMemoryRecord])
_ANSWERS = TypeAdapter(dict[UUID, list[DiscussionAnswerRecord]])
_WATCHLIST = TypeAdapter(list[UUID])
_WATCHED = TypeAdapter(dict[UUID, datetime])


def _decode(adapter: TypeAdapter, data: Any, what: str) -> Any:
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        raise DecodingFailedError(f"{what}: {exc.error_count()} validation error(s)") from exc


def _to_domain(records: list, what: str) -> list:
    try:
        return [r.to_domain() for r in records]
    except ValueError as exc:
        # domain constructors reject values the schema let through (e.g. memory rating 9)
        raise DecodingFailedError(f"{what}: {exc}") from exc


def encode_movies(movies: list[Movie]) -> list[dict[str, Any]]:
    try:
        return [MovieRecord.from_domain(m).dump() for m in movies]
    except ValidationError as exc:
        raise EncodingFailedError(f"movies: {exc.error_count()} validation error(s)") from exc


def decode_movies(data: Any) -> list[Movie]:
    return _to_domain(_decode(_MOVIES, data, "movies"), "movies")


def encode_memories(memories: list[WatchMemory]) -> list[dict[str, Any]]:
    try:
        return [WatchMemoryRecord.from_domain(m).dump() for m in memories]
    except ValidationError as exc:
        raise EncodingFailedError(f"memories: {exc.error_count()} validation error(s)") from exc


def decode_memories(data: Any) -> list[WatchMemory]:
    return _to_domain(_decode(_MEMORIES, data, "memories"), "memories")


def encode_discussion_answers(answers: dict[UUID, list[DiscussionAnswer]]) -> dict[str, list[dict[str, Any]]]:
    return {str(mid): [DiscussionAnswerRecord.from_domain(a).dump() for a in items] for mid, items in answers.items()}


def decode_discussion_answers(data: Any) -> dict[UUID, list[DiscussionAnswer]]:
    decoded = _decode(_ANSWERS, data, "discussion_answers")
    return {mid: [r.to_domain() for r in records] for mid, records in decoded.items()}


def encode_watchlist(watchlist: list[UUID]) -> list[str]:
    return [str(mid) for mid in watchlist]


def decode_watchlist(data: Any) -> list[UUID]:
    return _decode(_WATCHLIST, data, "watchlist")


def encode_watched(watched: dict[UUID, datetime]) -> dict[str, str]:
    return {str(mid): when.isoformat() for mid, when in watched.items()}


def decode_watched(data: Any) -> dict[UUID, datetime]:
    return _decode(_WATCHED, data, "watched_movies")
