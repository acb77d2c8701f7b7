from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from heykids.application.memory_service import MemoryService
from heykids.application.movie_service import MovieService
from heykids.application.view_models.load_state import LoadingMixin
from heykids.domain.age_group import AgeGroup
from heykids.domain.dates import comparable
from heykids.domain.memory import DiscussionAnswer, MemorySortCriteria, MIN_MEMORY_RATING, WatchMemory
from heykids.domain.movie import MovieView
from heykids.utils import format_kv

logger = logging.getLogger(__name__)


class MemoryViewModel(LoadingMixin):
    """Memories screen: memory snapshot, filters, and per-age-group stats.

    Filters that depend on the movie (age group, title search) join through
    the movie service; memories whose movie is not in the catalog only match
    the note and answer filters.
    """

    def __init__(
        self,
        memory_service: MemoryService,
        movie_service: MovieService,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.memory_service = memory_service
        self.movie_service = movie_service
        self._clock = clock
        self.memories: list[WatchMemory] = []
        self.search_text: str = ""
        self.selected_age_group: Optional[AgeGroup] = None
        self.selected_movie_id: Optional[UUID] = None
        self.minimum_rating: int = MIN_MEMORY_RATING
        self.load_memories()

    def load_memories(self) -> list[WatchMemory]:
        with self._loading():
            self.memories = self.memory_service.get_all_memories()
        return self.memories

    def get_movie(self, memory: WatchMemory) -> Optional[MovieView]:
        return self.movie_service.get_movie(memory.movie_id)

    def _title_of(self, movie_id: UUID) -> Optional[str]:
        movie = self.movie_service.get_movie(movie_id)
        return None if movie is None else movie.title

    # ----- filtering -----

    @property
    def has_active_filters(self) -> bool:
        return (
            self.selected_age_group is not None
            or bool(self.search_text.strip())
            or self.selected_movie_id is not None
            or self.minimum_rating > MIN_MEMORY_RATING
        )

    def clear_all_filters(self) -> None:
        self.search_text = ""
        self.selected_age_group = None
        self.selected_movie_id = None
        self.minimum_rating = MIN_MEMORY_RATING

    def _matches_search(self, memory: WatchMemory, query: str) -> bool:
        if query in (memory.notes or "").lower():
            return True
        if any(query in a.response.lower() for a in self.memory_service.get_discussion_answers(memory.id)):
            return True
        title = self._title_of(memory.movie_id)
        return title is not None and query in title.lower()

    @property
    def filtered_memories(self) -> list[WatchMemory]:
        result = list(self.memories)
        if self.selected_age_group is not None:
            wanted = self.selected_age_group
            result = [m for m in result if (movie := self.get_movie(m)) is not None and movie.age_group == wanted]
        if self.selected_movie_id is not None:
            result = [m for m in result if m.movie_id == self.selected_movie_id]
        if self.minimum_rating > MIN_MEMORY_RATING:
            result = [m for m in result if m.rating >= self.minimum_rating]
        query = self.search_text.strip().lower()
        if query:
            result = [m for m in result if self._matches_search(m, query)]
        return result

    def sorted_memories(self, criteria: MemorySortCriteria) -> list[WatchMemory]:
        return self.memory_service.get_memories_sorted(criteria, title_lookup=self._title_of)

    # ----- intents -----

    def create_memory(
        self,
        movie: MovieView,
        rating: int,
        notes: Optional[str] = None,
        watch_date: Optional[datetime] = None,
    ) -> bool:
        memory = WatchMemory(
            movie_id=movie.id,
            watch_date=watch_date if watch_date is not None else self._clock(),
            rating=rating,
            notes=notes,
        )
        created = self.memory_service.create_memory(memory)
        if created:
            self.load_memories()
        return created

    def delete_memory(self, memory: WatchMemory) -> bool:
        deleted = self.memory_service.delete_memory(memory.id)
        if deleted:
            self.load_memories()
        else:
            logger.debug("delete skipped (unknown memory) %s", format_kv(memory_id=memory.id))
        return deleted

    def add_discussion_answer(self, answer: DiscussionAnswer, memory: WatchMemory) -> bool:
        saved = self.memory_service.save_discussion_answer(answer, memory.id)
        if saved:
            self.load_memories()
        return saved

    def get_discussion_answers(self, memory: WatchMemory) -> list[DiscussionAnswer]:
        return self.memory_service.get_discussion_answers(memory.id)

    # ----- stats -----

    @property
    def memory_count(self) -> int:
        return len(self.memories)

    @property
    def average_rating(self) -> float:
        if not self.memories:
            return 0.0
        return sum(m.rating for m in self.memories) / len(self.memories)

    def memory_count_for(self, age_group: AgeGroup) -> int:
        return sum(1 for m in self.memories if (movie := self.get_movie(m)) is not None and movie.age_group == age_group)

    def recent_memories(self, limit: int = 5) -> list[WatchMemory]:
        newest_first = sorted(self.memories, key=lambda m: comparable(m.watch_date), reverse=True)
        return newest_first[: max(limit, 0)]
