from __future__ import annotations

import logging
from typing import Callable, Optional, Union
from uuid import UUID

from heykids.application.ports.memory_data_provider_port import MemoryDataProviderPort
from heykids.application.save_result import write_through
from heykids.domain.dates import comparable
from heykids.domain.errors import StorageError
from heykids.domain.memory import DiscussionAnswer, MemorySortCriteria, WatchMemory
from heykids.utils import format_kv

logger = logging.getLogger(__name__)

TitleLookup = Callable[[UUID], Optional[str]]


class MemoryService:
    """CRUD over watch memories, independent of the movie catalog."""

    def __init__(
        self,
        *,
        data_provider: MemoryDataProviderPort,
        raise_on_save_error: bool = False,
    ) -> None:
        self._provider = data_provider
        self._raise_on_save_error = bool(raise_on_save_error)
        self._memories: list[WatchMemory] = []
        self._answers: dict[UUID, list[DiscussionAnswer]] = {}
        self.last_save_error: Optional[StorageError] = None
        self.load_memories()

    def _save(self, what: str, action: Callable[[], None]) -> bool:
        try:
            result = write_through(
                action,
                what=what,
                logger=logger,
                raise_on_error=self._raise_on_save_error,
            )
        except StorageError as exc:
            self.last_save_error = exc
            raise
        self.last_save_error = result.error
        return result.ok

    def _save_memories(self) -> bool:
        return self._save("memories", lambda: self._provider.save_memories(list(self._memories)))

    def _save_answers(self) -> bool:
        snapshot = {mid: list(answers) for mid, answers in self._answers.items()}
        return self._save("discussion_answers", lambda: self._provider.save_discussion_answers(snapshot))

    def load_memories(self) -> list[WatchMemory]:
        self._memories = list(self._provider.load_memories())
        self._answers = {mid: list(a) for mid, a in self._provider.load_discussion_answers().items()}
        logger.debug("memories loaded %s", format_kv(count=len(self._memories)))
        return list(self._memories)

    # ----- CRUD -----

    def get_all_memories(self) -> list[WatchMemory]:
        return list(self._memories)

    def get_memory(self, memory_id: UUID) -> Optional[WatchMemory]:
        return next((m for m in self._memories if m.id == memory_id), None)

    def get_memories(self, movie_id: UUID) -> list[WatchMemory]:
        return [m for m in self._memories if m.movie_id == movie_id]

    def create_memory(self, memory: WatchMemory) -> bool:
        """Append a memory. The in-memory create always succeeds.

        Returns True even when the write-through failed; check
        ``last_save_error`` for that case.
        """
        self._memories.append(memory)
        logger.info(
            "memory created %s",
            format_kv(memory_id=memory.id, movie_id=memory.movie_id, rating=memory.rating),
        )
        self._save_memories()
        return True

    def replace_memory(self, memory: WatchMemory) -> bool:
        for idx, existing in enumerate(self._memories):
            if existing.id == memory.id:
                self._memories[idx] = memory
                logger.info("memory replaced %s", format_kv(memory_id=memory.id))
                self._save_memories()
                return True
        return False

    def delete_memory(self, memory_id: UUID) -> bool:
        before = len(self._memories)
        self._memories = [m for m in self._memories if m.id != memory_id]
        if len(self._memories) == before:
            return False
        logger.info("memory deleted %s", format_kv(memory_id=memory_id, remaining=len(self._memories)))
        self._save_memories()
        if self._answers.pop(memory_id, None) is not None:
            self._save_answers()
        return True

    # ----- discussion -----

    def save_discussion_answer(self, answer: DiscussionAnswer, memory_id: UUID) -> bool:
        if self.get_memory(memory_id) is None:
            return False
        kept = [a for a in self._answers.get(memory_id, []) if a.question_id != answer.question_id]
        kept.append(answer)
        self._answers[memory_id] = kept
        self._save_answers()
        return True

    def get_discussion_answers(self, memory_id: UUID) -> list[DiscussionAnswer]:
        memory = self.get_memory(memory_id)
        if memory is None:
            return []
        saved = self._answers.get(memory_id, [])
        saved_questions = {a.question_id for a in saved}
        embedded = [a for a in memory.discussion_answers if a.question_id not in saved_questions]
        return embedded + list(saved)

    # ----- queries and stats -----

    def get_memory_count(self) -> int:
        return len(self._memories)

    def get_average_rating(self) -> float:
        if not self._memories:
            return 0.0
        return sum(m.rating for m in self._memories) / len(self._memories)

    def get_memories_sorted(
        self,
        criteria: Union[MemorySortCriteria, str],
        title_lookup: Optional[TitleLookup] = None,
    ) -> list[WatchMemory]:
        criteria = MemorySortCriteria(criteria)
        by_date = sorted(self._memories, key=lambda m: comparable(m.watch_date), reverse=True)
        match criteria:
            case MemorySortCriteria.RATING:
                return sorted(self._memories, key=lambda m: m.rating, reverse=True)
            case MemorySortCriteria.MOVIE_TITLE if title_lookup is not None:
                # Newest-first within a title; unknown movies sort last.
                return sorted(
                    by_date,
                    key=lambda m: (title_lookup(m.movie_id) is None, (title_lookup(m.movie_id) or "").lower()),
                )
            case _:
                return by_date

    def search_memories(self, query: str) -> list[WatchMemory]:
        q = (query or "").strip().lower()
        if not q:
            return list(self._memories)
        return [m for m in self._memories if q in (m.notes or "").lower()]
