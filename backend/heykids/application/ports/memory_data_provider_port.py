from __future__ import annotations

from typing import Protocol
from uuid import UUID

from heykids.domain.memory import DiscussionAnswer, WatchMemory


class MemoryDataProviderPort(Protocol):
    def load_memories(self) -> list[WatchMemory]:
        ...

    def save_memories(self, memories: list[WatchMemory]) -> None:
        ...

    def load_discussion_answers(self) -> dict[UUID, list[DiscussionAnswer]]:
        """Answers saved separately from their memory, keyed by memory id."""
        ...

    def save_discussion_answers(self, answers: dict[UUID, list[DiscussionAnswer]]) -> None:
        ...
