from __future__ import annotations

import logging
from uuid import UUID

from heykids.application.ports.key_value_store_port import KeyValueStorePort
from heykids.application.ports.memory_data_provider_port import MemoryDataProviderPort
from heykids.domain.errors import StorageError
from heykids.domain.memory import DiscussionAnswer, WatchMemory
from heykids.infrastructure.storage import codec
from heykids.utils import format_kv

logger = logging.getLogger(__name__)

MEMORIES_KEY = "saved_memories"
ANSWERS_KEY = "discussion_answers"


class MemoryDataProvider(MemoryDataProviderPort):
    def __init__(self, store: KeyValueStorePort) -> None:
        self._store = store

    def load_memories(self) -> list[WatchMemory]:
        try:
            raw = self._store.load(MEMORIES_KEY)
            return [] if raw is None else codec.decode_memories(raw)
        except StorageError as exc:
            logger.warning("stored memories unreadable %s", format_kv(error=str(exc)))
            return []

    def save_memories(self, memories: list[WatchMemory]) -> None:
        self._store.save(MEMORIES_KEY, codec.encode_memories(memories))

    def load_discussion_answers(self) -> dict[UUID, list[DiscussionAnswer]]:
        try:
            raw = self._store.load(ANSWERS_KEY)
            return {} if raw is None else codec.decode_discussion_answers(raw)
        except StorageError as exc:
            logger.warning("stored discussion answers unreadable %s", format_kv(error=str(exc)))
            return {}

    def save_discussion_answers(self, answers: dict[UUID, list[DiscussionAnswer]]) -> None:
        self._store.save(ANSWERS_KEY, codec.encode_discussion_answers(answers))
