import sys
import unittest
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from heykids.application import MemoryService  # noqa: E402
from heykids.domain import DiscussionAnswer, MemorySortCriteria, WatchMemory  # noqa: E402
from heykids.domain.errors import DiskFullError  # noqa: E402
from heykids.infrastructure.storage import InMemoryKeyValueStore, MemoryDataProvider  # noqa: E402


class _FailingSaves(InMemoryKeyValueStore):
    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def save(self, key, value) -> None:
        if self.fail:
            raise DiskFullError()
        super().save(key, value)


def _memory(movie_id=None, *, day: int = 1, rating: int = 3, notes=None, answers=()) -> WatchMemory:
    return WatchMemory(
        movie_id=movie_id or uuid4(),
        watch_date=datetime(2024, 1, day, 19, 0),
        rating=rating,
        notes=notes,
        discussion_answers=answers,
    )


class TestMemoryService(unittest.TestCase):
    def setUp(self) -> None:
        self.store = _FailingSaves()
        self.provider = MemoryDataProvider(self.store)
        self.service = MemoryService(data_provider=self.provider)

    def test_create_and_query(self) -> None:
        movie_id = uuid4()
        first, second, other = _memory(movie_id), _memory(movie_id, day=2), _memory()
        for memory in (first, second, other):
            self.assertTrue(self.service.create_memory(memory))
        self.assertEqual(self.service.get_memory_count(), 3)
        self.assertEqual(self.service.get_memories(movie_id), [first, second])
        self.assertEqual(self.service.get_memory(other.id), other)
        self.assertIsNone(self.service.get_memory(uuid4()))

    def test_memories_persist_across_instances(self) -> None:
        memory = _memory(notes="Popcorn everywhere")
        self.service.create_memory(memory)
        self.assertEqual(MemoryService(data_provider=self.provider).get_all_memories(), [memory])

    def test_delete(self) -> None:
        memory = _memory()
        self.service.create_memory(memory)
        self.assertFalse(self.service.delete_memory(uuid4()))
        self.assertTrue(self.service.delete_memory(memory.id))
        self.assertEqual(self.service.get_all_memories(), [])

    def test_replace(self) -> None:
        memory = _memory(rating=2)
        self.service.create_memory(memory)
        updated = replace(memory, rating=5)
        self.assertTrue(self.service.replace_memory(updated))
        self.assertEqual(self.service.get_memory(memory.id).rating, 5)
        self.assertFalse(self.service.replace_memory(_memory()))

    def test_average_rating(self) -> None:
        self.assertEqual(self.service.get_average_rating(), 0.0)
        self.service.create_memory(_memory(rating=2))
        self.service.create_memory(_memory(rating=5))
        self.assertEqual(self.service.get_average_rating(), 3.5)

    def test_sorting(self) -> None:
        titles = {}
        a, b, c = _memory(day=1, rating=5), _memory(day=3, rating=1), _memory(day=2, rating=3)
        titles[a.movie_id], titles[c.movie_id] = "Zootopia", "Balto"
        for memory in (a, b, c):
            self.service.create_memory(memory)
        self.assertEqual(self.service.get_memories_sorted(MemorySortCriteria.DATE), [b, c, a])
        self.assertEqual(self.service.get_memories_sorted("rating"), [a, c, b])
        self.assertEqual(
            self.service.get_memories_sorted(MemorySortCriteria.MOVIE_TITLE, title_lookup=titles.get),
            [c, a, b],
        )
        self.assertEqual(self.service.get_memories_sorted(MemorySortCriteria.MOVIE_TITLE), [b, c, a])

    def test_date_sort_mixes_naive_and_aware_dates(self) -> None:
        older = replace(_memory(), watch_date=datetime(2020, 1, 1, tzinfo=timezone.utc))
        newer = _memory(day=5)
        for memory in (older, newer):
            self.service.create_memory(memory)
        self.assertEqual(self.service.get_memories_sorted(MemorySortCriteria.DATE), [newer, older])

    def test_search_is_notes_only(self) -> None:
        hit = _memory(notes="The SNOW scene was magic")
        miss = _memory(answers=(DiscussionAnswer(question_id=uuid4(), response="snow", child_age=5),))
        self.service.create_memory(hit)
        self.service.create_memory(miss)
        self.assertEqual(self.service.search_memories("snow"), [hit])
        self.assertEqual(len(self.service.search_memories("")), 2)

    def test_discussion_answers(self) -> None:
        question = uuid4()
        embedded = DiscussionAnswer(question_id=uuid4(), response="the boat", child_age=6)
        memory = _memory(answers=(embedded,))
        self.service.create_memory(memory)

        first = DiscussionAnswer(question_id=question, response="happy", child_age=6)
        revised = DiscussionAnswer(question_id=question, response="excited", child_age=6)
        self.assertTrue(self.service.save_discussion_answer(first, memory.id))
        self.assertTrue(self.service.save_discussion_answer(revised, memory.id))
        self.assertEqual(self.service.get_discussion_answers(memory.id), [embedded, revised])

        reloaded = MemoryService(data_provider=self.provider)
        self.assertEqual(reloaded.get_discussion_answers(memory.id), [embedded, revised])

    def test_answer_for_unknown_memory(self) -> None:
        answer = DiscussionAnswer(question_id=uuid4(), response="?", child_age=4)
        self.assertFalse(self.service.save_discussion_answer(answer, uuid4()))
        self.assertEqual(self.service.get_discussion_answers(uuid4()), [])

    def test_deleting_memory_drops_its_answers(self) -> None:
        memory = _memory()
        self.service.create_memory(memory)
        self.service.save_discussion_answer(DiscussionAnswer(question_id=uuid4(), response="x", child_age=9), memory.id)
        self.service.delete_memory(memory.id)
        self.assertEqual(self.service.get_discussion_answers(memory.id), [])

    def test_save_failure_is_kept_in_last_error(self) -> None:
        self.store.fail = True
        with self.assertLogs("heykids.application.memory_service", level="WARNING"):
            self.assertTrue(self.service.create_memory(_memory()))
        self.assertIsInstance(self.service.last_save_error, DiskFullError)
        self.assertEqual(self.service.get_memory_count(), 1)

    def test_strict_mode_raises(self) -> None:
        service = MemoryService(data_provider=self.provider, raise_on_save_error=True)
        self.store.fail = True
        with self.assertRaises(DiskFullError):
            service.create_memory(_memory())


if __name__ == "__main__":
    unittest.main()
