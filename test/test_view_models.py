import random
import sys
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from heykids.application import MemoryService, MovieService  # noqa: E402
from heykids.application.view_models import (  # noqa: E402
    LoadState,
    MemoryViewModel,
    MovieListViewModel,
    WatchlistSortOrder,
    WatchlistViewModel,
)
from heykids.domain import AgeGroup, DiscussionAnswer, Movie, WatchMemory  # noqa: E402
from heykids.domain.errors import DiskFullError, WritePermissionDeniedError  # noqa: E402
from heykids.infrastructure.calendar import InMemoryCalendar  # noqa: E402
from heykids.infrastructure.storage import (  # noqa: E402
    InMemoryKeyValueStore,
    MemoryDataProvider,
    MovieDataProvider,
)

_NOW = datetime(2024, 6, 1, 12, 0)


def _catalog() -> list[Movie]:
    return [
        Movie(
            title="Moana",
            year=2016,
            age_group=AgeGroup.LITTLE_KIDS,
            genre="Animation",
            streaming_services=("Disney+",),
            rating=4.7,
        ),
        Movie(
            title="Hero",
            year=2002,
            age_group=AgeGroup.TWEENS,
            genre="Action",
            streaming_services=("Max",),
            rating=4.4,
        ),
        Movie(
            title="Balto",
            year=1995,
            age_group=AgeGroup.PRESCHOOLERS,
            genre="Animation",
            streaming_services=("Netflix", "Disney+"),
            rating=4.1,
        ),
    ]


class _Fixture(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryKeyValueStore()
        self.catalog = _catalog()
        self.moana, self.hero, self.balto = self.catalog
        self.movies = MovieService(
            data_provider=MovieDataProvider(self.store, lambda: list(self.catalog)),
            clock=lambda: _NOW,
        )

    def view(self, movie: Movie):
        return self.movies.get_movie(movie.id)


class TestMovieListViewModel(_Fixture):
    def setUp(self) -> None:
        super().setUp()
        self.vm = MovieListViewModel(self.movies)

    def test_loads_snapshot_and_returns_to_idle(self) -> None:
        self.assertEqual(len(self.vm.movies), 3)
        self.assertIs(self.vm.load_state, LoadState.IDLE)
        self.assertFalse(self.vm.is_loading)

    def test_filters_combine(self) -> None:
        self.vm.selected_genre = "Animation"
        self.assertEqual({m.title for m in self.vm.filtered_movies}, {"Moana", "Balto"})
        self.vm.selected_streaming_service = "Netflix"
        self.assertEqual([m.title for m in self.vm.filtered_movies], ["Balto"])
        self.assertEqual(self.vm.active_filter_count, 2)
        self.vm.search_text = "moana"
        self.assertEqual(self.vm.filtered_movies, [])
        self.vm.clear_all_filters()
        self.assertFalse(self.vm.has_active_filters)
        self.assertEqual(len(self.vm.filtered_movies), 3)

    def test_quick_filter_replaces_other_filters(self) -> None:
        self.vm.search_text = "hero"
        self.vm.apply_quick_filter(AgeGroup.LITTLE_KIDS)
        self.assertEqual(self.vm.search_text, "")
        self.assertEqual([m.title for m in self.vm.filtered_movies], ["Moana"])

    def test_available_options(self) -> None:
        self.assertEqual(self.vm.available_genres, ["Action", "Animation"])
        self.assertEqual(self.vm.available_streaming_services, ["Disney+", "Max", "Netflix"])

    def test_toggle_watchlist_refreshes_snapshot(self) -> None:
        movie = self.vm.movies[1]
        self.vm.toggle_watchlist(movie)
        self.assertTrue(self.vm.movies[1].is_in_watchlist)
        self.assertEqual(self.vm.watchlist_count, 1)
        self.vm.toggle_watchlist(movie)
        self.assertFalse(self.vm.movies[1].is_in_watchlist)

    def test_reload_keeps_toggle_whose_write_failed(self) -> None:
        save = self.store.save

        def refuse_watchlist(key, value):
            if key == "stored_watchlist":
                raise WritePermissionDeniedError(key)
            save(key, value)

        self.store.save = refuse_watchlist  # type: ignore[method-assign]
        movie = self.vm.movies[0]
        self.assertFalse(self.vm.toggle_watchlist(movie).ok)
        self.assertTrue(self.vm.movies[0].is_in_watchlist)
        self.vm.load_movies()
        self.assertTrue(self.vm.movies[0].is_in_watchlist)
        self.assertEqual(self.vm.watchlist_count, 1)

    def test_mark_as_watched_skips_when_already_watched(self) -> None:
        first = datetime(2024, 5, 1)
        movie = self.vm.movies[0]
        self.assertTrue(self.vm.mark_as_watched(movie, first).changed)
        self.assertFalse(self.vm.mark_as_watched(movie, datetime(2024, 5, 9)).changed)
        self.assertEqual(self.movies.get_watched_date(movie.id), first)
        self.assertTrue(self.vm.movies[0].is_watched)

    def test_schedule_and_clear(self) -> None:
        self.vm.schedule_movie(self.vm.movies[2], _NOW)
        self.assertTrue(self.vm.movies[2].is_scheduled)
        self.vm.toggle_watchlist(self.vm.movies[0])
        self.vm.clear_watchlist()
        self.assertEqual(self.vm.watchlist_count, 0)
        self.assertEqual(self.vm.get_watchlist_movies(), [])


class TestWatchlistViewModel(_Fixture):
    def setUp(self) -> None:
        super().setUp()
        for movie in (self.hero, self.balto, self.moana):
            self.movies.add_to_watchlist(movie.id)
        self.calendar = InMemoryCalendar()
        self.vm = WatchlistViewModel(self.movies, self.calendar, random.Random(7), clock=lambda: _NOW)

    def test_sort_orders(self) -> None:
        titles = lambda: [m.title for m in self.vm.filtered_watchlist]  # noqa: E731
        self.assertEqual(titles(), ["Hero", "Balto", "Moana"])
        self.vm.sort_order = WatchlistSortOrder.RATING
        self.assertEqual(titles(), ["Moana", "Hero", "Balto"])
        self.vm.sort_order = WatchlistSortOrder.TITLE
        self.assertEqual(titles(), ["Balto", "Hero", "Moana"])
        self.vm.sort_order = WatchlistSortOrder.AGE_GROUP
        self.assertEqual(titles(), ["Balto", "Moana", "Hero"])

    def test_search(self) -> None:
        self.vm.search_text = "BAL"
        self.assertEqual([m.title for m in self.vm.filtered_watchlist], ["Balto"])

    def test_statistics(self) -> None:
        self.assertEqual(self.vm.statistics.total_count, 3)
        self.vm.clear_watchlist()
        self.assertIsNone(self.vm.statistics)
        self.assertEqual(self.vm.watchlist_movies, [])

    def test_remove_and_mark_watched(self) -> None:
        self.vm.remove_from_watchlist(self.view(self.hero))
        self.assertEqual([m.title for m in self.vm.watchlist_movies], ["Balto", "Moana"])
        self.vm.mark_as_watched(self.view(self.balto))
        self.assertTrue(self.vm.watchlist_movies[0].is_watched)

    def test_random_movie(self) -> None:
        picks = {self.vm.random_movie().title for _ in range(30)}
        self.assertTrue(picks <= {"Hero", "Balto", "Moana"})
        self.vm.clear_watchlist()
        self.assertIsNone(self.vm.random_movie())

    def test_schedule_movie_night(self) -> None:
        when = _NOW + timedelta(days=2)
        result = self.vm.schedule_movie_night(self.view(self.moana), when)
        self.assertTrue(result.success)
        self.assertEqual(len(self.calendar.events), 1)
        self.assertEqual(self.calendar.events[0].title, "Movie Night: Moana")
        self.assertEqual(self.movies.get_scheduled_date(self.moana.id), when)
        self.assertIsNone(self.vm.error_message)

    def test_calendar_failure_does_not_schedule(self) -> None:
        vm = WatchlistViewModel(self.movies, InMemoryCalendar(fail_with="Calendar access denied"))
        result = vm.schedule_movie_night(self.view(self.hero), _NOW)
        self.assertFalse(result.success)
        self.assertEqual(vm.error_message, "Calendar access denied")
        self.assertFalse(self.movies.is_scheduled(self.hero.id))

    def test_next_movie_night_is_earliest_upcoming(self) -> None:
        self.assertIsNone(self.vm.next_movie_night)
        self.movies.schedule_movie(self.hero.id, _NOW - timedelta(days=1))
        self.movies.schedule_movie(self.balto.id, _NOW + timedelta(days=5))
        self.movies.schedule_movie(self.moana.id, _NOW + timedelta(days=1))
        self.assertEqual(self.vm.next_movie_night.title, "Moana")

    def test_next_movie_night_with_aware_dates_and_default_clock(self) -> None:
        self.movies.schedule_movie(self.hero.id, datetime(2999, 12, 25, 19, 0, tzinfo=timezone.utc))
        self.movies.schedule_movie(self.balto.id, datetime(2999, 12, 24, 19, 0))
        self.movies.schedule_movie(self.moana.id, datetime(2000, 1, 1, tzinfo=timezone.utc))
        vm = WatchlistViewModel(self.movies)
        self.assertEqual(vm.next_movie_night.title, "Balto")
        self.calendar.create_movie_night(self.view(self.hero), datetime(2999, 12, 25, 19, 0, tzinfo=timezone.utc))
        self.assertEqual(len(self.calendar.upcoming(datetime.now())), 1)

    def test_save_failure_sets_error_message(self) -> None:
        def broken_save(key, value):
            raise DiskFullError(key)

        self.store.save = broken_save  # type: ignore[method-assign]
        result = self.vm.remove_from_watchlist(self.view(self.hero))
        self.assertFalse(result.ok)
        self.assertIn("Insufficient disk space", self.vm.error_message)


class TestMemoryViewModel(_Fixture):
    def setUp(self) -> None:
        super().setUp()
        self.memories = MemoryService(data_provider=MemoryDataProvider(self.store))
        self.vm = MemoryViewModel(self.memories, self.movies, clock=lambda: _NOW)

    def test_create_defaults_watch_date_to_now(self) -> None:
        self.assertTrue(self.vm.create_memory(self.view(self.moana), 5, "Sang along"))
        [memory] = self.vm.memories
        self.assertEqual(memory.watch_date, _NOW)
        self.assertEqual(memory.movie_id, self.moana.id)

    def test_invalid_rating_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.vm.create_memory(self.view(self.moana), 0)
        self.assertEqual(self.vm.memories, [])

    def test_filters(self) -> None:
        self.vm.create_memory(self.view(self.moana), 5, "Sang along", datetime(2024, 5, 1))
        self.vm.create_memory(self.view(self.hero), 3, "A bit long", datetime(2024, 5, 2))
        self.vm.create_memory(self.view(self.balto), 4, None, datetime(2024, 5, 3))

        self.vm.selected_age_group = AgeGroup.TWEENS
        self.assertEqual(len(self.vm.filtered_memories), 1)
        self.vm.clear_all_filters()

        self.vm.minimum_rating = 4
        self.assertEqual(len(self.vm.filtered_memories), 2)
        self.assertTrue(self.vm.has_active_filters)
        self.vm.clear_all_filters()

        self.vm.search_text = "balto"
        self.assertEqual([m.movie_id for m in self.vm.filtered_memories], [self.balto.id])
        self.vm.search_text = "sang"
        self.assertEqual([m.movie_id for m in self.vm.filtered_memories], [self.moana.id])

        self.vm.clear_all_filters()
        self.vm.selected_movie_id = self.hero.id
        self.assertEqual([m.movie_id for m in self.vm.filtered_memories], [self.hero.id])

    def test_search_covers_discussion_answers(self) -> None:
        self.vm.create_memory(self.view(self.hero), 4)
        [memory] = self.vm.memories
        answer = DiscussionAnswer(question_id=uuid4(), response="The colors were amazing", child_age=11)
        self.assertTrue(self.vm.add_discussion_answer(answer, memory))
        self.vm.search_text = "colors"
        self.assertEqual(self.vm.filtered_memories, [memory])
        self.assertEqual(self.vm.get_discussion_answers(memory), [answer])

    def test_memory_for_unknown_movie_only_matches_text_filters(self) -> None:
        self.vm.create_memory(self.view(self.moana), 4, "movie night")
        self.memories.create_memory(WatchMemory(movie_id=uuid4(), watch_date=_NOW, rating=2, notes="orphan"))
        self.vm.load_memories()
        self.vm.selected_age_group = AgeGroup.LITTLE_KIDS
        self.assertEqual(len(self.vm.filtered_memories), 1)
        self.vm.clear_all_filters()
        self.vm.search_text = "orphan"
        self.assertEqual(len(self.vm.filtered_memories), 1)

    def test_stats_and_recent(self) -> None:
        for day, (movie, rating) in enumerate([(self.moana, 5), (self.balto, 2), (self.moana, 4)], start=1):
            self.vm.create_memory(self.view(movie), rating, watch_date=datetime(2024, 5, day))
        self.assertAlmostEqual(self.vm.average_rating, 11 / 3)
        self.assertEqual(self.vm.memory_count_for(AgeGroup.LITTLE_KIDS), 2)
        self.assertEqual(self.vm.memory_count_for(AgeGroup.TWEENS), 0)
        recent = self.vm.recent_memories(limit=2)
        self.assertEqual([m.watch_date.day for m in recent], [3, 2])

    def test_delete(self) -> None:
        self.vm.create_memory(self.view(self.hero), 3)
        [memory] = self.vm.memories
        self.assertTrue(self.vm.delete_memory(memory))
        self.assertFalse(self.vm.delete_memory(memory))
        self.assertEqual(self.vm.memory_count, 0)


if __name__ == "__main__":
    unittest.main()
