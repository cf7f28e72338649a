"""Tests for RewardState loading, mutation and persistence.

RewardState only needs a key-value store, so these tests use the in-memory
FakeStore and never start Home Assistant.
"""

from __future__ import annotations

from datetime import UTC, datetime
import random

import pytest

from custom_components.studyquest import const
from custom_components.studyquest.engines.reward_engine import InvalidPointsError
from custom_components.studyquest.reward_state import (
    EventNotFoundError,
    InvalidRecordError,
    RewardState,
    TaskNotFoundError,
)

from tests.conftest import FakeStore

TTT = const.GAME_TIC_TAC_TOE

# =============================================================================
# Test: Loading
# =============================================================================


class TestLoad:
    """Tests for construction from stored values."""

    def test_empty_store_defaults(self, fake_store: FakeStore) -> None:
        """A fresh store yields level 0 with only the first game."""
        state = RewardState(fake_store)

        assert state.points == 0
        assert state.level == 0
        assert state.tasks == []
        assert state.events == []
        assert state.unlocked_games == [TTT]

    def test_corrupted_tasks_fall_back_to_empty(self) -> None:
        """Undecodable task JSON is ignored; other keys still load."""
        store = FakeStore(
            {
                const.DATA_POINTS: 120,
                const.DATA_LEVEL: 2,
                const.DATA_TASKS: "{not json",
            }
        )

        state = RewardState(store)

        assert state.tasks == []
        assert state.points == 120
        assert state.level == 2

    def test_one_malformed_task_discards_the_list(self) -> None:
        """A list with a malformed element is dropped as a whole."""
        store = FakeStore(
            {
                const.DATA_TASKS: (
                    '[{"id": "a", "text": "ok", "completed": false},'
                    ' {"id": "b", "text": "missing flag"}]'
                ),
            }
        )

        assert RewardState(store).tasks == []

    def test_event_with_bad_date_discards_events(self) -> None:
        """Events whose date is not an ISO datetime are ignored."""
        store = FakeStore(
            {const.DATA_EVENTS: '[{"id": "e", "title": "Exam", "date": "soon"}]'}
        )

        assert RewardState(store).events == []

    @pytest.mark.parametrize("raw", [-5, "12", 3.5, True])
    def test_invalid_counters_use_defaults(self, raw: object) -> None:
        """Counters that are not non-negative integers fall back to 0."""
        store = FakeStore({const.DATA_POINTS: raw, const.DATA_LEVEL: raw})
        state = RewardState(store)

        assert state.points == 0
        assert state.level == 0

    def test_missing_unlocks_are_repaired(self) -> None:
        """Games required by the stored level are restored on load."""
        store = FakeStore(
            {
                const.DATA_POINTS: 250,
                const.DATA_LEVEL: 3,
                const.DATA_UNLOCKED_GAMES: [TTT],
            }
        )

        state = RewardState(store)

        assert state.unlocked_games == [TTT, const.GAME_PONG, const.GAME_FLAPPY_BIRD]

    def test_duplicate_unlocks_are_collapsed(self) -> None:
        """Repeated ids in storage are kept once, in first-seen order."""
        store = FakeStore({const.DATA_UNLOCKED_GAMES: [TTT, TTT]})

        assert RewardState(store).unlocked_games == [TTT]


# =============================================================================
# Test: Points
# =============================================================================


class TestAddPoints:
    """Tests for add_points on the state."""

    def test_zero_is_no_op(self, fake_store: FakeStore) -> None:
        """add_points(0) changes neither points nor level."""
        state = RewardState(fake_store)

        delta = state.add_points(0)

        assert state.points == 0
        assert state.level == 0
        assert delta["levels_gained"] == 0

    def test_hundred_from_fresh_state(self, fake_store: FakeStore) -> None:
        """From level 0, 100 points reach level 2 and unlock the second game."""
        state = RewardState(fake_store)

        delta = state.add_points(100, source="manual")

        assert state.points == 100
        assert state.level == 2
        assert state.unlocked_games == [TTT, const.GAME_PONG]
        assert delta["source"] == "manual"

    def test_negative_rejected_without_change(self, fake_store: FakeStore) -> None:
        """A negative amount raises and leaves the state alone."""
        state = RewardState(fake_store)
        state.add_points(40)

        with pytest.raises(InvalidPointsError):
            state.add_points(-10)

        assert state.points == 40

    def test_unlocks_never_shrink(self, fake_store: FakeStore) -> None:
        """Each award keeps every earlier unlock, in order."""
        state = RewardState(fake_store)
        previous: list[str] = state.unlocked_games

        for amount in (5, 95, 0, 150, 300, 1000):
            state.add_points(amount)
            current = state.unlocked_games
            assert current[: len(previous)] == previous
            previous = current

    def test_mutation_does_not_save(self, fake_store: FakeStore) -> None:
        """Only save() writes to the store."""
        state = RewardState(fake_store)
        state.add_points(50)

        assert fake_store.save_count == 0
        assert const.DATA_POINTS not in fake_store.data


# =============================================================================
# Test: Tasks and events
# =============================================================================


class TestRecords:
    """Tests for task and event CRUD."""

    def test_add_and_toggle_task(self, fake_store: FakeStore) -> None:
        """New tasks are open; toggling flips completion."""
        state = RewardState(fake_store)

        task = state.add_task("  Read chapter 4 ")
        assert task["text"] == "Read chapter 4"
        assert task["completed"] is False

        assert state.toggle_task(task["id"])["completed"] is True
        assert state.toggle_task(task["id"])["completed"] is False

    def test_empty_task_rejected(self, fake_store: FakeStore) -> None:
        """Blank task text is invalid."""
        with pytest.raises(InvalidRecordError):
            RewardState(fake_store).add_task("   ")

    def test_unknown_task(self, fake_store: FakeStore) -> None:
        """Toggling an unknown id raises."""
        with pytest.raises(TaskNotFoundError):
            RewardState(fake_store).toggle_task("missing")

    def test_add_and_delete_event(self, fake_store: FakeStore) -> None:
        """Events are stored with a UTC ISO date and can be deleted."""
        state = RewardState(fake_store)

        event = state.add_event("Exam", datetime(2026, 5, 12, 9, 0, tzinfo=UTC))
        assert event["date"] == "2026-05-12T09:00:00+00:00"

        assert state.delete_event(event["id"]) == event
        assert state.events == []

        with pytest.raises(EventNotFoundError):
            state.delete_event(event["id"])


# =============================================================================
# Test: Persistence
# =============================================================================


class TestSave:
    """Tests for save() and reloading."""

    def test_save_writes_every_key_once(self, fake_store: FakeStore) -> None:
        """One save mirrors all five keys and schedules one write."""
        state = RewardState(fake_store)
        state.add_points(100)
        state.add_task("Flashcards")

        state.save()

        assert fake_store.save_count == 1
        assert set(fake_store.data) == {
            const.DATA_POINTS,
            const.DATA_LEVEL,
            const.DATA_TASKS,
            const.DATA_EVENTS,
            const.DATA_UNLOCKED_GAMES,
        }
        assert isinstance(fake_store.data[const.DATA_TASKS], str)

    def test_round_trip(self, fake_store: FakeStore) -> None:
        """A saved state reloads with identical values."""
        state = RewardState(fake_store)
        state.add_points(230)
        task = state.add_task("Essay outline")
        state.toggle_task(task["id"])
        state.add_event("Study group", datetime(2026, 4, 1, 17, 30, tzinfo=UTC))
        state.save()

        reloaded = RewardState(FakeStore(fake_store.data))

        assert reloaded.points == state.points
        assert reloaded.level == state.level
        assert reloaded.tasks == state.tasks
        assert reloaded.events == state.events
        assert reloaded.unlocked_games == state.unlocked_games


def _expected_after(amounts: list[int]) -> tuple[int, int]:
    """Run the level-up loop over amounts from a fresh state."""
    points, level = 0, 0
    for amount in amounts:
        if amount:
            points += amount
            while points >= level * const.POINTS_PER_LEVEL:
                level += 1
    return points, level


class TestAwardSequences:
    """Points and level over long award sequences with reloads in between."""

    @pytest.mark.parametrize("seed", range(20))
    def test_matches_level_loop_across_reloads(self, seed: int) -> None:
        """Totals follow the loop and survive a reload after every save."""
        rng = random.Random(seed)
        amounts = [
            rng.choice((0, rng.randint(1, 150), rng.randint(150, 900)))
            for _ in range(rng.randint(1, 40))
        ]
        store = FakeStore()
        state = RewardState(store)

        for step, amount in enumerate(amounts, start=1):
            state.add_points(amount)
            state.save()
            store = FakeStore(store.data)
            state = RewardState(store)

            points, level = _expected_after(amounts[:step])
            assert (state.points, state.level) == (points, level)
            unlocked_count = max(1, min(level, len(const.GAME_CATALOG)))
            assert state.unlocked_games == list(const.GAME_CATALOG[:unlocked_count])

        assert state.points == sum(amounts)
