# File: reward_state.py
"""Reward/progression state for one StudyQuest user.

RewardState is the explicit context object every screen, minigame and service
handler works through. It is constructed from a key-value store at setup,
mutated in memory and mirrored back with one save() per logical unit of work.

Stored keys (see const.DATA_*):
    userPoints     int
    userLevel      int
    userTasks      JSON array text of TaskData
    userEvents     JSON array text of EventData
    unlockedGames  list of content ids, in unlock order

Any key that is absent or fails to decode falls back to its default.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol
import uuid

from homeassistant.helpers.json import json_dumps
from homeassistant.util import dt as dt_util
from homeassistant.util.json import json_loads

from . import const
from .engines.reward_engine import RewardEngine, StudyQuestError

if TYPE_CHECKING:
    from .type_defs import EventData, EventId, GameId, RewardDelta, TaskData, TaskId


class TaskNotFoundError(StudyQuestError, LookupError):
    """Raised when a task id is not in the task list."""


class EventNotFoundError(StudyQuestError, LookupError):
    """Raised when an event id is not in the event list."""


class InvalidRecordError(StudyQuestError, ValueError):
    """Raised when a task or event would be created with empty text."""


class KeyValueStore(Protocol):
    """Durable key-value store collaborator."""

    def get(self, key: str) -> Any | None:
        """Return the value for key or None."""

    def set(self, key: str, value: Any) -> None:
        """Set key to value."""

    def schedule_save(self) -> None:
        """Persist the current values."""


# ------------------------------------------------------------------------------------------------
# Decoding
# ------------------------------------------------------------------------------------------------


def _decode_count(raw: Any, key: str, default: int) -> int:
    """Decode a non-negative integer counter."""
    if raw is None:
        return default
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        const.LOGGER.debug(
            "DEBUG: Stored '%s' is not a non-negative integer (%r), using %s",
            key,
            raw,
            default,
        )
        return default
    return raw


def _is_task(item: Any) -> bool:
    return (
        isinstance(item, dict)
        and isinstance(item.get(const.DATA_TASK_ID), str)
        and isinstance(item.get(const.DATA_TASK_TEXT), str)
        and isinstance(item.get(const.DATA_TASK_COMPLETED), bool)
    )


def _is_event(item: Any) -> bool:
    if not (
        isinstance(item, dict)
        and isinstance(item.get(const.DATA_EVENT_ID), str)
        and isinstance(item.get(const.DATA_EVENT_TITLE), str)
        and isinstance(item.get(const.DATA_EVENT_DATE), str)
    ):
        return False
    try:
        return dt_util.parse_datetime(item[const.DATA_EVENT_DATE]) is not None
    except ValueError:
        return False


def _decode_records(raw: Any, key: str, is_valid) -> list[Any]:
    """Decode a JSON array blob; any malformed element discards the whole list."""
    if raw is None:
        return []
    try:
        items = json_loads(raw) if isinstance(raw, (str, bytes)) else raw
    except ValueError as err:
        const.LOGGER.debug("DEBUG: Could not decode stored '%s': %s", key, err)
        return []
    if not isinstance(items, list) or not all(is_valid(item) for item in items):
        const.LOGGER.debug("DEBUG: Stored '%s' has an unexpected shape, ignoring", key)
        return []
    return [dict(item) for item in items]


def _decode_unlocked(raw: Any, catalog: Sequence[GameId]) -> list[GameId]:
    """Decode the unlocked-games list; default is the first catalog member."""
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        if raw is not None:
            const.LOGGER.debug(
                "DEBUG: Stored '%s' is not a list of ids, using default",
                const.DATA_UNLOCKED_GAMES,
            )
        return [catalog[0]]
    unlocked: list[GameId] = []
    for content_id in raw:
        if content_id not in unlocked:
            unlocked.append(content_id)
    return unlocked


# ------------------------------------------------------------------------------------------------
# RewardState
# ------------------------------------------------------------------------------------------------


class RewardState:
    """Points, level, unlocks, tasks and events for one user."""

    def __init__(
        self, store: KeyValueStore, catalog: Sequence[GameId] = const.GAME_CATALOG
    ) -> None:
        """Load the state from store, falling back to defaults per key."""
        self._store = store
        self._catalog = tuple(catalog)
        self.points: int = _decode_count(
            store.get(const.DATA_POINTS), const.DATA_POINTS, const.DEFAULT_POINTS
        )
        self.level: int = _decode_count(
            store.get(const.DATA_LEVEL), const.DATA_LEVEL, const.DEFAULT_LEVEL
        )
        self.tasks: list[TaskData] = _decode_records(
            store.get(const.DATA_TASKS), const.DATA_TASKS, _is_task
        )
        self.events: list[EventData] = _decode_records(
            store.get(const.DATA_EVENTS), const.DATA_EVENTS, _is_event
        )
        self._unlocked: list[GameId] = _decode_unlocked(
            store.get(const.DATA_UNLOCKED_GAMES), self._catalog
        )

        # Repair stores written before the level they describe was reached
        for content_id in RewardEngine.required_unlocks(self.level, self._catalog):
            if content_id not in self._unlocked:
                const.LOGGER.debug(
                    "DEBUG: Restoring unlock '%s' required by level %s",
                    content_id,
                    self.level,
                )
                self._unlocked.append(content_id)

    # -------------------------------------------------------------------------------------
    # Reward operations
    # -------------------------------------------------------------------------------------

    def add_points(self, amount: int, source: str | None = None) -> RewardDelta:
        """Add points, levelling up and unlocking content as thresholds are crossed.

        Raises:
            InvalidPointsError: amount is negative
        """
        self.points, self.level, self._unlocked, delta = RewardEngine.apply_points(
            self.points, self.level, self._unlocked, amount, self._catalog
        )
        delta["source"] = source
        if delta["levels_gained"]:
            const.LOGGER.info(
                "INFO: Reached level %s with %s points (unlocked: %s)",
                self.level,
                self.points,
                delta["newly_unlocked"] or "nothing new",
            )
        elif amount:
            const.LOGGER.debug(
                "DEBUG: Added %s points from %s, total %s", amount, source, self.points
            )
        return delta

    @property
    def unlocked_games(self) -> list[GameId]:
        """Return unlocked content ids in unlock order."""
        return list(self._unlocked)

    def is_unlocked(self, content_id: str) -> bool:
        """Return whether content_id has been unlocked."""
        return content_id in self._unlocked

    @property
    def progress_within_level(self) -> int:
        """Return points earned towards the next hundred."""
        return RewardEngine.progress_within_level(self.points)

    # -------------------------------------------------------------------------------------
    # Task CRUD
    # -------------------------------------------------------------------------------------

    def add_task(self, text: str) -> TaskData:
        """Append a new open task."""
        text = text.strip()
        if not text:
            raise InvalidRecordError("Task text must not be empty")
        task: TaskData = {
            "id": str(uuid.uuid4()),
            "text": text,
            "completed": False,
        }
        self.tasks.append(task)
        return task

    def get_task(self, task_id: TaskId) -> TaskData:
        """Return the task with task_id."""
        for task in self.tasks:
            if task["id"] == task_id:
                return task
        raise TaskNotFoundError(f"Task '{task_id}' not found")

    def toggle_task(self, task_id: TaskId) -> TaskData:
        """Flip the completed flag of a task."""
        task = self.get_task(task_id)
        task["completed"] = not task["completed"]
        return task

    # -------------------------------------------------------------------------------------
    # Event CRUD
    # -------------------------------------------------------------------------------------

    def add_event(self, title: str, date: datetime) -> EventData:
        """Append a calendar event at date."""
        title = title.strip()
        if not title:
            raise InvalidRecordError("Event title must not be empty")
        event: EventData = {
            "id": str(uuid.uuid4()),
            "title": title,
            "date": dt_util.as_utc(date).isoformat(),
        }
        self.events.append(event)
        return event

    def delete_event(self, event_id: EventId) -> EventData:
        """Remove and return the event with event_id."""
        for index, event in enumerate(self.events):
            if event["id"] == event_id:
                return self.events.pop(index)
        raise EventNotFoundError(f"Event '{event_id}' not found")

    # -------------------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------------------

    def as_dict(self) -> dict[str, Any]:
        """Return the stored representation of every field."""
        return {
            const.DATA_POINTS: self.points,
            const.DATA_LEVEL: self.level,
            const.DATA_TASKS: json_dumps(self.tasks),
            const.DATA_EVENTS: json_dumps(self.events),
            const.DATA_UNLOCKED_GAMES: list(self._unlocked),
        }

    def save(self) -> None:
        """Mirror every field into the store and queue one write."""
        for key, value in self.as_dict().items():
            self._store.set(key, value)
        self._store.schedule_save()
