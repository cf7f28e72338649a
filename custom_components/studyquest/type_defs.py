"""Type definitions for StudyQuest data structures.

TypedDict is used for the fixed-shape records that cross module seams
(stored tasks and events, reward deltas, chat messages, profiles).

IMPORTANT: This file must NOT import from coordinator.py or any file that
imports coordinator to avoid circular dependencies.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Stored data is validated at load
time in reward_state.py; TypedDict does not enforce types at runtime.
"""

from typing import NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

TaskId = str  # UUID string
EventId = str  # UUID string
GameId = str  # Catalog content id, e.g. "Tic-Tac-Toe"
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"


# =============================================================================
# Stored Records
# =============================================================================


class TaskData(TypedDict):
    """A study task in the task list."""

    id: TaskId
    text: str
    completed: bool


class EventData(TypedDict):
    """A calendar event."""

    id: EventId
    title: str
    date: ISODatetime


# =============================================================================
# Reward Engine
# =============================================================================


class RewardDelta(TypedDict):
    """Result of applying points to a reward state."""

    points_added: int
    old_points: int
    new_points: int
    old_level: int
    new_level: int
    levels_gained: int
    newly_unlocked: list[GameId]
    source: NotRequired[str | None]


class GameOutcome(TypedDict):
    """Final result of one minigame round."""

    score: int
    won: NotRequired[bool]


# =============================================================================
# Session / Assistant
# =============================================================================


class UserProfile(TypedDict):
    """Profile returned by the identity provider."""

    sub: str
    name: str
    given_name: str
    family_name: str
    email: str
    picture: str


class ChatMessage(TypedDict):
    """One bubble in the assistant chat log."""

    id: str
    content: str
    is_user: bool
