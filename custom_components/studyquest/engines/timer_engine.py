"""Timer Engine - Pure focus-session (pomodoro) state machine.

States: idle -> running <-> paused, running -> finished (once the end time
passes) -> idle (on claim). The clock is injected on every call so the
machine never schedules anything itself.

ARCHITECTURE: Pure logic with NO Home Assistant dependencies. Point awards
are returned to the caller, which applies them to the reward state.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from .. import const
from .reward_engine import StudyQuestError


class FocusTimerError(StudyQuestError):
    """Raised when a focus-timer transition is not allowed in the current state."""


class FocusTimer:
    """A single focus session countdown."""

    def __init__(self, duration_seconds: int = const.FOCUS_SESSION_SECONDS) -> None:
        """Initialize an idle timer."""
        self.duration_seconds = duration_seconds
        self._remaining = duration_seconds
        self._ends_at: datetime | None = None
        self._paused = False

    def state(self, now: datetime) -> str:
        """Return the current state name."""
        if self._ends_at is not None:
            if now >= self._ends_at:
                return const.FOCUS_STATE_FINISHED
            return const.FOCUS_STATE_RUNNING
        if self._paused:
            return const.FOCUS_STATE_PAUSED
        if self._remaining <= 0:
            return const.FOCUS_STATE_FINISHED
        return const.FOCUS_STATE_IDLE

    def remaining(self, now: datetime) -> int:
        """Return whole seconds left in the session."""
        if self._ends_at is not None:
            return max(0, int((self._ends_at - now).total_seconds()))
        return self._remaining

    def ends_at(self, now: datetime) -> datetime | None:
        """Return the end time while running, otherwise None."""
        if self.state(now) == const.FOCUS_STATE_RUNNING:
            return self._ends_at
        return None

    def start(self, now: datetime) -> int:
        """Start or resume the session; return the points earned.

        Only starting a fresh session earns points, resuming a paused one
        does not.
        """
        current = self.state(now)
        if current in (const.FOCUS_STATE_RUNNING, const.FOCUS_STATE_FINISHED):
            raise FocusTimerError(f"Cannot start a focus session that is {current}")
        self._ends_at = now + timedelta(seconds=self._remaining)
        self._paused = False
        if current == const.FOCUS_STATE_IDLE:
            return const.POINTS_FOCUS_STARTED
        return 0

    def pause(self, now: datetime) -> None:
        """Freeze the remaining time of a running session."""
        current = self.state(now)
        if current != const.FOCUS_STATE_RUNNING:
            raise FocusTimerError(f"Cannot pause a focus session that is {current}")
        self._remaining = self.remaining(now)
        self._ends_at = None
        self._paused = True

    def claim(self, now: datetime) -> int:
        """Reset a finished session and return the points earned."""
        current = self.state(now)
        if current != const.FOCUS_STATE_FINISHED:
            raise FocusTimerError(f"Cannot claim a focus session that is {current}")
        self.reset()
        return const.POINTS_FOCUS_CLAIMED

    def reset(self) -> None:
        """Return to idle with a full session."""
        self._remaining = self.duration_seconds
        self._ends_at = None
        self._paused = False
