"""Reward Engine - Pure logic for points, levels and content unlocks.

This engine provides stateless, pure Python functions for:
- Points validation
- Iterative level-up with catalog unlocks
- Level progress calculations
- Unlock invariant checks

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
State management belongs in RewardState.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import GameId, RewardDelta


class StudyQuestError(Exception):
    """Base class for StudyQuest domain errors."""


class InvalidPointsError(StudyQuestError, ValueError):
    """Raised when a points amount is negative or not an integer.

    Attributes:
        amount: The rejected amount
    """

    def __init__(self, amount: object) -> None:
        """Initialize InvalidPointsError.

        Args:
            amount: The rejected amount
        """
        self.amount = amount
        super().__init__(f"Points amount must be a non-negative integer, got {amount!r}")


class RewardEngine:
    """Pure logic engine for progression calculations.

    All methods are static - no instance state. This enables easy unit testing
    without any Home Assistant mocking.

    Level policy:
        After points are added, while points >= level * POINTS_PER_LEVEL the
        level increments and catalog[min(level - 1, N - 1)] is unlocked. Once
        the catalog is exhausted the last id is re-unlocked, which is a no-op.
    """

    @staticmethod
    def validate_amount(amount: int) -> int:
        """Return amount if it is a non-negative integer.

        Raises:
            InvalidPointsError: amount is negative, a bool or not an int
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise InvalidPointsError(amount)
        return amount

    @staticmethod
    def unlock_for_level(
        level: int, catalog: Sequence[GameId] = const.GAME_CATALOG
    ) -> GameId:
        """Return the content id unlocked on reaching level (level >= 1)."""
        return catalog[min(level - 1, len(catalog) - 1)]

    @staticmethod
    def unlock_level_for(
        content_id: GameId, catalog: Sequence[GameId] = const.GAME_CATALOG
    ) -> int | None:
        """Return the level at which content_id is unlocked, or None if unknown."""
        try:
            return catalog.index(content_id) + 1
        except ValueError:
            return None

    @staticmethod
    def required_unlocks(
        level: int, catalog: Sequence[GameId] = const.GAME_CATALOG
    ) -> list[GameId]:
        """Return every content id a user at level must have unlocked.

        The first catalog member is always unlocked, even at level 0.
        """
        return list(catalog[: max(1, min(level, len(catalog)))])

    @staticmethod
    def apply_points(
        points: int,
        level: int,
        unlocked: list[GameId],
        amount: int,
        catalog: Sequence[GameId] = const.GAME_CATALOG,
    ) -> tuple[int, int, list[GameId], RewardDelta]:
        """Add amount to points and run the level-up loop.

        The passed-in unlocked list is not modified.

        Args:
            points: Current points
            level: Current level
            unlocked: Currently unlocked ids, in unlock order
            amount: Points to add (non-negative)
            catalog: Ordered unlock catalog

        Returns:
            Tuple of (new_points, new_level, new_unlocked, delta)

        Raises:
            InvalidPointsError: amount is negative
        """
        RewardEngine.validate_amount(amount)
        new_unlocked = list(unlocked)
        newly_unlocked: list[GameId] = []
        new_points = points
        new_level = level

        if amount:
            new_points = points + amount
            while new_points >= new_level * const.POINTS_PER_LEVEL:
                new_level += 1
                content_id = RewardEngine.unlock_for_level(new_level, catalog)
                if content_id not in new_unlocked:
                    new_unlocked.append(content_id)
                    newly_unlocked.append(content_id)

        delta: RewardDelta = {
            "points_added": amount,
            "old_points": points,
            "new_points": new_points,
            "old_level": level,
            "new_level": new_level,
            "levels_gained": new_level - level,
            "newly_unlocked": newly_unlocked,
        }
        return new_points, new_level, new_unlocked, delta

    @staticmethod
    def progress_within_level(points: int) -> int:
        """Return points earned towards the next hundred."""
        return points % const.POINTS_PER_LEVEL

    @staticmethod
    def progress_percentage(points: int) -> float:
        """Return progress_within_level as a percentage of POINTS_PER_LEVEL."""
        return round(
            RewardEngine.progress_within_level(points) * 100 / const.POINTS_PER_LEVEL,
            2,
        )

    @staticmethod
    def points_to_next_level(points: int, level: int) -> int:
        """Return how many points are missing before the next level-up."""
        return max(0, level * const.POINTS_PER_LEVEL - points)

    @staticmethod
    def next_unlock(
        unlocked: Sequence[GameId], catalog: Sequence[GameId] = const.GAME_CATALOG
    ) -> GameId | None:
        """Return the first catalog id not yet unlocked, or None when complete."""
        for content_id in catalog:
            if content_id not in unlocked:
                return content_id
        return None
