"""Game Engine - Minigame variants and their points-awarding rules.

Each minigame is a Minigame subclass with one capability:
apply_outcome(state, outcome) -> RewardDelta. Only the scoring rules live
here; gameplay itself is rendered elsewhere.

ARCHITECTURE: Pure logic with NO Home Assistant dependencies. The reward state
is passed in and only needs is_unlocked() and add_points().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Protocol

from .. import const
from .reward_engine import StudyQuestError

if TYPE_CHECKING:
    from ..type_defs import GameId, GameOutcome, RewardDelta


class UnknownGameError(StudyQuestError, KeyError):
    """Raised when a game id is not in the catalog."""

    def __init__(self, game_id: str) -> None:
        """Initialize UnknownGameError."""
        self.game_id = game_id
        super().__init__(f"Unknown game '{game_id}'")

    def __str__(self) -> str:
        """Return the message without KeyError's repr quoting."""
        return str(self.args[0])


class GameLockedError(StudyQuestError):
    """Raised when recording an outcome for a game that is not unlocked.

    Attributes:
        game_id: The locked game
        unlock_level: Level at which the game unlocks
    """

    def __init__(self, game_id: str, unlock_level: int) -> None:
        """Initialize GameLockedError."""
        self.game_id = game_id
        self.unlock_level = unlock_level
        super().__init__(f"Game '{game_id}' is locked until level {unlock_level}")


class InvalidOutcomeError(StudyQuestError, ValueError):
    """Raised when a game outcome has a negative or non-integer score."""


class RewardTarget(Protocol):
    """What a minigame needs from the reward state."""

    def is_unlocked(self, content_id: str) -> bool:
        """Return whether content_id is unlocked."""

    def add_points(self, amount: int, source: str | None = None) -> RewardDelta:
        """Add points and return the resulting delta."""


class Minigame(ABC):
    """Base class for a minigame's scoring rule."""

    game_id: ClassVar[GameId]

    @abstractmethod
    def score_points(self, outcome: GameOutcome) -> int:
        """Return the points earned for outcome."""

    @property
    def unlock_level(self) -> int:
        """Return the level at which this game becomes playable."""
        return const.GAME_CATALOG.index(self.game_id) + 1

    def apply_outcome(self, state: RewardTarget, outcome: GameOutcome) -> RewardDelta:
        """Award the points for outcome to state.

        Raises:
            GameLockedError: The game is not unlocked in state
            InvalidOutcomeError: The outcome score is invalid
        """
        if not state.is_unlocked(self.game_id):
            raise GameLockedError(self.game_id, self.unlock_level)
        score = outcome.get("score")
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise InvalidOutcomeError(
                f"Score for '{self.game_id}' must be a non-negative integer, got {score!r}"
            )
        points = self.score_points(outcome)
        const.LOGGER.debug(
            "DEBUG: Game '%s' outcome %s earned %s points", self.game_id, outcome, points
        )
        return state.add_points(points, source=const.POINTS_SOURCE_GAME)


class TicTacToe(Minigame):
    """Win against the computer for a flat award."""

    game_id = const.GAME_TIC_TAC_TOE

    def score_points(self, outcome: GameOutcome) -> int:
        return const.POINTS_TIC_TAC_TOE_WIN if outcome.get("won", False) else 0


class Pong(Minigame):
    """One point per paddle hit."""

    game_id = const.GAME_PONG

    def score_points(self, outcome: GameOutcome) -> int:
        return outcome["score"]


class FlappyBird(Minigame):
    """One point per pipe passed."""

    game_id = const.GAME_FLAPPY_BIRD

    def score_points(self, outcome: GameOutcome) -> int:
        return outcome["score"]


class MemoryMatch(Minigame):
    """Ten points per matched pair."""

    game_id = const.GAME_MEMORY_MATCH

    def score_points(self, outcome: GameOutcome) -> int:
        return outcome["score"] * const.POINTS_MEMORY_MATCH_PAIR


class _AnswerRoundGame(Minigame):
    """A round of questions: points per correct answer plus an end bonus."""

    per_correct: ClassVar[int]
    end_multiplier: ClassVar[int]

    def score_points(self, outcome: GameOutcome) -> int:
        correct = outcome["score"]
        return correct * self.per_correct + correct * self.end_multiplier


class MathChallenge(_AnswerRoundGame):
    """Arithmetic questions."""

    game_id = const.GAME_MATH_CHALLENGE
    per_correct = const.POINTS_MATH_CORRECT
    end_multiplier = const.POINTS_MATH_END_MULTIPLIER


class WordScramble(_AnswerRoundGame):
    """Unscramble study words."""

    game_id = const.GAME_WORD_SCRAMBLE
    per_correct = const.POINTS_WORD_CORRECT
    end_multiplier = const.POINTS_WORD_END_MULTIPLIER


class QuizMaster(_AnswerRoundGame):
    """Multiple-choice trivia."""

    game_id = const.GAME_QUIZ_MASTER
    per_correct = const.POINTS_QUIZ_CORRECT
    end_multiplier = const.POINTS_QUIZ_END_MULTIPLIER


MINIGAMES: dict[GameId, Minigame] = {
    game.game_id: game
    for game in (
        TicTacToe(),
        Pong(),
        FlappyBird(),
        MemoryMatch(),
        MathChallenge(),
        WordScramble(),
        QuizMaster(),
    )
}


def get_minigame(game_id: str) -> Minigame:
    """Return the minigame registered under game_id.

    Raises:
        UnknownGameError: No such game
    """
    try:
        return MINIGAMES[game_id]
    except KeyError as err:
        raise UnknownGameError(game_id) from err
