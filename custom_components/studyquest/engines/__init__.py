"""Engine modules for StudyQuest integration.

Contains pure computation engines:
- reward_engine: Points, level-up and unlock arithmetic
- game_engine: Minigame scoring rules
- timer_engine: Focus-session state machine
"""

# Use relative imports within package to avoid mypy module resolution issues
from .game_engine import (
    MINIGAMES,
    GameLockedError,
    InvalidOutcomeError,
    Minigame,
    UnknownGameError,
    get_minigame,
)
from .reward_engine import InvalidPointsError, RewardEngine, StudyQuestError
from .timer_engine import FocusTimer, FocusTimerError

__all__ = [
    "MINIGAMES",
    "FocusTimer",
    "FocusTimerError",
    "GameLockedError",
    "InvalidOutcomeError",
    "InvalidPointsError",
    "Minigame",
    "RewardEngine",
    "StudyQuestError",
    "UnknownGameError",
    "get_minigame",
]
