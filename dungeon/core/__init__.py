"""
Core components of the dungeon battler: constants, configuration, errors,
logging, randomness, scheduling and game content.
"""

from .config import GameConfig, get_user_data_dir
from .constants import (
    ActionKind,
    BattleOutcome,
    BattlePhase,
    LogCategory,
)
from .content import GameContent, load_content
from .errors import (
    ContentError,
    GameException,
    InsufficientResource,
    InvalidAction,
    InvalidRange,
    PersistenceFailure,
)
from .random_source import RandomSource, SystemRandomSource
from .scheduler import ScheduledTask, TurnScheduler

__all__ = [
    # Import from config.py
    "GameConfig",
    "get_user_data_dir",
    # Import from constants.py
    "ActionKind",
    "BattleOutcome",
    "BattlePhase",
    "LogCategory",
    # Import from content.py
    "GameContent",
    "load_content",
    # Import from errors.py
    "ContentError",
    "GameException",
    "InsufficientResource",
    "InvalidAction",
    "InvalidRange",
    "PersistenceFailure",
    # Import from random_source.py
    "RandomSource",
    "SystemRandomSource",
    # Import from scheduler.py
    "ScheduledTask",
    "TurnScheduler",
]
