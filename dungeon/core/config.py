"""
Runtime configuration of the dungeon battler.
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

from dungeon.core.constants import ENEMY_TURN_DELAY, STORAGE_KEY


def get_user_data_dir() -> Path:
    """Returns the per-user directory where saves are kept."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "DungeonBattler"
        return Path.home() / "DungeonBattler"
    return Path.home() / ".local" / "share" / "dungeon_battler"


class GameConfig(BaseModel):
    """Settings of a game session."""

    save_dir: Path = Field(
        default_factory=get_user_data_dir,
        description="Directory holding the save slot.",
    )
    storage_key: str = Field(
        STORAGE_KEY,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Name of the save slot.",
    )
    enemy_turn_delay: float = Field(
        ENEMY_TURN_DELAY,
        ge=0,
        description="Seconds the enemy thinks before answering.",
    )
    seed: int | None = Field(
        None,
        description="Seed of the random source; None for a fresh stream each run.",
    )
    content_dir: Path | None = Field(
        None,
        description="Directory with the enemy catalog and player template.",
    )
    persist: bool = Field(
        True,
        description="Whether the game is saved to disk.",
    )
    log_level: int = Field(
        logging.WARNING,
        description="Level of diagnostic logging.",
    )
