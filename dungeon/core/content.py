"""
Game content module for the dungeon battler.

Loads the enemy catalog and the initial player template from the JSON files
in the data directory, falling back to the built-in values when a file is
missing or unreadable.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from catchery import log_warning
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from dungeon.core.errors import ContentError
from dungeon.entities.enemy import EnemyTemplate
from dungeon.entities.player import Player

T = TypeVar("T")

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

DEFAULT_ENEMIES: list[dict[str, Any]] = [
    {"name": "Goblin", "glyph": "👹", "base_health": 80, "base_damage": 8, "base_experience": 40},
    {"name": "Skeleton", "glyph": "💀", "base_health": 110, "base_damage": 12, "base_experience": 60},
    {"name": "Orc", "glyph": "👺", "base_health": 150, "base_damage": 15, "base_experience": 90},
    {"name": "Dark Wizard", "glyph": "🧙‍♂️", "base_health": 200, "base_damage": 25, "base_experience": 150},
    {"name": "Dragon", "glyph": "🐉", "base_health": 350, "base_damage": 35, "base_experience": 300},
]

DEFAULT_PLAYER: dict[str, Any] = {
    "level": 1,
    "experience": 0,
    "experience_required": 100,
    "current_health": 100,
    "max_health": 100,
    "current_mana": 50,
    "max_mana": 50,
    "min_damage": 12,
    "max_damage": 20,
}


class GameContent(BaseModel):
    """The static content of the game: who you fight, and who you start as."""

    enemies: list[EnemyTemplate] = Field(
        min_length=1,
        description="The enemy catalog, ordered from weakest to strongest.",
    )
    initial_player: Player = Field(
        description="The player every new game starts from.",
    )

    @property
    def last_tier_index(self) -> int:
        """Returns the index of the strongest enemy tier."""
        return len(self.enemies) - 1


def _load_json_file(
    path: Path,
    loader: Callable[[Any], T],
    default: Any,
    description: str,
) -> T:
    """
    Loads a JSON file and converts it with the given loader.

    Args:
        path (Path):
            The file to read.
        loader (Callable[[Any], T]):
            Converts the decoded JSON into content.
        default (Any):
            The raw data used when the file cannot be read.
        description (str):
            What the file contains, for diagnostics.

    Returns:
        T:
            The loaded content.

    Raises:
        ContentError: If the data does not describe valid content.

    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        log_warning(
            f"Could not read {description}, using built-in defaults",
            {"file_path": str(path), "error": str(e)},
        )
        data = default
    try:
        return loader(data)
    except ValidationError as e:
        raise ContentError(f"Invalid {description} in {path}: {e}") from e


def load_content(data_dir: Path | None = None) -> GameContent:
    """
    Loads the enemy catalog and the initial player from a data directory.

    Args:
        data_dir (Path | None):
            The directory containing ``enemies.json`` and ``player.json``.
            Defaults to the data shipped with the package.

    Returns:
        GameContent:
            The loaded content.

    """
    root = data_dir or DEFAULT_DATA_DIR
    enemies = _load_json_file(
        root / "enemies.json",
        TypeAdapter(list[EnemyTemplate]).validate_python,
        DEFAULT_ENEMIES,
        "enemy catalog",
    )
    initial_player = _load_json_file(
        root / "player.json",
        Player.model_validate,
        DEFAULT_PLAYER,
        "initial player",
    )
    try:
        return GameContent(enemies=enemies, initial_player=initial_player)
    except ValidationError as e:
        raise ContentError(f"Invalid game content in {root}: {e}") from e
