"""
Constants and enumerations for the dungeon battler.

Defines the gameplay tuning values (costs, probabilities, growth rates) and
the enumerations for player actions, log categories and battle phases used
throughout the engine.
"""

from enum import Enum

# Key under which the whole battle state is persisted.
STORAGE_KEY = "rpg_v1"

# Delay, in seconds, between a player action and the enemy's answer.
ENEMY_TURN_DELAY = 1.0

# Mana economy.
ATTACK_MANA_REGEN = 10
SPECIAL_ATTACK_MANA_COST = 25
HEAL_MANA_COST = 15

# Player damage.
CRITICAL_CHANCE = 0.15
CRITICAL_MULTIPLIER = 1.5
SPECIAL_ATTACK_MULTIPLIER = 2.5

# Healing: uniform(HEAL_MIN, HEAL_MAX) + level * HEAL_PER_LEVEL.
HEAL_MIN = 25
HEAL_MAX = 40
HEAL_PER_LEVEL = 5

# Enemy scaling.
LEVELS_PER_TIER = 2
TIER_DOWNGRADE_CHANCE = 0.3
SCALE_PER_LEVEL = 0.2
ENEMY_DAMAGE_MIN_FACTOR = 0.8
ENEMY_DAMAGE_MAX_FACTOR = 1.2
ENEMY_LEVEL_SPREAD = 1

# Level-up growth.
EXPERIENCE_GROWTH = 1.4
LEVEL_UP_HEALTH = 20
LEVEL_UP_MANA = 10
LEVEL_UP_DAMAGE = 3


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class ActionKind(NiceEnum):
    """Defines the actions the player can take on their turn."""

    ATTACK = "ATTACK"
    SPECIAL_ATTACK = "SPECIAL_ATTACK"
    HEAL = "HEAL"

    @property
    def mana_cost(self) -> int:
        """Returns the mana required to perform the action."""
        return {
            ActionKind.SPECIAL_ATTACK: SPECIAL_ATTACK_MANA_COST,
            ActionKind.HEAL: HEAL_MANA_COST,
        }.get(self, 0)

    @property
    def label(self) -> str:
        """Returns the label shown on the action menu."""
        return {
            ActionKind.ATTACK: "Attack",
            ActionKind.SPECIAL_ATTACK: "Fireball",
            ActionKind.HEAL: "Heal",
        }[self]

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this action."""
        return {
            ActionKind.ATTACK: "⚔️",
            ActionKind.SPECIAL_ATTACK: "🔥",
            ActionKind.HEAL: "✨",
        }.get(self, "❔")


class LogCategory(NiceEnum):
    """Defines the kind of a combat narration message."""

    SYSTEM = "SYSTEM"
    PLAYER = "PLAYER"
    ENEMY = "ENEMY"
    MAGIC = "MAGIC"
    HEAL = "HEAL"

    @property
    def color(self) -> str:
        """Returns the color string associated with this log category."""
        return {
            LogCategory.SYSTEM: "bold yellow",
            LogCategory.PLAYER: "bold white",
            LogCategory.ENEMY: "bold red",
            LogCategory.MAGIC: "bold magenta",
            LogCategory.HEAL: "bold green",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies log category color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class BattleOutcome(NiceEnum):
    """Defines how a finished encounter ended."""

    WON = "WON"
    LOST = "LOST"


class BattlePhase(NiceEnum):
    """Defines the phase the battle is currently in."""

    NO_ENCOUNTER = "NO_ENCOUNTER"
    AWAITING_PLAYER_ACTION = "AWAITING_PLAYER_ACTION"
    AWAITING_ENEMY_ACTION = "AWAITING_ENEMY_ACTION"
    WON = "WON"
    LOST = "LOST"

    def is_over(self) -> bool:
        """Checks if the phase is terminal."""
        return self in (BattlePhase.WON, BattlePhase.LOST)
