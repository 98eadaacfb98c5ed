"""
Battle state module for the dungeon battler.

Defines BattleState, the single authoritative value describing the game:
the player, the current enemy (if any) and the turn flags. It is the unit of
persistence and the snapshot handed to the presentation layer.
"""

from pydantic import BaseModel, Field, model_validator

from dungeon.core.constants import BattleOutcome, BattlePhase
from dungeon.entities.enemy import Enemy
from dungeon.entities.player import Player


class BattleState(BaseModel):
    """The whole game state, serializable as one JSON document."""

    player: Player = Field(
        description="The human-controlled character.",
    )
    enemy: Enemy | None = Field(
        None,
        description="The enemy of the current encounter, if one was generated.",
    )
    is_player_turn: bool = Field(
        True,
        description="Whether the player may act.",
    )
    is_over: bool = Field(
        False,
        description="Whether the current encounter has ended.",
    )

    @model_validator(mode="after")
    def _check_terminal(self) -> "BattleState":
        if self.is_over and self.outcome is None:
            raise ValueError("a finished encounter needs a defeated combatant")
        return self

    @property
    def outcome(self) -> BattleOutcome | None:
        """
        Classifies the terminal condition of the current health values.

        The enemy's defeat is checked first, so a double knock-out counts as
        a win.

        Returns:
            BattleOutcome | None:
                WON, LOST, or None if both combatants are still standing.

        """
        if self.enemy is not None and self.enemy.is_dead():
            return BattleOutcome.WON
        if self.player.is_dead():
            return BattleOutcome.LOST
        return None

    @property
    def phase(self) -> BattlePhase:
        """Returns the phase of the battle, derived from flags and health."""
        if self.is_over:
            if self.outcome == BattleOutcome.WON:
                return BattlePhase.WON
            return BattlePhase.LOST
        if self.enemy is None:
            return BattlePhase.NO_ENCOUNTER
        if self.is_player_turn:
            return BattlePhase.AWAITING_PLAYER_ACTION
        return BattlePhase.AWAITING_ENEMY_ACTION

    def has_live_encounter(self) -> bool:
        """Checks if an encounter is in progress and not yet resolved."""
        return self.enemy is not None and not self.is_over

    def snapshot(self) -> "BattleState":
        """Returns a deep copy, safe to hand to code outside the engine."""
        return self.model_copy(deep=True)
