"""
Damage module for the dungeon battler.

Pure combat formulas: player damage (with critical hits), enemy damage and
heal amounts. Every random draw goes through the injected RandomSource, and
the results are never clamped here; applying them to health and mana is the
state machine's job.
"""

import math
from typing import Protocol

from pydantic import BaseModel, Field

from dungeon.core.constants import (
    CRITICAL_CHANCE,
    CRITICAL_MULTIPLIER,
    HEAL_MAX,
    HEAL_MIN,
    HEAL_PER_LEVEL,
)
from dungeon.core.random_source import RandomSource


class DamageDealer(Protocol):
    """Anything with a damage range."""

    min_damage: int
    max_damage: int


class Leveled(Protocol):
    """Anything with a level."""

    level: int


class DamageRoll(BaseModel):
    """The result of a player damage roll."""

    amount: int = Field(
        ge=0,
        description="The damage dealt, after critical scaling.",
    )
    is_critical: bool = Field(
        False,
        description="Whether the roll was a critical hit.",
    )
    base: float = Field(
        ge=0,
        description="The rolled damage times the multiplier, before critical scaling.",
    )


class CombatMath:
    """
    Combat formulas bound to a random source.

    Args:
        rng (RandomSource):
            The source of every random draw made by the formulas.

    """

    def __init__(self, rng: RandomSource) -> None:
        self.rng = rng

    def player_damage(self, actor: DamageDealer, multiplier: float = 1.0) -> DamageRoll:
        """
        Rolls the damage of a player attack.

        The base is a uniform roll in the actor's damage range times the
        multiplier. With a fixed chance the base is multiplied by the
        critical multiplier. The result is floored either way.

        Args:
            actor (DamageDealer):
                The attacker.
            multiplier (float):
                Scales the base roll, used by special attacks.

        Returns:
            DamageRoll:
                The damage dealt and whether it was a critical hit.

        """
        base = self.rng.uniform_int(actor.min_damage, actor.max_damage) * multiplier
        is_critical = self.rng.bernoulli(CRITICAL_CHANCE)
        amount = base * CRITICAL_MULTIPLIER if is_critical else base
        return DamageRoll(
            amount=max(0, math.floor(amount)),
            is_critical=is_critical,
            base=max(0.0, base),
        )

    def enemy_damage(self, enemy: DamageDealer) -> int:
        """Rolls the damage of an enemy attack; enemies never crit."""
        return self.rng.uniform_int(enemy.min_damage, enemy.max_damage)

    def heal_amount(self, player: Leveled) -> int:
        """Rolls the health restored by a heal, which grows with level."""
        return self.rng.uniform_int(HEAL_MIN, HEAL_MAX) + player.level * HEAL_PER_LEVEL
