"""
Progression module for the dungeon battler.

Experience awards and the level-up formula.
"""

import math

from pydantic import BaseModel, Field

from dungeon.core.constants import (
    EXPERIENCE_GROWTH,
    LEVEL_UP_DAMAGE,
    LEVEL_UP_HEALTH,
    LEVEL_UP_MANA,
)
from dungeon.entities.player import Player


class ExperienceAward(BaseModel):
    """What an experience award did to the player."""

    amount: int = Field(
        ge=0,
        description="The experience awarded.",
    )
    leveled_up: bool = Field(
        False,
        description="Whether the award triggered a level-up.",
    )
    new_level: int = Field(
        gt=0,
        description="The player's level after the award.",
    )


def level_up(player: Player) -> None:
    """
    Raises the player by one level.

    The experience threshold is consumed (the surplus carries over), the next
    threshold grows by 40%, the player's stats grow, and health and mana are
    fully restored.
    """
    player.level += 1
    player.experience -= player.experience_required
    player.experience_required = math.floor(player.experience_required * EXPERIENCE_GROWTH)
    player.max_health += LEVEL_UP_HEALTH
    player.max_mana += LEVEL_UP_MANA
    player.min_damage += LEVEL_UP_DAMAGE
    player.max_damage += LEVEL_UP_DAMAGE
    player.restore()


def award_experience(player: Player, amount: int) -> ExperienceAward:
    """
    Awards experience to the player, levelling up when the threshold is met.

    At most one level is gained per award, even if the experience would
    cover several thresholds; the surplus stays in ``experience`` and counts
    towards the next award.

    Args:
        player (Player):
            The player receiving the experience.
        amount (int):
            The experience to award.

    Returns:
        ExperienceAward:
            The amount awarded and whether the player levelled up.

    """
    if amount < 0:
        raise ValueError(f"Experience awards cannot be negative: {amount}")
    player.experience += amount
    leveled_up = player.experience >= player.experience_required
    if leveled_up:
        level_up(player)
    return ExperienceAward(amount=amount, leveled_up=leveled_up, new_level=player.level)
