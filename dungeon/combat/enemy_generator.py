"""
Enemy generator module for the dungeon battler.

Creates the enemy of each encounter by picking a tier of the catalog from the
player's level and scaling the template's stats.
"""

import math
from collections.abc import Sequence

from dungeon.core.constants import (
    ENEMY_DAMAGE_MAX_FACTOR,
    ENEMY_DAMAGE_MIN_FACTOR,
    ENEMY_LEVEL_SPREAD,
    LEVELS_PER_TIER,
    SCALE_PER_LEVEL,
    TIER_DOWNGRADE_CHANCE,
)
from dungeon.core.logging import get_logger
from dungeon.core.random_source import RandomSource
from dungeon.entities.enemy import Enemy, EnemyTemplate

logger = get_logger(__name__)


def base_tier_index(player_level: int, last_tier_index: int) -> int:
    """
    Returns the catalog tier matching a player level.

    A new tier unlocks every two levels, capped at the strongest tier.
    """
    return min((player_level - 1) // LEVELS_PER_TIER, last_tier_index)


def scale_factor(player_level: int) -> float:
    """Returns the multiplier applied to a template's stats."""
    return 1 + player_level * SCALE_PER_LEVEL


class EnemyGenerator:
    """
    Produces scaled enemies from an ordered catalog of templates.

    Args:
        templates (Sequence[EnemyTemplate]):
            The catalog, ordered from weakest to strongest.
        rng (RandomSource):
            The source of the tier and level draws.

    """

    def __init__(self, templates: Sequence[EnemyTemplate], rng: RandomSource) -> None:
        if not templates:
            raise ValueError("The enemy catalog cannot be empty.")
        self.templates = list(templates)
        self.rng = rng

    @property
    def last_tier_index(self) -> int:
        return len(self.templates) - 1

    def pick_tier(self, player_level: int) -> int:
        """
        Picks the tier of the next enemy.

        Occasionally (30% of the time) an easier tier is picked, as a
        breather; the weakest tier is never downgraded.
        """
        tier = base_tier_index(player_level, self.last_tier_index)
        if tier > 0 and self.rng.bernoulli(TIER_DOWNGRADE_CHANCE):
            tier -= 1
        return tier

    def create(self, player_level: int) -> Enemy:
        """
        Creates an enemy scaled to the player's level.

        Args:
            player_level (int):
                The current level of the player.

        Returns:
            Enemy:
                A fresh enemy at full health.

        """
        template = self.templates[self.pick_tier(player_level)]
        scale = scale_factor(player_level)
        health = math.floor(template.base_health * scale)
        enemy = Enemy(
            name=template.name,
            glyph=template.glyph,
            level=player_level + self.rng.uniform_int(0, ENEMY_LEVEL_SPREAD),
            current_health=health,
            max_health=health,
            min_damage=math.floor(template.base_damage * scale * ENEMY_DAMAGE_MIN_FACTOR),
            max_damage=math.floor(template.base_damage * scale * ENEMY_DAMAGE_MAX_FACTOR),
            experience_reward=math.floor(template.base_experience * scale),
        )
        logger.debug("Generated %s for player level %d", enemy, player_level)
        return enemy
