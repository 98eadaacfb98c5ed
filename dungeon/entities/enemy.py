"""
Enemy module for the dungeon battler.

Defines the enemy templates of the catalog and the scaled Enemy instances
the player fights.
"""

from pydantic import BaseModel, Field, model_validator


class EnemyTemplate(BaseModel):
    """An entry of the enemy catalog, before level scaling."""

    name: str = Field(
        min_length=1,
        description="The name of the enemy.",
    )
    glyph: str = Field(
        "👹",
        description="The glyph used to display the enemy.",
    )
    base_health: int = Field(
        gt=0,
        description="Health before scaling.",
    )
    base_damage: int = Field(
        gt=0,
        description="Damage before scaling.",
    )
    base_experience: int = Field(
        gt=0,
        description="Experience reward before scaling.",
    )


class Enemy(BaseModel):
    """
    A scaled enemy, alive for the duration of one encounter.

    Only ``current_health`` changes during the battle; everything else is
    fixed when the enemy is generated.
    """

    name: str = Field(
        description="The name of the enemy.",
    )
    glyph: str = Field(
        description="The glyph used to display the enemy.",
    )
    level: int = Field(
        gt=0,
        description="The level of the enemy.",
    )
    current_health: int = Field(
        ge=0,
        description="The current health points.",
    )
    max_health: int = Field(
        gt=0,
        description="The maximum health points.",
    )
    min_damage: int = Field(
        ge=0,
        description="The lower bound of the enemy's attack roll.",
    )
    max_damage: int = Field(
        ge=0,
        description="The upper bound of the enemy's attack roll.",
    )
    experience_reward: int = Field(
        gt=0,
        description="Experience awarded when the enemy is defeated.",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "Enemy":
        if self.current_health > self.max_health:
            raise ValueError("current_health cannot exceed max_health")
        if self.min_damage > self.max_damage:
            raise ValueError("min_damage cannot exceed max_damage")
        return self

    def is_alive(self) -> bool:
        """Checks if the enemy is alive (health > 0)."""
        return self.current_health > 0

    def is_dead(self) -> bool:
        """Checks if the enemy is dead (health <= 0)."""
        return self.current_health <= 0

    def take_damage(self, amount: int) -> int:
        """
        Reduces the enemy's health, never below zero.

        Returns:
            int:
                The health actually lost.

        """
        before = self.current_health
        self.current_health = max(0, self.current_health - amount)
        return before - self.current_health

    def __str__(self) -> str:
        return f"{self.glyph} {self.name} (Lvl {self.level})"
