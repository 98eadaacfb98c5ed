"""
Player module for the dungeon battler.

Defines the Player model: the human-controlled character, its resources and
its progression counters.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class Player(BaseModel):
    """
    The human-controlled character.

    Health and mana are always kept within [0, max] by the mutators below;
    the combat formulas never clamp anything themselves.
    """

    level: int = Field(
        1,
        gt=0,
        description="The current level of the player.",
    )
    experience: int = Field(
        0,
        ge=0,
        description="Experience accumulated towards the next level.",
    )
    experience_required: int = Field(
        100,
        gt=0,
        description="Experience needed to reach the next level.",
    )
    current_health: int = Field(
        ge=0,
        description="The current health points.",
    )
    max_health: int = Field(
        gt=0,
        description="The maximum health points.",
    )
    current_mana: int = Field(
        ge=0,
        description="The current mana points.",
    )
    max_mana: int = Field(
        ge=0,
        description="The maximum mana points.",
    )
    min_damage: int = Field(
        gt=0,
        description="The lower bound of a basic attack roll.",
    )
    max_damage: int = Field(
        gt=0,
        description="The upper bound of a basic attack roll.",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "Player":
        if self.current_health > self.max_health:
            raise ValueError("current_health cannot exceed max_health")
        if self.current_mana > self.max_mana:
            raise ValueError("current_mana cannot exceed max_mana")
        if self.min_damage > self.max_damage:
            raise ValueError("min_damage cannot exceed max_damage")
        return self

    def is_alive(self) -> bool:
        """Checks if the player is alive (health > 0)."""
        return self.current_health > 0

    def is_dead(self) -> bool:
        """Checks if the player is dead (health <= 0)."""
        return self.current_health <= 0

    def take_damage(self, amount: int) -> int:
        """
        Reduces the player's health, never below zero.

        Args:
            amount (int):
                The damage dealt.

        Returns:
            int:
                The health actually lost.

        """
        before = self.current_health
        self.current_health = max(0, self.current_health - amount)
        return before - self.current_health

    def heal(self, amount: int) -> int:
        """
        Increases the player's health, up to max_health.

        Returns:
            int:
                The health actually restored.

        """
        before = self.current_health
        self.current_health = min(self.max_health, self.current_health + amount)
        return self.current_health - before

    def regain_mana(self, amount: int) -> int:
        """
        Increases the player's mana, up to max_mana.

        Returns:
            int:
                The mana actually restored.

        """
        before = self.current_mana
        self.current_mana = min(self.max_mana, self.current_mana + amount)
        return self.current_mana - before

    def has_mana(self, amount: int) -> bool:
        """Checks if the player can afford the given mana cost."""
        return self.current_mana >= amount

    def spend_mana(self, amount: int) -> bool:
        """
        Reduces the player's mana by the given amount, if they have enough.

        Returns:
            bool:
                True if the mana was spent, False otherwise.

        """
        if not self.has_mana(amount):
            return False
        self.current_mana -= amount
        return True

    def restore(self) -> None:
        """Fully restores health and mana."""
        self.current_health = self.max_health
        self.current_mana = self.max_mana

    def __str__(self) -> str:
        return (
            f"Player(level={self.level}, hp={self.current_health}/{self.max_health}, "
            f"mp={self.current_mana}/{self.max_mana})"
        )


def new_player(template: Player | dict[str, Any]) -> Player:
    """
    Creates a fresh player from a template, never sharing state with it.

    Args:
        template (Player | dict[str, Any]):
            The initial player template.

    Returns:
        Player:
            An independent copy of the template.

    """
    if isinstance(template, Player):
        return template.model_copy(deep=True)
    return Player.model_validate(template)
