"""
Presentation port of the dungeon battler.

The game engine never draws anything itself. It hands read-only snapshots of
the battle state and narration messages to a PresentationPort, implemented
by whatever front end is in use.
"""

from typing import Protocol

from dungeon.core.constants import LogCategory
from dungeon.entities.battle_state import BattleState


class PresentationPort(Protocol):
    """What the game needs from a user interface."""

    def render(self, state: BattleState) -> None:
        """Shows the given state. Calling it twice with the same state is harmless."""
        ...

    def notify_log(self, message: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        """Appends a message to the combat log."""
        ...

    def clear_log(self) -> None:
        """Empties the combat log."""
        ...

    def set_controls_enabled(self, enabled: bool) -> None:
        """Enables or disables the player's action controls."""
        ...

    def prompt_continuation(self, won: bool) -> None:
        """Offers to continue to the next battle (won) or to restart (lost)."""
        ...
