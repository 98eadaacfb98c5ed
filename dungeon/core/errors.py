"""
Exceptions raised by the dungeon battler.

Gameplay errors (``InvalidAction``, ``InsufficientResource``) are raised by
the battle state machine before anything is mutated, so callers can simply
catch them and carry on. ``InvalidRange`` and ``ContentError`` signal
programming or packaging mistakes and are never recovered from.
"""


class GameException(Exception):
    """Base class for every error raised by the game."""


class InvalidAction(GameException):
    """Raised when a transition is attempted out of turn or without a live enemy."""


class InsufficientResource(GameException):
    """Raised when the player lacks the mana an action costs."""

    def __init__(self, resource: str, required: int, available: int) -> None:
        super().__init__(
            f"Not enough {resource}: {required} required, {available} available"
        )
        self.resource = resource
        self.required = required
        self.available = available


class PersistenceFailure(GameException):
    """Raised by a key-value store when reading or writing fails."""


class InvalidRange(GameException, ValueError):
    """Raised when a random draw is requested with an empty or invalid range."""


class ContentError(GameException):
    """Raised when a game content file does not describe valid content."""
