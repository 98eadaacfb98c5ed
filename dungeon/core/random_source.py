"""
Random source module for the dungeon battler.

Every random decision in the game (damage rolls, critical hits, enemy tier
and level selection, heal amounts) goes through a ``RandomSource``, so the
combat rules can be exercised with a scripted source in tests.
"""

import random
from typing import Protocol

from dungeon.core.errors import InvalidRange


class RandomSource(Protocol):
    """Capability providing uniform integers and Bernoulli trials."""

    def uniform_int(self, minimum: int, maximum: int) -> int:
        """Returns an integer in the inclusive range [minimum, maximum]."""
        ...

    def bernoulli(self, probability: float) -> bool:
        """Returns True with the given probability."""
        ...


class SystemRandomSource:
    """
    RandomSource backed by ``random.Random``.

    Args:
        seed (int | None):
            Optional seed, making the stream reproducible. When None the
            generator is seeded from the operating system.

    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def uniform_int(self, minimum: int, maximum: int) -> int:
        """
        Draws an integer uniformly from [minimum, maximum].

        Raises:
            InvalidRange: If minimum is greater than maximum.

        """
        if minimum > maximum:
            raise InvalidRange(f"Empty range: [{minimum}, {maximum}]")
        return self._random.randint(minimum, maximum)

    def bernoulli(self, probability: float) -> bool:
        """
        Performs a Bernoulli trial.

        Raises:
            InvalidRange: If probability is outside [0, 1].

        """
        if not 0.0 <= probability <= 1.0:
            raise InvalidRange(f"Probability out of range: {probability}")
        return self._random.random() < probability
