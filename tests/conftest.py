"""
Shared fixtures for the dungeon battler tests.
"""

import pytest

from dungeon.combat.battle_state_machine import BattleStateMachine
from dungeon.core.constants import LogCategory
from dungeon.core.content import GameContent, load_content
from dungeon.core.errors import InvalidRange, PersistenceFailure
from dungeon.core.scheduler import TurnScheduler
from dungeon.entities.battle_state import BattleState
from dungeon.persistence.gateway import PersistenceGateway
from dungeon.persistence.store import MemoryKeyValueStore


class ScriptedRandom:
    """
    RandomSource returning scripted values, for deterministic tests.

    Integers and coin flips are consumed from separate queues. An exhausted
    integer queue yields the lower bound of the range; an exhausted flip
    queue yields False.
    """

    def __init__(self, ints: list[int] | None = None, flips: list[bool] | None = None) -> None:
        self.ints = list(ints or [])
        self.flips = list(flips or [])
        self.int_calls: list[tuple[int, int]] = []
        self.flip_calls: list[float] = []

    def uniform_int(self, minimum: int, maximum: int) -> int:
        if minimum > maximum:
            raise InvalidRange(f"Empty range: [{minimum}, {maximum}]")
        self.int_calls.append((minimum, maximum))
        if not self.ints:
            return minimum
        value = self.ints.pop(0)
        assert minimum <= value <= maximum, f"{value} outside [{minimum}, {maximum}]"
        return value

    def bernoulli(self, probability: float) -> bool:
        self.flip_calls.append(probability)
        if not self.flips:
            return False
        return self.flips.pop(0)


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingPresentation:
    """PresentationPort keeping everything it is asked to show."""

    def __init__(self) -> None:
        self.renders: list[BattleState] = []
        self.logs: list[tuple[str, LogCategory]] = []
        self.controls: list[bool] = []
        self.continuations: list[bool] = []
        self.clears = 0

    def render(self, state: BattleState) -> None:
        self.renders.append(state)

    def notify_log(self, message: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        self.logs.append((message, category))

    def clear_log(self) -> None:
        self.clears += 1
        self.logs.clear()

    def set_controls_enabled(self, enabled: bool) -> None:
        self.controls.append(enabled)

    def prompt_continuation(self, won: bool) -> None:
        self.continuations.append(won)

    @property
    def messages(self) -> list[str]:
        return [message for message, _ in self.logs]

    @property
    def controls_enabled(self) -> bool | None:
        return self.controls[-1] if self.controls else None


class BrokenStore:
    """Store whose every operation fails, like a full or read-only disk."""

    def get(self, key: str) -> str | None:
        raise PersistenceFailure("disk unreadable")

    def set(self, key: str, value: str) -> None:
        raise PersistenceFailure("quota exceeded")

    def delete(self, key: str) -> None:
        raise PersistenceFailure("read-only")


@pytest.fixture
def content() -> GameContent:
    return load_content()


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def gateway(store) -> PersistenceGateway:
    return PersistenceGateway(store)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock) -> TurnScheduler:
    return TurnScheduler(clock=clock, sleep=clock.advance)


@pytest.fixture
def presentation() -> RecordingPresentation:
    return RecordingPresentation()


@pytest.fixture
def make_machine(content, gateway):
    """Builds a state machine drawing the given scripted values."""

    def factory(
        ints: list[int] | None = None,
        flips: list[bool] | None = None,
        state: BattleState | None = None,
    ) -> BattleStateMachine:
        return BattleStateMachine(content, ScriptedRandom(ints, flips), gateway, state)

    return factory
