"""
Persistence gateway for the dungeon battler.

Saves and loads the whole BattleState, as JSON, under a single key of a
key-value store. Persistence is best effort: failures are logged and
swallowed, so a full disk or a corrupted save never interrupts a battle.
"""

from catchery import log_warning
from pydantic import ValidationError

from dungeon.core.constants import STORAGE_KEY
from dungeon.core.errors import PersistenceFailure
from dungeon.entities.battle_state import BattleState
from dungeon.persistence.store import KeyValueStore


class PersistenceGateway:
    """
    Best-effort save slot for the battle state.

    Args:
        store (KeyValueStore):
            The durable store.
        key (str):
            The key of the save slot.

    """

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self.store = store
        self.key = key

    def save(self, state: BattleState) -> bool:
        """
        Saves the state.

        Returns:
            bool:
                True if the state was written, False if the write failed.

        """
        try:
            self.store.set(self.key, state.model_dump_json())
        except (PersistenceFailure, OSError) as e:
            log_warning(
                "Could not save the battle state",
                {"key": self.key, "error": str(e)},
            )
            return False
        return True

    def load(self) -> BattleState | None:
        """
        Loads the saved state.

        Returns:
            BattleState | None:
                The saved state, or None if there is no save or it cannot
                be read.

        """
        try:
            data = self.store.get(self.key)
        except (PersistenceFailure, OSError) as e:
            log_warning(
                "Could not read the saved battle state",
                {"key": self.key, "error": str(e)},
            )
            return None
        if not data:
            return None
        try:
            return BattleState.model_validate_json(data)
        except ValidationError as e:
            log_warning(
                "Discarding malformed saved battle state",
                {"key": self.key, "errors": e.error_count()},
            )
            return None

    def clear(self) -> bool:
        """
        Deletes the saved state.

        Returns:
            bool:
                True if the slot is now empty, False if the deletion failed.

        """
        try:
            self.store.delete(self.key)
        except (PersistenceFailure, OSError) as e:
            log_warning(
                "Could not clear the saved battle state",
                {"key": self.key, "error": str(e)},
            )
            return False
        return True
