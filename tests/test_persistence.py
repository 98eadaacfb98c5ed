"""
Tests for the key-value stores and the persistence gateway.
"""

import json

import pytest
from conftest import BrokenStore

from dungeon.core.errors import PersistenceFailure
from dungeon.entities.battle_state import BattleState
from dungeon.entities.enemy import Enemy
from dungeon.persistence.gateway import PersistenceGateway
from dungeon.persistence.store import FileKeyValueStore, MemoryKeyValueStore


@pytest.fixture
def state(content) -> BattleState:
    player = content.initial_player.model_copy(deep=True)
    player.current_health = 42
    player.experience = 17
    enemy = Enemy(
        name="Dark Wizard",
        glyph="🧙‍♂️",
        level=7,
        current_health=150,
        max_health=440,
        min_damage=44,
        max_damage=66,
        experience_reward=330,
    )
    return BattleState(player=player, enemy=enemy, is_player_turn=False)


# ============================================================================
# STORES
# ============================================================================


def test_memory_store_roundtrip():
    store = MemoryKeyValueStore()
    assert store.get("slot") is None
    store.set("slot", "value")
    assert store.get("slot") == "value"
    store.delete("slot")
    store.delete("slot")
    assert store.get("slot") is None


def test_file_store_roundtrip(tmp_path):
    store = FileKeyValueStore(tmp_path / "saves")
    assert store.get("slot") is None
    store.set("slot", '{"hello": "🐉"}')
    assert (tmp_path / "saves" / "slot.json").exists()
    assert store.get("slot") == '{"hello": "🐉"}'
    store.set("slot", "replaced")
    assert store.get("slot") == "replaced"
    # No temporary file is left behind.
    assert [p.name for p in (tmp_path / "saves").iterdir()] == ["slot.json"]
    store.delete("slot")
    store.delete("slot")
    assert store.get("slot") is None


@pytest.mark.parametrize("key", ["", "../escape", "a/b", "with space"])
def test_file_store_rejects_unsafe_keys(tmp_path, key):
    store = FileKeyValueStore(tmp_path)
    with pytest.raises(PersistenceFailure):
        store.set(key, "value")


def test_file_store_write_failure_is_reported(tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("occupied")
    store = FileKeyValueStore(blocker)
    with pytest.raises(PersistenceFailure):
        store.set("slot", "value")


# ============================================================================
# GATEWAY
# ============================================================================


def test_save_then_load_returns_equal_state(gateway, state):
    assert gateway.save(state)
    loaded = gateway.load()
    assert loaded == state
    assert loaded is not state


def test_file_backed_gateway_survives_a_new_session(tmp_path, state):
    assert PersistenceGateway(FileKeyValueStore(tmp_path)).save(state)
    assert PersistenceGateway(FileKeyValueStore(tmp_path)).load() == state


def test_load_without_save_is_none(gateway):
    assert gateway.load() is None


def test_slots_are_independent(store, state):
    first = PersistenceGateway(store, "first")
    second = PersistenceGateway(store, "second")
    first.save(state)
    assert second.load() is None


def test_clear_removes_the_save(gateway, state):
    gateway.save(state)
    assert gateway.clear()
    assert gateway.load() is None


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        '{"player": {"level": 1}}',
        '{"player": null}',
        "[]",
    ],
)
def test_malformed_save_is_discarded(store, gateway, raw):
    store.set(gateway.key, raw)
    assert gateway.load() is None


def test_save_breaking_an_invariant_is_discarded(store, gateway, state):
    # Over, but nobody is defeated.
    data = state.model_dump(mode="json")
    data["is_over"] = True
    store.set(gateway.key, json.dumps(data))
    assert gateway.load() is None


def test_broken_store_is_swallowed(state):
    gateway = PersistenceGateway(BrokenStore())
    assert gateway.save(state) is False
    assert gateway.load() is None
    assert gateway.clear() is False


def test_invalid_key_is_swallowed(tmp_path, state):
    gateway = PersistenceGateway(FileKeyValueStore(tmp_path), "../../etc/passwd")
    assert gateway.save(state) is False
    assert gateway.load() is None
