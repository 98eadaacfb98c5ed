"""
Tests for the terminal presentation.
"""

import pytest

from dungeon.core.constants import ActionKind, LogCategory
from dungeon.core.utils import ccapture, make_bar
from dungeon.entities.battle_state import BattleState
from dungeon.entities.enemy import Enemy
from dungeon.ui.cli_interface import ACTION_KEYS, ConsolePresentation


@pytest.fixture
def ui() -> ConsolePresentation:
    return ConsolePresentation(max_log_lines=3, clear_screen=False)


@pytest.fixture
def state(content) -> BattleState:
    enemy = Enemy(
        name="Orc",
        glyph="👺",
        level=6,
        current_health=20,
        max_health=330,
        min_damage=26,
        max_damage=39,
        experience_reward=198,
    )
    return BattleState(player=content.initial_player.model_copy(deep=True), enemy=enemy)


def test_make_bar():
    assert make_bar(5, 10, length=4, color="green") == "[green]▮▮[dim white]▯▯[/][/]"
    assert make_bar(10, 10, length=4) == "[white]▮▮▮▮[/]"
    assert make_bar(-3, 10, length=4) == "[white][dim white]▯▯▯▯[/][/]"
    assert make_bar(30, 10, length=4) == "[white]▮▮▮▮[/]"
    assert make_bar(1, 0, length=2) == "[white][dim white]▯▯[/][/]"


def test_action_keys_cover_every_action():
    assert set(ACTION_KEYS.values()) == set(ActionKind)


def test_status_lines(ui, state):
    player_line = ui.player_line(state)
    assert "Lvl 1" in player_line
    assert "HP: 100/100" in player_line
    assert "MP: 50/50" in player_line
    enemy_line = ui.enemy_line(state)
    assert "Orc" in enemy_line
    assert "Lvl 6" in enemy_line
    # Below 30% health the bar turns red.
    assert "[bold red]" in enemy_line


def test_log_keeps_messages_in_order(ui, state):
    ui.render(state)
    ui.notify_log("first")
    ui.notify_log("second", LogCategory.ENEMY)
    assert ui.log == [("first", LogCategory.SYSTEM), ("second", LogCategory.ENEMY)]
    ui.clear_log()
    assert ui.log == []


def test_menu_follows_the_phase(ui, state):
    ui.render(state)
    assert "thinking" in ui.menu()
    ui.set_controls_enabled(True)
    table = ccapture(ui.menu())
    assert "Attack" in table
    assert "Fireball" in table
    assert "Heal" in table
    assert "+10 MP" in table
    ui.prompt_continuation(True)
    assert "Continue Deeper" in ui.menu()
    ui.prompt_continuation(False)
    assert "Resurrect" in ui.menu()
    ui.set_controls_enabled(True)
    assert ui.continuation is None


def test_unaffordable_actions_are_dimmed(ui, state):
    state.player.current_mana = 20
    ui.render(state)
    table = ui.action_table()
    styles = [row.style for row in table.rows[:3]]
    assert styles == ["", "dim", ""]
