"""
Tests for the combat formulas.
"""

import math

import pytest
from conftest import ScriptedRandom

from dungeon.combat.damage import CombatMath
from dungeon.core.constants import CRITICAL_CHANCE, SPECIAL_ATTACK_MULTIPLIER
from dungeon.core.random_source import SystemRandomSource
from dungeon.entities.enemy import Enemy
from dungeon.entities.player import Player


@pytest.fixture
def player():
    return Player(
        level=3,
        current_health=100,
        max_health=100,
        current_mana=50,
        max_mana=50,
        min_damage=12,
        max_damage=20,
    )


@pytest.fixture
def enemy():
    return Enemy(
        name="Orc",
        glyph="👺",
        level=3,
        current_health=240,
        max_health=240,
        min_damage=19,
        max_damage=28,
        experience_reward=144,
    )


def test_player_damage_without_critical(player):
    rng = ScriptedRandom(ints=[15], flips=[False])
    roll = CombatMath(rng).player_damage(player)
    assert roll.amount == 15
    assert not roll.is_critical
    assert rng.int_calls == [(12, 20)]
    assert rng.flip_calls == [CRITICAL_CHANCE]


def test_player_damage_critical_is_floored(player):
    roll = CombatMath(ScriptedRandom(ints=[15], flips=[True])).player_damage(player)
    assert roll.is_critical
    assert roll.amount == 22  # floor(15 * 1.5)


def test_player_damage_multiplier_scales_the_roll(player):
    math_ = CombatMath(ScriptedRandom(ints=[13, 13], flips=[False, True]))
    assert math_.player_damage(player, SPECIAL_ATTACK_MULTIPLIER).amount == 32  # floor(32.5)
    assert math_.player_damage(player, SPECIAL_ATTACK_MULTIPLIER).amount == 48  # floor(48.75)


def test_player_damage_rolls_respect_bounds(player):
    combat_math = CombatMath(SystemRandomSource(seed=7))
    for multiplier in (1.0, SPECIAL_ATTACK_MULTIPLIER):
        for _ in range(300):
            roll = combat_math.player_damage(player, multiplier)
            assert player.min_damage <= roll.base / multiplier <= player.max_damage
            if roll.is_critical:
                assert roll.amount == math.floor(roll.base * 1.5)
            else:
                assert roll.amount == math.floor(roll.base)


def test_critical_hits_happen_about_fifteen_percent_of_the_time(player):
    combat_math = CombatMath(SystemRandomSource(seed=11))
    crits = sum(combat_math.player_damage(player).is_critical for _ in range(4000))
    assert 450 < crits < 750


def test_enemy_damage_uses_enemy_range(enemy):
    rng = ScriptedRandom(ints=[25])
    assert CombatMath(rng).enemy_damage(enemy) == 25
    assert rng.int_calls == [(19, 28)]
    assert rng.flip_calls == []


def test_heal_amount_grows_with_level(player):
    rng = ScriptedRandom(ints=[30])
    assert CombatMath(rng).heal_amount(player) == 45  # 30 + 3 * 5
    assert rng.int_calls == [(25, 40)]


def test_formulas_do_not_touch_the_combatants(player, enemy):
    before = (player.model_dump(), enemy.model_dump())
    combat_math = CombatMath(SystemRandomSource(seed=5))
    combat_math.player_damage(player)
    combat_math.enemy_damage(enemy)
    combat_math.heal_amount(player)
    assert (player.model_dump(), enemy.model_dump()) == before
