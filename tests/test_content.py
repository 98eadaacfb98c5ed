"""
Tests for loading the enemy catalog and the initial player.
"""

import json

import pytest

from dungeon.core.content import DEFAULT_ENEMIES, DEFAULT_PLAYER, load_content
from dungeon.core.errors import ContentError


def test_shipped_content_matches_the_built_in_defaults(content):
    assert [e.model_dump() for e in content.enemies] == DEFAULT_ENEMIES
    assert content.initial_player.model_dump() == DEFAULT_PLAYER
    assert content.last_tier_index == 4


def test_catalog_is_ordered_by_tier(content):
    assert [e.name for e in content.enemies] == [
        "Goblin",
        "Skeleton",
        "Orc",
        "Dark Wizard",
        "Dragon",
    ]
    dragon = content.enemies[-1]
    assert (dragon.base_health, dragon.base_damage, dragon.base_experience) == (350, 35, 300)


def test_missing_directory_falls_back_to_defaults(tmp_path):
    content = load_content(tmp_path / "nowhere")
    assert len(content.enemies) == 5
    assert content.initial_player.max_health == 100


def test_unreadable_file_falls_back_to_defaults(tmp_path):
    (tmp_path / "enemies.json").write_text("{not json", encoding="utf-8")
    content = load_content(tmp_path)
    assert content.enemies[0].name == "Goblin"


def test_custom_content_is_loaded(tmp_path):
    enemies = [{"name": "Rat", "glyph": "🐀", "base_health": 10, "base_damage": 2, "base_experience": 5}]
    player = dict(DEFAULT_PLAYER, max_health=60, current_health=60)
    (tmp_path / "enemies.json").write_text(json.dumps(enemies), encoding="utf-8")
    (tmp_path / "player.json").write_text(json.dumps(player), encoding="utf-8")
    content = load_content(tmp_path)
    assert [e.name for e in content.enemies] == ["Rat"]
    assert content.last_tier_index == 0
    assert content.initial_player.max_health == 60


@pytest.mark.parametrize(
    "enemies",
    [
        [],
        {"name": "Goblin"},
        [{"name": "Goblin", "base_health": 0, "base_damage": 8, "base_experience": 40}],
    ],
)
def test_invalid_catalog_is_an_error(tmp_path, enemies):
    (tmp_path / "enemies.json").write_text(json.dumps(enemies), encoding="utf-8")
    with pytest.raises(ContentError):
        load_content(tmp_path)


def test_invalid_player_is_an_error(tmp_path):
    player = dict(DEFAULT_PLAYER, current_health=150)
    (tmp_path / "player.json").write_text(json.dumps(player), encoding="utf-8")
    with pytest.raises(ContentError):
        load_content(tmp_path)
