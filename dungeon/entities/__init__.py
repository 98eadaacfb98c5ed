"""
Entities of the dungeon battler: the player, enemies and the battle state.
"""

from .battle_state import BattleState
from .enemy import Enemy, EnemyTemplate
from .player import Player, new_player

__all__ = [
    "BattleState",
    "Enemy",
    "EnemyTemplate",
    "Player",
    "new_player",
]
