"""
Combat rules of the dungeon battler: damage formulas, enemy generation,
progression and the battle state machine.
"""

from .battle_state_machine import BattleStateMachine, EncounterResult, TurnResult
from .damage import CombatMath, DamageRoll
from .enemy_generator import EnemyGenerator, base_tier_index, scale_factor
from .progression import ExperienceAward, award_experience, level_up

__all__ = [
    # Import from battle_state_machine.py
    "BattleStateMachine",
    "EncounterResult",
    "TurnResult",
    # Import from damage.py
    "CombatMath",
    "DamageRoll",
    # Import from enemy_generator.py
    "EnemyGenerator",
    "base_tier_index",
    "scale_factor",
    # Import from progression.py
    "ExperienceAward",
    "award_experience",
    "level_up",
]
