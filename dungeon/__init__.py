"""
Dungeon Battler: a turn-based, single-player combat game.

The player fights a sequence of enemies scaled to their level, gaining
experience and levelling up. Progress is saved after every action.
"""

__version__ = "0.1.0"
