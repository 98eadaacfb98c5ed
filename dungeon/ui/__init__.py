"""
User interface of the dungeon battler: the presentation port and the console
front end.
"""

from .cli_interface import CommandPrompt, ConsolePresentation
from .presentation import PresentationPort

__all__ = [
    "CommandPrompt",
    "ConsolePresentation",
    "PresentationPort",
]
