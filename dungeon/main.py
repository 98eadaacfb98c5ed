"""
Main entry point for the Dungeon Battler.

Loads the game content, restores the saved game (if any), and runs the
interactive battle loop in the terminal:

- ``1``/``a`` attack, ``2``/``f`` fireball, ``3``/``h`` heal
- ``c`` continue after a battle, ``r`` restart, ``q`` quit
"""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from dungeon.combat.battle_state_machine import BattleStateMachine
from dungeon.controller import GameController
from dungeon.core.config import GameConfig
from dungeon.core.content import load_content
from dungeon.core.logging import get_logger, setup_logging
from dungeon.core.random_source import SystemRandomSource
from dungeon.core.scheduler import TurnScheduler
from dungeon.persistence.gateway import PersistenceGateway
from dungeon.persistence.store import FileKeyValueStore, MemoryKeyValueStore
from dungeon.ui.cli_interface import (
    ACTION_KEYS,
    CONTINUE_KEY,
    QUIT_KEY,
    RESTART_KEY,
    CommandPrompt,
    ConsolePresentation,
)
from dungeon.ui.presentation import PresentationPort

logger = get_logger(__name__)


def build_game(
    config: GameConfig,
    presentation: PresentationPort,
    scheduler: TurnScheduler | None = None,
) -> GameController:
    """
    Wires the engine, the save slot and the presentation together.

    Args:
        config (GameConfig):
            The session settings.
        presentation (PresentationPort):
            The front end.
        scheduler (TurnScheduler | None):
            Runs the enemy turns. Defaults to a real-time scheduler.

    Returns:
        GameController:
            A controller ready to ``start()``.

    """
    content = load_content(config.content_dir)
    store = FileKeyValueStore(config.save_dir) if config.persist else MemoryKeyValueStore()
    gateway = PersistenceGateway(store, config.storage_key)
    machine, restored = BattleStateMachine.restore(
        content, SystemRandomSource(config.seed), gateway
    )
    logger.info("Save slot %s restored: %s", config.storage_key, restored)
    return GameController(
        machine,
        presentation,
        scheduler or TurnScheduler(),
        enemy_turn_delay=config.enemy_turn_delay,
        restored=restored,
    )


def run(config: GameConfig) -> None:
    """Runs the interactive game until the player quits."""
    presentation = ConsolePresentation()
    scheduler = TurnScheduler()
    controller = build_game(config, presentation, scheduler)
    prompt = CommandPrompt()

    controller.start()
    presentation.redraw()
    while True:
        # The enemy's pause blocks input, as the player cannot act anyway.
        if scheduler.run_pending(block=True):
            presentation.redraw()
        try:
            answer = prompt.ask()
        except (EOFError, KeyboardInterrupt):
            break
        if answer == QUIT_KEY:
            break
        if answer == RESTART_KEY:
            controller.restart()
        elif answer == CONTINUE_KEY:
            controller.handle_continue()
        elif answer in ACTION_KEYS:
            controller.handle_player_action(ACTION_KEYS[answer])
        presentation.redraw()


def parse_args(argv: Sequence[str] | None = None) -> GameConfig:
    """Builds the session settings from the command line."""
    defaults = GameConfig()
    parser = argparse.ArgumentParser(
        prog="dungeon-battler",
        description="Fight your way down the dungeon, one enemy at a time.",
    )
    parser.add_argument(
        "--save-dir",
        type=Path,
        default=defaults.save_dir,
        help="directory holding the save slot (default: %(default)s)",
    )
    parser.add_argument(
        "--slot",
        default=defaults.storage_key,
        help="name of the save slot (default: %(default)s)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=defaults.enemy_turn_delay,
        help="seconds the enemy thinks before answering (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed of the random source")
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=None,
        help="directory with enemies.json and player.json",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="do not read or write the save slot",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="show diagnostics (-v info, -vv debug)",
    )
    args = parser.parse_args(argv)
    levels = [defaults.log_level, logging.INFO, logging.DEBUG]
    return GameConfig(
        save_dir=args.save_dir,
        storage_key=args.slot,
        enemy_turn_delay=args.delay,
        seed=args.seed,
        content_dir=args.content_dir,
        persist=not args.no_save,
        log_level=levels[min(args.verbose, len(levels) - 1)],
    )


def main(argv: Sequence[str] | None = None) -> None:
    config = parse_args(argv)
    setup_logging(config.log_level)
    run(config)


if __name__ == "__main__":
    main()
