"""
Game controller module for the dungeon battler.

Connects the battle state machine to a presentation: it forwards the user's
requests, narrates what happened, schedules the enemy's answer after its
thinking pause, and offers to continue once an encounter is over.
"""

from catchery import log_debug

from dungeon.combat.battle_state_machine import (
    BattleStateMachine,
    EncounterResult,
    TurnResult,
)
from dungeon.core.constants import (
    ENEMY_TURN_DELAY,
    ActionKind,
    BattleOutcome,
    BattlePhase,
    LogCategory,
)
from dungeon.core.errors import InsufficientResource, InvalidAction
from dungeon.core.scheduler import ScheduledTask, TurnScheduler
from dungeon.ui.presentation import PresentationPort


class GameController:
    """
    Runs the game loop on top of a BattleStateMachine.

    Every stimulus (a user request or the scheduled enemy turn) is handled to
    completion: apply it, let the state machine save, then render.

    Args:
        machine (BattleStateMachine):
            The engine owning the battle state.
        presentation (PresentationPort):
            Where snapshots and narration are sent.
        scheduler (TurnScheduler):
            Runs the deferred enemy turns.
        enemy_turn_delay (float):
            Seconds between a player action and the enemy's answer.
        restored (bool):
            Whether the machine resumed a saved game.

    """

    def __init__(
        self,
        machine: BattleStateMachine,
        presentation: PresentationPort,
        scheduler: TurnScheduler,
        enemy_turn_delay: float = ENEMY_TURN_DELAY,
        restored: bool = False,
    ) -> None:
        self.machine = machine
        self.ui = presentation
        self.scheduler = scheduler
        self.enemy_turn_delay = enemy_turn_delay
        self.restored = restored
        self.enemy_turn: ScheduledTask | None = None

    def start(self) -> None:
        """Resumes the saved game where it stopped, or starts a new battle."""
        if not self.restored:
            self.start_new_battle()
            return

        self.ui.notify_log("--- SESSION RESTORED ---", LogCategory.SYSTEM)
        self.render()
        phase = self.machine.phase
        if phase.is_over():
            self.ui.prompt_continuation(phase == BattlePhase.WON)
        elif phase == BattlePhase.AWAITING_ENEMY_ACTION:
            self.ui.set_controls_enabled(False)
            self.schedule_enemy_turn()
        elif phase == BattlePhase.AWAITING_PLAYER_ACTION:
            self.ui.set_controls_enabled(True)
        else:
            self.start_new_battle()

    def start_new_battle(self) -> None:
        """Spawns a new enemy and hands the turn to the player."""
        self.machine.start_encounter()
        self._announce_new_enemy()

    def handle_player_action(self, kind: ActionKind) -> TurnResult | None:
        """
        Performs the player's action, if it is acceptable right now.

        Out-of-turn requests are ignored. Requests the player cannot afford
        are rejected with a hint in the combat log.

        Returns:
            TurnResult | None:
                The effects of the action, or None if it was rejected.

        """
        try:
            result = self.machine.apply_player_action(kind)
        except InsufficientResource as e:
            log_debug(
                "Rejected player action",
                {"action": str(kind), "required": e.required, "available": e.available},
            )
            self.ui.notify_log("Not enough MP!", LogCategory.SYSTEM)
            return None
        except InvalidAction as e:
            log_debug(
                "Ignored player action",
                {"action": str(kind), "phase": str(self.machine.phase), "reason": str(e)},
            )
            return None

        self.render()
        self.ui.notify_log(*self.describe_player_action(result))

        if result.encounter is not None:
            self.announce_encounter_end(result.encounter)
            return result

        self.ui.set_controls_enabled(False)
        self.schedule_enemy_turn()
        return result

    def execute_enemy_turn(self) -> TurnResult | None:
        """
        Lets the enemy answer. Called by the scheduler once the thinking
        pause is over.

        Returns:
            TurnResult | None:
                The enemy's attack, or None if the enemy could not act.

        """
        self.enemy_turn = None
        try:
            result = self.machine.execute_enemy_action()
        except InvalidAction as e:
            log_debug(
                "Skipped enemy turn",
                {"phase": str(self.machine.phase), "reason": str(e)},
            )
            return None

        enemy = self.machine.state.enemy
        name = enemy.name if enemy is not None else "The enemy"
        self.ui.notify_log(f"{name} attacked you for {result.amount} dmg!", LogCategory.ENEMY)
        self.render()

        if result.encounter is not None:
            self.announce_encounter_end(result.encounter)
        else:
            self.ui.set_controls_enabled(True)
        return result

    def handle_continue(self) -> bool:
        """
        Moves on after an encounter: the next battle after a win, a new game
        after a defeat.

        Returns:
            bool:
                True if a new battle started, False if the request was ignored.

        """
        phase = self.machine.phase
        if phase == BattlePhase.LOST:
            self.machine.reset_after_defeat()
            self.ui.clear_log()
            self.ui.notify_log("--- NEW GAME STARTED ---", LogCategory.SYSTEM)
        elif phase == BattlePhase.WON:
            self.machine.start_encounter()
            self.ui.notify_log("--- NEXT BATTLE ---", LogCategory.SYSTEM)
        else:
            log_debug("Ignored continue request", {"phase": str(phase)})
            return False
        self._announce_new_enemy()
        return True

    def restart(self) -> None:
        """Abandons the current game, even during the enemy's pause, and starts over."""
        self.cancel_enemy_turn()
        self.machine.restart()
        self.ui.clear_log()
        self.ui.notify_log("--- NEW GAME STARTED ---", LogCategory.SYSTEM)
        self._announce_new_enemy()

    # ============================================================================
    # ENEMY TURN
    # ============================================================================

    def schedule_enemy_turn(self) -> ScheduledTask:
        """Schedules the enemy's answer after the thinking pause."""
        self.cancel_enemy_turn()
        self.enemy_turn = self.scheduler.schedule(
            self.enemy_turn_delay,
            self.execute_enemy_turn,
            name="enemy-turn",
        )
        return self.enemy_turn

    def cancel_enemy_turn(self) -> bool:
        """Cancels the pending enemy turn, if any."""
        task, self.enemy_turn = self.enemy_turn, None
        return task is not None and task.cancel()

    def is_enemy_turn_pending(self) -> bool:
        return self.enemy_turn is not None and self.enemy_turn.pending

    # ============================================================================
    # NARRATION
    # ============================================================================

    def describe_player_action(self, result: TurnResult) -> tuple[str, LogCategory]:
        """Returns the combat log line of a player action."""
        enemy = self.machine.state.enemy
        name = enemy.name if enemy is not None else "the enemy"
        crit = " Critical hit!" if result.is_critical else ""
        if result.kind == ActionKind.SPECIAL_ATTACK:
            return (
                f"FIREBALL! You scorched {name} for {result.amount} dmg!{crit}",
                LogCategory.MAGIC,
            )
        if result.kind == ActionKind.HEAL:
            return f"You cast Heal and recovered {result.amount} HP.", LogCategory.HEAL
        return (
            f"You hit for {result.amount} dmg and recovered {result.mana_restored} MP.{crit}",
            LogCategory.PLAYER,
        )

    def announce_encounter_end(self, encounter: EncounterResult) -> None:
        """Narrates a win or a loss and offers the matching continuation."""
        if encounter.outcome == BattleOutcome.WON:
            self.ui.notify_log(
                f"Victory! You defeated the {encounter.enemy_name}.",
                LogCategory.SYSTEM,
            )
            award = encounter.award
            if award is not None:
                self.ui.notify_log(f"You gained {award.amount} XP.", LogCategory.SYSTEM)
                if award.leveled_up:
                    self.ui.notify_log(
                        f"LEVEL UP! You are now Level {award.new_level}.",
                        LogCategory.SYSTEM,
                    )
            self.render()
            self.ui.prompt_continuation(True)
        else:
            self.ui.notify_log("DEFEAT. The dungeon claims another soul.", LogCategory.ENEMY)
            self.render()
            self.ui.prompt_continuation(False)

    def render(self) -> None:
        self.ui.render(self.machine.snapshot())

    def _announce_new_enemy(self) -> None:
        enemy = self.machine.state.enemy
        self.ui.set_controls_enabled(True)
        if enemy is not None:
            self.ui.notify_log(
                f"A wild {enemy.name} (Lvl {enemy.level}) appears!",
                LogCategory.SYSTEM,
            )
        self.render()
