"""
Battle state machine module for the dungeon battler.

Owns the authoritative BattleState and is the only code that mutates it. It
enforces turn order and mana costs, applies actions through the combat
formulas, detects the end of an encounter, awards experience, and saves the
state after every transition.
"""

from pydantic import BaseModel, Field

from dungeon.combat.damage import CombatMath
from dungeon.combat.enemy_generator import EnemyGenerator
from dungeon.combat.progression import ExperienceAward, award_experience
from dungeon.core.constants import (
    ATTACK_MANA_REGEN,
    SPECIAL_ATTACK_MULTIPLIER,
    ActionKind,
    BattleOutcome,
    BattlePhase,
)
from dungeon.core.content import GameContent
from dungeon.core.errors import InsufficientResource, InvalidAction
from dungeon.core.logging import get_logger
from dungeon.core.random_source import RandomSource
from dungeon.entities.battle_state import BattleState
from dungeon.entities.enemy import Enemy
from dungeon.entities.player import new_player
from dungeon.persistence.gateway import PersistenceGateway

logger = get_logger(__name__)


class EncounterResult(BaseModel):
    """How an encounter ended, and what the player got out of it."""

    outcome: BattleOutcome = Field(
        description="Whether the player won or lost.",
    )
    enemy_name: str = Field(
        description="The name of the enemy fought.",
    )
    award: ExperienceAward | None = Field(
        None,
        description="The experience awarded, on a win.",
    )


class TurnResult(BaseModel):
    """What a single player or enemy action did."""

    kind: ActionKind | None = Field(
        None,
        description="The player action, or None for the enemy's attack.",
    )
    amount: int = Field(
        0,
        ge=0,
        description="Damage dealt or health restored, after clamping.",
    )
    rolled: int = Field(
        0,
        ge=0,
        description="The amount rolled, before clamping.",
    )
    is_critical: bool = Field(
        False,
        description="Whether the damage roll was a critical hit.",
    )
    mana_spent: int = Field(
        0,
        ge=0,
        description="Mana paid for the action.",
    )
    mana_restored: int = Field(
        0,
        ge=0,
        description="Mana regained by the action.",
    )
    encounter: EncounterResult | None = Field(
        None,
        description="Set when the action ended the encounter.",
    )

    @property
    def shows_as_critical(self) -> bool:
        """Special attacks are always presented as critical hits."""
        return self.is_critical or self.kind == ActionKind.SPECIAL_ATTACK

    @property
    def ended_encounter(self) -> bool:
        return self.encounter is not None


class BattleStateMachine:
    """
    Runs encounters between the player and generated enemies.

    Every public transition validates the current phase before touching the
    state: a rejected transition raises and leaves the state exactly as it
    was. A successful transition is saved through the gateway before the
    method returns.

    Args:
        content (GameContent):
            The enemy catalog and the initial player.
        rng (RandomSource):
            The source of every random draw.
        gateway (PersistenceGateway | None):
            Where the state is saved after each transition. None disables
            persistence.
        state (BattleState | None):
            A previously saved state to resume. Defaults to a fresh game.

    """

    def __init__(
        self,
        content: GameContent,
        rng: RandomSource,
        gateway: PersistenceGateway | None = None,
        state: BattleState | None = None,
    ) -> None:
        self.content = content
        self.combat_math = CombatMath(rng)
        self.enemy_generator = EnemyGenerator(content.enemies, rng)
        self.gateway = gateway
        self.state: BattleState = state if state is not None else self.new_state()

    @classmethod
    def restore(
        cls,
        content: GameContent,
        rng: RandomSource,
        gateway: PersistenceGateway,
    ) -> tuple["BattleStateMachine", bool]:
        """
        Creates a state machine resuming the saved state, if there is one.

        Returns:
            tuple[BattleStateMachine, bool]:
                The state machine, and whether a saved state was restored.

        """
        saved = gateway.load()
        return cls(content, rng, gateway, saved), saved is not None

    def new_state(self) -> BattleState:
        """Returns the state of a brand new game: a fresh player, no enemy."""
        return BattleState(player=new_player(self.content.initial_player))

    # ============================================================================
    # QUERIES
    # ============================================================================

    @property
    def phase(self) -> BattlePhase:
        return self.state.phase

    def snapshot(self) -> BattleState:
        """Returns a read-only copy of the state, for the presentation layer."""
        return self.state.snapshot()

    def can_afford(self, kind: ActionKind) -> bool:
        """Checks if the player has the mana the action costs."""
        return self.state.player.has_mana(kind.mana_cost)

    # ============================================================================
    # TRANSITIONS
    # ============================================================================

    def start_encounter(self) -> Enemy:
        """
        Spawns a new enemy at the player's level and gives the player the
        first turn.

        Returns:
            Enemy:
                The new enemy.

        Raises:
            InvalidAction: If an encounter is still in progress, or the
                player is dead.

        """
        if self.state.has_live_encounter():
            raise InvalidAction("An encounter is already in progress.")
        if self.state.player.is_dead():
            raise InvalidAction("A defeated player cannot start an encounter.")
        enemy = self.enemy_generator.create(self.state.player.level)
        self.state.enemy = enemy
        self.state.is_player_turn = True
        self.state.is_over = False
        logger.debug("Encounter started against %s", enemy)
        self._commit()
        return enemy

    def apply_player_action(self, kind: ActionKind) -> TurnResult:
        """
        Applies the player's action for this turn.

        Attack deals a basic damage roll and regenerates mana. Special attack
        costs mana and deals a multiplied roll. Heal costs mana and restores
        health. If the action does not end the encounter, the turn passes to
        the enemy.

        Args:
            kind (ActionKind):
                The action to perform.

        Returns:
            TurnResult:
                The effects of the action.

        Raises:
            InvalidAction: If it is not the player's turn, the encounter is
                over, or there is no enemy.
            InsufficientResource: If the player lacks the mana the action
                costs.

        """
        if not isinstance(kind, ActionKind):
            raise InvalidAction(f"Unknown action: {kind!r}")
        enemy = self._require_phase(BattlePhase.AWAITING_PLAYER_ACTION)
        player = self.state.player
        cost = kind.mana_cost
        if not player.has_mana(cost):
            raise InsufficientResource("mana", cost, player.current_mana)

        result = TurnResult(kind=kind)
        if kind == ActionKind.ATTACK:
            roll = self.combat_math.player_damage(player)
            result.rolled = roll.amount
            result.is_critical = roll.is_critical
            result.amount = enemy.take_damage(roll.amount)
            result.mana_restored = player.regain_mana(ATTACK_MANA_REGEN)
        elif kind == ActionKind.SPECIAL_ATTACK:
            player.spend_mana(cost)
            result.mana_spent = cost
            roll = self.combat_math.player_damage(player, SPECIAL_ATTACK_MULTIPLIER)
            result.rolled = roll.amount
            result.is_critical = roll.is_critical
            result.amount = enemy.take_damage(roll.amount)
        else:
            player.spend_mana(cost)
            result.mana_spent = cost
            result.rolled = self.combat_math.heal_amount(player)
            result.amount = player.heal(result.rolled)
        logger.debug("Player used %s: %s", kind, result)

        result.encounter = self._end_turn(next_is_player=False)
        return result

    def execute_enemy_action(self) -> TurnResult:
        """
        Applies the enemy's attack.

        Returns:
            TurnResult:
                The damage dealt to the player.

        Raises:
            InvalidAction: If it is not the enemy's turn.

        """
        enemy = self._require_phase(BattlePhase.AWAITING_ENEMY_ACTION)
        rolled = self.combat_math.enemy_damage(enemy)
        result = TurnResult(
            rolled=rolled,
            amount=self.state.player.take_damage(rolled),
        )
        logger.debug("%s attacked: %s", enemy.name, result)

        result.encounter = self._end_turn(next_is_player=True)
        return result

    def resolve_encounter_end(self) -> EncounterResult:
        """
        Closes an encounter whose terminal condition holds.

        On a win the player is awarded the enemy's experience; the defeated
        enemy stays in the state until the next encounter starts. On a loss
        nothing but the over flag changes.

        Returns:
            EncounterResult:
                The outcome, and the experience award on a win.

        Raises:
            InvalidAction: If the encounter is already resolved, or neither
                combatant is defeated.

        """
        enemy = self.state.enemy
        outcome = self.state.outcome
        if enemy is None or self.state.is_over or outcome is None:
            raise InvalidAction("There is no finished encounter to resolve.")
        award = None
        if outcome == BattleOutcome.WON:
            award = award_experience(self.state.player, enemy.experience_reward)
        self.state.is_over = True
        logger.debug("Encounter against %s ended: %s", enemy.name, outcome)
        self._commit()
        return EncounterResult(outcome=outcome, enemy_name=enemy.name, award=award)

    def reset_after_defeat(self) -> Enemy:
        """
        Starts over after a defeat: the player is reset to the initial
        template and a new encounter begins.

        Raises:
            InvalidAction: If the last encounter was not lost.

        """
        if self.state.phase != BattlePhase.LOST:
            raise InvalidAction("Only a lost encounter can be reset.")
        self.state.player = new_player(self.content.initial_player)
        self.state.enemy = None
        self.state.is_over = False
        self.state.is_player_turn = True
        self._commit()
        return self.start_encounter()

    def continue_after_encounter(self) -> Enemy:
        """
        Moves on from a finished encounter: a new enemy at the current level
        after a win, a reset after a defeat.

        Raises:
            InvalidAction: If the encounter is not over.

        """
        phase = self.state.phase
        if phase == BattlePhase.LOST:
            return self.reset_after_defeat()
        if phase == BattlePhase.WON:
            return self.start_encounter()
        raise InvalidAction(f"Cannot continue while {phase.display_name.lower()}.")

    def restart(self) -> Enemy:
        """Discards the current game, whatever its phase, and starts a new one."""
        self.state = self.new_state()
        self._commit()
        return self.start_encounter()

    # ============================================================================
    # HELPERS
    # ============================================================================

    def _require_phase(self, expected: BattlePhase) -> Enemy:
        """Checks the phase and returns the live enemy, or raises InvalidAction."""
        phase = self.state.phase
        if phase != expected or self.state.enemy is None:
            raise InvalidAction(
                f"Expected {expected.display_name.lower()}, "
                f"but the battle is {phase.display_name.lower()}."
            )
        return self.state.enemy

    def _end_turn(self, next_is_player: bool) -> EncounterResult | None:
        """Resolves the encounter if it is over, otherwise passes the turn."""
        if self.state.outcome is not None:
            return self.resolve_encounter_end()
        self.state.is_player_turn = next_is_player
        self._commit()
        return None

    def _commit(self) -> None:
        if self.gateway is not None:
            self.gateway.save(self.state)
