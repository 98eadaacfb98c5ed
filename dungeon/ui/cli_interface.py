"""
Console interface module for the dungeon battler.

Implements the presentation port on a terminal with rich: status lines with
health, mana and experience bars, a coloured combat log, and the action menu
read with prompt_toolkit.
"""

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table

from dungeon.core.constants import ATTACK_MANA_REGEN, ActionKind, LogCategory
from dungeon.core.utils import cclear, cprint, crule, make_bar
from dungeon.entities.battle_state import BattleState

# Keys accepted by the action menu.
ACTION_KEYS: dict[str, ActionKind] = {
    "1": ActionKind.ATTACK,
    "a": ActionKind.ATTACK,
    "2": ActionKind.SPECIAL_ATTACK,
    "f": ActionKind.SPECIAL_ATTACK,
    "3": ActionKind.HEAL,
    "h": ActionKind.HEAL,
}
CONTINUE_KEY = "c"
RESTART_KEY = "r"
QUIT_KEY = "q"


class ConsolePresentation:
    """
    Terminal front end of the game.

    Keeps the last rendered state and the combat log, and redraws the whole
    screen on every render.

    Args:
        max_log_lines (int):
            How many log messages are shown under the battle scene.
        clear_screen (bool):
            Whether to clear the terminal before each redraw.

    """

    def __init__(self, max_log_lines: int = 8, clear_screen: bool = True) -> None:
        self.max_log_lines = max_log_lines
        self.clear_screen = clear_screen
        self.log: list[tuple[str, LogCategory]] = []
        self.state: BattleState | None = None
        self.controls_enabled = False
        self.continuation: bool | None = None

    # ============================================================================
    # PRESENTATION PORT
    # ============================================================================

    def render(self, state: BattleState) -> None:
        self.state = state
        self.redraw()

    def notify_log(self, message: str, category: LogCategory = LogCategory.SYSTEM) -> None:
        self.log.append((message, category))
        if self.state is None:
            cprint(category.colorize(message))

    def clear_log(self) -> None:
        self.log.clear()

    def set_controls_enabled(self, enabled: bool) -> None:
        self.controls_enabled = enabled
        if enabled:
            self.continuation = None

    def prompt_continuation(self, won: bool) -> None:
        self.continuation = won
        self.controls_enabled = False
        self.redraw()

    # ============================================================================
    # DRAWING
    # ============================================================================

    def redraw(self) -> None:
        """Redraws the battle scene, the log and the menu."""
        if self.state is None:
            return
        if self.clear_screen:
            cclear()
        crule("Dungeon Battler", style="bold yellow")
        cprint(self.player_line(self.state))
        if self.state.enemy is not None:
            cprint(self.enemy_line(self.state))
        crule(style="dim white")
        for message, category in self.log[-self.max_log_lines:]:
            cprint(category.colorize(message))
        crule(style="dim white")
        cprint(self.menu())

    def player_line(self, state: BattleState) -> str:
        """Formats the player's level, experience, health and mana."""
        player = state.player
        return (
            f"🛡️ [bold blue]Hero[/] [bold]Lvl {player.level}[/] "
            f"| [yellow]XP:{player.experience:>4}/{player.experience_required}[/]"
            f"{make_bar(player.experience, player.experience_required, length=8, color='yellow')} "
            f"| [green]HP:{player.current_health:>4}/{player.max_health}[/]"
            f"{make_bar(player.current_health, player.max_health, length=10, color=_health_color(player.current_health, player.max_health, 'green'))} "
            f"| [blue]MP:{player.current_mana:>3}/{player.max_mana}[/]"
            f"{make_bar(player.current_mana, player.max_mana, length=8, color='blue')}"
        )

    def enemy_line(self, state: BattleState) -> str:
        """Formats the enemy's name, level and health."""
        enemy = state.enemy
        if enemy is None:
            return ""
        return (
            f"{enemy.glyph} [bold red]{enemy.name}[/] [bold]Lvl {enemy.level}[/] "
            f"| [red]HP:{enemy.current_health:>4}/{enemy.max_health}[/]"
            f"{make_bar(enemy.current_health, enemy.max_health, length=10, color=_health_color(enemy.current_health, enemy.max_health, 'red'))}"
        )

    def menu(self) -> str | Table:
        """Returns the menu matching the current phase."""
        if self.continuation is True:
            return "[bold yellow](c) Continue Deeper ➔[/]   [dim](q) Quit[/]"
        if self.continuation is False:
            return "[bold white](c) Resurrect (Restart) 💀[/]   [dim](q) Quit[/]"
        if not self.controls_enabled:
            return "[dim]The enemy is thinking...[/]"
        return self.action_table()

    def action_table(self) -> Table:
        """Builds the table of player actions, dimming the unaffordable ones."""
        table = Table(title="Actions", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Action", style="bold")
        table.add_column("Cost", style="blue")
        mana = self.state.player.current_mana if self.state else 0
        for index, kind in enumerate(ActionKind, 1):
            affordable = mana >= kind.mana_cost
            style = "" if affordable else "dim"
            cost = f"{kind.mana_cost} MP" if kind.mana_cost else f"+{ATTACK_MANA_REGEN} MP"
            table.add_row(str(index), f"{kind.emoji} {kind.label}", cost, style=style)
        table.add_row()
        table.add_row(RESTART_KEY, "Restart", "")
        table.add_row(QUIT_KEY, "Quit", "")
        return table


def _health_color(current: int, maximum: int, default: str) -> str:
    """Turns a health bar red when it drops under 30%."""
    if maximum > 0 and current / maximum < 0.3:
        return "bold red"
    return default


class CommandPrompt:
    """Reads menu choices with prompt_toolkit."""

    def __init__(self) -> None:
        # one session keeps history
        self.session: PromptSession = PromptSession(erase_when_done=True)

    def ask(self, message: str = "Action > ") -> str:
        """
        Prompts the user until a non-empty answer is given.

        Returns:
            str:
                The lower-cased answer.

        """
        while True:
            answer = self.session.prompt(ANSI(message)).strip().lower()
            if answer:
                return answer
