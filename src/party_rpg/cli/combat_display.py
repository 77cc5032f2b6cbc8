"""Combat display helpers: rich rendering of encounters and round results."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from party_rpg.models.character import Character
from party_rpg.models.combat import CombatAction, CombatActionType, Encounter, EncounterStatus

console = Console()

_ACTION_COLORS = {
    CombatActionType.MELEE_ATTACK: "red",
    CombatActionType.MAGIC_ATTACK: "magenta",
    CombatActionType.HEAL: "green",
    CombatActionType.DEFEND: "cyan",
    CombatActionType.FLEE: "yellow",
}


def hp_bar(current: int, maximum: int, width: int = 12) -> str:
    pct = max(0, current / maximum) if maximum > 0 else 0
    filled = int(pct * width)
    if pct > 0.5:
        color = "green"
    elif pct > 0.25:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


class CombatDisplay:
    def __init__(self, console_: Console | None = None) -> None:
        self.console = console_ or console

    def show_combat_start(self, encounter: Encounter, narration: str) -> None:
        enemy_names = ", ".join(e.name for e in encounter.enemies())
        self.console.print(Panel(
            f"[bold red]COMBAT![/bold red]\n\nHostile creatures engage: {enemy_names}\n\n{narration}",
            border_style="red", box=box.HEAVY,
        ))

    def show_roster(self, encounter: Encounter) -> None:
        table = Table(title=f"Turn {encounter.current_turn}", box=box.SIMPLE)
        table.add_column("Side")
        table.add_column("Name")
        table.add_column("HP")
        table.add_column("Mana", justify="right")
        table.add_column("DEF", justify="right")
        for side, members in (("party", encounter.party()), ("enemy", encounter.enemies())):
            color = "green" if side == "party" else "red"
            for c in members:
                table.add_row(f"[{color}]{side}[/{color}]", self._name(c), self._hp(c),
                              f"{c.mana.current}/{c.mana.max}", str(c.defense()))
        self.console.print(table)

    def show_actions(self, actions: list[CombatAction], narrations: list[str]) -> None:
        for action, line in zip(actions, narrations):
            color = _ACTION_COLORS.get(action.action_type, "white")
            text = Text.from_markup(f"[{color}]•[/{color}] {line}")
            self.console.print(text)

    def show_outcome(self, encounter: Encounter, narration: str) -> None:
        style = {
            EncounterStatus.PLAYER_VICTORY: "green",
            EncounterStatus.PLAYER_DEFEAT: "red",
            EncounterStatus.FLED: "yellow",
        }.get(encounter.status, "white")
        self.console.print(Panel(narration, title=encounter.status.value.replace("_", " ").title(),
                                 border_style=style, box=box.ROUNDED))

    @staticmethod
    def _name(character: Character) -> str:
        return character.name if character.is_alive else f"[dim strike]{character.name}[/dim strike]"

    @staticmethod
    def _hp(character: Character) -> str:
        return f"{hp_bar(character.hp.current, character.hp.max)} {character.hp.current}/{character.hp.max}"
