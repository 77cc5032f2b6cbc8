"""Plain-text combat summaries handed to the LLM collaborators."""
from __future__ import annotations

import re

from party_rpg.models.character import Character
from party_rpg.models.combat import CombatAction, Encounter

_LINE_RE = re.compile(r"^- (?P<name>.+) \(HP: (?P<current>\d+)/(?P<max>\d+)\)$")


def format_combatant(character: Character) -> str:
    return f"- {character.name} (HP: {character.hp.current}/{character.hp.max})"


def build_combat_situation(encounter: Encounter) -> str:
    """Living allies and enemies with their health, one per line."""
    lines = ["Combat situation:", "Allies:"]
    lines.extend(format_combatant(c) for c in encounter.living_party())
    lines.append("Enemies:")
    lines.extend(format_combatant(c) for c in encounter.living_enemies())
    return "\n".join(lines) + "\n"


def parse_combat_situation(situation: str) -> dict[str, list[dict]]:
    """Read a summary built by build_combat_situation back into name/HP records."""
    sides: dict[str, list[dict]] = {"allies": [], "enemies": []}
    current: list[dict] | None = None
    for raw in situation.splitlines():
        line = raw.strip()
        if line == "Allies:":
            current = sides["allies"]
        elif line == "Enemies:":
            current = sides["enemies"]
        elif current is not None:
            m = _LINE_RE.match(line)
            if m:
                current.append({
                    "name": m.group("name"),
                    "current": int(m.group("current")),
                    "max": int(m.group("max")),
                })
    return sides


def pack_action_context(action: CombatAction) -> dict:
    """Template variables describing one resolved action."""
    return {
        "attacker": action.attacker_name,
        "target": action.target_name,
        "action_type": action.action_type.value,
        "hit": action.is_hit,
        "damage": action.damage_dealt,
        "healing": action.healing_done,
        "attack_roll": action.attack_roll,
        "defense": action.defense_value,
        "target_health": action.target_health,
        "target_max_health": action.target_max_health,
        "reason": action.reason,
    }


def pack_encounter_context(encounter: Encounter) -> dict:
    lead = encounter.lead()
    return {
        "location": encounter.location,
        "turn": encounter.current_turn,
        "status": encounter.status.value,
        "lead": lead,
        "party": encounter.party(),
        "enemies": encounter.enemies(),
        "survivors": len(encounter.living_party()),
    }
