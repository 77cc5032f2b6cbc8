"""Combat narration: turns CombatAction records into prose.

The engine never waits on this. Without an LLM, or when it fails, every
method returns a plain mechanical description instead.
"""
from __future__ import annotations

import logging

from party_rpg.llm.context_packer import pack_action_context, pack_encounter_context
from party_rpg.llm.templates import render
from party_rpg.llm.provider import LLMProvider
from party_rpg.models.combat import NO_TARGET_REASON, CombatAction, CombatActionType, Encounter, EncounterStatus

logger = logging.getLogger(__name__)


def describe_action(action: CombatAction) -> str:
    """One-line mechanical summary of an action."""
    who, whom = action.attacker_name, action.target_name
    hp = f"({action.target_health}/{action.target_max_health} HP)"
    if action.action_type == CombatActionType.MELEE_ATTACK:
        if not action.is_hit:
            return f"{who} swings at {whom} and misses (rolled {action.attack_roll} vs defense {action.defense_value})."
        return f"{who} strikes {whom} for {action.damage_dealt} damage {hp}."
    if action.action_type == CombatActionType.MAGIC_ATTACK:
        return f"{who} blasts {whom} with magic for {action.damage_dealt} damage {hp}."
    if action.action_type == CombatActionType.HEAL:
        return f"{who} heals {whom} for {action.healing_done} {hp}."
    if action.action_type == CombatActionType.DEFEND:
        if action.reason == NO_TARGET_REASON:
            return f"{who} stands ready, with no foe left to fight."
        return f"{who} takes a defensive stance."
    return f"{who} flees."


def describe_outcome(encounter: Encounter) -> str:
    return {
        EncounterStatus.PLAYER_VICTORY: "Victory! The enemies are defeated.",
        EncounterStatus.PLAYER_DEFEAT: "Defeat. The party has fallen.",
        EncounterStatus.FLED: "The party fled from combat.",
    }.get(encounter.status, f"Turn {encounter.current_turn} begins.")


class CombatNarrator:
    def __init__(self, llm: LLMProvider | None = None, max_sentences: int = 2):
        self.llm = llm
        self.max_sentences = max_sentences

    def narrate_start(self, encounter: Encounter) -> str:
        names = ", ".join(e.name for e in encounter.enemies())
        fallback = f"Combat begins! Hostile creatures engage: {names}."
        return self._narrate("combat_start.j2", pack_encounter_context(encounter), fallback)

    def narrate_action(self, action: CombatAction) -> str:
        return self._narrate("combat_action.j2", pack_action_context(action), describe_action(action))

    def narrate_end(self, encounter: Encounter) -> str:
        return self._narrate("combat_end.j2", pack_encounter_context(encounter), describe_outcome(encounter))

    def _narrate(self, template_name: str, context: dict, fallback: str) -> str:
        if not self.llm:
            return fallback
        try:
            prompt = render(template_name, **context)
            system_prompt = render("narrator_system.j2", max_sentences=self.max_sentences)
            text = self.llm.generate(prompt, system_prompt, temperature=0.9, max_tokens=160).strip()
        except Exception as e:
            logger.warning(f"Combat narration failed: {e}")
            return fallback
        return text or fallback
