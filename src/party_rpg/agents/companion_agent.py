"""Companion decision agents: the collaborators that say what a companion wants to do."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from party_rpg.config import CombatRules
from party_rpg.llm.context_packer import parse_combat_situation
from party_rpg.llm.templates import render
from party_rpg.llm.provider import LLMProvider
from party_rpg.mechanics.loyalty import adjust_loyalty, loyalty_shift_from_reaction
from party_rpg.models.character import Character

logger = logging.getLogger(__name__)

LOW_HEALTH_RATIO = 0.5


class CompanionDecider(ABC):
    """Returns one line of the form ``ACTION: X | TARGET: Y | REASON: Z``.

    The resolver tolerates anything here, including exceptions; bad output
    just falls back to attacking a random enemy.
    """

    @abstractmethod
    def decide(self, companion: Character, situation: str) -> str: ...


class SilentCompanionAgent(CompanionDecider):
    """Never says anything, so every companion turn takes the fallback attack."""

    def decide(self, companion: Character, situation: str) -> str:
        return ""


class RuleBasedCompanionAgent(CompanionDecider):
    """Offline agent working from the same text summary an LLM would see.

    Heals the most wounded ally below half health when it can afford the
    spell, otherwise attacks the enemy with the least health left.
    """

    def __init__(self, rules: CombatRules | None = None):
        self.rules = rules or CombatRules()

    def decide(self, companion: Character, situation: str) -> str:
        sides = parse_combat_situation(situation)

        wounded = [a for a in sides["allies"] if a["max"] and a["current"] / a["max"] < LOW_HEALTH_RATIO]
        if wounded and companion.mana.current >= self.rules.heal_mana_cost:
            target = min(wounded, key=lambda a: a["current"] / a["max"])
            return f"ACTION: HEAL | TARGET: {target['name']} | REASON: {target['name']} is badly hurt"

        if sides["enemies"]:
            target = min(sides["enemies"], key=lambda e: e["current"])
            return f"ACTION: ATTACK | TARGET: {target['name']} | REASON: finish off the weakest foe"

        return "ACTION: DEFEND | TARGET: self | REASON: nothing left to strike"


class LLMCompanionAgent(CompanionDecider):
    def __init__(self, llm: LLMProvider, temperature: float = 0.7, max_tokens: int = 80):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    def decide(self, companion: Character, situation: str) -> str:
        prompt = render("companion_decision.j2", companion=companion, situation=situation)
        system_prompt = render("companion_system.j2")
        text = self.llm.generate(prompt, system_prompt, self.temperature, self.max_tokens)
        return _first_line(text)

    def react(self, companion: Character, event: str) -> str:
        """Ask the companion to react to *event* and shift loyalty by the tone of the reply."""
        prompt = render("companion_reaction.j2", companion=companion, event=event)
        try:
            reaction = self.llm.generate(prompt, temperature=0.9, max_tokens=120).strip()
        except Exception as e:
            logger.warning(f"Companion reaction failed for {companion.name}: {e}")
            return ""
        shift = loyalty_shift_from_reaction(reaction)
        if shift:
            adjust_loyalty(companion, shift)
            logger.debug(f"{companion.name} loyalty now {companion.loyalty}")
        return reaction


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""
