"""Resolves a single combatant's turn into a CombatAction.

Nothing in here raises for bad luck or bad input: a dead or missing target
is replaced, a spell without mana becomes a weapon swing, and unreadable
companion decisions become an attack on a random enemy. Only caller misuse
(asking a dead actor to act) raises.
"""
from __future__ import annotations

import logging
import random

from party_rpg.agents.companion_agent import CompanionDecider, SilentCompanionAgent
from party_rpg.config import CombatRules
from party_rpg.llm.context_packer import build_combat_situation
from party_rpg.llm.decision_parser import DecisionIntent, IntentKind, parse_decision
from party_rpg.mechanics.combat_math import attack_roll, damage_roll, halve, resist_check, strongest
from party_rpg.models.character import Character, CharacterKind
from party_rpg.models.combat import NO_TARGET_REASON, CombatAction, CombatActionType, Encounter

logger = logging.getLogger(__name__)


def find_by_name(name: str, candidates: list[Character]) -> Character | None:
    """Case-insensitive, whitespace-trimmed exact name match."""
    wanted = (name or "").strip().lower()
    if not wanted:
        return None
    for candidate in candidates:
        if candidate.name.strip().lower() == wanted:
            return candidate
    return None


class ActionResolver:
    def __init__(
        self,
        rng: random.Random | None = None,
        decider: CompanionDecider | None = None,
        rules: CombatRules | None = None,
    ):
        self.rng = rng or random.Random()
        self.decider = decider or SilentCompanionAgent()
        self.rules = rules or CombatRules()

    def resolve_turn(self, actor: Character, encounter: Encounter) -> CombatAction:
        if not actor.is_alive:
            raise ValueError(f"{actor.name} is down and cannot act")

        match actor.kind:
            case CharacterKind.HERO:
                target = strongest(encounter.living_opponents_of(actor))
                action = self.execute_attack(actor, target, encounter)
            case CharacterKind.ENEMY:
                target = self._random_target(encounter.living_opponents_of(actor))
                action = self.execute_attack(actor, target, encounter)
            case CharacterKind.COMPANION:
                action = self._resolve_companion(actor, encounter)
            case _:
                raise ValueError(f"Unknown combatant kind: {actor.kind!r}")

        logger.debug(
            f"{action.attacker_name} -> {action.target_name}: {action.action_type.value} "
            f"hit={action.is_hit} dmg={action.damage_dealt} heal={action.healing_done}"
        )
        return action

    # -- Companion decisions --

    def _resolve_companion(self, companion: Character, encounter: Encounter) -> CombatAction:
        situation = build_combat_situation(encounter)
        try:
            decision = self.decider.decide(companion, situation)
            intent = parse_decision(decision)
        except Exception as e:
            logger.warning(f"Unusable decision from {companion.name}, attacking at random: {e}")
            return self.execute_attack(companion, None, encounter)
        return self.execute_intent(companion, intent, encounter)

    def execute_intent(self, actor: Character, intent: DecisionIntent, encounter: Encounter) -> CombatAction:
        match intent.kind:
            case IntentKind.HEAL:
                target = find_by_name(intent.target_name, encounter.living_allies_of(actor))
                return self.execute_heal(actor, target or actor, intent.reason)
            case IntentKind.DEFEND:
                return self.execute_defend(actor, intent.reason)
            case _:
                target = find_by_name(intent.target_name, encounter.living_opponents_of(actor))
                return self.execute_attack(actor, target, encounter, intent.reason)

    # -- Action pipelines --

    def execute_attack(
        self,
        attacker: Character,
        target: Character | None,
        encounter: Encounter,
        reason: str = "",
    ) -> CombatAction:
        """Magic when the attacker is smarter than strong and has the mana, melee otherwise."""
        if target is None or not target.is_alive:
            target = self._random_target(encounter.living_opponents_of(attacker))
        if target is None:
            # Nobody left to hit this round; the round's end check settles it.
            return CombatAction.build(attacker, attacker, CombatActionType.DEFEND, reason=NO_TARGET_REASON)

        smarter = attacker.attributes.intelligence > attacker.attributes.strength
        if smarter and attacker.mana.current >= self.rules.magic_mana_cost:
            return self.execute_magic_attack(attacker, target, reason)
        return self.execute_melee_attack(attacker, target, reason)

    def execute_melee_attack(self, attacker: Character, target: Character, reason: str = "") -> CombatAction:
        """d20 + STR vs defense; on a hit, STR + weapon bonus + damage die (at least 1)."""
        defense = target.defense()
        hit, atk = attack_roll(attacker.strength_modifier, defense, self.rng)
        damage = 0
        if hit:
            dmg = damage_roll(
                self.rules.melee_damage_die,
                attacker.strength_modifier + attacker.weapon_bonus,
                self.rng,
            )
            damage = dmg.total
            target.take_damage(damage)
        return CombatAction.build(
            attacker, target, CombatActionType.MELEE_ATTACK,
            damage_dealt=damage, is_hit=hit,
            attack_roll=atk.natural, defense_value=defense,
            reason=reason,
        )

    def execute_magic_attack(self, attacker: Character, target: Character, reason: str = "") -> CombatAction:
        """Always hits for INT + damage die (at least 1), halved if the target resists."""
        attacker.use_mana(self.rules.magic_mana_cost)
        dmg = damage_roll(self.rules.magic_damage_die, attacker.intelligence_modifier, self.rng)
        resisted, _ = resist_check(target.intelligence_modifier, self.rules.resist_threshold, self.rng)
        damage = halve(dmg.total) if resisted else dmg.total
        target.take_damage(damage)
        return CombatAction.build(
            attacker, target, CombatActionType.MAGIC_ATTACK,
            damage_dealt=damage, is_hit=True, reason=reason,
        )

    def execute_heal(self, healer: Character, target: Character, reason: str = "") -> CombatAction:
        """Spend mana to heal; without enough mana, swing at the same target instead."""
        if not healer.use_mana(self.rules.heal_mana_cost):
            logger.debug(f"{healer.name} lacks mana to heal, falling back to melee")
            return self.execute_melee_attack(healer, target, reason)
        amount = damage_roll(self.rules.heal_die, healer.intelligence_modifier, self.rng, minimum=0).total
        target.heal(amount)
        return CombatAction.build(
            healer, target, CombatActionType.HEAL,
            healing_done=amount, reason=reason,
        )

    def execute_defend(self, actor: Character, reason: str = "") -> CombatAction:
        actor.armor_bonus += self.rules.defend_armor_bonus
        return CombatAction.build(
            actor, actor, CombatActionType.DEFEND,
            defense_value=actor.defense(), reason=reason,
        )

    def _random_target(self, candidates: list[Character]) -> Character | None:
        return self.rng.choice(candidates) if candidates else None
