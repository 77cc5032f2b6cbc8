"""Tests for src/party_rpg/engine/action_resolver.py."""
from __future__ import annotations

import pytest

from party_rpg.agents.companion_agent import CompanionDecider
from party_rpg.engine.action_resolver import ActionResolver, find_by_name
from party_rpg.llm.decision_parser import DecisionIntent, IntentKind
from party_rpg.models.character import CharacterKind
from party_rpg.models.combat import NO_TARGET_REASON, CombatActionType, Encounter


class ScriptedDecider(CompanionDecider):
    def __init__(self, reply: str):
        self.reply = reply
        self.situations: list[str] = []

    def decide(self, companion, situation):
        self.situations.append(situation)
        return self.reply


class ExplodingDecider(CompanionDecider):
    def decide(self, companion, situation):
        raise ConnectionError("model offline")


class TestFindByName:
    def test_case_and_whitespace(self, hero, goblin):
        assert find_by_name("  goblin ", [hero, goblin]) is goblin

    def test_no_match(self, hero, goblin):
        assert find_by_name("Dragon", [hero, goblin]) is None

    def test_blank(self, hero):
        assert find_by_name("", [hero]) is None


class TestMeleeAttack:
    def test_hit_damage(self, scripted, make_character):
        attacker = make_character("Brute", strength=14, weapon_bonus=1)
        target = make_character("Rogue", CharacterKind.ENEMY, agility=14, hp=30)
        resolver = ActionResolver(rng=scripted([15, 4]))
        action = resolver.execute_melee_attack(attacker, target)
        assert action.action_type == CombatActionType.MELEE_ATTACK
        assert action.is_hit
        assert action.damage_dealt == 7
        assert action.attack_roll == 15
        assert action.defense_value == 12
        assert target.hp.current == 23
        assert action.target_health == 23

    def test_miss_rolls_no_damage_die(self, scripted, make_character):
        attacker = make_character("Brute", strength=10)
        target = make_character("Rogue", CharacterKind.ENEMY, agility=14, hp=30)
        resolver = ActionResolver(rng=scripted([2]))
        action = resolver.execute_melee_attack(attacker, target)
        assert not action.is_hit
        assert action.damage_dealt == 0
        assert target.hp.current == 30

    def test_damage_at_least_one(self, scripted, make_character):
        attacker = make_character("Weakling", strength=3)
        target = make_character("Dummy", CharacterKind.ENEMY, agility=1, hp=10)
        resolver = ActionResolver(rng=scripted([20, 1]))
        action = resolver.execute_melee_attack(attacker, target)
        assert action.is_hit
        assert action.damage_dealt == 1

    def test_meets_defense_exactly(self, scripted, make_character):
        attacker = make_character("Brute", strength=10)
        target = make_character("Dummy", CharacterKind.ENEMY, agility=10, hp=10)
        resolver = ActionResolver(rng=scripted([10, 3]))
        assert resolver.execute_melee_attack(attacker, target).is_hit


class TestMagicAttack:
    def test_resisted_damage_halved(self, scripted, make_character):
        mage = make_character("Sage", strength=8, intelligence=16, mana=30)
        target = make_character("Orc", CharacterKind.ENEMY, intelligence=12, hp=30)
        resolver = ActionResolver(rng=scripted([5, 18]))
        action = resolver.execute_magic_attack(mage, target)
        assert action.action_type == CombatActionType.MAGIC_ATTACK
        assert action.is_hit
        assert action.damage_dealt == 4
        assert mage.mana.current == 20
        assert target.hp.current == 26

    def test_not_resisted(self, scripted, make_character):
        mage = make_character("Sage", strength=8, intelligence=16, mana=30)
        target = make_character("Orc", CharacterKind.ENEMY, intelligence=12, hp=30)
        resolver = ActionResolver(rng=scripted([5, 14]))
        assert resolver.execute_magic_attack(mage, target).damage_dealt == 8

    def test_resist_threshold_is_strict(self, scripted, make_character):
        mage = make_character("Sage", strength=8, intelligence=16, mana=30)
        target = make_character("Orc", CharacterKind.ENEMY, intelligence=10, hp=30)
        resolver = ActionResolver(rng=scripted([5, 15]))
        assert resolver.execute_magic_attack(mage, target).damage_dealt == 8


class TestAttackChoice:
    def test_smart_caster_uses_magic(self, scripted, make_character, goblin):
        mage = make_character("Sage", strength=8, intelligence=16, mana=10)
        encounter = Encounter.from_rosters([mage], [goblin])
        action = ActionResolver(rng=scripted([1, 1])).execute_attack(mage, goblin, encounter)
        assert action.action_type == CombatActionType.MAGIC_ATTACK
        assert mage.mana.current == 0

    def test_caster_without_mana_swings(self, scripted, make_character, goblin):
        mage = make_character("Sage", strength=8, intelligence=16, mana=9, max_mana=20)
        encounter = Encounter.from_rosters([mage], [goblin])
        action = ActionResolver(rng=scripted([1])).execute_attack(mage, goblin, encounter)
        assert action.action_type == CombatActionType.MELEE_ATTACK
        assert mage.mana.current == 9

    def test_dead_target_retargeted(self, scripted, hero, goblin, orc):
        goblin.take_damage(goblin.hp.max)
        encounter = Encounter.from_rosters([hero], [goblin, orc])
        action = ActionResolver(rng=scripted([1])).execute_attack(hero, goblin, encounter)
        assert action.target_id == orc.id

    def test_nobody_left_holds(self, scripted, hero, goblin):
        goblin.take_damage(goblin.hp.max)
        encounter = Encounter.from_rosters([hero], [goblin])
        action = ActionResolver(rng=scripted([])).execute_attack(hero, None, encounter)
        assert action.action_type == CombatActionType.DEFEND
        assert action.target_id == hero.id
        assert hero.armor_bonus == 0
        assert action.reason == NO_TARGET_REASON


class TestHeal:
    def test_heal_spends_mana(self, scripted, companion, hero):
        hero.take_damage(50)
        action = ActionResolver(rng=scripted([5])).execute_heal(companion, hero)
        assert action.action_type == CombatActionType.HEAL
        assert action.healing_done == 7
        assert hero.hp.current == 97
        assert companion.mana.current == 55

    def test_heal_capped_at_max(self, scripted, companion, hero):
        hero.take_damage(3)
        ActionResolver(rng=scripted([8])).execute_heal(companion, hero)
        assert hero.hp.current == hero.hp.max

    def test_no_mana_falls_back_to_melee(self, scripted, make_character, goblin):
        healer = make_character("Acolyte", CharacterKind.COMPANION, intelligence=14, mana=5, max_mana=50)
        action = ActionResolver(rng=scripted([1])).execute_heal(healer, goblin)
        assert action.action_type == CombatActionType.MELEE_ATTACK
        assert healer.mana.current == 5


class TestDefend:
    def test_armor_bonus(self, hero):
        before = hero.defense()
        action = ActionResolver().execute_defend(hero, "brace")
        assert action.action_type == CombatActionType.DEFEND
        assert hero.armor_bonus == 2
        assert action.defense_value == before + 2
        assert action.reason == "brace"


class TestResolveTurn:
    def test_hero_hits_healthiest_enemy(self, scripted, hero, goblin, orc):
        encounter = Encounter.from_rosters([hero], [goblin, orc])
        action = ActionResolver(rng=scripted([10, 3])).resolve_turn(hero, encounter)
        assert action.target_id == orc.id
        assert action.damage_dealt == 8
        assert orc.hp.current == 32

    def test_enemy_picks_random_party_member(self, scripted, hero, companion, orc):
        encounter = Encounter.from_rosters([hero, companion], [orc])
        resolver = ActionResolver(rng=scripted([1], choices=[1]))
        action = resolver.resolve_turn(orc, encounter)
        assert action.target_id == companion.id

    def test_dead_actor_rejected(self, hero, goblin):
        goblin.take_damage(goblin.hp.max)
        encounter = Encounter.from_rosters([hero], [goblin])
        with pytest.raises(ValueError):
            ActionResolver().resolve_turn(goblin, encounter)

    def test_companion_follows_heal_decision(self, scripted, hero, companion, goblin):
        hero.take_damage(100)
        decider = ScriptedDecider("ACTION: HEAL | TARGET: Aldric | REASON: low hp")
        encounter = Encounter.from_rosters([hero, companion], [goblin])
        action = ActionResolver(rng=scripted([4]), decider=decider).resolve_turn(companion, encounter)
        assert action.action_type == CombatActionType.HEAL
        assert action.target_id == hero.id
        assert action.reason == "low hp"
        assert hero.hp.current == 46
        assert "- Aldric (HP: 40/140)" in decider.situations[0]

    def test_heal_unknown_target_heals_self(self, scripted, hero, companion, goblin):
        companion.take_damage(10)
        decider = ScriptedDecider("ACTION: HEAL | TARGET: Nobody")
        encounter = Encounter.from_rosters([hero, companion], [goblin])
        action = ActionResolver(rng=scripted([4]), decider=decider).resolve_turn(companion, encounter)
        assert action.target_id == companion.id

    def test_companion_defends(self, hero, companion, goblin):
        decider = ScriptedDecider("ACTION: DEFEND | TARGET: self | REASON: wait")
        encounter = Encounter.from_rosters([hero, companion], [goblin])
        action = ActionResolver(decider=decider).resolve_turn(companion, encounter)
        assert action.action_type == CombatActionType.DEFEND
        assert companion.armor_bonus == 2

    def test_garbage_decision_attacks_random_enemy(self, scripted, hero, companion, goblin, orc):
        decider = ScriptedDecider("garbage text")
        encounter = Encounter.from_rosters([hero, companion], [goblin, orc])
        resolver = ActionResolver(rng=scripted([3, 2], choices=[1]), decider=decider)
        action = resolver.resolve_turn(companion, encounter)
        assert action.action_type == CombatActionType.MAGIC_ATTACK
        assert action.target_id == orc.id
        assert action.reason == ""

    def test_decider_failure_attacks_random_enemy(self, scripted, hero, companion, goblin):
        encounter = Encounter.from_rosters([hero, companion], [goblin])
        resolver = ActionResolver(rng=scripted([3, 2]), decider=ExplodingDecider())
        action = resolver.resolve_turn(companion, encounter)
        assert action.target_id == goblin.id
        assert action.damage_dealt > 0

    def test_named_attack_target(self, scripted, make_character, hero, goblin, orc):
        fighter = make_character("Bram", CharacterKind.COMPANION, strength=14)
        encounter = Encounter.from_rosters([hero, fighter], [goblin, orc])
        intent = DecisionIntent(kind=IntentKind.ATTACK, target_name="goblin")
        action = ActionResolver(rng=scripted([1])).execute_intent(fighter, intent, encounter)
        assert action.target_id == goblin.id
