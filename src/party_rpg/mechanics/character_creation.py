"""Character creation: builds heroes, companions and enemies from presets."""
from __future__ import annotations

from party_rpg.mechanics.ability_scores import (
    BALANCED,
    COMMONER,
    COMPANION_CLASSES,
    ENEMY_ROLES,
    HERO_CLASSES,
    max_health_for,
    max_mana_for,
    preset_for,
)
from party_rpg.models.character import Attributes, Character, CharacterKind, HitPoints, ManaPool


def _build(name: str, kind: CharacterKind, preset: dict[str, int], **fields) -> Character:
    weapon_bonus = preset.pop("weapon_bonus", 0)
    armor_bonus = preset.pop("armor_bonus", 0)
    attributes = Attributes(**preset)
    max_hp = max_health_for(attributes.constitution)
    max_mana = max_mana_for(attributes.intelligence)
    return Character(
        name=name,
        kind=kind,
        attributes=attributes,
        hp=HitPoints(current=max_hp, max=max_hp),
        mana=ManaPool(current=max_mana, max=max_mana),
        weapon_bonus=weapon_bonus,
        armor_bonus=armor_bonus,
        **fields,
    )


def create_hero(name: str, char_class: str) -> Character:
    """Create a level 1 hero with class-based starting attributes."""
    preset = preset_for(HERO_CLASSES, char_class, BALANCED)
    return _build(name, CharacterKind.HERO, preset, char_class=char_class, level=1, experience=0)


def create_companion(
    name: str,
    char_class: str,
    personality: str = "",
    backstory: str = "",
    character_id: str | None = None,
) -> Character:
    """Create a companion at neutral loyalty (50)."""
    preset = preset_for(COMPANION_CLASSES, char_class, BALANCED)
    extra = {"id": character_id} if character_id else {}
    return _build(
        name, CharacterKind.COMPANION, preset,
        char_class=char_class, personality=personality, backstory=backstory, loyalty=50,
        **extra,
    )


def create_enemy(
    name: str,
    role: str = "",
    agenda: str = "",
    personality: str = "",
    is_hostile: bool = True,
    character_id: str | None = None,
) -> Character:
    """Create an NPC combatant with role-based attributes."""
    preset = preset_for(ENEMY_ROLES, role, COMMONER)
    extra = {"id": character_id} if character_id else {}
    return _build(
        name, CharacterKind.ENEMY, preset,
        role=role, agenda=agenda, personality=personality, is_hostile=is_hostile,
        **extra,
    )
