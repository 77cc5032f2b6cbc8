"""Attribute math and class/role presets: pure functions, no I/O."""
from __future__ import annotations

BALANCED = {"strength": 12, "intelligence": 12, "agility": 12, "constitution": 12, "charisma": 12}

HERO_CLASSES: dict[str, dict[str, int]] = {
    "warrior": {"strength": 16, "intelligence": 10, "agility": 12, "constitution": 14, "charisma": 10,
                "weapon_bonus": 2},
    "mage": {"strength": 8, "intelligence": 16, "agility": 10, "constitution": 10, "charisma": 14},
    "rogue": {"strength": 10, "intelligence": 12, "agility": 16, "constitution": 10, "charisma": 14},
    "bard": {"strength": 10, "intelligence": 14, "agility": 12, "constitution": 12, "charisma": 16},
}

_FIGHTER = {"strength": 15, "intelligence": 10, "agility": 12, "constitution": 14, "charisma": 10,
            "weapon_bonus": 2, "armor_bonus": 1}
_CASTER = {"strength": 8, "intelligence": 16, "agility": 10, "constitution": 10, "charisma": 12}
_HEALER = {"strength": 10, "intelligence": 14, "agility": 10, "constitution": 12, "charisma": 14}
_SKIRMISHER = {"strength": 10, "intelligence": 12, "agility": 16, "constitution": 10, "charisma": 12}

COMPANION_CLASSES: dict[str, dict[str, int]] = {
    "warrior": _FIGHTER,
    "fighter": _FIGHTER,
    "mage": _CASTER,
    "wizard": _CASTER,
    "healer": _HEALER,
    "cleric": _HEALER,
    "rogue": _SKIRMISHER,
    "archer": _SKIRMISHER,
    "bard": {"strength": 10, "intelligence": 14, "agility": 12, "constitution": 12, "charisma": 16},
}

_SOLDIER = {"strength": 14, "intelligence": 10, "agility": 12, "constitution": 14, "charisma": 10,
            "weapon_bonus": 1, "armor_bonus": 2}
_SPELLCASTER = {"strength": 8, "intelligence": 16, "agility": 10, "constitution": 10, "charisma": 12}

ENEMY_ROLES: dict[str, dict[str, int]] = {
    "guard": _SOLDIER,
    "warrior": _SOLDIER,
    "wizard": _SPELLCASTER,
    "mage": _SPELLCASTER,
    "merchant": {"strength": 10, "intelligence": 12, "agility": 10, "constitution": 10, "charisma": 16},
}

COMMONER = {"strength": 10, "intelligence": 10, "agility": 10, "constitution": 10, "charisma": 10}


def modifier(score: int) -> int:
    """Calculate attribute modifier from score.

    Rounds toward zero, so 9 gives 0 and 7 gives -1.
    """
    return int((score - 10) / 2)


def max_health_for(constitution: int) -> int:
    return constitution * 10


def max_mana_for(intelligence: int) -> int:
    return intelligence * 5


def preset_for(table: dict[str, dict[str, int]], key: str, default: dict[str, int]) -> dict[str, int]:
    """Look up a class/role preset case-insensitively, falling back to *default*."""
    return dict(table.get(key.strip().lower(), default))
