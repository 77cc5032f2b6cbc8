"""Shared fixtures for the party-rpg test suite."""
from __future__ import annotations

import random
from typing import Any

import pytest

from party_rpg.models.character import Character, CharacterKind


class ScriptedRandom(random.Random):
    """Random source with forced dice.

    ``randint`` pops the next scripted roll (and checks it fits the die);
    ``choice`` picks the scripted index, or the first element once the
    script runs out.
    """

    def __init__(self, rolls: list[int] | None = None, choices: list[int] | None = None):
        super().__init__(0)
        self.rolls = list(rolls or [])
        self.choices = list(choices or [])

    def randint(self, a: int, b: int) -> int:
        if not self.rolls:
            raise AssertionError(f"Unscripted roll requested: randint({a}, {b})")
        value = self.rolls.pop(0)
        assert a <= value <= b, f"Scripted roll {value} outside {a}..{b}"
        return value

    def choice(self, seq: Any) -> Any:
        index = self.choices.pop(0) if self.choices else 0
        return seq[index]


def build_character(
    name: str,
    kind: CharacterKind = CharacterKind.HERO,
    strength: int = 10,
    intelligence: int = 10,
    agility: int = 10,
    constitution: int = 10,
    charisma: int = 10,
    hp: int = 30,
    max_hp: int | None = None,
    mana: int = 0,
    max_mana: int | None = None,
    **fields: Any,
) -> Character:
    return Character(
        name=name,
        kind=kind,
        attributes={
            "strength": strength, "intelligence": intelligence, "agility": agility,
            "constitution": constitution, "charisma": charisma,
        },
        hp={"current": hp, "max": max_hp if max_hp is not None else hp},
        mana={"current": mana, "max": max_mana if max_mana is not None else mana},
        **fields,
    )


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def make_character():
    return build_character


@pytest.fixture
def hero() -> Character:
    return build_character("Aldric", CharacterKind.HERO, strength=16, agility=12, hp=140, weapon_bonus=2)


@pytest.fixture
def companion() -> Character:
    return build_character(
        "Mira", CharacterKind.COMPANION, strength=10, intelligence=14, hp=120, mana=70,
        char_class="healer",
    )


@pytest.fixture
def goblin() -> Character:
    return build_character("Goblin", CharacterKind.ENEMY, strength=10, agility=10, hp=20)


@pytest.fixture
def orc() -> Character:
    return build_character("Orc", CharacterKind.ENEMY, strength=14, agility=10, hp=40)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)
