from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from party_rpg.mechanics.ability_scores import modifier


class CharacterKind(str, Enum):
    HERO = "hero"
    ENEMY = "enemy"
    COMPANION = "companion"


class Attributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    strength: int = 10
    intelligence: int = 10
    agility: int = 10
    constitution: int = 10
    charisma: int = 10


class HitPoints(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current: int = 0
    max: int = 0


class ManaPool(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current: int = 0
    max: int = 0


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")


class Character(BaseModel):
    """A combatant: one shared stat payload tagged by ``kind``.

    Fields after the combat block only matter for their own kind: heroes
    track level and experience, companions track loyalty and persona,
    enemies track role and agenda.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    kind: CharacterKind
    attributes: Attributes = Field(default_factory=Attributes)
    hp: HitPoints = Field(default_factory=HitPoints)
    mana: ManaPool = Field(default_factory=ManaPool)
    armor_bonus: int = 0
    weapon_bonus: int = 0

    char_class: str = ""
    level: int = 1
    experience: int = 0

    personality: str = ""
    backstory: str = ""
    loyalty: int = 50

    role: str = ""
    agenda: str = ""
    is_hostile: bool = True

    @model_validator(mode="after")
    def _check_pools(self) -> Character:
        if not 0 <= self.hp.current <= self.hp.max:
            raise ValueError(f"{self.name}: health {self.hp.current} outside 0..{self.hp.max}")
        if not 0 <= self.mana.current <= self.mana.max:
            raise ValueError(f"{self.name}: mana {self.mana.current} outside 0..{self.mana.max}")
        return self

    # -- Derived stats --

    @property
    def is_alive(self) -> bool:
        return self.hp.current > 0

    @property
    def strength_modifier(self) -> int:
        return modifier(self.attributes.strength)

    @property
    def intelligence_modifier(self) -> int:
        return modifier(self.attributes.intelligence)

    @property
    def agility_modifier(self) -> int:
        return modifier(self.attributes.agility)

    @property
    def constitution_modifier(self) -> int:
        return modifier(self.attributes.constitution)

    @property
    def charisma_modifier(self) -> int:
        return modifier(self.attributes.charisma)

    def defense(self) -> int:
        """10 + agility modifier + armor bonus."""
        return 10 + self.agility_modifier + self.armor_bonus

    # -- Mutation --
    # Negative amounts are caller errors and raise ValueError.

    def take_damage(self, amount: int) -> None:
        _check_amount(amount)
        self.hp.current = max(0, self.hp.current - amount)

    def heal(self, amount: int) -> None:
        _check_amount(amount)
        self.hp.current = min(self.hp.max, self.hp.current + amount)

    def use_mana(self, amount: int) -> bool:
        """Spend mana if enough is available. Returns False and leaves mana untouched otherwise."""
        _check_amount(amount)
        if self.mana.current >= amount:
            self.mana.current -= amount
            return True
        return False

    def restore_mana(self, amount: int) -> None:
        _check_amount(amount)
        self.mana.current = min(self.mana.max, self.mana.current + amount)
