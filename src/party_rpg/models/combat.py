from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from party_rpg.models.character import Character, CharacterKind


class EncounterClosedError(RuntimeError):
    """Raised when a round is requested on an encounter that has already ended."""


class EncounterStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    PLAYER_VICTORY = "player_victory"
    PLAYER_DEFEAT = "player_defeat"
    FLED = "fled"


class CombatActionType(str, Enum):
    MELEE_ATTACK = "melee_attack"
    MAGIC_ATTACK = "magic_attack"
    HEAL = "heal"
    DEFEND = "defend"
    FLEE = "flee"


# Reason recorded on the DEFEND an actor takes when nobody is left to attack.
NO_TARGET_REASON = "no target left"


class CombatAction(BaseModel):
    """Outcome of one resolved turn, handed to the narrator and then discarded."""

    model_config = ConfigDict(frozen=True)

    attacker_id: str
    attacker_name: str
    target_id: str
    target_name: str
    action_type: CombatActionType
    damage_dealt: int = 0
    healing_done: int = 0
    is_hit: bool = False
    is_critical: bool = False  # reserved; no rule sets it yet
    attack_roll: int = 0
    defense_value: int = 0
    target_health: int = 0
    target_max_health: int = 0
    reason: str = ""

    @classmethod
    def build(cls, attacker: Character, target: Character, action_type: CombatActionType, **fields) -> CombatAction:
        return cls(
            attacker_id=attacker.id,
            attacker_name=attacker.name,
            target_id=target.id,
            target_name=target.name,
            action_type=action_type,
            target_health=target.hp.current,
            target_max_health=target.hp.max,
            **fields,
        )


class Encounter(BaseModel):
    """One fight between the party and a set of enemies.

    Characters live in ``combatants`` keyed by id; the two sides are ordered
    id lists into it. The characters are the caller's own objects, mutated in
    place as the fight goes on.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    combatants: dict[str, Character] = Field(default_factory=dict)
    party_ids: list[str] = Field(default_factory=list)
    enemy_ids: list[str] = Field(default_factory=list)
    base_armor: dict[str, int] = Field(default_factory=dict)
    status: EncounterStatus = EncounterStatus.IN_PROGRESS
    current_turn: int = 1
    location: str = ""

    @classmethod
    def from_rosters(cls, party: list[Character], enemies: list[Character], location: str = "") -> Encounter:
        combatants: dict[str, Character] = {}
        for character in [*party, *enemies]:
            if character.id in combatants:
                raise ValueError(f"Duplicate combatant id: {character.id}")
            combatants[character.id] = character
        return cls(
            combatants=combatants,
            party_ids=[c.id for c in party],
            enemy_ids=[c.id for c in enemies],
            base_armor={cid: c.armor_bonus for cid, c in combatants.items()},
            location=location,
        )

    # -- Roster access --

    def get(self, character_id: str) -> Character:
        return self.combatants[character_id]

    def party(self) -> list[Character]:
        return [self.combatants[cid] for cid in self.party_ids]

    def enemies(self) -> list[Character]:
        return [self.combatants[cid] for cid in self.enemy_ids]

    def living_party(self) -> list[Character]:
        return [c for c in self.party() if c.is_alive]

    def living_enemies(self) -> list[Character]:
        return [c for c in self.enemies() if c.is_alive]

    def is_party_member(self, character: Character) -> bool:
        return character.id in self.party_ids

    def living_opponents_of(self, character: Character) -> list[Character]:
        return self.living_enemies() if self.is_party_member(character) else self.living_party()

    def living_allies_of(self, character: Character) -> list[Character]:
        return self.living_party() if self.is_party_member(character) else self.living_enemies()

    def lead(self) -> Character | None:
        """The player-controlled hero, or None if the party has no hero."""
        for character in self.party():
            if character.kind == CharacterKind.HERO:
                return character
        return None

    # -- Status --

    def is_active(self) -> bool:
        return self.status == EncounterStatus.IN_PROGRESS

    def all_enemies_defeated(self) -> bool:
        return not any(c.is_alive for c in self.enemies())

    def is_party_defeated(self) -> bool:
        return not any(c.is_alive for c in self.party())

    def advance_turn(self) -> None:
        self.current_turn += 1

    def restore_armor(self) -> None:
        """Undo armor gained during the fight, back to each combatant's value at the start."""
        for cid, armor in self.base_armor.items():
            self.combatants[cid].armor_bonus = armor

    # Terminal transitions fire once. Later calls leave the status alone and return False.

    def end_with_victory(self) -> bool:
        return self._end(EncounterStatus.PLAYER_VICTORY)

    def end_with_defeat(self) -> bool:
        return self._end(EncounterStatus.PLAYER_DEFEAT)

    def end_by_fleeing(self) -> bool:
        return self._end(EncounterStatus.FLED)

    def _end(self, status: EncounterStatus) -> bool:
        if not self.is_active():
            return False
        self.status = status
        return True
