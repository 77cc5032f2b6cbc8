"""Round orchestration: drives an encounter one full round at a time."""
from __future__ import annotations

import logging
from typing import Callable

from party_rpg.config import CombatRules
from party_rpg.engine.action_resolver import ActionResolver
from party_rpg.mechanics.leveling import gain_experience
from party_rpg.models.character import Character
from party_rpg.models.combat import CombatAction, Encounter, EncounterClosedError

logger = logging.getLogger(__name__)

EncounterListener = Callable[[Encounter], None]


class CombatEngine:
    """Runs encounters: the party acts in list order, then the enemies.

    ``on_end`` is called once per encounter, right after it reaches a
    terminal status (victory, defeat or flight). The owning session uses it
    to mark game over on defeat. Armor picked up by defending is dropped
    just before the call.
    """

    def __init__(
        self,
        resolver: ActionResolver | None = None,
        rules: CombatRules | None = None,
        on_end: EncounterListener | None = None,
    ):
        self.rules = rules or (resolver.rules if resolver else CombatRules())
        self.resolver = resolver or ActionResolver(rules=self.rules)
        self.on_end = on_end

    def start_encounter(self, party: list[Character], enemies: list[Character], location: str = "") -> Encounter:
        if not party:
            raise ValueError("Cannot start combat without a party")
        if not enemies:
            raise ValueError("Cannot start combat without enemies")
        encounter = Encounter.from_rosters(party, enemies, location)
        logger.info(f"Combat started at {location or 'unknown location'} against {len(enemies)} enemies")
        return encounter

    def execute_round(self, encounter: Encounter) -> list[CombatAction]:
        """Resolve one round and return the actions in the order they happened.

        Victory and defeat are checked only after every living combatant has
        acted, so an enemy killed early in the round simply sits out the rest
        of it.
        """
        if not encounter.is_active():
            raise EncounterClosedError(f"Encounter {encounter.id} already ended: {encounter.status.value}")

        actions: list[CombatAction] = []
        for actor in [*encounter.party(), *encounter.enemies()]:
            if not actor.is_alive:
                continue
            actions.append(self.resolver.resolve_turn(actor, encounter))

        if encounter.all_enemies_defeated():
            if encounter.end_with_victory():
                self._award_victory(encounter)
                self._finish(encounter)
        elif encounter.is_party_defeated():
            if encounter.end_with_defeat():
                self._finish(encounter)
        else:
            encounter.advance_turn()
        return actions

    def flee(self, encounter: Encounter) -> bool:
        """Leave the fight. Returns False if the encounter had already ended."""
        if not encounter.end_by_fleeing():
            return False
        self._finish(encounter)
        return True

    def _award_victory(self, encounter: Encounter) -> None:
        lead = encounter.lead()
        if lead is None:
            return
        xp = self.rules.xp_per_enemy * len(encounter.enemy_ids)
        levels = gain_experience(lead, xp)
        logger.info(f"{lead.name} gains {xp} XP" + (f" and {levels} level(s)" if levels else ""))

    def _finish(self, encounter: Encounter) -> None:
        encounter.restore_armor()
        logger.info(f"Combat ended after turn {encounter.current_turn}: {encounter.status.value}")
        if self.on_end:
            self.on_end(encounter)
