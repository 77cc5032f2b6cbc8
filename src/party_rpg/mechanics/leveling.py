"""XP and level-up mechanics for heroes."""
from __future__ import annotations

from party_rpg.models.character import Character

HEALTH_PER_LEVEL = 10
MANA_PER_LEVEL = 5


def xp_for_next_level(level: int) -> int:
    """Total XP needed to leave *level*: 100 per current level."""
    return level * 100


def can_level_up(level: int, xp: int) -> bool:
    return xp >= xp_for_next_level(level)


def gain_experience(hero: Character, amount: int) -> int:
    """Add XP to *hero*, levelling up as often as the new total allows.

    Each level adds 10 max health and 5 max mana and fully restores both.
    Returns the number of levels gained.
    """
    if amount < 0:
        raise ValueError(f"Experience must be non-negative, got {amount}")
    hero.experience += amount
    gained = 0
    while can_level_up(hero.level, hero.experience):
        hero.level += 1
        hero.hp.max += HEALTH_PER_LEVEL
        hero.hp.current = hero.hp.max
        hero.mana.max += MANA_PER_LEVEL
        hero.mana.current = hero.mana.max
        gained += 1
    return gained
