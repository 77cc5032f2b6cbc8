"""Combat math: pure functions, no I/O."""
from __future__ import annotations

import random

from party_rpg.mechanics.dice import DiceResult, roll, roll_d20


def attack_roll(
    attack_bonus: int,
    target_defense: int,
    rng: random.Random | None = None,
) -> tuple[bool, DiceResult]:
    """Make an attack roll. Returns (hit, dice_result).

    Hits when d20 + bonus meets or beats the target's defense. No natural
    20/1 special cases.
    """
    result = roll_d20(attack_bonus, rng)
    return result.total >= target_defense, result


def damage_roll(
    damage_dice: str,
    damage_modifier: int,
    rng: random.Random | None = None,
    minimum: int = 1,
) -> DiceResult:
    """Roll damage dice plus a flat modifier, never below *minimum*."""
    result = roll(damage_dice, rng)
    result.modifier = damage_modifier
    result.total = max(minimum, sum(result.individual_rolls) + damage_modifier)
    return result


def resist_check(
    resist_bonus: int,
    threshold: int,
    rng: random.Random | None = None,
) -> tuple[bool, DiceResult]:
    """Roll d20 + bonus; the target resists when the total is strictly above *threshold*."""
    result = roll_d20(resist_bonus, rng)
    return result.total > threshold, result


def halve(damage: int) -> int:
    return damage // 2


def strongest(candidates: list, key=lambda c: c.hp.current):
    """First candidate with the highest *key*, or None for an empty list."""
    best = None
    for candidate in candidates:
        if best is None or key(candidate) > key(best):
            best = candidate
    return best
