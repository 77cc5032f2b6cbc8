"""Companion loyalty: clamped 0..100 score that colours companion behaviour."""
from __future__ import annotations

from party_rpg.models.character import Character

MIN_LOYALTY = 0
MAX_LOYALTY = 100
LEAVING_THRESHOLD = 20
REACTION_SHIFT = 5

_POSITIVE_WORDS = ("glad", "happy", "good")
_NEGATIVE_WORDS = ("angry", "disagree", "wrong", "shouldn't")


def clamp_loyalty(score: int) -> int:
    return max(MIN_LOYALTY, min(MAX_LOYALTY, score))


def adjust_loyalty(companion: Character, amount: int) -> int:
    """Shift a companion's loyalty by *amount* and return the new score."""
    companion.loyalty = clamp_loyalty(companion.loyalty + amount)
    return companion.loyalty


def is_likely_to_leave(companion: Character) -> bool:
    return companion.loyalty < LEAVING_THRESHOLD


def loyalty_shift_from_reaction(reaction: str) -> int:
    """Crude keyword sentiment: +5 for approval, -5 for disapproval, else 0."""
    lower = reaction.lower()
    if any(word in lower for word in _POSITIVE_WORDS):
        return REACTION_SHIFT
    if any(word in lower for word in _NEGATIVE_WORDS):
        return -REACTION_SHIFT
    return 0
