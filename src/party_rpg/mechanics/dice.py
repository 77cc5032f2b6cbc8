"""Dice rolling engine: pure math, no I/O."""
from __future__ import annotations

import random
import re
from dataclasses import dataclass

# Pattern: NdM, optional +/-X
_DICE_RE = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$", re.IGNORECASE)


@dataclass
class DiceResult:
    expression: str
    individual_rolls: list[int]
    modifier: int = 0
    total: int = 0

    @property
    def natural(self) -> int:
        """The first die as rolled, before any modifier."""
        return self.individual_rolls[0] if self.individual_rolls else 0


def roll(expression: str, rng: random.Random | None = None) -> DiceResult:
    """Roll dice from an expression like '2d6+3', '1d20', '1d8'.

    Every die is drawn with ``rng.randint(1, sides)`` in left-to-right order,
    so a seeded ``random.Random`` reproduces the same sequence.
    """
    expr = expression.replace(" ", "")
    m = _DICE_RE.match(expr)
    if not m:
        raise ValueError(f"Invalid dice expression: {expression}")

    num_dice = int(m.group(1))
    die_size = int(m.group(2))
    modifier = int(m.group(3)) if m.group(3) else 0
    if num_dice < 1 or die_size < 1:
        raise ValueError(f"Invalid dice expression: {expression}")

    source = rng or random
    rolls = [source.randint(1, die_size) for _ in range(num_dice)]
    return DiceResult(
        expression=expression,
        individual_rolls=rolls,
        modifier=modifier,
        total=sum(rolls) + modifier,
    )


def roll_d20(modifier: int = 0, rng: random.Random | None = None) -> DiceResult:
    """Convenience: roll 1d20 + modifier."""
    r = roll("1d20", rng)
    r.modifier = modifier
    r.total = r.individual_rolls[0] + modifier
    return r
