"""Parse a companion's one-line combat decision into a structured intent.

Expected shape::

    ACTION: HEAL | TARGET: Bob | REASON: low hp

Each label is looked up on its own, so field order does not matter and a
missing REASON is fine. A missing or unknown ACTION means attack.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_KEYS = ("ACTION", "TARGET", "REASON")


class DecisionParseError(ValueError):
    """The decision text carries nothing that can be read as an intent."""


class IntentKind(str, Enum):
    ATTACK = "attack"
    HEAL = "heal"
    DEFEND = "defend"


@dataclass(frozen=True)
class DecisionIntent:
    kind: IntentKind
    target_name: str = ""
    reason: str = ""


def extract_value(text: str, key: str) -> str | None:
    """Text after ``KEY:`` up to the next ``|`` (or end of string), trimmed.

    A label at the start of a field wins over the same word inside another
    field's free text. Returns None when the label is absent. Labels match
    case-insensitively.
    """
    match = re.search(rf"(?:^|\|)\s*{key}\s*:", text, re.IGNORECASE)
    if not match:
        match = re.search(rf"\b{key}\s*:", text, re.IGNORECASE)
    if not match:
        return None
    start = match.end()
    end = text.find("|", start)
    if end == -1:
        end = len(text)
    return text[start:end].strip()


def parse_intent_kind(token: str | None) -> IntentKind:
    if not token:
        return IntentKind.ATTACK
    try:
        return IntentKind(token.strip().lower())
    except ValueError:
        return IntentKind.ATTACK


def parse_decision(text: str) -> DecisionIntent:
    """Parse collaborator text into a DecisionIntent.

    Raises DecisionParseError for non-string or blank input, or text with
    none of the ACTION / TARGET / REASON labels.
    """
    if not isinstance(text, str) or not text.strip():
        raise DecisionParseError("Empty decision text")

    values = {key: extract_value(text, key) for key in _KEYS}
    if all(v is None for v in values.values()):
        raise DecisionParseError(f"No labelled fields in decision: {text[:80]!r}")

    return DecisionIntent(
        kind=parse_intent_kind(values["ACTION"]),
        target_name=values["TARGET"] or "",
        reason=values["REASON"] or "",
    )
