"""Party roster helpers."""
from __future__ import annotations

from party_rpg.models.character import Character, CharacterKind

DEFAULT_MAX_TEAM_SIZE = 3


def can_recruit(team: list[Character], max_team_size: int = DEFAULT_MAX_TEAM_SIZE) -> bool:
    return len(team) < max_team_size


def recruit(team: list[Character], member: Character, max_team_size: int = DEFAULT_MAX_TEAM_SIZE) -> bool:
    """Append *member* to *team* unless the team is full. Returns whether it joined."""
    if member.kind != CharacterKind.COMPANION:
        raise ValueError(f"Only companions can join the team, got {member.kind.value}")
    if not can_recruit(team, max_team_size):
        return False
    team.append(member)
    return True


def build_party(hero: Character, team: list[Character]) -> list[Character]:
    """Combat order for the player's side: the hero first, then the team in join order."""
    return [hero, *team]


def living_members(party: list[Character]) -> list[Character]:
    return [c for c in party if c.is_alive]
