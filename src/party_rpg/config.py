"""Configuration loading: config.toml at the project root."""
from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.toml"


class CombatRules(BaseModel):
    """Tunable numbers for combat resolution."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    magic_mana_cost: int = Field(10, ge=0)
    heal_mana_cost: int = Field(15, ge=0)
    defend_armor_bonus: int = Field(2, ge=0)
    resist_threshold: int = 15
    xp_per_enemy: int = Field(50, ge=0)
    melee_damage_die: str = "1d6"
    magic_damage_die: str = "1d8"
    heal_die: str = "1d8"


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config.toml. A missing file yields an empty dict (all defaults)."""
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if config_path.exists():
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    logger.info("No config at %s, using defaults.", config_path)
    return {}


def combat_rules(config: dict[str, Any] | None = None) -> CombatRules:
    return CombatRules(**(config or {}).get("combat", {}))


def max_team_size(config: dict[str, Any] | None = None) -> int:
    return int((config or {}).get("party", {}).get("max_team_size", 3))
