"""Game balance configuration (progression rules, pool scaling, quests, pill tuning).

get_balance() returns the shipped defaults overlaid with an optional JSON
file. Overrides are applied per section: a file that only contains
"pool_scaling" keeps every other section at its default. The full layout:

    {
      "pill_progression":  {"max_round": 15, "rules": {"SAFE": {...}, ...}},
      "shape_progression": {"max_round": 15, "rules": {"round": {...}, ...}},
      "pool_scaling":      {"base_count": 6, "increase_by": 1, "frequency": 3, "max_cap": 12},
      "quest":             {"min_length": 2, "max_length": 3, "increase_after_round": 5},
      "pills":             {"damage_low": [1, 2], "damage_high": [3, 4], ...}
    }

Partial rule maps are merged rule by rule onto the defaults, so tuning one
pill type does not require restating the others.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from side_effects.distribution import POOL_SCALING
from side_effects.models import (
    PillConfig,
    PillProgressionConfig,
    PoolScalingConfig,
    QuestConfig,
    ShapeProgressionConfig,
)
from side_effects.pool import DEFAULT_PILL_CONFIG
from side_effects.progression import PILL_PROGRESSION, SHAPE_PROGRESSION
from side_effects.quests import DEFAULT_QUEST_CONFIG

logger = logging.getLogger(__name__)

_balance: BalanceConfig | None = None


class BalanceError(RuntimeError):
    """Raised when a balance file cannot be read or fails validation."""


class BalanceConfig(BaseModel):
    pill_progression: PillProgressionConfig = PILL_PROGRESSION
    shape_progression: ShapeProgressionConfig = SHAPE_PROGRESSION
    pool_scaling: PoolScalingConfig = POOL_SCALING
    quest: QuestConfig = DEFAULT_QUEST_CONFIG
    pills: PillConfig = DEFAULT_PILL_CONFIG


_PROGRESSION_SECTIONS = ("pill_progression", "shape_progression")
_FLAT_SECTIONS = ("pool_scaling", "quest", "pills")


def _merge(stored: dict[str, Any]) -> dict[str, Any]:
    """Overlay stored sections onto the default config dump."""
    merged = BalanceConfig().model_dump(mode="json")
    for section in _PROGRESSION_SECTIONS:
        if section not in stored:
            continue
        values = stored[section]
        if "max_round" in values:
            merged[section]["max_round"] = values["max_round"]
        for category, rule in values.get("rules", {}).items():
            merged[section]["rules"].setdefault(category, {}).update(rule)
    for section in _FLAT_SECTIONS:
        if section in stored:
            merged[section].update(stored[section])
    unknown = set(stored) - set(_PROGRESSION_SECTIONS) - set(_FLAT_SECTIONS)
    if unknown:
        logger.warning("Ignoring unknown balance sections: %s", sorted(unknown))
    return merged


def load_balance(path: Path | None = None) -> BalanceConfig:
    """Defaults, overlaid with the JSON file at `path` when it exists."""
    if path is None or not path.is_file():
        if path is not None:
            logger.info("Balance file %s not found, using defaults", path)
        return BalanceConfig()
    try:
        stored = json.loads(path.read_text())
        if not isinstance(stored, dict):
            raise BalanceError(f"Balance file {path} must contain a JSON object")
        return BalanceConfig.model_validate(_merge(stored))
    except json.JSONDecodeError as e:
        raise BalanceError(f"Balance file {path} is not valid JSON: {e}") from e
    except (ValidationError, ValueError, AttributeError, TypeError) as e:
        raise BalanceError(f"Balance file {path} is invalid: {e}") from e


def init_balance(path: Path | None = None) -> BalanceConfig:
    global _balance
    _balance = load_balance(path)
    return _balance


def get_balance() -> BalanceConfig:
    assert _balance is not None, "Call init_balance() before using the balance config"
    return _balance
