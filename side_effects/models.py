"""Core domain models.

Every engine function takes and returns these types. Pydantic validates
configuration at the boundary so the algorithms can trust their inputs.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar, Union

from pydantic import BaseModel, Field, model_validator


class PillType(str, Enum):
    SAFE = "SAFE"
    DMG_LOW = "DMG_LOW"
    DMG_HIGH = "DMG_HIGH"
    FATAL = "FATAL"
    HEAL = "HEAL"
    LIFE = "LIFE"


class PillShape(str, Enum):
    CAPSULE = "capsule"
    ROUND = "round"
    TRIANGLE = "triangle"
    OVAL = "oval"
    CROSS = "cross"
    HEART = "heart"
    FLOWER = "flower"
    STAR = "star"
    PUMPKIN = "pumpkin"
    COIN = "coin"
    BEAR = "bear"
    GEM = "gem"
    SKULL = "skull"
    DOMINO = "domino"
    PINEAPPLE = "pineapple"
    FRUIT = "fruit"


Category = TypeVar("Category", PillType, PillShape)

# Derived per round, never persisted.
ProbabilityTable = dict[Union[PillType, PillShape], float]
Distribution = dict[Union[PillType, PillShape], int]


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------

class CategoryRule(BaseModel):
    """Probability schedule of one pill type or shape."""

    unlock_round: int = Field(ge=1)
    start_pct: float = Field(ge=0)  # weight on the unlock round
    end_pct: float = Field(ge=0)  # weight at max_round


class ProgressionConfig(BaseModel):
    """Rounds beyond max_round behave exactly like max_round."""

    max_round: int = Field(ge=1)
    rules: dict[str, CategoryRule]


class PillProgressionConfig(ProgressionConfig):
    rules: dict[PillType, CategoryRule]

    @model_validator(mode="after")
    def _every_type_has_a_rule(self) -> PillProgressionConfig:
        missing = [t.value for t in PillType if t not in self.rules]
        if missing:
            raise ValueError(f"Missing progression rules for pill types: {missing}")
        return self


class ShapeProgressionConfig(ProgressionConfig):
    rules: dict[PillShape, CategoryRule]

    @model_validator(mode="after")
    def _every_shape_has_a_rule(self) -> ShapeProgressionConfig:
        missing = [s.value for s in PillShape if s not in self.rules]
        if missing:
            raise ValueError(f"Missing progression rules for shapes: {missing}")
        return self


class PoolScalingConfig(BaseModel):
    base_count: int = Field(gt=0)
    increase_by: int = Field(ge=0)
    frequency: int = Field(gt=0)  # rounds per growth step
    max_cap: int | None = None

    @model_validator(mode="after")
    def _cap_not_below_base(self) -> PoolScalingConfig:
        if self.max_cap is not None and self.max_cap < self.base_count:
            raise ValueError("max_cap must be >= base_count")
        return self


# ---------------------------------------------------------------------------
# Quests
# ---------------------------------------------------------------------------

class QuestConfig(BaseModel):
    min_length: int = Field(ge=1)
    max_length: int = Field(ge=1)
    increase_after_round: int = Field(ge=1)  # first round allowed to roll longer sequences

    @model_validator(mode="after")
    def _ordered_bounds(self) -> QuestConfig:
        if self.max_length < self.min_length:
            raise ValueError("max_length must be >= min_length")
        return self


class ShapeQuest(BaseModel):
    """A per-player objective: consume shapes in this exact order."""

    id: str
    sequence: list[PillShape]
    progress: int = Field(default=0, ge=0)  # index of the next expected shape
    completed: bool = False

    @model_validator(mode="after")
    def _consistent_progress(self) -> ShapeQuest:
        if self.progress > len(self.sequence):
            raise ValueError("progress cannot exceed sequence length")
        finished = bool(self.sequence) and self.progress == len(self.sequence)
        if self.completed != finished:
            raise ValueError("completed must be true exactly when progress reaches the sequence end")
        return self


class QuestProgress(BaseModel):
    """Outcome of feeding one consumed shape to a quest."""

    quest: ShapeQuest
    just_completed: bool = False
    was_reset: bool = False


# ---------------------------------------------------------------------------
# Pills
# ---------------------------------------------------------------------------

class PillConfig(BaseModel):
    """Damage/heal tuning applied when a pill of a given type is created."""

    damage_low: tuple[int, int] = (1, 2)
    damage_high: tuple[int, int] = (3, 4)
    heal_amount: int = Field(default=2, ge=0)
    fatal_damage: int = Field(default=999, ge=0)


class PillStats(BaseModel):
    damage: int = 0
    is_fatal: bool = False
    heal: int = 0
    lives_restore: int = 0


class Pill(BaseModel):
    id: str
    type: PillType
    shape: PillShape
    stats: PillStats
    is_revealed: bool = False
