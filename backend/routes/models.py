"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel, Field

from side_effects.models import Pill, PillShape, PillType, ShapeQuest

# Upper bound for caller-supplied pool counts.
MAX_POOL_COUNT = 1000


class GeneratePoolBody(BaseModel):
    round: int = 1
    count: int | None = Field(default=None, ge=0, le=MAX_POOL_COUNT)
    seed: int | None = None


class PoolResponse(BaseModel):
    round: int
    pills: list[Pill]
    type_counts: dict[PillType, int]
    shape_counts: dict[PillShape, int]


class GenerateQuestBody(BaseModel):
    round: int = 1
    shape_counts: dict[PillShape, int]
    seed: int | None = None


class AdvanceQuestBody(BaseModel):
    quest: ShapeQuest
    shape: PillShape


class NextTurnBody(BaseModel):
    current: str
    player_order: list[str]
    alive: list[str] | None = None


class TargetsBody(BaseModel):
    current: str
    players: list[str]
    alive: list[str] | None = None


class StatusBody(BaseModel):
    alive: list[str]
    min_players: int = 2
