"""Pool size, pool composition, and full pool generation."""

import random

from fastapi import APIRouter, HTTPException, Query

from backend.balance import get_balance
from side_effects.distribution import distribute, pool_size
from side_effects.pool import (
    FALLBACK_PILL_TYPE,
    FALLBACK_SHAPE,
    count_shapes,
    count_types,
    generate_pool,
    resolved_chances,
)
from side_effects.progression import pill_chances, shape_chances

from .models import MAX_POOL_COUNT, GeneratePoolBody, PoolResponse

router = APIRouter()


@router.get("/pool/size")
async def get_pool_size(round: int = 1):
    """Number of pills in a round's pool."""
    return {"round": round, "size": pool_size(round, get_balance().pool_scaling)}


@router.get("/pool/distribution")
async def get_pool_distribution(
    round: int = 1,
    count: int | None = Query(default=None, ge=0, le=MAX_POOL_COUNT),
):
    """Exact pill type and shape counts for a round (count defaults to the pool size)."""
    balance = get_balance()
    if count is None:
        count = pool_size(round, balance.pool_scaling)
    types = resolved_chances(pill_chances(round, balance.pill_progression), FALLBACK_PILL_TYPE)
    shapes = resolved_chances(shape_chances(round, balance.shape_progression), FALLBACK_SHAPE)
    return {
        "round": round,
        "count": count,
        "types": distribute(count, types),
        "shapes": distribute(count, shapes),
    }


@router.post("/pool", response_model=PoolResponse)
async def create_pool(body: GeneratePoolBody):
    """Generate a shuffled pill pool. Pass `seed` for a reproducible pool."""
    balance = get_balance()
    rng = random.Random(body.seed)
    try:
        pills = generate_pool(
            body.round,
            count=body.count,
            progression=balance.pill_progression,
            shape_progression=balance.shape_progression,
            scaling=balance.pool_scaling,
            pill_config=balance.pills,
            rng=rng,
            id_factory=lambda: f"{rng.getrandbits(64):016x}",
        )
    except ValueError as e:
        raise HTTPException(400, str(e))
    return PoolResponse(
        round=body.round,
        pills=pills,
        type_counts=count_types(pills),
        shape_counts=count_shapes(pills),
    )
