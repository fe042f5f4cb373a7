"""Per-round probability tables."""

from fastapi import APIRouter

from backend.balance import get_balance
from side_effects.progression import pill_chances, shape_chances

router = APIRouter()


@router.get("/progression/pills")
async def get_pill_chances(round: int = 1):
    """Pill type chances (percent) for a round."""
    return pill_chances(round, get_balance().pill_progression)


@router.get("/progression/shapes")
async def get_shape_chances(round: int = 1):
    """Pill shape chances (percent) for a round."""
    return shape_chances(round, get_balance().shape_progression)
