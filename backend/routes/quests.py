"""Shape quest generation and progress endpoints."""

import random

from fastapi import APIRouter

from backend.balance import get_balance
from side_effects.models import QuestProgress, ShapeQuest
from side_effects.quests import advance_quest, generate_quest

from .models import AdvanceQuestBody, GenerateQuestBody

router = APIRouter()


@router.post("/quests", response_model=ShapeQuest)
async def create_quest(body: GenerateQuestBody):
    """Generate a quest from the shapes currently in the pool."""
    return generate_quest(
        body.round,
        body.shape_counts,
        get_balance().quest,
        rng=random.Random(body.seed),
    )


@router.post("/quests/advance", response_model=QuestProgress)
async def advance(body: AdvanceQuestBody):
    """Apply one consumed shape to a quest."""
    return advance_quest(body.quest, body.shape)
