"""Turn rotation, targeting, and win condition endpoints."""

from fastapi import APIRouter, HTTPException

from side_effects.turns import TurnError, can_continue, next_turn, targetable_players, winner

from .models import NextTurnBody, StatusBody, TargetsBody

router = APIRouter()


@router.post("/turns/next")
async def get_next_turn(body: NextTurnBody):
    """Who plays after `current`, skipping eliminated players."""
    try:
        player = next_turn(body.current, body.player_order, body.alive)
    except TurnError as e:
        raise HTTPException(400, str(e))
    return {"next": player}


@router.post("/turns/targets")
async def get_targets(body: TargetsBody):
    """Players the current player may target with an item."""
    return {"targets": targetable_players(body.current, body.players, body.alive)}


@router.post("/turns/status")
async def get_status(body: StatusBody):
    """Whether the game goes on, and the winner once one player is left."""
    return {
        "can_continue": can_continue(body.alive, body.min_players),
        "winner": winner(body.alive),
    }
