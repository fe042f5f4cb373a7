"""Health check and active balance configuration endpoints."""

from fastapi import APIRouter

from backend.balance import get_balance

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/balance")
async def balance():
    """The balance config in effect (defaults merged with BALANCE_FILE)."""
    return get_balance().model_dump(mode="json")
