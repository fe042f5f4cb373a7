"""FastAPI API endpoints under /api.

Endpoint groups: health + balance, progression tables, pool sizing and
generation, shape quests, turns. Every endpoint is stateless: callers send
the game state they own and get the engine's decision back, which makes the
API usable both as a balancing simulator and by an authoritative game server.
"""

from fastapi import APIRouter

from .pool import router as pool_router
from .progression import router as progression_router
from .quests import router as quests_router
from .settings import router as settings_router
from .turns import router as turns_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(progression_router)
router.include_router(pool_router)
router.include_router(quests_router)
router.include_router(turns_router)
