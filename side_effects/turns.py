"""Turn rotation and win conditions for N-player games.

Players act in the fixed cyclical `player_order`. When the caller passes the
`alive` subset, eliminated players are skipped. The caller owns all game
state; these functions only decide who acts next and whether play goes on.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence

logger = logging.getLogger(__name__)


class TurnError(ValueError):
    """Raised for turn requests that would hide a game-ending condition."""


def next_turn(
    current: str,
    player_order: Sequence[str],
    alive: Collection[str] | None = None,
) -> str:
    """Return the player who acts after `current`.

    Scans `player_order` circularly starting after `current` and returns the
    first player still alive. `current` itself is checked last, so a sole
    survivor keeps the turn. Without `alive` this is plain rotation.
    """
    if not player_order:
        raise TurnError("playerOrder cannot be empty")
    if alive is not None and len(alive) == 0:
        raise TurnError("No active players remaining")

    try:
        index = list(player_order).index(current)
    except ValueError:
        logger.warning("next_turn: %r is not in the player order, turn unchanged", current)
        return current

    size = len(player_order)
    for step in range(1, size + 1):
        candidate = player_order[(index + step) % size]
        if alive is None or candidate in alive:
            return candidate

    raise TurnError(f"None of the alive players {sorted(alive)} are in the player order")


def targetable_players(
    current: str,
    all_players: Sequence[str],
    alive: Collection[str] | None = None,
) -> list[str]:
    """Players `current` may aim an item at, in turn order."""
    return [
        p for p in all_players
        if p != current and (alive is None or p in alive)
    ]


def can_continue(alive: Collection[str], min_players: int = 2) -> bool:
    return len(alive) >= min_players


def winner(alive: Collection[str]) -> str | None:
    """The last player standing, or None while several (or none) remain."""
    if len(alive) == 1:
        return next(iter(alive))
    return None
