"""Round pool generation — from per-round tables to concrete pills.

Flow for one round:
  1. pool_size(round)                      → how many pills
  2. pill_chances / shape_chances(round)   → percentage tables
  3. resolved_chances(table, fallback)     → never all-zero
  4. distribute(count, table)              → exact counts per type / shape
  5. shapes are shuffled and paired with types one-to-one, then the pool
     itself is shuffled so position reveals nothing.

Fallback categories: when a misconfigured round leaves every category
locked, pill types fall back to SAFE and shapes to ROUND, and the pool keeps
its full size.
"""

from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Callable, Iterable

from side_effects.distribution import POOL_SCALING, distribute, pool_size
from side_effects.models import (
    Category,
    Pill,
    PillConfig,
    PillProgressionConfig,
    PillShape,
    PillStats,
    PillType,
    PoolScalingConfig,
    ProbabilityTable,
    ShapeProgressionConfig,
)
from side_effects.progression import (
    PILL_PROGRESSION,
    SHAPE_PROGRESSION,
    pill_chances,
    shape_chances,
)

logger = logging.getLogger(__name__)

FALLBACK_PILL_TYPE = PillType.SAFE
FALLBACK_SHAPE = PillShape.ROUND

DEFAULT_PILL_CONFIG = PillConfig()


def resolved_chances(table: ProbabilityTable, fallback: Category) -> ProbabilityTable:
    """Return `table`, or a table forcing `fallback` to 100% if nothing has weight."""
    if any(chance > 0 for chance in table.values()):
        return table
    logger.warning("All categories locked; forcing fallback %s", fallback.value)
    forced = {category: 0.0 for category in table}
    forced[fallback] = 100.0
    return forced


def pill_stats(
    pill_type: PillType, config: PillConfig = DEFAULT_PILL_CONFIG, rng: random.Random | None = None
) -> PillStats:
    rng = rng or random.Random()
    if pill_type == PillType.DMG_LOW:
        return PillStats(damage=rng.randint(*config.damage_low))
    if pill_type == PillType.DMG_HIGH:
        return PillStats(damage=rng.randint(*config.damage_high))
    if pill_type == PillType.FATAL:
        return PillStats(damage=config.fatal_damage, is_fatal=True)
    if pill_type == PillType.HEAL:
        return PillStats(heal=config.heal_amount)
    if pill_type == PillType.LIFE:
        return PillStats(lives_restore=1)
    return PillStats()


def _new_pill_id() -> str:
    return uuid.uuid4().hex


def generate_pool(
    round: int,
    *,
    count: int | None = None,
    progression: PillProgressionConfig = PILL_PROGRESSION,
    shape_progression: ShapeProgressionConfig = SHAPE_PROGRESSION,
    scaling: PoolScalingConfig = POOL_SCALING,
    pill_config: PillConfig = DEFAULT_PILL_CONFIG,
    rng: random.Random | None = None,
    id_factory: Callable[[], str] = _new_pill_id,
) -> list[Pill]:
    """Generate the shuffled pill pool for a round.

    `count` overrides the scaled pool size (used by dev tooling and tests).
    """
    rng = rng or random.Random()
    if count is None:
        count = pool_size(round, scaling)

    types = distribute(count, resolved_chances(pill_chances(round, progression), FALLBACK_PILL_TYPE))
    shapes = distribute(count, resolved_chances(shape_chances(round, shape_progression), FALLBACK_SHAPE))

    shape_bag = [shape for shape, n in shapes.items() for _ in range(n)]
    rng.shuffle(shape_bag)

    pills = []
    for pill_type, n in types.items():
        for _ in range(n):
            pills.append(Pill(
                id=id_factory(),
                type=pill_type,
                shape=shape_bag[len(pills)],
                stats=pill_stats(pill_type, pill_config, rng),
            ))
    rng.shuffle(pills)

    logger.debug("pool generated round=%d size=%d", round, len(pills))
    return pills


def count_types(pills: Iterable[Pill]) -> dict[PillType, int]:
    """Public per-type counts (shown to players without revealing which is which)."""
    counts = {t: 0 for t in PillType}
    for pill in pills:
        counts[pill.type] += 1
    return counts


def count_shapes(pills: Iterable[Pill]) -> dict[PillShape, int]:
    counts = {s: 0 for s in PillShape}
    for pill in pills:
        counts[pill.shape] += 1
    return counts


def consume_pill(pills: list[Pill], pill_id: str) -> tuple[Pill | None, list[Pill]]:
    """Remove a pill by id. Unknown ids leave the pool untouched."""
    for i, pill in enumerate(pills):
        if pill.id == pill_id:
            return pill, pills[:i] + pills[i + 1:]
    return None, pills


def reveal_pill(pill: Pill) -> Pill:
    if pill.is_revealed:
        return pill
    return pill.model_copy(update={"is_revealed": True})
