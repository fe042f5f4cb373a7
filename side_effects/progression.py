"""Per-round probability tables for pill types and shapes.

Each category (a PillType or a PillShape) carries a CategoryRule:

    unlock_round  first round the category can appear at all
    start_pct     raw weight on the unlock round
    end_pct       raw weight at max_round

For a round r (clamped to [1, max_round]) an unlocked category's raw weight
is lerp(start_pct, end_pct, t) with t = (r - unlock) / (max_round - unlock),
or t = 1 when the category unlocks exactly at max_round. Raw weights are then
normalised to percentages (2 decimals) summing to ~100.

If no category has weight the all-zero table is returned as-is; see
side_effects.pool.resolved_chances for the fallback applied by callers that
must always produce something.
"""

from __future__ import annotations

import random
from decimal import ROUND_HALF_UP, Decimal

from side_effects.models import (
    Category,
    CategoryRule,
    PillProgressionConfig,
    PillShape,
    PillType,
    ProbabilityTable,
    ProgressionConfig,
    ShapeProgressionConfig,
)

# Balance notes:
#   - round 1 already carries risk (DMG_HIGH) so the first turn is tense
#   - HEAL unlocks before FATAL as an escape valve
#   - FATAL tops out at 18% so late game stays skill-driven
#   - LIFE is disabled (unlock 99) until the mechanic ships
PILL_PROGRESSION = PillProgressionConfig(
    max_round=15,
    rules={
        PillType.SAFE: CategoryRule(unlock_round=1, start_pct=45, end_pct=10),
        PillType.DMG_LOW: CategoryRule(unlock_round=1, start_pct=30, end_pct=15),
        PillType.DMG_HIGH: CategoryRule(unlock_round=1, start_pct=15, end_pct=25),
        PillType.FATAL: CategoryRule(unlock_round=4, start_pct=5, end_pct=18),
        PillType.HEAL: CategoryRule(unlock_round=2, start_pct=10, end_pct=15),
        PillType.LIFE: CategoryRule(unlock_round=99, start_pct=0, end_pct=0),
    },
)

# Basic, easy to tell apart shapes first; the roster widens every few rounds
# and flattens out towards max_round.
SHAPE_PROGRESSION = ShapeProgressionConfig(
    max_round=15,
    rules={
        PillShape.CAPSULE: CategoryRule(unlock_round=1, start_pct=50, end_pct=8),
        PillShape.ROUND: CategoryRule(unlock_round=1, start_pct=50, end_pct=8),
        PillShape.TRIANGLE: CategoryRule(unlock_round=3, start_pct=15, end_pct=7),
        PillShape.OVAL: CategoryRule(unlock_round=2, start_pct=20, end_pct=7),
        PillShape.CROSS: CategoryRule(unlock_round=4, start_pct=12, end_pct=7),
        PillShape.HEART: CategoryRule(unlock_round=4, start_pct=12, end_pct=7),
        PillShape.FLOWER: CategoryRule(unlock_round=5, start_pct=10, end_pct=6),
        PillShape.STAR: CategoryRule(unlock_round=5, start_pct=10, end_pct=6),
        PillShape.PUMPKIN: CategoryRule(unlock_round=6, start_pct=8, end_pct=6),
        PillShape.COIN: CategoryRule(unlock_round=6, start_pct=8, end_pct=6),
        PillShape.BEAR: CategoryRule(unlock_round=7, start_pct=8, end_pct=6),
        PillShape.GEM: CategoryRule(unlock_round=7, start_pct=8, end_pct=6),
        PillShape.SKULL: CategoryRule(unlock_round=8, start_pct=6, end_pct=5),
        PillShape.DOMINO: CategoryRule(unlock_round=8, start_pct=6, end_pct=5),
        PillShape.PINEAPPLE: CategoryRule(unlock_round=10, start_pct=5, end_pct=5),
        PillShape.FRUIT: CategoryRule(unlock_round=10, start_pct=5, end_pct=5),
    },
)


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation. t is not clamped."""
    return start + (end - start) * t


def _progress(round: int, rule: CategoryRule, max_round: int) -> float:
    span = max_round - rule.unlock_round
    if span <= 0:
        return 1.0
    return (round - rule.unlock_round) / span


def chances(round: int, config: ProgressionConfig) -> ProbabilityTable:
    """Normalised probability table (percent, sum ~100) for a round."""
    clamped = max(1, min(round, config.max_round))

    weights: ProbabilityTable = {}
    total = 0.0
    for category, rule in config.rules.items():
        if clamped < rule.unlock_round:
            weights[category] = 0.0
            continue
        value = lerp(rule.start_pct, rule.end_pct, _progress(clamped, rule, config.max_round))
        weights[category] = value
        total += value

    if total <= 0:
        return weights
    return {category: _round2(w * 100 / total) for category, w in weights.items()}


def _round2(value: float) -> float:
    # half-up: an exact tie such as 12.125 becomes 12.13
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def pill_chances(round: int, config: PillProgressionConfig = PILL_PROGRESSION) -> ProbabilityTable:
    return chances(round, config)


def shape_chances(round: int, config: ShapeProgressionConfig = SHAPE_PROGRESSION) -> ProbabilityTable:
    return chances(round, config)


# ---------------------------------------------------------------------------
# Single weighted draws
# ---------------------------------------------------------------------------

def roll(
    table: ProbabilityTable, fallback: Category, rng: random.Random | None = None
) -> Category:
    """Draw one category from a percentage table.

    Returns `fallback` when the cumulative chances never cover the draw,
    which only happens for an all-zero (or badly truncated) table.
    """
    rng = rng or random.Random()
    value = rng.random() * 100
    accumulated = 0.0
    for category, chance in table.items():
        if chance <= 0:
            continue
        accumulated += chance
        if value <= accumulated:
            return category
    return fallback


def roll_pill_type(
    round: int,
    config: PillProgressionConfig = PILL_PROGRESSION,
    rng: random.Random | None = None,
) -> PillType:
    return roll(pill_chances(round, config), PillType.SAFE, rng)


def roll_shape(
    round: int,
    config: ShapeProgressionConfig = SHAPE_PROGRESSION,
    rng: random.Random | None = None,
) -> PillShape:
    return roll(shape_chances(round, config), PillShape.ROUND, rng)
