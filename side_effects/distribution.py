"""Turning probability tables into whole pill counts, and sizing the pool.

distribute() uses largest-remainder allocation: every category first gets
floor(count * chance / 100), then the units lost to flooring are handed out
one at a time by descending fractional remainder. Ties keep the table's
iteration order, so the same table always yields the same counts.

pool_size() is a step function: the pool grows by `increase_by` every
`frequency` rounds, optionally capped at `max_cap`.
"""

from __future__ import annotations

import math

from side_effects.models import (
    Distribution,
    PillProgressionConfig,
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

POOL_SCALING = PoolScalingConfig(base_count=6, increase_by=1, frequency=3, max_cap=12)


class DistributionError(ValueError):
    """Raised when a table has nothing to distribute a non-zero count over."""


def distribute(count: int, table: ProbabilityTable) -> Distribution:
    """Split `count` units across the table's categories; values sum to `count`."""
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    result: Distribution = {category: 0 for category in table}
    if count == 0:
        return result

    remainders = []
    for category, chance in table.items():
        if chance <= 0:
            continue
        ideal = count * chance / 100
        base = math.floor(ideal)
        result[category] = base
        remainders.append((category, ideal - base))

    if not remainders:
        raise DistributionError(
            f"Cannot distribute {count} units: every category has zero chance"
        )

    # sorted() is stable: equal remainders keep table order
    ranking = sorted(remainders, key=lambda item: item[1], reverse=True)
    leftover = count - sum(result.values())

    # A table rounded to 2 decimals can sum a hair above or below 100;
    # keep going round the ranking until the total is exact.
    i = 0
    while leftover > 0:
        category, _ = ranking[i % len(ranking)]
        result[category] += 1
        leftover -= 1
        i += 1

    i = 0
    while leftover < 0:
        category, _ = ranking[-1 - i % len(ranking)]
        if result[category] > 0:
            result[category] -= 1
            leftover += 1
        i += 1

    return result


def distribute_pill_types(
    count: int, round: int, config: PillProgressionConfig = PILL_PROGRESSION
) -> Distribution:
    return distribute(count, pill_chances(round, config))


def distribute_shapes(
    count: int, round: int, config: ShapeProgressionConfig = SHAPE_PROGRESSION
) -> Distribution:
    return distribute(count, shape_chances(round, config))


def pool_size(round: int, config: PoolScalingConfig = POOL_SCALING) -> int:
    """Number of pills on the table for a round (rounds < 1 count as round 1)."""
    safe_round = max(1, round)
    cycles = (safe_round - 1) // config.frequency
    size = config.base_count + cycles * config.increase_by
    if config.max_cap is not None:
        size = min(size, config.max_cap)
    return size
