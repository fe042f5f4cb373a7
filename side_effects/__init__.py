"""Side Effects — pill roulette progression engine.

Pure, synchronous functions; the host application owns all game state and
calls these at transition points (round start, pill consumption).

  progression   per-round probability tables for pill types and shapes
  distribution  largest-remainder counts from a table; pool size scaling
  quests        shape-sequence quest generation and progress tracking
  turns         turn rotation with elimination skipping; win conditions
  pool          concrete pill pools built from the pieces above

Randomness is injected (`rng: random.Random`, `id_factory`) wherever it is
used, so seeded runs are reproducible.
"""

# Re-export the public API so `from side_effects import ...` works.

from .distribution import (  # noqa: F401
    POOL_SCALING,
    DistributionError,
    distribute,
    distribute_pill_types,
    distribute_shapes,
    pool_size,
)
from .models import (  # noqa: F401
    CategoryRule,
    Pill,
    PillConfig,
    PillProgressionConfig,
    PillShape,
    PillStats,
    PillType,
    PoolScalingConfig,
    ProgressionConfig,
    QuestConfig,
    QuestProgress,
    ShapeProgressionConfig,
    ShapeQuest,
)
from .pool import (  # noqa: F401
    FALLBACK_PILL_TYPE,
    FALLBACK_SHAPE,
    consume_pill,
    count_shapes,
    count_types,
    generate_pool,
    resolved_chances,
    reveal_pill,
)
from .progression import (  # noqa: F401
    PILL_PROGRESSION,
    SHAPE_PROGRESSION,
    chances,
    lerp,
    pill_chances,
    roll_pill_type,
    roll_shape,
    shape_chances,
)
from .quests import (  # noqa: F401
    DEFAULT_QUEST_CONFIG,
    QUEST_REWARD_COINS,
    advance_quest,
    generate_quest,
    generate_round_quests,
)
from .turns import (  # noqa: F401
    TurnError,
    can_continue,
    next_turn,
    targetable_players,
    winner,
)
