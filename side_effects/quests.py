"""Shape quests — per-player sequence objectives for the current round.

A quest asks the player to consume pills of the given shapes in order.
Consuming the expected shape advances it; any other shape sends it back to
the start. A completed quest is frozen until the next round replaces it.
"""

from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Callable, Iterable, Mapping

from side_effects.models import PillShape, QuestConfig, QuestProgress, ShapeQuest

logger = logging.getLogger(__name__)

DEFAULT_QUEST_CONFIG = QuestConfig(min_length=2, max_length=3, increase_after_round=5)

# Pill coins the host awards when advance_quest() reports just_completed.
QUEST_REWARD_COINS = 1


def _new_quest_id() -> str:
    return uuid.uuid4().hex


def generate_quest(
    round: int,
    available_counts: Mapping[PillShape, int],
    config: QuestConfig = DEFAULT_QUEST_CONFIG,
    *,
    rng: random.Random | None = None,
    id_factory: Callable[[], str] = _new_quest_id,
) -> ShapeQuest:
    """Build a quest out of the shapes present in the round's pool.

    Sequences use distinct shapes, so their length never exceeds the number
    of shapes actually on the table. An empty pool yields an empty sequence,
    which callers treat as "no objective this round".
    """
    rng = rng or random.Random()
    feasible = [shape for shape, count in available_counts.items() if count > 0]

    if round < config.increase_after_round:
        length = config.min_length
    else:
        length = rng.randint(config.min_length, config.max_length)
    length = min(length, len(feasible))

    sequence = rng.sample(feasible, length) if length else []
    quest = ShapeQuest(id=id_factory(), sequence=sequence)
    logger.debug("quest generated round=%d id=%s sequence=%s", round, quest.id,
                 [s.value for s in sequence])
    return quest


def generate_round_quests(
    round: int,
    players: Iterable[str],
    available_counts: Mapping[PillShape, int],
    config: QuestConfig = DEFAULT_QUEST_CONFIG,
    *,
    rng: random.Random | None = None,
    id_factory: Callable[[], str] = _new_quest_id,
) -> dict[str, ShapeQuest]:
    """One fresh quest per player, as handed out at the start of each round."""
    rng = rng or random.Random()
    return {
        player: generate_quest(round, available_counts, config, rng=rng, id_factory=id_factory)
        for player in players
    }


def advance_quest(quest: ShapeQuest, shape: PillShape) -> QuestProgress:
    """Feed one consumed shape to a quest. The input quest is never mutated."""
    if quest.completed or not quest.sequence:
        return QuestProgress(quest=quest)

    if quest.sequence[quest.progress] == shape:
        progress = quest.progress + 1
        done = progress == len(quest.sequence)
        updated = quest.model_copy(update={"progress": progress, "completed": done})
        return QuestProgress(quest=updated, just_completed=done)

    updated = quest.model_copy(update={"progress": 0})
    return QuestProgress(quest=updated, was_reset=quest.progress > 0)
