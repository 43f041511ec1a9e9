import numpy as np
from typing import Dict, Optional, Tuple

from .models import StatBonuses

STATS = ("power", "loft", "wind")
MIN_POINTS = 4
MAX_POINTS = 8


def distribute_points(points: int, rng: np.random.Generator) -> Dict[str, int]:
    """Assign each point to a uniformly chosen stat."""
    dist = {stat: 0 for stat in STATS}
    for idx in rng.integers(0, len(STATS), size=points):
        dist[STATS[idx]] += 1
    return dist


def award_correct_answer(
    bonuses: StatBonuses,
    rng: np.random.Generator,
) -> Tuple[StatBonuses, Dict[str, int]]:
    """Level up after a correct answer: 4-8 random points spread over the stats"""
    total = int(rng.integers(MIN_POINTS, MAX_POINTS + 1))
    dist = distribute_points(total, rng)
    updated = bonuses.model_copy(
        update={stat: getattr(bonuses, stat) + dist[stat] for stat in STATS}
    )
    return updated, dist


def award_for_answers(
    correct_answers: int,
    rng: Optional[np.random.Generator] = None,
    base: Optional[StatBonuses] = None,
) -> StatBonuses:
    rng = rng or np.random.default_rng()
    bonuses = base or StatBonuses()
    for _ in range(correct_answers):
        bonuses, _ = award_correct_answer(bonuses, rng)
    return bonuses
