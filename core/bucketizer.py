"""
core/bucketizer.py
────────────────────────────────────────────────────────────────────────
Split an already-filtered meal list into one candidate bucket per
required slot.

Responsibilities
----------------
1.   Collect every meal that serves a slot (a meal may serve several).
2.   Drop rows with non-positive cost or calories.
3.   Rank by calories ↓ then cost ↑ and keep the first `limit` rows, so the
     truncated search space still favours cheap, filling options.

Allergy / dietary filtering happens *before* this step.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from core.errors import InsufficientCandidates, MissingMealType
from core.models.meal import DEFAULT_CANDIDATE_LIMIT, REQUIRED_MEAL_TYPES, MealCandidate

_LOG = logging.getLogger(__name__)

Buckets = Dict[str, List[MealCandidate]]

_COLUMNS = ["position", "calories", "cost"]


def _to_frame(meals: Sequence[MealCandidate]) -> pd.DataFrame:
    rows = [
        {
            "position": i,
            "calories": float(m.calories),
            "cost": float(m.cost),
        }
        for i, m in enumerate(meals)
    ]
    return pd.DataFrame(rows, columns=_COLUMNS)


def bucketize(
    meals: Sequence[MealCandidate],
    candidate_limit_per_type: int = DEFAULT_CANDIDATE_LIMIT,
) -> Tuple[Buckets, Dict[str, int]]:
    """
    Returns `(buckets, counts)` where `counts` holds the raw number of
    meals per slot *before* the sanity filter and truncation.

    Raises `MissingMealType` when nothing serves a slot, and
    `InsufficientCandidates` when the cost/calorie filter empties one.
    """
    if candidate_limit_per_type < 1:
        raise ValueError(
            f"candidate_limit_per_type must be >= 1, got {candidate_limit_per_type}"
        )

    df = _to_frame(meals)
    buckets: Buckets = {}
    counts: Dict[str, int] = {}

    for slot in REQUIRED_MEAL_TYPES:
        mask = pd.Series([m.serves(slot) for m in meals], index=df.index, dtype=bool)
        in_slot = df[mask]
        counts[slot] = len(in_slot)
        if in_slot.empty:
            raise MissingMealType(slot)

        usable = in_slot[(in_slot["cost"] > 0) & (in_slot["calories"] > 0)]
        if usable.empty:
            raise InsufficientCandidates(slot, counts[slot])

        # lexsort is stable → equal rows keep their input order
        ranked = usable.sort_values(["calories", "cost"], ascending=[False, True])
        kept = ranked.head(candidate_limit_per_type)["position"].tolist()
        buckets[slot] = [meals[i] for i in kept]

        _LOG.debug(
            "%s: %d raw → %d usable → %d kept",
            slot, counts[slot], len(usable), len(kept),
        )

    return buckets, counts
