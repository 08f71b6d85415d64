"""
core/meal_planner.py
────────────────────────────────────────────────────────────────────────
Deterministic one-day plan search: exactly one meal per slot
(Breakfast → Lunch → Dinner → Snack), total cost within budget, nutrition
as close as possible to the targets.

Score (lower = better)
----------------------
    calorie_penalty = |kcal − goal| / max(goal, 1)       (× 1.35 if under goal)
    macro_penalty   = mean(|actual − target| / target)   over protein/carbs/fat
    score           = 0.7 · calorie_penalty + 0.3 · macro_penalty

The search is a plain 4-level loop with running-cost pruning; the first
new best that is "good enough" ends it early.  Infeasibility is returned
as `None`, never raised.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple

from core.bucketizer import Buckets, bucketize
from core.errors import MissingMealType
from core.models.meal import REQUIRED_MEAL_TYPES, MealCandidate, ScoringParams, Targets
from core.models.plan import PlanSelection, PlanTotals

_LOG = logging.getLogger(__name__)


def macro_penalty(actual: float, target: float) -> float:
    if target == 0:
        return 0.0
    return abs(actual - target) / target


def score_totals(
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
    targets: Targets,
    params: ScoringParams,
) -> Tuple[float, float, float]:
    """Return `(score, raw_calorie_penalty, macro_penalty_average)`."""
    goal = targets.calorie_goal
    raw_calorie = abs(calories - goal) / max(goal, 1)
    macro_avg = (
        macro_penalty(protein, targets.protein_target)
        + macro_penalty(carbs, targets.carbs_target)
        + macro_penalty(fat, targets.fat_target)
    ) / 3

    calorie = raw_calorie * params.under_target_multiplier if calories < goal else raw_calorie
    score = calorie * params.calorie_weight + macro_avg * params.macro_weight
    return score, raw_calorie, macro_avg


def _slot_lists(buckets: Buckets) -> Tuple[Sequence[MealCandidate], ...]:
    missing = [s for s in REQUIRED_MEAL_TYPES if not buckets.get(s)]
    if missing:
        raise MissingMealType(missing[0])
    return tuple(buckets[s] for s in REQUIRED_MEAL_TYPES)


def select_plan(
    buckets: Buckets,
    targets: Targets,
    params: Optional[ScoringParams] = None,
    counts: Optional[Dict[str, int]] = None,
) -> Optional[PlanSelection]:
    params = params or ScoringParams()
    breakfasts, lunches, dinners, snacks = _slot_lists(buckets)
    if counts is None:
        counts = {s: len(buckets[s]) for s in REQUIRED_MEAL_TYPES}

    budget = targets.budget
    goal = targets.calorie_goal
    low, high = targets.calorie_band

    best: Optional[PlanSelection] = None
    attempts = 0

    for breakfast in breakfasts:
        cost_b = breakfast.cost
        if cost_b > budget:
            continue
        b_id = breakfast.meal_id

        for lunch in lunches:
            l_id = lunch.meal_id
            if l_id == b_id:
                continue
            cost_bl = cost_b + lunch.cost
            if cost_bl > budget:
                continue
            kcal_bl = breakfast.calories + lunch.calories
            prot_bl = breakfast.protein_g + lunch.protein_g
            carbs_bl = breakfast.carbs_g + lunch.carbs_g
            fat_bl = breakfast.fat_g + lunch.fat_g

            for dinner in dinners:
                d_id = dinner.meal_id
                if d_id == b_id or d_id == l_id:
                    continue
                cost_bld = cost_bl + dinner.cost
                if cost_bld > budget:
                    continue
                kcal_bld = kcal_bl + dinner.calories
                prot_bld = prot_bl + dinner.protein_g
                carbs_bld = carbs_bl + dinner.carbs_g
                fat_bld = fat_bl + dinner.fat_g

                for snack in snacks:
                    s_id = snack.meal_id
                    if s_id == b_id or s_id == l_id or s_id == d_id:
                        continue
                    attempts += 1

                    # full plan cost, checked against the budget once more
                    cost = cost_bld + snack.cost
                    if cost > budget:
                        continue

                    calories = kcal_bld + snack.calories
                    protein = prot_bld + snack.protein_g
                    carbs = carbs_bld + snack.carbs_g
                    fat = fat_bld + snack.fat_g

                    score, raw_calorie, macro_avg = score_totals(
                        calories, protein, carbs, fat, targets, params
                    )

                    if best is not None and not (
                        score < best.score
                        or (score == best.score and cost < best.totals.cost)
                    ):
                        continue

                    best = PlanSelection(
                        meals=(breakfast, lunch, dinner, snack),
                        totals=PlanTotals(
                            calories=calories, protein=protein,
                            carbs=carbs, fat=fat, cost=cost,
                        ),
                        score=score,
                        attempts=attempts,
                        candidate_counts=counts,
                        calorie_penalty=raw_calorie,
                        macro_penalty=macro_avg,
                    )

                    if (
                        low <= calories <= high
                        and macro_avg <= params.early_exit_macro_penalty
                        and raw_calorie <= params.early_exit_calorie_penalty
                    ):
                        _LOG.debug("early exit after %d attempts (score=%.4f)", attempts, score)
                        return best

    if best is None:
        _LOG.info("no budget-feasible combination (%d attempts)", attempts)
        return None

    final_penalty = abs(best.totals.calories - goal) / max(goal, 1)
    ceiling = targets.max_calorie_deviation * params.acceptance_factor
    if final_penalty > ceiling:
        _LOG.warning(
            "best plan rejected: calorie penalty %.3f > %.3f (kcal=%.0f, goal=%.0f)",
            final_penalty, ceiling, best.totals.calories, goal,
        )
        return None

    return best.model_copy(update={"attempts": attempts})


def select_meal_plan(
    meals: Sequence[MealCandidate],
    targets: Targets,
    params: Optional[ScoringParams] = None,
) -> Optional[PlanSelection]:
    """Bucketize `meals` and search; structural errors propagate."""
    buckets, counts = bucketize(meals, targets.candidate_limit_per_type)
    _LOG.info(
        "planning over %d meals (buckets: %s)",
        len(meals), {s: len(b) for s, b in buckets.items()},
    )

    plan = select_plan(buckets, targets, params, counts=counts)
    if plan is None:
        _LOG.warning(
            "unable to build a plan (calorie_goal=%.0f, budget=%.2f)",
            targets.calorie_goal, targets.budget,
        )
        return plan

    _LOG.info(
        "selected %s (kcal=%.0f, cost=%.2f, score=%.4f, attempts=%d)",
        [m.meal_id for m in plan.meals],
        plan.totals.calories, plan.totals.cost, plan.score, plan.attempts,
    )
    return plan
