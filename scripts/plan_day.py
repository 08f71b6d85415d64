"""
scripts/plan_day.py
────────────────────────────────────────────────────────────────────────
Build one day's plan (breakfast, lunch, dinner, snack) from the catalog
files and print the selection as JSON.

    python -m scripts.plan_day --budget 300

    # profile-derived targets, ingredient-priced meals
    python -m scripts.plan_day --budget 250 --age 30 --gender male \
        --height 175 --weight 70 --activity moderate --goal "Weight Loss" \
        --ingredient-costs
"""
from __future__ import annotations

import json
import logging
import sys
from argparse import ArgumentParser, Namespace
from typing import List

from config import settings
from core.catalog import load_ingredients, load_meals, to_candidates
from core.costing import IngredientCostCalculator, stored_cost
from core.errors import NoFeasibleCombination, PlannerError
from core.meal_planner import select_meal_plan
from core.models.meal import ScoringParams
from core.nutrition_calc import NutritionalCalculator, UserAnthro

_LOG = logging.getLogger("scripts.plan_day")


def _parse(argv: List[str] | None) -> Namespace:
    ap = ArgumentParser(description="Select a one-day meal plan within budget")
    ap.add_argument("--budget", type=float, required=True)
    ap.add_argument("--meals", default=settings.meals_path)
    ap.add_argument("--ingredients", default=settings.ingredients_path)
    ap.add_argument("--ingredient-costs", action="store_true",
                    help="price meals from ingredients instead of stored cost")
    ap.add_argument("--age", type=int)
    ap.add_argument("--gender")
    ap.add_argument("--height", type=float, help="cm")
    ap.add_argument("--weight", type=float, help="kg")
    ap.add_argument("--activity", help="sedentary | light | moderate | active")
    ap.add_argument("--goal", help="Weight Loss | Weight Gain | Weight Maintenance")
    ap.add_argument("--max-deviation", type=float, default=settings.max_calorie_deviation)
    ap.add_argument("--candidate-limit", type=int, default=settings.candidate_limit_per_type)
    return ap.parse_args(argv)


def run(args: Namespace) -> dict:
    cost = stored_cost
    if args.ingredient_costs:
        cost = IngredientCostCalculator(load_ingredients(args.ingredients))
    candidates = to_candidates(load_meals(args.meals), cost)

    user = UserAnthro(
        age=args.age,
        gender=args.gender,
        weight_kg=args.weight,
        height_cm=args.height,
        activity_level=args.activity,
        health_goal=args.goal,
    )
    calc = NutritionalCalculator(default_calorie_goal=settings.default_calorie_goal)
    targets = calc.targets(
        user,
        budget=args.budget,
        max_calorie_deviation=args.max_deviation,
        candidate_limit_per_type=args.candidate_limit,
    )

    plan = select_meal_plan(candidates, targets, ScoringParams.from_settings(settings))
    if plan is None:
        raise NoFeasibleCombination(targets)

    out = plan.summary()
    out["targets"] = targets.model_dump()
    return out


def main(argv: List[str] | None = None) -> int:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = _parse(argv)
    try:
        result = run(args)
    except NoFeasibleCombination as e:
        _LOG.warning("%s", e)
        print(e.user_message, file=sys.stderr)
        return 2
    except PlannerError as e:
        _LOG.error("planner input error: %s", e)
        print(str(e), file=sys.stderr)
        return 2

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
