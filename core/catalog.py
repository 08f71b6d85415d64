"""
Load the meal / ingredient catalog JSON files and turn catalog meals into
planner candidates.

Expected shapes::

    {"meals":       [{"meal_id": "MEAL_001", "meal_type": ["Lunch"], ...}]}
    {"ingredients": [{"ingredient_id": "ING_001", "unit": "kg", ...}]}
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

from core.costing import CostFn, stored_cost
from core.models.catalog import CatalogMeal, Ingredient
from core.models.meal import MealCandidate

_LOG = logging.getLogger(__name__)


def _read_list(path: str | Path, key: str) -> List[dict[str, Any]]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    rows = data.get(key) if isinstance(data, dict) else None
    if not rows:
        raise ValueError(f"{path}: no '{key}' found")
    return rows


def load_meals(path: str | Path) -> List[CatalogMeal]:
    meals = [CatalogMeal.model_validate(r) for r in _read_list(path, "meals")]
    _LOG.info("loaded %d meals from %s", len(meals), path)
    return meals


def load_ingredients(path: str | Path) -> List[Ingredient]:
    ingredients = [Ingredient.model_validate(r) for r in _read_list(path, "ingredients")]
    _LOG.info("loaded %d ingredients from %s", len(ingredients), path)
    return ingredients


def to_candidates(meals: Iterable[CatalogMeal], cost: CostFn = stored_cost) -> List[MealCandidate]:
    out: List[MealCandidate] = []
    for meal in meals:
        n = meal.total_nutrition
        out.append(
            MealCandidate(
                meal_id=meal.meal_id,
                name=meal.name_en,
                meal_types=frozenset(meal.meal_type),
                calories=max(n.calories, 0.0),
                protein_g=max(n.protein_g, 0.0),
                carbs_g=max(n.carbs_g, 0.0),
                fat_g=max(n.fat_g, 0.0),
                cost=max(cost(meal), 0.0),
            )
        )
    return out
