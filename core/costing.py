"""
Meal costing.

The planner only ever sees `cost(meal) -> float`.  Two implementations:

* `stored_cost`               – the catalog's `total_cost_bdt` as-is
* `IngredientCostCalculator`  – price × quantity per ingredient, falling
                                back to the stored value when a line can't
                                be priced
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from core.models.catalog import CatalogMeal, Ingredient

_LOG = logging.getLogger(__name__)

CostFn = Callable[[CatalogMeal], float]

# unit → (dimension, size in base units)
_UNITS: dict[str, tuple[str, float]] = {
    "g": ("mass", 1.0),
    "gram": ("mass", 1.0),
    "100g": ("mass", 100.0),
    "kg": ("mass", 1000.0),
    "ml": ("volume", 1.0),
    "litre": ("volume", 1000.0),
    "liter": ("volume", 1000.0),
    "l": ("volume", 1000.0),
    "piece": ("piece", 1.0),
    "bundle": ("bundle", 1.0),
}


def convert_quantity(quantity: float, from_unit: str, to_unit: str) -> float | None:
    """Express `quantity` of `from_unit` in `to_unit`; None if incompatible."""
    src = _UNITS.get(from_unit.strip().lower())
    dst = _UNITS.get(to_unit.strip().lower())
    if src is None or dst is None or src[0] != dst[0]:
        return None
    return quantity * src[1] / dst[1]


def stored_cost(meal: CatalogMeal) -> float:
    return float(meal.total_cost_bdt)


class IngredientCostCalculator:
    def __init__(self, ingredients: Iterable[Ingredient]) -> None:
        self._by_id = {ing.ingredient_id: ing for ing in ingredients}

    def __len__(self) -> int:
        return len(self._by_id)

    def meal_cost(self, meal: CatalogMeal) -> float:
        if not meal.ingredients:
            return stored_cost(meal)

        total = 0.0
        for line in meal.ingredients:
            ing = self._by_id.get(line.ingredient_id)
            if ing is None:
                _LOG.debug("%s: unknown ingredient %s → stored cost", meal.meal_id, line.ingredient_id)
                return stored_cost(meal)

            qty = convert_quantity(line.quantity, line.unit, ing.unit)
            if qty is None:
                _LOG.debug(
                    "%s: can't convert %s → %s for %s → stored cost",
                    meal.meal_id, line.unit, ing.unit, ing.ingredient_id,
                )
                return stored_cost(meal)
            total += qty * ing.price_bdt

        return round(total, 2)

    __call__ = meal_cost
