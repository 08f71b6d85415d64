import math

from core.costing import IngredientCostCalculator, convert_quantity, stored_cost
from core.models.catalog import CatalogMeal, Ingredient

INGREDIENTS = [
    Ingredient(ingredient_id="ING_001", name_en="Rice", unit="kg", price_bdt=75),
    Ingredient(ingredient_id="ING_004", name_en="Egg", unit="piece", price_bdt=13),
    Ingredient(ingredient_id="ING_005", name_en="Soybean Oil", unit="litre", price_bdt=170),
    Ingredient(ingredient_id="ING_009", name_en="Peanuts", unit="100g", price_bdt=20),
]

calc = IngredientCostCalculator(INGREDIENTS)


def _meal(lines, stored=99.0):
    return CatalogMeal(
        meal_id="MEAL_X",
        meal_type=["Breakfast"],
        ingredients=[{"ingredient_id": i, "quantity": q, "unit": u} for i, q, u in lines],
        total_cost_bdt=stored,
    )


def test_unit_conversion():
    assert math.isclose(convert_quantity(150, "g", "kg"), 0.15)
    assert math.isclose(convert_quantity(1, "Litre", "ml"), 1000)
    assert math.isclose(convert_quantity(40, "g", "100g"), 0.4)
    assert convert_quantity(2, "piece", "kg") is None
    assert convert_quantity(1, "cup", "ml") is None


def test_prices_from_ingredients():
    meal = _meal([("ING_001", 150, "g"), ("ING_004", 2, "piece"), ("ING_005", 20, "ml")])
    # 11.25 rice + 26 eggs + 3.40 oil
    assert math.isclose(calc.meal_cost(meal), 40.65)
    assert math.isclose(calc(meal), 40.65)


def test_unknown_ingredient_falls_back_to_stored():
    meal = _meal([("ING_001", 150, "g"), ("ING_404", 1, "piece")], stored=55)
    assert calc.meal_cost(meal) == 55


def test_unconvertible_unit_falls_back_to_stored():
    meal = _meal([("ING_004", 100, "g")], stored=12)
    assert calc.meal_cost(meal) == 12


def test_no_ingredients_uses_stored():
    meal = _meal([], stored=160)
    assert calc.meal_cost(meal) == stored_cost(meal) == 160


def test_lookup_map_is_per_instance():
    assert len(calc) == 4
    assert len(IngredientCostCalculator([])) == 0
