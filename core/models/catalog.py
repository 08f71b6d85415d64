from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class Ingredient(BaseModel):
    ingredient_id: str = Field(validation_alias=AliasChoices("ingredient_id", "id"))
    name_en: str = Field("", validation_alias=AliasChoices("name_en", "name"))
    name_bn: str = ""
    unit: str                  # kg / g / 100g / litre / ml / piece / bundle
    price_bdt: float = Field(ge=0)   # per one `unit`


class MealIngredient(BaseModel):
    ingredient_id: str
    quantity: float = Field(ge=0)
    unit: str


class MealNutrition(BaseModel):
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    sodium_mg: float = 0.0
    sugar_g: float = 0.0


class CatalogMeal(BaseModel):
    meal_id: str
    name_en: str = ""
    name_bn: str = ""
    meal_type: list[str]       # e.g. ["Lunch", "Dinner"]
    prep_time_min: int | None = None
    ingredients: list[MealIngredient] = []
    total_nutrition: MealNutrition = MealNutrition()
    total_cost_bdt: float = 0.0
    tags: list[str] = []
