from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# every finished plan fills exactly these four slots, in this order
MealSlot = Literal["Breakfast", "Lunch", "Dinner", "Snack"]
REQUIRED_MEAL_TYPES: tuple[MealSlot, ...] = ("Breakfast", "Lunch", "Dinner", "Snack")

DEFAULT_CANDIDATE_LIMIT = 55
DEFAULT_MAX_CALORIE_DEVIATION = 0.12  # 12 %


class MealCandidate(BaseModel):
    meal_id: str
    name: str = ""
    meal_types: frozenset[str]
    calories: float = Field(ge=0)
    protein_g: float = Field(0.0, ge=0)
    carbs_g: float = Field(0.0, ge=0)
    fat_g: float = Field(0.0, ge=0)
    cost: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    def serves(self, slot: str) -> bool:
        slot = slot.lower()
        return any(t.lower() == slot for t in self.meal_types)


class Targets(BaseModel):
    calorie_goal: float = Field(ge=0)
    protein_target: float = Field(ge=0)
    carbs_target: float = Field(ge=0)
    fat_target: float = Field(ge=0)
    budget: float
    max_calorie_deviation: float = Field(DEFAULT_MAX_CALORIE_DEVIATION, ge=0)
    candidate_limit_per_type: int = Field(DEFAULT_CANDIDATE_LIMIT, ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def calorie_band(self) -> tuple[float, float]:
        dev = self.max_calorie_deviation
        return self.calorie_goal * (1 - dev), self.calorie_goal * (1 + dev)


class ScoringParams(BaseModel):
    """
    Tunables of the plan scorer.

    The defaults were picked empirically; keep them unless a catalog
    clearly needs something else.
    """

    early_exit_macro_penalty: float = 0.12
    early_exit_calorie_penalty: float = 0.08
    under_target_multiplier: float = 1.35   # under-fed plans cost more
    calorie_weight: float = 0.7
    macro_weight: float = 0.3
    acceptance_factor: float = 1.5          # x max_calorie_deviation

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings) -> "ScoringParams":
        return cls(
            early_exit_macro_penalty=settings.early_exit_macro_penalty,
            early_exit_calorie_penalty=settings.early_exit_calorie_penalty,
            under_target_multiplier=settings.under_target_multiplier,
            calorie_weight=settings.calorie_weight,
            macro_weight=settings.macro_weight,
            acceptance_factor=settings.acceptance_factor,
        )
