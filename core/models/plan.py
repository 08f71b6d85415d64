from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from .meal import REQUIRED_MEAL_TYPES, MealCandidate


class PlanTotals(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    cost: float = 0.0

    model_config = ConfigDict(frozen=True)


class PlanSelection(BaseModel):
    meals: tuple[MealCandidate, ...]      # slot order, see REQUIRED_MEAL_TYPES
    totals: PlanTotals
    score: float
    attempts: int
    candidate_counts: dict[str, int]
    calorie_penalty: float                # raw, before the under-target multiplier
    macro_penalty: float                  # mean of protein / carbs / fat

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _one_distinct_meal_per_slot(self) -> "PlanSelection":
        if len(self.meals) != len(REQUIRED_MEAL_TYPES):
            raise ValueError(
                f"plan needs {len(REQUIRED_MEAL_TYPES)} meals, got {len(self.meals)}"
            )
        ids = [m.meal_id for m in self.meals]
        if len(set(ids)) != len(ids):
            raise ValueError(f"meal reused across slots: {ids}")
        return self

    def by_slot(self) -> dict[str, MealCandidate]:
        return dict(zip(REQUIRED_MEAL_TYPES, self.meals))

    def summary(self) -> dict[str, Any]:
        """Flat diagnostics dict for the response / debug layer."""
        return {
            "selected_meal_ids": [m.meal_id for m in self.meals],
            "selected_meal_names": [m.name for m in self.meals],
            "slots": {slot: m.meal_id for slot, m in self.by_slot().items()},
            "totals": self.totals.model_dump(),
            "attempts": self.attempts,
            "score": self.score,
            "calorie_penalty": self.calorie_penalty,
            "macro_penalty": self.macro_penalty,
            "candidate_counts": dict(self.candidate_counts),
        }
