"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Turns a user profile into planner `Targets`:

1. BMR  (Mifflin–St Jeor)
2. TDEE (activity multiplier)
3. Goal adjustment (±500 kcal)
4. Macro split per goal (protein / carbs / fat)

An incomplete profile falls back to the default calorie goal.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from core.models.meal import DEFAULT_CANDIDATE_LIMIT, DEFAULT_MAX_CALORIE_DEVIATION, Targets

Logger = logging.getLogger(__name__)

DEFAULT_CALORIE_GOAL = 2500


# ──────────────────────────────────────────────────────────────────────
#  User dataclass
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class UserAnthro:
    age: int | None = None
    gender: str | None = None          # "male" | "female"
    weight_kg: float | None = None
    height_cm: float | None = None
    activity_level: str | None = None  # sedentary | light | moderate | active
    health_goal: str | None = None     # "Weight Loss" | "weight_gain" | ...

    @property
    def complete(self) -> bool:
        return all(
            (self.age, self.gender, self.weight_kg, self.height_cm, self.activity_level)
        )

    @property
    def goal_key(self) -> str:
        return normalize_goal(self.health_goal)


def normalize_goal(goal: str | None) -> str:
    """'Weight Loss' / 'weight_loss' → 'weightloss'."""
    return re.sub(r"[_\s]", "", (goal or "").lower())


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionalCalculator:
    """Source-of-truth for the daily kcal + macro targets."""

    _ACTIVITY = {
        "sedentary": 1.2,
        "light": 1.375,
        "moderate": 1.55,
        "active": 1.725,
    }
    _DEFAULT_ACTIVITY = 1.55
    _GOAL_DELTA = {"weightloss": -500, "weightgain": 500}

    # (protein, carbs, fat) as share of kcal
    _SPLITS = {
        "weightloss": (0.30, 0.40, 0.30),
        "weightgain": (0.25, 0.50, 0.25),
    }
    _MAINTAIN_SPLIT = (0.25, 0.45, 0.30)

    def __init__(self, default_calorie_goal: float = DEFAULT_CALORIE_GOAL) -> None:
        self.default_calorie_goal = default_calorie_goal

    # --------------- public entrypoint --------------------------------
    def targets(
        self,
        u: UserAnthro,
        budget: float,
        max_calorie_deviation: float = DEFAULT_MAX_CALORIE_DEVIATION,
        candidate_limit_per_type: int = DEFAULT_CANDIDATE_LIMIT,
    ) -> Targets:
        kcal = self.calorie_goal(u)
        macros = self.macro_targets(kcal, u.health_goal)
        Logger.debug("targets for goal=%r: kcal=%s %s", u.health_goal, kcal, macros)
        return Targets(
            calorie_goal=kcal,
            protein_target=macros["protein_g"],
            carbs_target=macros["carbs_g"],
            fat_target=macros["fat_g"],
            budget=budget,
            max_calorie_deviation=max_calorie_deviation,
            candidate_limit_per_type=candidate_limit_per_type,
        )

    # --------------- BMR / TDEE -------------------------------------
    def bmr(self, u: UserAnthro) -> float:
        base = 10 * u.weight_kg + 6.25 * u.height_cm - 5 * u.age
        return base + (5 if (u.gender or "").lower() == "male" else -161)

    def tdee(self, u: UserAnthro) -> float:
        pal = self._ACTIVITY.get((u.activity_level or "").lower(), self._DEFAULT_ACTIVITY)
        return self.bmr(u) * pal

    # --------------- Calories ---------------------------------------
    def calorie_goal(self, u: UserAnthro) -> float:
        if not u.complete:
            Logger.debug("incomplete profile → default %s kcal", self.default_calorie_goal)
            return self.default_calorie_goal
        kcal = self.tdee(u) + self._GOAL_DELTA.get(u.goal_key, 0)
        # tiny profiles can end up below zero after the deficit
        return max(_round_half_up(kcal), 0)

    # --------------- Macros -----------------------------------------
    def macro_targets(self, kcal: float, health_goal: str | None) -> dict[str, float]:
        kcal = max(kcal, 0)
        prot_pc, carbs_pc, fat_pc = self._SPLITS.get(
            normalize_goal(health_goal), self._MAINTAIN_SPLIT
        )
        return {
            "protein_g": _round_half_up(kcal * prot_pc / 4),
            "carbs_g": _round_half_up(kcal * carbs_pc / 4),
            "fat_g": _round_half_up(kcal * fat_pc / 9),
        }
