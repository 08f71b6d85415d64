# tests/test_nutrition_calc.py
from __future__ import annotations

import math
from dataclasses import replace

from core.nutrition_calc import NutritionalCalculator, UserAnthro, normalize_goal

calc = NutritionalCalculator()

MALE_70KG = UserAnthro(
    age=30,
    gender="Male",
    weight_kg=70,
    height_cm=175,
    activity_level="Moderate",
)

# ── BMR / TDEE ───────────────────────────────────────────────────────
def test_bmr_mifflin_male():
    expected = 10 * 70 + 6.25 * 175 - 5 * 30 + 5   # 1648.75
    assert math.isclose(calc.bmr(MALE_70KG), expected, rel_tol=1e-4)


def test_bmr_mifflin_female():
    u = UserAnthro(age=30, gender="female", weight_kg=60, height_cm=165, activity_level="light")
    expected = 10 * 60 + 6.25 * 165 - 5 * 30 - 161
    assert math.isclose(calc.bmr(u), expected, rel_tol=1e-4)


def test_tdee_activity_multiplier():
    expected = calc.bmr(MALE_70KG) * 1.55
    assert math.isclose(calc.tdee(MALE_70KG), expected, rel_tol=1e-4)


def test_unknown_activity_defaults_to_moderate():
    u = UserAnthro(age=30, gender="Male", weight_kg=70, height_cm=175, activity_level="extreme")
    assert math.isclose(calc.tdee(u), calc.tdee(MALE_70KG))


# ── calorie goal ────────────────────────────────────────────────────
def test_maintain_goal_is_rounded_tdee():
    assert calc.calorie_goal(MALE_70KG) == 2556       # 2555.5625


def test_weight_loss_and_gain_shift_by_500():
    loss = replace(MALE_70KG, health_goal="Weight Loss")
    gain = replace(MALE_70KG, health_goal="weight_gain")
    assert calc.calorie_goal(loss) == 2056
    assert calc.calorie_goal(gain) == 3056


def test_incomplete_profile_uses_default():
    assert calc.calorie_goal(UserAnthro(age=30)) == 2500
    assert NutritionalCalculator(default_calorie_goal=2000).calorie_goal(UserAnthro()) == 2000


def test_goal_normalisation():
    assert normalize_goal("Weight Loss") == "weightloss"
    assert normalize_goal("weight_gain") == "weightgain"
    assert normalize_goal(None) == ""


# ── targets() ───────────────────────────────────────────────────────
def test_targets_maintenance_split():
    t = calc.targets(MALE_70KG, budget=300)
    assert t.calorie_goal == 2556
    assert t.protein_target == 160    # 25 %
    assert t.carbs_target == 288      # 45 %
    assert t.fat_target == 85         # 30 %
    assert t.budget == 300
    assert t.max_calorie_deviation == 0.12
    assert t.candidate_limit_per_type == 55


def test_targets_default_profile():
    t = calc.targets(UserAnthro(), budget=250, candidate_limit_per_type=20)
    assert (t.calorie_goal, t.protein_target, t.carbs_target, t.fat_target) == (2500, 156, 281, 83)
    assert t.candidate_limit_per_type == 20


def test_weight_loss_macro_split():
    m = calc.macro_targets(2000, "Weight Loss")
    assert m == {"protein_g": 150, "carbs_g": 200, "fat_g": 67}


def test_deficit_never_goes_below_zero():
    tiny = UserAnthro(
        age=90, gender="female", weight_kg=30, height_cm=100,
        activity_level="sedentary", health_goal="Weight Loss",
    )
    t = calc.targets(tiny, budget=300)
    assert t.calorie_goal == 0
    assert (t.protein_target, t.carbs_target, t.fat_target) == (0, 0, 0)
    assert calc.macro_targets(-100, None) == {"protein_g": 0, "carbs_g": 0, "fat_g": 0}
