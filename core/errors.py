"""
Planner failure taxonomy.

`MissingMealType` and `InsufficientCandidates` are structural and abort a
request before any search happens.  `NoFeasibleCombination` is an expected
business outcome: the planner itself returns `None`, callers raise this
when they want to surface it.
"""
from __future__ import annotations


class PlannerError(ValueError):
    """Base class for every meal-planner error."""


class MissingMealType(PlannerError):
    def __init__(self, slot: str) -> None:
        self.slot = slot
        super().__init__(f"No meals available for required type: {slot}")


class InsufficientCandidates(PlannerError):
    def __init__(self, slot: str, raw_count: int) -> None:
        self.slot = slot
        self.raw_count = raw_count
        super().__init__(
            f"Insufficient candidates for {slot} after filtering "
            f"({raw_count} dropped for non-positive cost or calories)"
        )


class NoFeasibleCombination(PlannerError):
    user_message = (
        "No meal combination found that satisfies calorie and budget targets. "
        "Please adjust your preferences."
    )

    def __init__(self, targets=None) -> None:
        self.targets = targets
        detail = ""
        if targets is not None:
            detail = (
                f" (calorie_goal={targets.calorie_goal:g}, budget={targets.budget:g})"
            )
        super().__init__(self.user_message + detail)
