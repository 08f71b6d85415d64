"""
Centralised settings loader.

Every field can be overridden with a `PLANNER_`-prefixed env var or a
`.env` file, e.g. `PLANNER_CANDIDATE_LIMIT_PER_TYPE=30`.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ────────────────────────────────────────────────────
    env_name: str = "local"
    log_level: str = "INFO"

    # ─── catalog files ──────────────────────────────────────────────
    meals_path: str = "data/meals.json"
    ingredients_path: str = "data/ingredients.json"

    # ─── planner defaults ───────────────────────────────────────────
    default_calorie_goal: float = Field(2500, gt=0)
    max_calorie_deviation: float = Field(0.12, ge=0)
    candidate_limit_per_type: int = Field(55, ge=1)

    # ─── scorer tunables (see core.models.meal.ScoringParams) ───────
    early_exit_macro_penalty: float = 0.12
    early_exit_calorie_penalty: float = 0.08
    under_target_multiplier: float = 1.35
    calorie_weight: float = 0.7
    macro_weight: float = 0.3
    acceptance_factor: float = 1.5

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
