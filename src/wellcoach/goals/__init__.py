"""Adaptive daily calorie goal.

Key components:
- Mifflin-St Jeor BMR and activity-scaled TDEE
- Biological, same-day context, adherence and weight-trend adjustments
- Least-squares weight trend (numpy)
- Macro split for the resulting target
"""

from __future__ import annotations

from wellcoach.goals.calculator import GoalCalculator, calculate_bmr, calculate_tdee
from wellcoach.goals.macros import calculate_macros, split_calories
from wellcoach.goals.models import (
    AdherenceResult,
    AdjustmentStep,
    CalorieGoal,
    CalorieRange,
    GoalReason,
    MacroTargets,
    TrendResult,
)
from wellcoach.goals.tables import DEFAULT_GOAL_TABLES, GoalTables
from wellcoach.goals.trend import fit_weight_trend, weekly_rate

__all__ = [
    "AdherenceResult",
    "AdjustmentStep",
    "CalorieGoal",
    "CalorieRange",
    "DEFAULT_GOAL_TABLES",
    "GoalCalculator",
    "GoalReason",
    "GoalTables",
    "MacroTargets",
    "TrendResult",
    "calculate_bmr",
    "calculate_macros",
    "calculate_tdee",
    "split_calories",
    "fit_weight_trend",
    "weekly_rate",
]
