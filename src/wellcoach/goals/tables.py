"""Fixed constants for the daily calorie goal.

These reproduce the app's published tables. They are frozen; tests and
callers that need different values build a new GoalTables with
dataclasses.replace and pass it to GoalCalculator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from wellcoach.profiles.models import ActivityLevel, GoalType

# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS: Mapping[ActivityLevel, float] = MappingProxyType({
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
})

# 500 kcal/day is roughly 0.5 kg/week; 300 kcal/day is a lean-gain surplus
GOAL_OFFSETS: Mapping[GoalType, int] = MappingProxyType({
    GoalType.WEIGHT_LOSS: -500,
    GoalType.WEIGHT_GAIN: 300,
    GoalType.MAINTAIN: 0,
})

# Protein targets by goal (grams per kg body weight)
PROTEIN_PER_KG: Mapping[GoalType, float] = MappingProxyType({
    GoalType.WEIGHT_LOSS: 2.0,
    GoalType.WEIGHT_GAIN: 1.8,
    GoalType.MAINTAIN: 1.6,
})

METABOLISM_AFFECTING_MEDICATIONS = ("antidepressants", "corticosteroids", "beta-blockers")


@dataclass(frozen=True)
class GoalTables:
    """All constants consumed by GoalCalculator."""

    activity_multipliers: Mapping[ActivityLevel, float] = field(
        default_factory=lambda: ACTIVITY_MULTIPLIERS
    )
    default_activity: ActivityLevel = ActivityLevel.MODERATE
    goal_offsets: Mapping[GoalType, int] = field(default_factory=lambda: GOAL_OFFSETS)

    # Biological adjustments (kcal/day)
    cycle_adjustment: int = 150
    breastfeeding_adjustment: int = 500
    hypothyroidism_adjustment: int = -100
    pcos_adjustment: int = -50
    age_decline_per_decade: int = -25
    age_decline_start: int = 30
    medication_adjustment: int = 100
    affecting_medications: tuple[str, ...] = METABOLISM_AFFECTING_MEDICATIONS

    # Same-day context adjustments (kcal/day)
    sleep_target_hours: float = 7.0
    sleep_deficit_per_hour: int = 50
    high_stress_adjustment: int = 100
    sick_adjustment: int = 150
    travel_adjustment: int = 75
    high_activity_adjustment: int = 200
    low_energy_adjustment: int = 50

    # Adherence learning
    history_window: int = 14
    under_ratio: float = 0.8
    over_ratio: float = 1.2
    pattern_fraction: float = 0.6
    consistent_delta: float = 300.0
    under_goal_adjustment: int = 150
    over_goal_adjustment: int = -100
    celebrate_adherence: float = 0.8

    # Weight trend
    trend_window: int = 28
    trend_min_points: int = 14
    slow_loss_rate: float = -0.25  # kg/week, shallower than this is a stall
    fast_loss_rate: float = -1.2  # kg/week, steeper than this is too fast
    slow_loss_adjustment: int = -50
    fast_loss_adjustment: int = 100

    # Result band and display
    flexibility_band: int = 150
    display_low_sleep_hours: float = 6.0

    protein_per_kg: Mapping[GoalType, float] = field(default_factory=lambda: PROTEIN_PER_KG)
    fat_fraction: float = 0.30


DEFAULT_GOAL_TABLES = GoalTables()
