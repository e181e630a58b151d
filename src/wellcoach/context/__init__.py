"""Context-aware personalization: life-situation profiles, insights, daily
plans and weekly patterns."""

from __future__ import annotations

from wellcoach.context.engine import ContextEngine
from wellcoach.context.models import (
    DEFAULT_WORKOUT,
    DailyContext,
    DailyPlan,
    DailyPriority,
    Insight,
    Pattern,
    PatternReport,
    WeeklyRecommendation,
    WeeklySummary,
    WorkoutRecommendation,
)
from wellcoach.context.patterns import detect_patterns, top_priority, weekly_summary
from wellcoach.context.profiles import (
    LIFE_SITUATION_PROFILES,
    LifeSituationProfile,
    ProfileKey,
    merge_adjustments,
)

__all__ = [
    "ContextEngine",
    "DEFAULT_WORKOUT",
    "DailyContext",
    "DailyPlan",
    "DailyPriority",
    "Insight",
    "LIFE_SITUATION_PROFILES",
    "LifeSituationProfile",
    "Pattern",
    "PatternReport",
    "ProfileKey",
    "WeeklyRecommendation",
    "WeeklySummary",
    "WorkoutRecommendation",
    "detect_patterns",
    "merge_adjustments",
    "top_priority",
    "weekly_summary",
]
