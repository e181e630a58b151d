"""Weekly pattern detection and summaries over the context history."""

from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from wellcoach.checkin.models import Level
from wellcoach.context.models import (
    DailyContext,
    Pattern,
    PatternReport,
    WeeklyRecommendation,
    WeeklySummary,
)

WEEK = 7
MIN_PATTERN_DAYS = 7
SLEEP_TARGET_HOURS = 7.0
CHRONIC_STRESS_DAYS = 5
STRESS_RECOMMENDATION_DAYS = 4


def _is_high_stress(context: DailyContext) -> bool:
    return context.check_in.stress_level == Level.HIGH


def _average(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 1)


def detect_patterns(history: Sequence[DailyContext]) -> PatternReport:
    """Find chronic sleep deficit and chronic stress in the last week.

    Args:
        history: Caller-owned context history, oldest first

    Returns:
        PatternReport. ready is False with fewer than 7 entries.
    """
    if len(history) < MIN_PATTERN_DAYS:
        return PatternReport(ready=False, message="Building your pattern data...")

    week = history[-WEEK:]
    patterns: list[Pattern] = []

    avg_sleep = sum(day.check_in.sleep_hours for day in week) / WEEK
    if avg_sleep < SLEEP_TARGET_HOURS:
        patterns.append(Pattern(
            type="chronic_sleep_deficit",
            severity="high",
            message=f"You've averaged {avg_sleep:.1f} hours of sleep this week.",
            impact="This can significantly affect hunger, energy, and progress.",
            action="Consider making sleep a top priority",
            resources=("Sleep hygiene tips", "Bedtime routine guide"),
        ))

    high_stress_days = sum(1 for day in week if _is_high_stress(day))
    if high_stress_days >= CHRONIC_STRESS_DAYS:
        patterns.append(Pattern(
            type="chronic_stress",
            severity="critical",
            message=f"You've reported high stress on {high_stress_days} out of 7 days.",
            impact=(
                "Chronic stress affects cortisol, which can hinder weight loss "
                "and increase cravings."
            ),
            action="Consider stress management resources or professional support",
            resources=("Meditation app recommendations", "Stress management techniques"),
        ))

    return PatternReport(ready=True, patterns=tuple(patterns))


def top_priority(report: PatternReport) -> str:
    """Pick the action of the most severe pattern (critical > high > first)."""
    if not report.patterns:
        return "Keep up the great work! Focus on consistency."
    for severity in ("critical", "high"):
        for pattern in report.patterns:
            if pattern.severity == severity:
                return pattern.action
    return report.patterns[0].action


def _most_common_stress(week: Sequence[DailyContext]) -> Optional[str]:
    if not week:
        return None
    counts = Counter(day.check_in.stress.value for day in week)
    return counts.most_common(1)[0][0]


def celebration(week: Sequence[DailyContext]) -> str:
    celebrations: list[str] = []

    logged_days = sum(1 for day in week if day.check_in.logged)
    if logged_days >= 6:
        celebrations.append("7 days of logging! 🎉")
    elif logged_days >= 5:
        celebrations.append("5+ days logged! 📊")

    workouts = sum(1 for day in week if day.check_in.workout_completed)
    if workouts >= 5:
        celebrations.append("5+ workouts completed! 💪")

    if week and _average([day.check_in.sleep_hours for day in week]) >= 7.5:
        celebrations.append("Great sleep average! 😴")

    if not celebrations:
        return "You showed up this week, that's what matters! 💙"
    return " ".join(celebrations)


def weekly_recommendations(week: Sequence[DailyContext]) -> tuple[WeeklyRecommendation, ...]:
    recommendations: list[WeeklyRecommendation] = []

    if _average([day.check_in.sleep_hours for day in week]) < SLEEP_TARGET_HOURS:
        recommendations.append(WeeklyRecommendation(
            priority="high",
            text="Prioritize sleep this week, aim for 7-9 hours nightly",
            icon="😴",
        ))

    if sum(1 for day in week if _is_high_stress(day)) >= STRESS_RECOMMENDATION_DAYS:
        recommendations.append(WeeklyRecommendation(
            priority="high",
            text="Add daily stress management, even 5 minutes helps",
            icon="🧘",
        ))

    if sum(1 for day in week if day.check_in.workout_completed) < 3:
        recommendations.append(WeeklyRecommendation(
            priority="medium",
            text="Try shorter workouts (15-20 min) if time is tight",
            icon="⏰",
        ))

    return tuple(recommendations)


def weekly_summary(history: Sequence[DailyContext]) -> WeeklySummary:
    """Summarize the last seven contexts of the history.

    Averages are over the days present (fewer than seven early on); days
    without a logged calorie count contribute zero calories.
    """
    week = list(history[-WEEK:])
    report = detect_patterns(history)
    return WeeklySummary(
        days=len(week),
        average_calories=_average([day.check_in.calories_logged or 0.0 for day in week]),
        average_sleep=_average([day.check_in.sleep_hours for day in week]),
        most_common_stress=_most_common_stress(week),
        workouts_completed=sum(1 for day in week if day.check_in.workout_completed),
        logged_days=sum(1 for day in week if day.check_in.logged),
        patterns=report,
        top_priority=top_priority(report),
        celebration=celebration(week),
        recommendations=weekly_recommendations(week),
    )
