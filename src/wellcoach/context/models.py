"""Data models for daily context, plans and weekly patterns."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from wellcoach.checkin.models import DailyCheckIn
from wellcoach.context.profiles import ProfileKey
from wellcoach.goals.models import CalorieRange, MacroTargets


@dataclass(frozen=True)
class Insight:
    """Guidance derived from one check-in rule. Never changes numbers."""

    type: str
    priority: str
    title: str
    detail: str
    action: str
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "priority": self.priority,
            "title": self.title,
            "detail": self.detail,
            "action": self.action,
            "icon": self.icon,
        }


@dataclass
class DailyContext:
    """A classified check-in.

    active_profiles only ever holds ProfileKey members. adjustments is the
    merged map of all active profiles plus check-in derived values.
    """

    date: date
    check_in: DailyCheckIn
    active_profiles: list[ProfileKey] = field(default_factory=list)
    adjustments: dict[str, Any] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)
    insights: list[Insight] = field(default_factory=list)

    def is_active(self, key: ProfileKey) -> bool:
        return key in self.active_profiles

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "check_in": self.check_in.to_dict(),
            "active_profiles": [key.value for key in self.active_profiles],
            "adjustments": {
                key: list(value) if isinstance(value, tuple) else value
                for key, value in self.adjustments.items()
            },
            "recommendations": list(self.recommendations),
            "insights": [insight.to_dict() for insight in self.insights],
        }


@dataclass(frozen=True)
class WorkoutRecommendation:
    """Workout suggestion for the day."""

    type: str
    message: str
    duration: Optional[int] = None
    intensity: Optional[str] = None
    exercises: tuple[str, ...] = ()
    options: tuple[str, ...] = ()
    alternative: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "message": self.message}
        if self.duration is not None:
            data["duration"] = self.duration
        if self.intensity is not None:
            data["intensity"] = self.intensity
        if self.exercises:
            data["exercises"] = list(self.exercises)
        if self.options:
            data["options"] = list(self.options)
        if self.alternative:
            data["alternative"] = self.alternative
        return data


DEFAULT_WORKOUT = WorkoutRecommendation(
    type="general",
    duration=30,
    intensity="medium",
    message="Standard workout for today",
)


@dataclass(frozen=True)
class DailyPriority:
    rank: int
    priority: str
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return {"rank": self.rank, "priority": self.priority, "icon": self.icon}


@dataclass(frozen=True)
class DailyPlan:
    """The goal merged with the day's context."""

    date: date
    calories: CalorieRange
    macros: MacroTargets
    workout: WorkoutRecommendation
    priorities: tuple[DailyPriority, ...]
    recommendations: tuple[str, ...]
    insights: tuple[Insight, ...]
    mindset: str
    active_profiles: tuple[dict[str, str], ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "calories": self.calories.to_dict(),
            "macros": self.macros.to_dict(),
            "workout": self.workout.to_dict(),
            "priorities": [p.to_dict() for p in self.priorities],
            "recommendations": list(self.recommendations),
            "insights": [insight.to_dict() for insight in self.insights],
            "mindset": self.mindset,
            "active_profiles": [dict(p) for p in self.active_profiles],
        }


@dataclass(frozen=True)
class Pattern:
    """A recurring pattern found in the last week of check-ins."""

    type: str
    severity: str
    message: str
    impact: str
    action: str
    resources: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity,
            "message": self.message,
            "impact": self.impact,
            "action": self.action,
            "resources": list(self.resources),
        }


@dataclass(frozen=True)
class PatternReport:
    """Result of weekly pattern detection.

    ready is False until enough history exists; patterns is then empty and
    message explains why.
    """

    ready: bool
    patterns: tuple[Pattern, ...] = ()
    message: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.patterns)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ready": self.ready,
            "patterns": [p.to_dict() for p in self.patterns],
            "count": self.count,
            "message": self.message,
        }


@dataclass(frozen=True)
class WeeklyRecommendation:
    priority: str
    text: str
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return {"priority": self.priority, "text": self.text, "icon": self.icon}


@dataclass(frozen=True)
class WeeklySummary:
    """Roll-up of the last seven classified days."""

    days: int
    average_calories: float
    average_sleep: float
    most_common_stress: Optional[str]
    workouts_completed: int
    logged_days: int
    patterns: PatternReport
    top_priority: str
    celebration: str
    recommendations: tuple[WeeklyRecommendation, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": self.days,
            "average_calories": self.average_calories,
            "average_sleep": self.average_sleep,
            "most_common_stress": self.most_common_stress,
            "workouts_completed": self.workouts_completed,
            "logged_days": self.logged_days,
            "patterns": self.patterns.to_dict(),
            "top_priority": self.top_priority,
            "celebration": self.celebration,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }
