"""Exercise calorie estimates and how they feed the daily budget."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union

from wellcoach.goals.models import CalorieRange
from wellcoach.logger import get_logger
from wellcoach.sync.tables import DEFAULT_SYNC_TABLES, EXERCISE_EXPLANATIONS, SyncTables

logger = get_logger(__name__)

DEFAULT_PREFERENCE = "maintain_deficit"


@dataclass(frozen=True)
class Exercise:
    """A logged activity. type should be a key of the MET table."""

    type: str
    avg_heart_rate: Optional[float] = None
    max_heart_rate: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Exercise":
        return cls(
            type=str(data["type"]),
            avg_heart_rate=data.get("avg_heart_rate", data.get("avgHeartRate")),
            max_heart_rate=data.get("max_heart_rate", data.get("maxHeartRate")),
        )

    @property
    def has_heart_rate(self) -> bool:
        return bool(self.avg_heart_rate) and bool(self.max_heart_rate)


@dataclass(frozen=True)
class ExerciseEstimate:
    calories: int
    min: int
    max: int
    confidence: str
    method: str
    display_text: str
    note: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "calories": self.calories,
            "range": {"min": self.min, "max": self.max},
            "confidence": self.confidence,
            "method": self.method,
            "display_text": self.display_text,
        }
        if self.note:
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class ExerciseBudget:
    adjusted: CalorieRange
    total_budget: float
    preference: str
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "adjusted_goal": self.adjusted.to_dict(),
            "total_budget": round(self.total_budget),
            "preference": self.preference,
            "explanation": self.explanation,
        }


class Bounds(Protocol):
    min: float
    target: float
    max: float


def estimate_exercise_calories(
    exercise: Union[Exercise, dict[str, Any]],
    weight: float,
    duration_minutes: float,
    tables: SyncTables = DEFAULT_SYNC_TABLES,
) -> ExerciseEstimate:
    """Estimate calories burned: MET x weight (kg) x duration (hours).

    With both average and max heart rate the MET figure is scaled by
    0.8 + 0.4 x avg/max and reported with a narrower range.

    Args:
        exercise: Activity type and optional heart-rate data
        weight: Body weight in kg
        duration_minutes: Duration of the activity

    Returns:
        ExerciseEstimate
    """
    if isinstance(exercise, dict):
        exercise = Exercise.from_dict(exercise)
    if weight <= 0:
        raise ValueError(f"weight must be positive, got {weight}")
    if duration_minutes < 0:
        raise ValueError(f"duration_minutes must be non-negative, got {duration_minutes}")

    met = tables.met_values.get(exercise.type)
    if met is None:
        logger.debug("No MET value for %r, using %.1f", exercise.type, tables.default_met)
        met = tables.default_met

    base = met * weight * (duration_minutes / 60)

    if exercise.has_heart_rate:
        intensity = exercise.avg_heart_rate / exercise.max_heart_rate
        adjusted = base * (0.8 + intensity * 0.4)
        low = round(adjusted * (1 - tables.heart_rate_margin))
        high = round(adjusted * (1 + tables.heart_rate_margin))
        return ExerciseEstimate(
            calories=round(adjusted),
            min=low,
            max=high,
            confidence="high",
            method="MET + Heart Rate",
            display_text=f"Burned approximately {round(adjusted)} cal (range: {low}-{high})",
        )

    return ExerciseEstimate(
        calories=round(base),
        min=round(base * (1 - tables.met_only_margin)),
        max=round(base * (1 + tables.met_only_margin)),
        confidence="medium",
        method="MET estimation",
        display_text=f"Burned approximately {round(base)} cal",
        note="Connect a heart rate monitor for more accurate tracking",
    )


def apply_exercise_calories(
    goal: Bounds,
    estimate: ExerciseEstimate,
    preference: Optional[str] = DEFAULT_PREFERENCE,
    tables: SyncTables = DEFAULT_SYNC_TABLES,
) -> ExerciseBudget:
    """Adjust a calorie range for exercise according to the user's choice.

    Unknown preferences fall back to maintain_deficit.
    """
    if preference not in tables.eat_back:
        preference = DEFAULT_PREFERENCE
    extra = estimate.calories * tables.eat_back[preference]
    adjusted = CalorieRange(goal.min, goal.target, goal.max).shifted(extra)
    return ExerciseBudget(
        adjusted=adjusted,
        total_budget=adjusted.target,
        preference=preference,
        explanation=EXERCISE_EXPLANATIONS.get(preference, ""),
    )
