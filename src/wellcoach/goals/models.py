"""Result types for the daily calorie goal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class GoalReason:
    """One human-readable reason attached to a calorie goal."""

    factor: str
    message: str
    adjustment: Optional[int] = None
    priority: Optional[str] = None
    tone: Optional[str] = None
    action: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"factor": self.factor, "message": self.message}
        for key in ("adjustment", "priority", "tone", "action"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class AdjustmentStep:
    """Output of one adjustment stage: a kcal delta and its reasons."""

    adjustment: float
    reasons: tuple[GoalReason, ...] = ()


@dataclass(frozen=True)
class AdherenceResult:
    """Adherence learning over the trailing history window."""

    adjustment: int
    feedback: Optional[GoalReason]
    adherence_rate: float
    logged_days: int


@dataclass(frozen=True)
class TrendResult:
    """Weight-trend correction.

    weekly_change is None while there are too few weigh-ins to fit a line.
    """

    adjustment: int
    message: Optional[str]
    weekly_change: Optional[float] = None
    points: int = 0

    @property
    def has_baseline(self) -> bool:
        return self.weekly_change is not None


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein: float
    carbs: float
    fat: float
    iron_mg: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "protein": round(self.protein),
            "carbs": round(self.carbs),
            "fat": round(self.fat),
        }
        if self.iron_mg is not None:
            data["iron"] = {"target": self.iron_mg, "priority": "high"}
        return data


@dataclass(frozen=True)
class CalorieGoal:
    """A day's calorie range with the arithmetic behind it.

    min < target < max always holds; the band is fixed and symmetric.
    """

    min: int
    target: int
    max: int
    breakdown: dict[str, int]
    reasons: tuple[GoalReason, ...]
    display_message: str
    macros: Optional[MacroTargets] = None
    adherence_rate: float = 0.0
    weekly_change: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "target": self.target,
            "max": self.max,
            "breakdown": dict(self.breakdown),
            "reasons": [reason.to_dict() for reason in self.reasons],
            "display_message": self.display_message,
            "macros": self.macros.to_dict() if self.macros else None,
            "adherence_rate": round(self.adherence_rate, 2),
            "weekly_change": (
                round(self.weekly_change, 3) if self.weekly_change is not None else None
            ),
        }


@dataclass(frozen=True)
class CalorieRange:
    """A shifted calorie range (used by daily plans and exercise budgets)."""

    min: float
    target: float
    max: float

    @classmethod
    def from_goal(cls, goal: CalorieGoal) -> "CalorieRange":
        return cls(min=goal.min, target=goal.target, max=goal.max)

    def shifted(self, delta: float) -> "CalorieRange":
        return CalorieRange(self.min + delta, self.target + delta, self.max + delta)

    def to_dict(self) -> dict[str, Any]:
        return {"min": round(self.min), "target": round(self.target), "max": round(self.max)}


__all__ = [
    "AdherenceResult",
    "AdjustmentStep",
    "CalorieGoal",
    "CalorieRange",
    "GoalReason",
    "MacroTargets",
    "TrendResult",
]
