"""User profile data model.

The profile is the biometric and preference snapshot the goal calculator
works from. History lists are chronological (oldest first) and are owned by
the caller; nothing in wellcoach persists them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class Gender(Enum):
    """Biological sex for the BMR formula."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level, selects the TDEE multiplier."""
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class GoalType(Enum):
    """Direction of the weight goal."""
    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MAINTAIN = "maintain"


class CyclePhase(Enum):
    """Menstrual cycle phase."""
    MENSTRUATION = "menstruation"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"


# Aliases used by exported app data (camelCase) and onboarding screens
_ACTIVITY_ALIASES = {
    "veryactive": ActivityLevel.VERY_ACTIVE,
    "very_active": ActivityLevel.VERY_ACTIVE,
    "lightly_active": ActivityLevel.LIGHT,
}
_GOAL_ALIASES = {
    "weightloss": GoalType.WEIGHT_LOSS,
    "weightgain": GoalType.WEIGHT_GAIN,
    "maintenance": GoalType.MAINTAIN,
}


def _normalize(value: str) -> str:
    return value.strip().lower().replace("-", "_").replace(" ", "_")


def parse_activity_level(value: ActivityLevel | str | None) -> Optional[ActivityLevel]:
    """Parse an activity level, returning None for unknown values.

    Unknown levels are not an error: the goal calculator falls back to the
    moderate multiplier for them.
    """
    if value is None or isinstance(value, ActivityLevel):
        return value
    key = _normalize(value)
    if key in _ACTIVITY_ALIASES:
        return _ACTIVITY_ALIASES[key]
    try:
        return ActivityLevel(key)
    except ValueError:
        return None


def parse_goal(value: GoalType | str | None) -> GoalType:
    """Parse a goal direction. Anything unrecognized means maintain."""
    if isinstance(value, GoalType):
        return value
    if value is None:
        return GoalType.MAINTAIN
    key = _normalize(value)
    if key in _GOAL_ALIASES:
        return _GOAL_ALIASES[key]
    try:
        return GoalType(key)
    except ValueError:
        return GoalType.MAINTAIN


def parse_gender(value: Gender | str | None) -> Gender | str | None:
    """Parse a gender value.

    Unsupported strings are returned unchanged so the goal calculator can
    reject them with a specific error instead of silently defaulting.
    """
    if value is None or isinstance(value, Gender):
        return value
    try:
        return Gender(value.strip().lower())
    except ValueError:
        return value


@dataclass
class LogEntry:
    """One day of food-logging history."""

    date: date
    logged: bool
    calories: float = 0.0
    target: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEntry":
        return cls(
            date=_parse_date(data["date"]),
            logged=bool(data.get("logged", False)),
            calories=float(data.get("calories") or 0.0),
            target=float(data.get("target") or 0.0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "logged": self.logged,
            "calories": self.calories,
            "target": self.target,
        }


@dataclass
class WeightPoint:
    """A single weigh-in in kilograms."""

    date: date
    weight: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeightPoint":
        return cls(date=_parse_date(data["date"]), weight=float(data["weight"]))

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "weight": self.weight}


@dataclass
class UserProfile:
    """Biometric and preference snapshot for one user.

    weight is in kg, height in cm, age in years. The four fields used by the
    BMR formula are optional here so a partly onboarded profile can still be
    loaded; the goal calculator refuses to run without them.
    """

    weight: Optional[float] = None
    height: Optional[float] = None
    age: Optional[int] = None
    gender: Gender | str | None = None
    activity_level: Optional[ActivityLevel] = ActivityLevel.MODERATE
    goal: GoalType = GoalType.MAINTAIN
    medical_conditions: list[str] = field(default_factory=list)
    medications: list[str] = field(default_factory=list)
    is_breastfeeding: bool = False
    cycle_phase: Optional[CyclePhase] = None
    history: list[LogEntry] = field(default_factory=list)
    weight_history: list[WeightPoint] = field(default_factory=list)
    exercise_calorie_preference: str = "maintain_deficit"

    def __post_init__(self) -> None:
        self.gender = parse_gender(self.gender)
        if not isinstance(self.activity_level, ActivityLevel):
            self.activity_level = parse_activity_level(self.activity_level)
        self.goal = parse_goal(self.goal)
        if self.cycle_phase is not None and not isinstance(self.cycle_phase, CyclePhase):
            self.cycle_phase = CyclePhase(_normalize(self.cycle_phase))
        for name in ("weight", "height", "age"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        """Build a profile from snake_case or camelCase keys."""

        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        cycle = pick("cycle_phase", "menstrualCycle")
        if isinstance(cycle, dict):
            cycle = cycle.get("currentPhase") or cycle.get("current_phase")

        return cls(
            weight=pick("weight"),
            height=pick("height"),
            age=pick("age"),
            gender=pick("gender", "sex"),
            activity_level=pick("activity_level", "activityLevel", default="moderate"),
            goal=pick("goal", default="maintain"),
            medical_conditions=list(pick("medical_conditions", "medicalConditions", default=[])),
            medications=list(pick("medications", default=[])),
            is_breastfeeding=bool(pick("is_breastfeeding", "isBreastfeeding", default=False)),
            cycle_phase=cycle,
            history=[LogEntry.from_dict(d) for d in pick("history", default=[])],
            weight_history=[
                WeightPoint.from_dict(d)
                for d in pick("weight_history", "weightHistory", default=[])
            ],
            exercise_calorie_preference=pick(
                "exercise_calorie_preference",
                "exerciseCaloriePreference",
                default="maintain_deficit",
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "weight": self.weight,
            "height": self.height,
            "age": self.age,
            "gender": self.gender.value if isinstance(self.gender, Gender) else self.gender,
            "activity_level": self.activity_level.value if self.activity_level else None,
            "goal": self.goal.value,
            "medical_conditions": list(self.medical_conditions),
            "medications": list(self.medications),
            "is_breastfeeding": self.is_breastfeeding,
            "cycle_phase": self.cycle_phase.value if self.cycle_phase else None,
            "history": [entry.to_dict() for entry in self.history],
            "weight_history": [point.to_dict() for point in self.weight_history],
            "exercise_calorie_preference": self.exercise_calorie_preference,
        }


def _parse_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))
