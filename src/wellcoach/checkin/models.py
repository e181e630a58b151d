"""Daily check-in data model.

A check-in is submitted once per calendar day and never changes afterwards.
Stress and energy are answered on a 5-point scale; most rules only care
about the collapsed low/medium/high level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Iterable, Optional


class Level(Enum):
    """Collapsed three-point level."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Rating(Enum):
    """Five-point answer scale used by the check-in form."""
    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"

    @classmethod
    def parse(cls, value: "Rating | Level | str | None") -> "Rating":
        """Parse a form label ("Very High"), a value ("very_high") or a Level.

        Unknown or missing answers are treated as medium.
        """
        if isinstance(value, Rating):
            return value
        if isinstance(value, Level):
            return cls(value.value)
        if value is None:
            return cls.MEDIUM
        key = value.strip().lower().replace(" ", "_").replace("-", "_")
        if key in ("veryhigh",):
            key = "very_high"
        elif key in ("verylow",):
            key = "very_low"
        try:
            return cls(key)
        except ValueError:
            return cls.MEDIUM

    def collapse(self) -> Level:
        """Collapse to low/medium/high."""
        if self in (Rating.VERY_LOW, Rating.LOW):
            return Level.LOW
        if self in (Rating.HIGH, Rating.VERY_HIGH):
            return Level.HIGH
        return Level.MEDIUM


class Situation(Enum):
    """Life-situation tags a user can pick for the day."""
    SICK = "sick"
    TRAVEL = "travel"
    HIGH_STRESS = "high-stress"
    PERIOD = "period"
    EVENT = "event"
    HIGH_ACTIVITY = "high-activity"
    WORKING_LATE = "working-late"
    NORMAL = "normal"

    @classmethod
    def parse(cls, value: "Situation | str") -> "Situation":
        """Parse a tag value, a camelCase key or a check-in form label."""
        if isinstance(value, Situation):
            return value
        key = value.strip().lower()
        if key in _SITUATION_LABELS:
            return _SITUATION_LABELS[key]
        return cls(key.replace("_", "-").replace(" ", "-"))


_SITUATION_LABELS = {
    "normal day": Situation.NORMAL,
    "feeling sick": Situation.SICK,
    "traveling": Situation.TRAVEL,
    "high stress/busy": Situation.HIGH_STRESS,
    "period/pms": Situation.PERIOD,
    "special event/celebration": Situation.EVENT,
    "extra active day": Situation.HIGH_ACTIVITY,
    "working late": Situation.WORKING_LATE,
    "highactivity": Situation.HIGH_ACTIVITY,
    "highstress": Situation.HIGH_STRESS,
    "bigevent": Situation.EVENT,
}


@dataclass(frozen=True)
class DailyCheckIn:
    """One user's answers for one calendar day."""

    date: date = field(default_factory=date.today)
    sleep_hours: float = 7.0
    stress: Rating = Rating.MEDIUM
    energy: Rating = Rating.MEDIUM
    mood: int = 5
    situations: tuple[Situation, ...] = ()
    hunger: int = 5
    # Filled in when the day is reviewed, used by insights and weekly summaries
    calories_logged: Optional[float] = None
    calorie_target: Optional[float] = None
    logged: bool = False
    workout_completed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "stress", Rating.parse(self.stress))
        object.__setattr__(self, "energy", Rating.parse(self.energy))
        object.__setattr__(
            self, "situations", tuple(Situation.parse(s) for s in self.situations)
        )
        if not 0 <= self.sleep_hours <= 12:
            raise ValueError(f"sleep_hours must be between 0 and 12, got {self.sleep_hours}")
        if not 1 <= self.mood <= 10:
            raise ValueError(f"mood must be between 1 and 10, got {self.mood}")
        if not 1 <= self.hunger <= 10:
            raise ValueError(f"hunger must be between 1 and 10, got {self.hunger}")

    @property
    def stress_level(self) -> Level:
        return self.stress.collapse()

    @property
    def energy_level(self) -> Level:
        return self.energy.collapse()

    def has(self, situation: Situation) -> bool:
        return situation in self.situations

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DailyCheckIn":
        """Build a check-in from form responses or a stored record."""
        raw_date = data.get("date")
        situations: Iterable[str] = data.get("situations", data.get("situation")) or ()
        if isinstance(situations, str):
            situations = [situations]
        if isinstance(raw_date, str):
            raw_date = date.fromisoformat(raw_date)
        return cls(
            date=raw_date or date.today(),
            sleep_hours=float(data.get("sleep_hours", data.get("sleep", 7.0))),
            stress=Rating.parse(data.get("stress")),
            energy=Rating.parse(data.get("energy")),
            mood=int(data.get("mood", 5)),
            situations=tuple(Situation.parse(s) for s in situations),
            hunger=int(data.get("hunger", data.get("hungerLevel", 5))),
            calories_logged=data.get("calories_logged", data.get("caloriesLogged")),
            calorie_target=data.get("calorie_target", data.get("calorieTarget")),
            logged=bool(data.get("logged", False)),
            workout_completed=bool(data.get("workout_completed", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "sleep_hours": self.sleep_hours,
            "stress": self.stress.value,
            "energy": self.energy.value,
            "mood": self.mood,
            "situations": [s.value for s in self.situations],
            "hunger": self.hunger,
            "calories_logged": self.calories_logged,
            "calorie_target": self.calorie_target,
            "logged": self.logged,
            "workout_completed": self.workout_completed,
        }


# Question battery shown when a day starts
CHECK_IN_QUESTIONS: tuple[dict[str, Any], ...] = (
    {
        "id": "sleep",
        "question": "How many hours did you sleep last night?",
        "type": "number",
        "range": (0, 12),
        "default": 7,
    },
    {
        "id": "energy",
        "question": "What's your energy level today?",
        "type": "select",
        "options": ("Very Low", "Low", "Medium", "High", "Very High"),
    },
    {
        "id": "stress",
        "question": "How stressed do you feel?",
        "type": "select",
        "options": ("Very Low", "Low", "Medium", "High", "Very High"),
    },
    {
        "id": "mood",
        "question": "How's your mood today?",
        "type": "scale",
        "range": (1, 10),
    },
    {
        "id": "situation",
        "question": "Anything special happening today?",
        "type": "multi-select",
        "options": (
            "Normal day",
            "Feeling sick",
            "Traveling",
            "High stress/busy",
            "Period/PMS",
            "Special event/celebration",
            "Extra active day",
            "Working late",
        ),
    },
    {
        "id": "hunger",
        "question": "How hungry are you feeling?",
        "type": "scale",
        "range": (1, 10),
    },
)
