"""Life-situation profiles.

Each profile carries a fixed adjustment map and recommendation texts. In an
adjustment map numeric values are summed across active profiles and other
values are overwritten by the last active profile.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ProfileKey(Enum):
    """Keys of the fixed profile table."""
    SICK = "sick"
    TRAVEL = "travel"
    HIGH_STRESS = "high_stress"
    PERIOD = "period"
    BIG_EVENT = "big_event"
    HIGH_ACTIVITY = "high_activity"


@dataclass(frozen=True)
class LifeSituationProfile:
    """A named set of adjustments for one kind of day."""

    key: ProfileKey
    name: str
    priority: str
    adjustments: Mapping[str, Any]
    recommendations: tuple[str, ...]
    duration: str
    extras: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def _profile(**kwargs: Any) -> LifeSituationProfile:
    kwargs["adjustments"] = MappingProxyType(kwargs["adjustments"])
    kwargs["extras"] = MappingProxyType(kwargs.get("extras", {}))
    return LifeSituationProfile(**kwargs)


LIFE_SITUATION_PROFILES: Mapping[ProfileKey, LifeSituationProfile] = MappingProxyType({
    ProfileKey.SICK: _profile(
        key=ProfileKey.SICK,
        name="Recovery Mode",
        priority="healing",
        adjustments={
            "calorie_increase": 150,
            "protein_increase": 10,
            "workout_intensity": 0,  # Pause workouts
            "streak_pause": True,
            "hydration_focus": True,
        },
        recommendations=(
            "Prioritize rest and sleep",
            "Focus on hydrating fluids (water, herbal tea, broth)",
            "Protein-rich, easy-to-digest foods",
            "Don't worry about calorie goals, focus on recovery",
        ),
        duration="until feeling better",
    ),
    ProfileKey.TRAVEL: _profile(
        key=ProfileKey.TRAVEL,
        name="Travel Mode",
        priority="flexibility",
        adjustments={
            "calorie_increase": 75,
            "workout_type": "bodyweight",
            "meal_tracking_mode": "simplified",
            "streak_flexibility": True,
        },
        recommendations=(
            "Hotel room bodyweight workouts (15-20 min)",
            "Aim for protein at each meal",
            "Stay hydrated (especially on flights)",
            "Walk as much as possible (explore on foot!)",
        ),
        duration="duration of trip",
        extras={
            "quick_log_options": (
                "Restaurant meal (balanced plate)",
                "Fast food/convenience",
                "Hotel breakfast",
                "Snacks/airport food",
            ),
        },
    ),
    ProfileKey.HIGH_STRESS: _profile(
        key=ProfileKey.HIGH_STRESS,
        name="Stress Management Mode",
        priority="mental health",
        adjustments={
            "calorie_increase": 100,
            "workout_intensity": 0.7,
            "workout_type": "stress-relief",
            "sleep_priority": True,
            "mindfulness_reminders": True,
        },
        recommendations=(
            "Gentle movement: yoga, walking, stretching",
            "Stress-reducing activities: meditation, nature, music",
            "Prioritize 7-9 hours sleep",
            "Avoid extreme calorie deficits (increases stress)",
        ),
        duration="until stress level decreases",
        extras={
            "stress_management_tools": (
                "5-minute breathing exercise",
                "10-minute guided meditation",
                "Journaling prompt",
                "Gratitude practice",
            ),
        },
    ),
    ProfileKey.PERIOD: _profile(
        key=ProfileKey.PERIOD,
        name="Menstrual Cycle Support",
        priority="hormone balance",
        adjustments={
            "calorie_increase": 150,
            "iron_increase": True,
            "workout_intensity": 0.8,
            "cravings_tolerance": "high",
        },
        recommendations=(
            "Iron-rich foods: red meat, spinach, lentils, fortified cereals",
            "Magnesium for cramps: dark chocolate, nuts, seeds",
            "Stay hydrated (reduces bloating)",
            "Lower intensity workouts are fine, listen to your body",
        ),
        duration="3-7 days",
        extras={
            "food_suggestions": (
                ("Dark chocolate", "Magnesium for cramps + satisfies cravings"),
                ("Salmon", "Omega-3s reduce inflammation"),
                ("Bananas", "Potassium reduces bloating"),
                ("Ginger tea", "Eases nausea and cramps"),
            ),
        },
    ),
    ProfileKey.BIG_EVENT: _profile(
        key=ProfileKey.BIG_EVENT,
        name="Special Event Mode",
        priority="enjoyment",
        adjustments={
            "calorie_tracking": "optional",
            "streak_flexibility": True,
            "mindset": "enjoy the moment",
        },
        recommendations=(
            "Events are for enjoying! Savor it.",
            "Aim for balance, not perfection",
            "Stay hydrated (especially if drinking alcohol)",
            "Get back to routine tomorrow, one meal or day doesn't define progress",
        ),
        duration="1 day",
    ),
    ProfileKey.HIGH_ACTIVITY: _profile(
        key=ProfileKey.HIGH_ACTIVITY,
        name="High Activity Mode",
        priority="fueling performance",
        adjustments={
            "calorie_increase": 300,
            "carb_increase": 50,
            "protein_increase": 20,
            "hydration_increase": True,
            "electrolytes": True,
        },
        recommendations=(
            "Fuel before activity: carbs + moderate protein",
            "Recovery after: protein + carbs within 2 hours",
            "Hydrate: add electrolytes for activities >1 hour",
            "Don't skimp on food, your body needs energy!",
        ),
        duration="day of activity",
    ),
})

def merge_adjustments(base: Mapping[str, Any], additional: Mapping[str, Any]) -> dict[str, Any]:
    """Merge two adjustment maps.

    Numeric values are summed; anything else (strings, flags, lists) is
    replaced by the value from ``additional``. Booleans count as flags.

    Args:
        base: Accumulated adjustments
        additional: Adjustments of the next profile

    Returns:
        New merged dictionary
    """
    merged = dict(base)
    for key, value in additional.items():
        if is_numeric(value):
            previous = merged.get(key, 0)
            merged[key] = (previous if is_numeric(previous) else 0) + value
        else:
            merged[key] = value
    return merged


def is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
