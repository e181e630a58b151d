"""User profile model and loading."""

from __future__ import annotations

from wellcoach.profiles.loader import load_profile, save_profile
from wellcoach.profiles.models import (
    ActivityLevel,
    CyclePhase,
    Gender,
    GoalType,
    LogEntry,
    UserProfile,
    WeightPoint,
)

__all__ = [
    "ActivityLevel",
    "CyclePhase",
    "Gender",
    "GoalType",
    "LogEntry",
    "UserProfile",
    "WeightPoint",
    "load_profile",
    "save_profile",
]
