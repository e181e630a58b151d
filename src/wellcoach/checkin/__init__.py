"""Daily check-in model."""

from __future__ import annotations

from wellcoach.checkin.models import (
    CHECK_IN_QUESTIONS,
    DailyCheckIn,
    Level,
    Rating,
    Situation,
)

__all__ = ["CHECK_IN_QUESTIONS", "DailyCheckIn", "Level", "Rating", "Situation"]
