"""Compassionate feedback: food descriptions, daily totals, streaks and
notifications under a banned-word content policy."""

from __future__ import annotations

from wellcoach.feedback.generator import FeedbackGenerator
from wellcoach.feedback.models import (
    Feedback,
    FoodFeedback,
    FoodItem,
    Notification,
    StreakSummary,
)
from wellcoach.feedback.policy import (
    BANNED_WORDS,
    DEFAULT_POLICY,
    FeedbackPolicy,
    NotificationKind,
    Tone,
)
from wellcoach.feedback.streaks import walk_streak, weekly_consistency

__all__ = [
    "BANNED_WORDS",
    "DEFAULT_POLICY",
    "Feedback",
    "FeedbackGenerator",
    "FeedbackPolicy",
    "FoodFeedback",
    "FoodItem",
    "Notification",
    "NotificationKind",
    "StreakSummary",
    "Tone",
    "walk_streak",
    "weekly_consistency",
]
