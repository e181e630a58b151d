"""Content policy for user-facing feedback.

The banned-word list is matched as case-insensitive substrings, so "fail"
also catches "failed" and "failure"; the variants are listed anyway so the
log line names the exact word.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

BANNED_WORDS: tuple[str, ...] = (
    "fail", "failed", "failure",
    "bad", "wrong", "mistake",
    "warning", "danger", "penalty",
    "cheat", "cheating", "cheat day",
    "unhealthy", "junk",
    "punish", "punishment",
    "guilt", "guilty",
)


class Tone(Enum):
    CELEBRATION = "celebration"
    ENCOURAGEMENT = "encouragement"
    SUPPORTIVE = "supportive"
    EDUCATIONAL = "educational"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    COMPASSIONATE = "compassionate"
    CONCERNED = "concerned"
    WARM = "warm"
    FRIENDLY = "friendly"


@dataclass(frozen=True)
class ToneProfile:
    voice: str
    emojis: bool
    examples: tuple[str, ...]


TONE_PROFILES: Mapping[Tone, ToneProfile] = MappingProxyType({
    Tone.CELEBRATION: ToneProfile(
        "energetic", True, ("Amazing!", "You're crushing it!", "Incredible work!")
    ),
    Tone.ENCOURAGEMENT: ToneProfile(
        "warm", True, ("Keep going!", "You're doing great!", "Every step counts!")
    ),
    Tone.SUPPORTIVE: ToneProfile(
        "calm", False,
        ("We're here for you", "Take it one day at a time", "Progress, not perfection"),
    ),
    Tone.EDUCATIONAL: ToneProfile(
        "clear", False, ("Here's why...", "Research shows...", "This is how...")
    ),
})


class NotificationKind(Enum):
    MEAL_REMINDER = "meal_reminder"
    WATER_REMINDER = "water_reminder"
    EXERCISE_REMINDER = "exercise_reminder"
    CHECK_IN = "check_in"
    CELEBRATION = "celebration"


NOTIFICATION_TEXTS: Mapping[NotificationKind, tuple[str, ...]] = MappingProxyType({
    NotificationKind.MEAL_REMINDER: (
        "Ready to log your meal? 🍽️",
        "Time to fuel up! Log when you're ready.",
        "Meal time! No pressure, just a friendly reminder.",
    ),
    NotificationKind.WATER_REMINDER: (
        "Hydration check! 💧",
        "Time for some water?",
        "Stay hydrated today!",
    ),
    NotificationKind.EXERCISE_REMINDER: (
        "Feel like moving today? 🏃",
        "Your body might enjoy some movement!",
        "Exercise reminder, but rest is valid too!",
    ),
    NotificationKind.CHECK_IN: (
        "How's your day going?",
        "Quick check-in: How are you feeling?",
        "We'd love to hear how you're doing!",
    ),
    NotificationKind.CELEBRATION: (
        "🎉 You hit your goal 3 days this week!",
        "Way to go! You've been consistent!",
        "Your progress this week is amazing!",
    ),
})

NOTIFICATION_ACTIONS: Mapping[NotificationKind, str] = MappingProxyType({
    NotificationKind.MEAL_REMINDER: "Log meal",
    NotificationKind.WATER_REMINDER: "Log water",
    NotificationKind.EXERCISE_REMINDER: "View workouts",
    NotificationKind.CHECK_IN: "Quick check-in",
    NotificationKind.CELEBRATION: "View progress",
})

MILESTONE_MESSAGES: Mapping[int, str] = MappingProxyType({
    7: "One week streak! 🎉 You're building momentum!",
    30: "30 days! 🔥 This is becoming a habit!",
    90: "90 days! 🏆 You're a consistency champion!",
})


@dataclass(frozen=True)
class FeedbackPolicy:
    """Constants consumed by FeedbackGenerator."""

    banned_words: tuple[str, ...] = BANNED_WORDS
    tones: Mapping[Tone, ToneProfile] = field(default_factory=lambda: TONE_PROFILES)
    notifications: Mapping[NotificationKind, tuple[str, ...]] = field(
        default_factory=lambda: NOTIFICATION_TEXTS
    )
    notification_actions: Mapping[NotificationKind, str] = field(
        default_factory=lambda: NOTIFICATION_ACTIONS
    )
    milestones: Mapping[int, str] = field(default_factory=lambda: MILESTONE_MESSAGES)
    max_freezes: int = 3  # Per period

    # Food facts
    protein_highlight_g: float = 15.0
    fiber_highlight_g: float = 5.0
    carbs_highlight_g: float = 20.0
    fat_highlight_g: float = 10.0

    # Percentage-of-target bands for end-of-day feedback
    over_minor_pct: float = 10.0
    over_moderate_pct: float = 25.0
    under_minor_pct: float = 10.0
    under_moderate_pct: float = 30.0

    # Weekly consistency that softens a short streak
    soften_streak_below: int = 3
    soften_consistency_pct: float = 70.0


DEFAULT_POLICY = FeedbackPolicy()
