"""Compassionate feedback for logged food, daily totals and streaks.

All generator texts are written to pass `FeedbackGenerator.validate`. The
check is a gate for callers: it logs and returns False, it never blocks a
message.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, Sequence, Union

from wellcoach.feedback.models import (
    Feedback,
    FoodFeedback,
    FoodItem,
    Notification,
    StreakSummary,
)
from wellcoach.feedback.policy import (
    DEFAULT_POLICY,
    FeedbackPolicy,
    NotificationKind,
    Tone,
)
from wellcoach.feedback.streaks import Loggable, walk_streak, weekly_consistency
from wellcoach.logger import get_logger

logger = get_logger(__name__)


class CalorieBounds(Protocol):
    min: float
    target: float
    max: float


def _kcal(value: float) -> int:
    return int(round(value))


class FeedbackGenerator:
    """Turns logged data into user-facing messages.

    Args:
        policy: Banned words, texts and thresholds
        rng: Source of randomness for notification variants. Pass a seeded
            random.Random to pin the selection.
    """

    def __init__(
        self,
        policy: FeedbackPolicy = DEFAULT_POLICY,
        rng: Optional[random.Random] = None,
    ):
        self.policy = policy
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Food
    # ------------------------------------------------------------------

    def describe_food(self, food: Union[FoodItem, dict]) -> FoodFeedback:
        """Describe a logged food by what it offers.

        Positive nutrient facts come first. A treat with nothing to highlight
        gets a fixed supportive message; anything else falls back to its
        carbohydrate and fat content.
        """
        if isinstance(food, dict):
            food = FoodItem.from_dict(food)
        p = self.policy

        benefits: list[str] = []
        if food.protein > p.protein_highlight_g:
            benefits.append(f"{food.protein:g}g protein for muscle support")
        if food.fiber > p.fiber_highlight_g:
            benefits.append(f"{food.fiber:g}g fiber for digestion and fullness")
        if food.iron:
            benefits.append("good source of iron")
        if food.potassium:
            benefits.append("potassium for heart health")
        if food.vitamin_c:
            benefits.append("vitamin C for immune function")

        if not benefits:
            if food.category == "treat":
                return FoodFeedback(
                    message=f"{food.name} logged. Enjoying treats is part of a balanced life! 🍰",
                    tone=Tone.SUPPORTIVE,
                    educational_note=(
                        "Balance over time matters more than perfection in one meal."
                    ),
                )
            if food.carbs > p.carbs_highlight_g:
                benefits.append("quick energy from carbohydrates")
            if food.fat > p.fat_highlight_g:
                benefits.append("healthy fats for hormone production")

        message = f"{food.name} logged!"
        if benefits:
            message += " " + ", ".join(benefits) + "."

        return FoodFeedback(
            message=message,
            tone=Tone.NEUTRAL,
            calories=food.calories,
            show_calories=True,
        )

    # ------------------------------------------------------------------
    # End of day
    # ------------------------------------------------------------------

    def describe_over_goal(self, actual: float, goal: CalorieBounds) -> Feedback:
        """Feedback for a day that ended above the range.

        The overage is measured from the top of the range and expressed as
        a percentage of the target.
        """
        overage = actual - goal.max
        percent_over = overage / goal.target * 100

        if percent_over < self.policy.over_minor_pct:
            return Feedback(
                message=f"{_kcal(actual)} calories today. Right in your flexible range! ✅",
                tone=Tone.POSITIVE,
            )

        if percent_over < self.policy.over_moderate_pct:
            return Feedback(
                message=(
                    f"You logged {_kcal(actual)} calories today, about "
                    f"{_kcal(overage)} more than usual. That's totally normal! 📊"
                ),
                tone=Tone.NEUTRAL,
                educational_note="Your body averages over days and weeks, not individual meals.",
                action="Focus on tomorrow",
            )

        return Feedback(
            message=(
                f"Today was higher than usual at {_kcal(actual)} calories. "
                "That's okay, we all have days like this! 🤗"
            ),
            tone=Tone.COMPASSIONATE,
            question="How are you feeling? Any insights about today?",
            suggestions=(
                "Social event or celebration?",
                "Stressful day?",
                "Just hungry?",
                "All of the above, and that's human!",
            ),
            action="Tomorrow is a fresh start",
            educational_note=(
                "Research shows occasional higher days don't impact long-term progress."
            ),
        )

    def describe_under_goal(self, actual: float, goal: CalorieBounds) -> Feedback:
        """Feedback for a day that ended below the range.

        Severe shortfalls set flag_for_review for downstream monitoring of
        repeated under-eating.
        """
        shortage = goal.min - actual
        percent_under = shortage / goal.target * 100

        if percent_under < self.policy.under_minor_pct:
            return Feedback(
                message=(
                    f"{_kcal(actual)} calories logged, within your flexible range. Well done! ✅"
                ),
                tone=Tone.POSITIVE,
            )

        if percent_under < self.policy.under_moderate_pct:
            return Feedback(
                message=(
                    f"You've logged {_kcal(actual)} calories so far. "
                    f"Your target range is {_kcal(goal.min)}-{_kcal(goal.max)}."
                ),
                tone=Tone.NEUTRAL,
                question="Are you satisfied, or would a small snack feel good?",
                suggestions=(
                    "A protein-rich snack (Greek yogurt, nuts)",
                    "I'm satisfied for today",
                    "I'll have a balanced dinner",
                ),
            )

        return Feedback(
            message=(
                f"You've logged {_kcal(actual)} calories today, which is quite a bit "
                "below your range. Are you feeling okay? 🤔"
            ),
            tone=Tone.CONCERNED,
            question="Are you feeling okay? Eating enough is important for energy and health.",
            educational_note=(
                "Very low calorie days can slow metabolism and make you extra hungry tomorrow."
            ),
            action="Try to add a balanced meal or snack",
            flag_for_review=True,
        )

    def describe_in_range(self, actual: float) -> Feedback:
        return Feedback(
            message=f"{_kcal(actual)} calories today. Right in your range, nice work! ✅",
            tone=Tone.CELEBRATION,
        )

    def describe_day(self, actual: float, goal: CalorieBounds) -> Feedback:
        """Pick the over, under or in-range feedback for a day's total."""
        if actual > goal.max:
            return self.describe_over_goal(actual, goal)
        if actual < goal.min:
            return self.describe_under_goal(actual, goal)
        return self.describe_in_range(actual)

    # ------------------------------------------------------------------
    # Streaks and absences
    # ------------------------------------------------------------------

    def streak(
        self,
        history: Sequence[Loggable],
        freezes: Optional[int] = None,
    ) -> StreakSummary:
        """Summarize the logging streak.

        Args:
            history: Log entries ordered oldest to newest
            freezes: Freezes available, defaults to the policy's per-period
                allowance

        Returns:
            StreakSummary
        """
        max_freezes = self.policy.max_freezes if freezes is None else freezes
        walk = walk_streak(history, max_freezes)
        consistency = weekly_consistency(history)
        remaining = max_freezes - walk.freezes_used

        return StreakSummary(
            current_streak=walk.current,
            longest_streak=walk.longest,
            freezes_remaining=remaining,
            weekly_consistency=_kcal(consistency),
            message=self.streak_message(walk.current, consistency, walk.freezes_used, remaining),
        )

    def streak_message(
        self,
        streak: int,
        consistency: float,
        freezes_used: int,
        freezes_remaining: int,
    ) -> str:
        if streak in self.policy.milestones:
            return self.policy.milestones[streak]

        if (
            streak < self.policy.soften_streak_below
            and consistency >= self.policy.soften_consistency_pct
        ):
            days = _kcal(consistency / 100 * 7)
            return f"You logged {days} out of 7 days this week. That's consistency! 📊"

        if streak == 0:
            return "Every journey starts with a single step. Let's log today! 🌟"

        message = f"{streak} day streak! Keep it going!"
        if freezes_used > 0:
            message += f" ({freezes_remaining} freezes left)"
        return message + " 🔥"

    def welcome_back(self, days_since_last_log: int) -> Feedback:
        """Greeting for a user returning after time away."""
        if days_since_last_log < 0:
            raise ValueError("days_since_last_log must be non-negative")

        if days_since_last_log <= 1:
            return Feedback(message="Welcome back! Ready to log today? 😊", tone=Tone.WARM)

        if days_since_last_log <= 7:
            return Feedback(
                message=(
                    f"Hey! It's been {days_since_last_log} days. Life gets busy, "
                    "let's get back on track! 💪"
                ),
                tone=Tone.SUPPORTIVE,
                action="Quick log your last meal?",
            )

        if days_since_last_log <= 30:
            return Feedback(
                message=(
                    f"Welcome back! No judgment, {days_since_last_log} days is just "
                    "a pause. 🌟"
                ),
                tone=Tone.COMPASSIONATE,
                action="Start fresh today",
            )

        return Feedback(
            message=(
                "Welcome back! We're glad you're here. Every day is a new "
                "opportunity to be kind to yourself. 💙"
            ),
            tone=Tone.WARM,
            action="Let's update your goals",
            reset_suggestion=True,
        )

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def notification_options(self, kind: Union[NotificationKind, str]) -> tuple[str, ...]:
        return self.policy.notifications[NotificationKind(kind)]

    def notification(self, kind: Union[NotificationKind, str]) -> Notification:
        """Build a reminder with a randomly chosen text variant."""
        kind = NotificationKind(kind)
        celebrating = kind == NotificationKind.CELEBRATION
        return Notification(
            message=self.rng.choice(self.notification_options(kind)),
            tone=Tone.FRIENDLY,
            sound="celebratory" if celebrating else "gentle",
            priority="high" if celebrating else "low",
            action=self.policy.notification_actions[kind],
        )

    # ------------------------------------------------------------------
    # Content policy
    # ------------------------------------------------------------------

    def banned_words_in(self, message: str) -> list[str]:
        lowered = message.lower()
        return [word for word in self.policy.banned_words if word in lowered]

    def validate(self, message: str) -> bool:
        """Check a message against the banned-word list.

        Returns:
            False if any banned word appears (case-insensitive substring)
        """
        found = self.banned_words_in(message)
        if found:
            logger.warning("Banned words found: %s", ", ".join(found))
            return False
        return True
