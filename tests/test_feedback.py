"""Tests for the feedback generator."""

from __future__ import annotations

import logging
import random

import pytest

from wellcoach.feedback import (
    BANNED_WORDS,
    FeedbackGenerator,
    FoodItem,
    NotificationKind,
    Tone,
)
from wellcoach.feedback.policy import MILESTONE_MESSAGES, NOTIFICATION_TEXTS
from wellcoach.goals.models import CalorieRange

GOAL = CalorieRange(min=1850, target=2000, max=2150)


@pytest.fixture
def generator():
    return FeedbackGenerator(rng=random.Random(0))


class TestDescribeFood:
    """Tests for describe_food."""

    def test_protein_highlight(self, generator) -> None:
        feedback = generator.describe_food(FoodItem(name="Chicken breast", calories=165, protein=31))
        assert feedback.message == "Chicken breast logged! 31g protein for muscle support."
        assert feedback.tone == Tone.NEUTRAL
        assert feedback.show_calories is True
        assert feedback.calories == 165

    def test_several_benefits_in_order(self, generator) -> None:
        feedback = generator.describe_food({
            "name": "Lentils",
            "calories": 230,
            "protein": 18,
            "fiber": 8,
            "micronutrients": {"iron": True, "vitaminC": True},
        })
        assert feedback.message == (
            "Lentils logged! 18g protein for muscle support, "
            "8g fiber for digestion and fullness, good source of iron, "
            "vitamin C for immune function."
        )

    def test_treat(self, generator) -> None:
        feedback = generator.describe_food(
            FoodItem(name="Cake", calories=350, carbs=50, fat=15, category="treat")
        )
        assert feedback.message == "Cake logged. Enjoying treats is part of a balanced life! 🍰"
        assert feedback.tone == Tone.SUPPORTIVE
        assert feedback.show_calories is False
        assert feedback.educational_note is not None

    def test_treat_with_benefits_is_described(self, generator) -> None:
        feedback = generator.describe_food(
            FoodItem(name="Protein bar", protein=20, category="treat")
        )
        assert feedback.tone == Tone.NEUTRAL
        assert "20g protein" in feedback.message

    def test_carb_and_fat_fallback(self, generator) -> None:
        feedback = generator.describe_food(FoodItem(name="Pasta", carbs=40, fat=12))
        assert feedback.message == (
            "Pasta logged! quick energy from carbohydrates, healthy fats for hormone production."
        )

    def test_nothing_to_highlight(self, generator) -> None:
        feedback = generator.describe_food(FoodItem(name="Water"))
        assert feedback.message == "Water logged!"

    def test_thresholds_are_strict(self, generator) -> None:
        feedback = generator.describe_food(FoodItem(name="Egg", protein=15, fiber=5))
        assert feedback.message == "Egg logged!"


class TestDescribeDay:
    """Tests for the end-of-day feedback bands."""

    def test_in_range(self, generator) -> None:
        feedback = generator.describe_day(2000, GOAL)
        assert feedback.tone == Tone.CELEBRATION
        assert feedback.message.startswith("2000 calories today.")

    def test_range_edges_are_in_range(self, generator) -> None:
        assert generator.describe_day(1850, GOAL).tone == Tone.CELEBRATION
        assert generator.describe_day(2150, GOAL).tone == Tone.CELEBRATION

    def test_slightly_over(self, generator) -> None:
        feedback = generator.describe_day(2200, GOAL)
        assert feedback.tone == Tone.POSITIVE
        assert feedback.message == "2200 calories today. Right in your flexible range! ✅"

    def test_moderately_over(self, generator) -> None:
        feedback = generator.describe_day(2500, GOAL)
        assert feedback.tone == Tone.NEUTRAL
        assert "about 350 more than usual" in feedback.message
        assert feedback.action == "Focus on tomorrow"
        assert feedback.educational_note is not None

    def test_well_over(self, generator) -> None:
        feedback = generator.describe_day(2800, GOAL)
        assert feedback.tone == Tone.COMPASSIONATE
        assert feedback.question == "How are you feeling? Any insights about today?"
        assert len(feedback.suggestions) == 4
        assert feedback.action == "Tomorrow is a fresh start"

    def test_slightly_under(self, generator) -> None:
        feedback = generator.describe_day(1700, GOAL)
        assert feedback.tone == Tone.POSITIVE
        assert feedback.flag_for_review is False

    def test_moderately_under(self, generator) -> None:
        feedback = generator.describe_day(1400, GOAL)
        assert feedback.tone == Tone.NEUTRAL
        assert feedback.message == (
            "You've logged 1400 calories so far. Your target range is 1850-2150."
        )
        assert len(feedback.suggestions) == 3

    def test_well_under_is_flagged(self, generator) -> None:
        feedback = generator.describe_day(1000, GOAL)
        assert feedback.tone == Tone.CONCERNED
        assert feedback.flag_for_review is True
        assert feedback.to_dict()["flag_for_review"] is True


class TestWelcomeBack:
    """Tests for welcome_back."""

    @pytest.mark.parametrize("days", [0, 1])
    def test_next_day(self, generator, days) -> None:
        feedback = generator.welcome_back(days)
        assert feedback.tone == Tone.WARM
        assert feedback.message == "Welcome back! Ready to log today? 😊"

    def test_within_a_week(self, generator) -> None:
        feedback = generator.welcome_back(4)
        assert feedback.tone == Tone.SUPPORTIVE
        assert "It's been 4 days" in feedback.message
        assert feedback.action == "Quick log your last meal?"

    def test_within_a_month(self, generator) -> None:
        feedback = generator.welcome_back(30)
        assert feedback.tone == Tone.COMPASSIONATE
        assert "30 days is just a pause" in feedback.message

    def test_long_absence_offers_reset(self, generator) -> None:
        feedback = generator.welcome_back(45)
        assert feedback.tone == Tone.WARM
        assert feedback.reset_suggestion is True
        assert feedback.action == "Let's update your goals"

    def test_negative_days(self, generator) -> None:
        with pytest.raises(ValueError):
            generator.welcome_back(-1)


class TestNotifications:
    """Tests for notification."""

    @pytest.mark.parametrize("kind", list(NotificationKind))
    def test_variant_from_table(self, generator, kind) -> None:
        notification = generator.notification(kind)
        assert notification.message in NOTIFICATION_TEXTS[kind]
        assert notification.tone == Tone.FRIENDLY

    def test_seeded_selection_is_repeatable(self) -> None:
        first = FeedbackGenerator(rng=random.Random(42)).notification("meal_reminder")
        second = FeedbackGenerator(rng=random.Random(42)).notification("meal_reminder")
        assert first.message == second.message

    def test_celebration_stands_out(self, generator) -> None:
        notification = generator.notification(NotificationKind.CELEBRATION)
        assert notification.sound == "celebratory"
        assert notification.priority == "high"
        assert notification.action == "View progress"

    def test_reminders_are_gentle(self, generator) -> None:
        notification = generator.notification("water_reminder")
        assert notification.sound == "gentle"
        assert notification.priority == "low"
        assert notification.action == "Log water"

    def test_unknown_kind(self, generator) -> None:
        with pytest.raises(ValueError):
            generator.notification("pizza_reminder")


class TestValidate:
    """Tests for the banned-word check."""

    def test_clean_message(self, generator) -> None:
        assert generator.validate("Great job today!") is True

    def test_banned_substring_case_insensitive(self, generator, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            assert generator.validate("You FAILED your goal") is False
        assert "Banned words found: fail, failed" in caplog.text

    def test_multi_word_entry(self, generator) -> None:
        assert "cheat day" in generator.banned_words_in("Sunday is my cheat day")

    def test_substring_inside_other_words(self, generator) -> None:
        # "badge" contains "bad"
        assert generator.validate("You earned a badge") is False

    def test_banned_list(self) -> None:
        assert len(BANNED_WORDS) == 18


class TestBuiltInTextsPassPolicy:
    """Every text the generator can produce passes its own check."""

    def test_food_and_day_texts(self, generator) -> None:
        messages = [
            generator.describe_food(FoodItem(name="Cake", category="treat")).message,
            generator.describe_food(FoodItem(name="Pasta", carbs=40, fat=12)).message,
        ]
        for actual in (1000, 1400, 1700, 2000, 2200, 2500, 2800):
            feedback = generator.describe_day(actual, GOAL)
            messages.append(feedback.message)
            messages.extend(feedback.suggestions)
            messages.extend(t for t in (feedback.question, feedback.action, feedback.educational_note) if t)
        for message in messages:
            assert generator.validate(message), message

    def test_welcome_and_streak_texts(self, generator) -> None:
        messages = [generator.welcome_back(days).message for days in (1, 5, 20, 60)]
        messages.extend(MILESTONE_MESSAGES.values())
        messages.append(generator.streak_message(0, 0, 0, 3))
        messages.append(generator.streak_message(1, 85.0, 0, 3))
        messages.append(generator.streak_message(5, 50.0, 1, 2))
        for message in messages:
            assert generator.validate(message), message

    def test_notification_texts(self, generator) -> None:
        for options in NOTIFICATION_TEXTS.values():
            for message in options:
                assert generator.validate(message), message
