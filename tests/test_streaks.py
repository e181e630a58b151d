"""Tests for the forgiving streak."""

from __future__ import annotations

import pytest
from factories import streak_history

from wellcoach.feedback import FeedbackGenerator, walk_streak, weekly_consistency


class TestWalkStreak:
    """Tests for walk_streak."""

    def test_unbroken(self) -> None:
        walk = walk_streak(streak_history("LLLL"))
        assert walk.current == 4
        assert walk.freezes_used == 0

    def test_single_miss_spends_a_freeze(self) -> None:
        walk = walk_streak(streak_history("LLMLLLL"))
        assert walk.current == 7
        assert walk.freezes_used == 1

    def test_no_freezes_left(self) -> None:
        walk = walk_streak(streak_history("LLMLLLL"), max_freezes=0)
        assert walk.current == 4
        assert walk.freezes_used == 0

    def test_two_consecutive_misses_end_the_streak(self) -> None:
        walk = walk_streak(streak_history("LLLLMML"))
        assert walk.current == 2
        assert walk.longest == 2

    def test_freezes_run_out(self) -> None:
        walk = walk_streak(streak_history("LMLMLMLML"))
        # Four gaps, three freezes
        assert walk.current == 7
        assert walk.freezes_used == 3

    def test_todays_miss_is_not_counted(self) -> None:
        walk = walk_streak(streak_history("LLLM"))
        assert walk.current == 3
        assert walk.freezes_used == 0

    def test_two_trailing_misses(self) -> None:
        assert walk_streak(streak_history("LLLMM")).current == 0

    def test_empty_history(self) -> None:
        walk = walk_streak([])
        assert (walk.current, walk.longest, walk.freezes_used) == (0, 0, 0)


class TestWeeklyConsistency:
    def test_last_seven_days_only(self) -> None:
        assert weekly_consistency(streak_history("MMMMLLLLLLL")) == pytest.approx(100.0)

    def test_short_history_divides_by_seven(self) -> None:
        assert weekly_consistency(streak_history("LLL")) == pytest.approx(300 / 7)


class TestStreakSummary:
    """Tests for FeedbackGenerator.streak."""

    @pytest.fixture
    def generator(self):
        return FeedbackGenerator()

    def test_week_milestone(self, generator) -> None:
        summary = generator.streak(streak_history("LLMLLLL"))
        assert summary.current_streak == 7
        assert summary.freezes_remaining == 2
        assert summary.weekly_consistency == 86
        assert summary.message == "One week streak! 🎉 You're building momentum!"

    def test_month_milestone(self, generator) -> None:
        summary = generator.streak(streak_history("L" * 30))
        assert summary.message == "30 days! 🔥 This is becoming a habit!"

    def test_standard_message(self, generator) -> None:
        summary = generator.streak(streak_history("LLL"))
        assert summary.message == "3 day streak! Keep it going! 🔥"

    def test_freezes_left_shown_after_a_freeze(self, generator) -> None:
        summary = generator.streak(streak_history("LLMLL"))
        assert summary.current_streak == 5
        assert summary.message == "5 day streak! Keep it going! (2 freezes left) 🔥"

    def test_consistency_softens_short_streak(self, generator) -> None:
        summary = generator.streak(streak_history("LLLLLMM"))
        assert summary.current_streak == 0
        assert summary.weekly_consistency == 71
        assert summary.message == "You logged 5 out of 7 days this week. That's consistency! 📊"

    def test_zero_streak(self, generator) -> None:
        summary = generator.streak(streak_history("MM"))
        assert summary.message == "Every journey starts with a single step. Let's log today! 🌟"

    def test_custom_freeze_allowance(self, generator) -> None:
        summary = generator.streak(streak_history("LLMLL"), freezes=1)
        assert summary.freezes_remaining == 0
        assert summary.message == "5 day streak! Keep it going! (0 freezes left) 🔥"
