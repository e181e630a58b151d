"""Tests for check-in classification and daily plans."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from wellcoach.checkin.models import DailyCheckIn, Rating, Situation
from wellcoach.context import (
    ContextEngine,
    ProfileKey,
    WorkoutRecommendation,
    merge_adjustments,
)
from wellcoach.goals import GoalCalculator, MacroTargets


@pytest.fixture
def engine():
    return ContextEngine()


@pytest.fixture
def goal(male_profile):
    return GoalCalculator().compute_daily_goal(male_profile, DailyCheckIn())


class TestMergeAdjustments:
    """Tests for merge_adjustments."""

    def test_numbers_sum(self) -> None:
        merged = merge_adjustments({"calorie_increase": 150}, {"calorie_increase": 75})
        assert merged["calorie_increase"] == 225

    def test_other_values_last_writer_wins(self) -> None:
        merged = merge_adjustments(
            {"workout_type": "bodyweight", "streak_flexibility": True},
            {"workout_type": "stress-relief", "streak_flexibility": False},
        )
        assert merged["workout_type"] == "stress-relief"
        assert merged["streak_flexibility"] is False

    def test_inputs_not_mutated(self) -> None:
        base = {"calorie_increase": 1}
        merge_adjustments(base, {"calorie_increase": 2})
        assert base == {"calorie_increase": 1}


class TestClassify:
    """Tests for ContextEngine.classify."""

    def test_multiple_profiles_activate(self, engine) -> None:
        check_in = DailyCheckIn(stress="very_high", situations=("sick", "travel", "period"))
        context = engine.classify(check_in)
        assert context.active_profiles == [
            ProfileKey.SICK, ProfileKey.TRAVEL, ProfileKey.HIGH_STRESS, ProfileKey.PERIOD
        ]
        # 150 + 75 + 100 + 150
        assert context.adjustments["calorie_increase"] == 475

    def test_high_stress_from_rating_only(self, engine) -> None:
        tagged = engine.classify(DailyCheckIn(situations=("high-stress",)))
        assert ProfileKey.HIGH_STRESS not in tagged.active_profiles
        rated = engine.classify(DailyCheckIn(stress=Rating.HIGH))
        assert rated.active_profiles == [ProfileKey.HIGH_STRESS]

    def test_event_maps_to_big_event(self, engine) -> None:
        context = engine.classify(DailyCheckIn(situations=(Situation.EVENT,)))
        assert context.active_profiles == [ProfileKey.BIG_EVENT]
        assert context.adjustments["mindset"] == "enjoy the moment"

    def test_recommendations_concatenated(self, engine) -> None:
        context = engine.classify(DailyCheckIn(situations=("sick", "travel")))
        assert len(context.recommendations) == 8
        assert context.recommendations[0] == "Prioritize rest and sleep"

    def test_check_in_adjustments(self, engine) -> None:
        short = engine.classify(DailyCheckIn(sleep_hours=5, energy="low"))
        assert short.adjustments["sleep_calorie_adjustment"] == pytest.approx(100)
        assert short.adjustments["energy_multiplier"] == 0.6

        long = engine.classify(DailyCheckIn(sleep_hours=10, energy="very_high"))
        assert long.adjustments["sleep_calorie_adjustment"] == -30
        assert long.adjustments["energy_multiplier"] == 1.2

    def test_stress_workout_preferences(self, engine) -> None:
        context = engine.classify(DailyCheckIn(stress="high"))
        assert "yoga" in context.adjustments["preferred_workout_types"]
        assert "HIIT" in context.adjustments["avoid_workout_types"]

    def test_repeatable(self, engine) -> None:
        check_in = DailyCheckIn(sleep_hours=5.5, stress="high", situations=("travel", "high-activity"))
        first = engine.classify(check_in)
        second = engine.classify(check_in)
        assert first.active_profiles == second.active_profiles
        assert first.adjustments == second.adjustments

    def test_history_appended(self, engine) -> None:
        history = []
        engine.classify(DailyCheckIn(date=date(2024, 3, 1)), history)
        engine.classify(DailyCheckIn(date=date(2024, 3, 2)), history)
        assert [c.date for c in history] == [date(2024, 3, 1), date(2024, 3, 2)]


class TestInsights:
    """Tests for the insight rules."""

    def test_quiet_day_has_no_insights(self, engine) -> None:
        context = engine.classify(DailyCheckIn(sleep_hours=8, mood=7, hunger=4))
        assert context.insights == []

    def test_sleep_mood_and_hunger(self, engine) -> None:
        context = engine.classify(DailyCheckIn(sleep_hours=6, mood=4, hunger=8))
        types = [i.type for i in context.insights]
        assert types == ["sleep_impact", "mood_boost", "hunger_sleep_link"]

    def test_underfueling_needs_previous_day(self, engine) -> None:
        history = []
        yesterday = DailyCheckIn(
            date=date(2024, 3, 1), mood=7, calories_logged=1200, calorie_target=2000, logged=True
        )
        engine.classify(yesterday, history)
        today = engine.classify(
            DailyCheckIn(date=date(2024, 3, 2), energy="low", mood=7), history
        )
        assert [i.type for i in today.insights] == ["underfueling"]
        assert today.insights[0].priority == "critical"

    def test_no_underfueling_without_history(self, engine) -> None:
        context = engine.classify(DailyCheckIn(energy="low", mood=7))
        assert context.insights == []


class TestDailyPlan:
    """Tests for build_daily_plan."""

    def test_calories_shift_by_numeric_adjustments(self, engine, goal) -> None:
        context = engine.classify(DailyCheckIn(sleep_hours=5, situations=("travel",)))
        plan = engine.build_daily_plan(goal, context)
        # travel 75 + sleep (7 - 5) * 50 + energy_multiplier 1.0
        assert plan.calories.target == pytest.approx(goal.target + 176)
        assert plan.calories.max - plan.calories.min == pytest.approx(300)

    def test_sick_day_sums_every_number(self, engine, goal) -> None:
        context = engine.classify(DailyCheckIn(situations=("sick",)))
        assert engine.calorie_adjustment(context) == pytest.approx(161)
        plan = engine.build_daily_plan(goal, context)
        # calorie 150 + protein 10 + workout_intensity 0 + energy 1.0; flags skipped
        assert plan.calories.min == pytest.approx(goal.min + 161)
        assert plan.calories.target == pytest.approx(goal.target + 161)
        assert plan.calories.max == pytest.approx(goal.max + 161)

    def test_non_kcal_numbers_count(self, engine, goal) -> None:
        context = engine.classify(DailyCheckIn(situations=("high-activity",)))
        plan = engine.build_daily_plan(goal, context)
        # calorie 300 + carb 50 + protein 20 + energy 1.0
        assert plan.calories.target == pytest.approx(goal.target + 371)

    def test_plain_day_shifts_by_energy_multiplier(self, engine, goal) -> None:
        context = engine.classify(DailyCheckIn(energy="low"))
        assert engine.calorie_adjustment(context) == pytest.approx(0.6)
        plan = engine.build_daily_plan(goal, engine.classify(DailyCheckIn()))
        assert plan.calories.target == pytest.approx(goal.target + 1.0)

    def test_macro_adjustments(self, engine, goal) -> None:
        base = MacroTargets(protein=100, carbs=200, fat=60)
        context = engine.classify(DailyCheckIn(situations=("sick", "high-activity", "period")))
        plan = engine.build_daily_plan(goal, context, base_macros=base)
        assert plan.macros.protein == 130
        assert plan.macros.carbs == 250
        assert plan.macros.iron_mg == 18

    def test_sick_means_rest(self, engine, goal) -> None:
        context = engine.classify(DailyCheckIn(situations=("sick", "travel")))
        plan = engine.build_daily_plan(goal, context)
        assert plan.workout.type == "rest"
        assert plan.priorities[0].priority == "Rest and hydration"
        assert plan.mindset.startswith("Recovery is progress.")

    def test_travel_circuit(self, engine, goal) -> None:
        plan = engine.build_daily_plan(goal, engine.classify(DailyCheckIn(situations=("travel",))))
        assert plan.workout.type == "bodyweight"
        assert plan.workout.duration == 20
        assert "burpees" in plan.workout.exercises

    def test_stress_relief(self, engine, goal) -> None:
        plan = engine.build_daily_plan(goal, engine.classify(DailyCheckIn(stress="high")))
        assert plan.workout.type == "stress-relief"
        assert plan.workout.options == ("yoga", "walking", "swimming", "stretching")

    def test_low_energy_lightens_workout(self, engine, goal) -> None:
        base = WorkoutRecommendation(type="strength", message="Leg day", duration=60, intensity="high")
        plan = engine.build_daily_plan(goal, engine.classify(DailyCheckIn(energy="low")), base)
        assert plan.workout.intensity == "light"
        assert plan.workout.duration == 42
        assert plan.workout.type == "strength"

    def test_high_energy_keeps_duration(self, engine, goal) -> None:
        base = WorkoutRecommendation(type="run", message="Tempo run", duration=45, intensity="medium")
        plan = engine.build_daily_plan(goal, engine.classify(DailyCheckIn(energy="high")), base)
        assert plan.workout.intensity == "high"
        assert plan.workout.duration == 45

    def test_default_workout_and_priorities(self, engine, goal) -> None:
        plan = engine.build_daily_plan(goal, engine.classify(DailyCheckIn()))
        assert plan.workout.type == "general"
        assert plan.workout.duration == 30
        assert len(plan.priorities) == 4
        assert plan.mindset == "Consistency over perfection. Every healthy choice counts!"

    def test_event_mindset(self, engine, goal) -> None:
        plan = engine.build_daily_plan(goal, engine.classify(DailyCheckIn(situations=("event",))))
        assert plan.mindset.startswith("Enjoy the moment!")

    def test_plan_serializes(self, engine, goal) -> None:
        start = date(2024, 3, 1)
        context = engine.classify(DailyCheckIn(date=start + timedelta(days=1), situations=("period",)))
        data = engine.build_daily_plan(goal, context).to_dict()
        assert data["date"] == "2024-03-02"
        assert data["active_profiles"] == [
            {"name": "Menstrual Cycle Support", "priority": "hormone balance"}
        ]
        assert data["macros"]["iron"]["target"] == 18
