"""Context-aware personalization.

Classifies a daily check-in into life-situation profiles, derives insights,
and merges the result with the calorie goal into a daily plan.

The context history is owned by the caller: pass the same list to every
classify call to get the previous-day insight and weekly patterns. Nothing
here persists it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping, Optional

from wellcoach.checkin.models import DailyCheckIn, Level, Rating, Situation
from wellcoach.context.models import (
    DEFAULT_WORKOUT,
    DailyContext,
    DailyPlan,
    DailyPriority,
    Insight,
    WorkoutRecommendation,
)
from wellcoach.context.profiles import (
    LIFE_SITUATION_PROFILES,
    LifeSituationProfile,
    ProfileKey,
    is_numeric,
    merge_adjustments,
)
from wellcoach.goals.macros import split_calories
from wellcoach.goals.models import CalorieGoal, CalorieRange, MacroTargets

# Situation tags that switch a profile on. High stress comes from the
# stress rating, not from a tag.
SITUATION_PROFILES: tuple[tuple[Situation, ProfileKey], ...] = (
    (Situation.SICK, ProfileKey.SICK),
    (Situation.TRAVEL, ProfileKey.TRAVEL),
    (Situation.PERIOD, ProfileKey.PERIOD),
    (Situation.EVENT, ProfileKey.BIG_EVENT),
    (Situation.HIGH_ACTIVITY, ProfileKey.HIGH_ACTIVITY),
)

ENERGY_MULTIPLIERS: Mapping[Level, float] = {
    Level.LOW: 0.6,
    Level.MEDIUM: 1.0,
    Level.HIGH: 1.2,
}

STRESS_RELIEF_WORKOUTS = ("yoga", "walking", "swimming", "stretching")
AVOID_UNDER_STRESS = ("HIIT", "heavy_lifting")
BODYWEIGHT_CIRCUIT = ("push-ups", "squats", "lunges", "planks", "burpees")

IRON_TARGET_MG = 18.0


class ContextEngine:
    """Turns check-ins into daily contexts and daily plans."""

    def __init__(
        self,
        profiles: Mapping[ProfileKey, LifeSituationProfile] = LIFE_SITUATION_PROFILES,
    ):
        self.profiles = profiles

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def active_profiles(self, check_in: DailyCheckIn) -> list[ProfileKey]:
        """Return the profiles a check-in activates, in table order."""
        active = [key for situation, key in SITUATION_PROFILES if check_in.has(situation)]
        if check_in.stress_level == Level.HIGH:
            active.append(ProfileKey.HIGH_STRESS)
        order = list(ProfileKey)
        return sorted(active, key=order.index)

    def classify(
        self,
        check_in: DailyCheckIn,
        history: Optional[list[DailyContext]] = None,
    ) -> DailyContext:
        """Classify a check-in.

        Args:
            check_in: Today's check-in
            history: Caller-owned context history. The last entry is read
                for the previous-day insight and the new context is appended.

        Returns:
            DailyContext for the check-in's date
        """
        previous = history[-1] if history else None
        active = self.active_profiles(check_in)

        adjustments: dict[str, Any] = {}
        recommendations: list[str] = []
        for key in active:
            profile = self.profiles[key]
            adjustments = merge_adjustments(adjustments, profile.adjustments)
            recommendations.extend(profile.recommendations)

        # Check-in derived values override rather than merge
        adjustments.update(self.check_in_adjustments(check_in))

        context = DailyContext(
            date=check_in.date,
            check_in=check_in,
            active_profiles=active,
            adjustments=adjustments,
            recommendations=recommendations,
            insights=self.insights(check_in, previous),
        )

        if history is not None:
            history.append(context)
        return context

    def check_in_adjustments(self, check_in: DailyCheckIn) -> dict[str, Any]:
        adjustments: dict[str, Any] = {}

        if check_in.sleep_hours < 6:
            adjustments["sleep_calorie_adjustment"] = (7 - check_in.sleep_hours) * 50
        elif check_in.sleep_hours > 9:
            adjustments["sleep_calorie_adjustment"] = -30

        adjustments["energy_multiplier"] = ENERGY_MULTIPLIERS.get(check_in.energy_level, 1.0)

        if check_in.stress_level == Level.HIGH:
            adjustments["preferred_workout_types"] = STRESS_RELIEF_WORKOUTS
            adjustments["avoid_workout_types"] = AVOID_UNDER_STRESS

        return adjustments

    def insights(
        self,
        check_in: DailyCheckIn,
        previous: Optional[DailyContext] = None,
    ) -> list[Insight]:
        """Run the fixed battery of insight rules."""
        insights: list[Insight] = []

        if check_in.sleep_hours < 7:
            insights.append(Insight(
                type="sleep_impact",
                priority="high",
                title="Sleep affects hunger",
                detail=(
                    f"You got {check_in.sleep_hours:g} hours of sleep. Research shows "
                    "less than 7 hours increases hunger hormones."
                ),
                action="Try to get 7-9 hours tonight",
                icon="😴",
            ))

        if check_in.stress_level == Level.HIGH:
            insights.append(Insight(
                type="stress_eating",
                priority="high",
                title="Stress and eating",
                detail=(
                    "High stress can trigger emotional eating and cravings "
                    "for high-calorie foods."
                ),
                action="Try a 5-minute walk or breathing exercise before eating",
                icon="🧘",
            ))

        if check_in.energy_level == Level.LOW and previous is not None:
            yesterday = previous.check_in
            if (
                yesterday.calories_logged is not None
                and yesterday.calorie_target is not None
                and yesterday.calories_logged < yesterday.calorie_target * 0.8
            ):
                insights.append(Insight(
                    type="underfueling",
                    priority="critical",
                    title="Low energy may be from undereating",
                    detail=(
                        "You logged well below your target yesterday. "
                        "Not eating enough can cause fatigue."
                    ),
                    action="Aim to hit your calorie range today",
                    icon="⚡",
                ))

        if check_in.mood <= 5:
            insights.append(Insight(
                type="mood_boost",
                priority="medium",
                title="Movement can boost mood",
                detail=(
                    "Feeling low? Even 10 minutes of movement releases endorphins, "
                    "your body's natural mood boosters."
                ),
                action="Try a short walk or gentle stretching",
                icon="🏃",
            ))

        if check_in.hunger >= 7 and check_in.sleep_hours < 7:
            insights.append(Insight(
                type="hunger_sleep_link",
                priority="high",
                title="Poor sleep increases hunger",
                detail=(
                    "High hunger with low sleep is common: sleep deprivation "
                    "affects hunger hormones."
                ),
                action="This is biological, not a lack of willpower. Honor your hunger today.",
                icon="🍽️",
            ))

        return insights

    # ------------------------------------------------------------------
    # Daily plan
    # ------------------------------------------------------------------

    def build_daily_plan(
        self,
        goal: CalorieGoal,
        context: DailyContext,
        base_workout: Optional[WorkoutRecommendation] = None,
        base_macros: Optional[MacroTargets] = None,
    ) -> DailyPlan:
        """Merge a calorie goal with a day's context.

        Args:
            goal: Output of GoalCalculator.compute_daily_goal
            context: Output of classify for the same day
            base_workout: The user's planned workout (defaults to a general
                30 minute session)
            base_macros: Macro targets to adjust (defaults to the goal's)

        Returns:
            DailyPlan
        """
        macros = base_macros or goal.macros or split_calories(goal.target)
        return DailyPlan(
            date=context.date,
            calories=self.adjust_calories(CalorieRange.from_goal(goal), context),
            macros=self.adjust_macros(macros, context),
            workout=self.select_workout(base_workout, context),
            priorities=self.daily_priorities(context),
            recommendations=tuple(context.recommendations),
            insights=tuple(context.insights),
            mindset=self.daily_mindset(context),
            active_profiles=tuple(
                {"name": self.profiles[key].name, "priority": self.profiles[key].priority}
                for key in context.active_profiles
            ),
        )

    def calorie_adjustment(self, context: DailyContext) -> float:
        """Sum of every numeric adjustment value.

        Flags and strings are skipped. Non-kcal numbers such as
        energy_multiplier and workout_intensity are part of the sum too.
        """
        return sum(value for value in context.adjustments.values() if is_numeric(value))

    def adjust_calories(self, calories: CalorieRange, context: DailyContext) -> CalorieRange:
        return calories.shifted(self.calorie_adjustment(context))

    def adjust_macros(self, macros: MacroTargets, context: DailyContext) -> MacroTargets:
        adjusted = macros
        if context.is_active(ProfileKey.SICK):
            adjusted = replace(adjusted, protein=adjusted.protein + 10)
        if context.is_active(ProfileKey.HIGH_ACTIVITY):
            adjusted = replace(
                adjusted, protein=adjusted.protein + 20, carbs=adjusted.carbs + 50
            )
        if context.is_active(ProfileKey.PERIOD):
            adjusted = replace(adjusted, iron_mg=IRON_TARGET_MG)
        return adjusted

    def select_workout(
        self,
        base_workout: Optional[WorkoutRecommendation],
        context: DailyContext,
    ) -> WorkoutRecommendation:
        workout = base_workout or DEFAULT_WORKOUT

        if context.is_active(ProfileKey.SICK):
            return WorkoutRecommendation(
                type="rest",
                message="Your body needs rest to recover. Take the day off!",
                alternative="Gentle stretching if you feel up to it",
            )

        if context.is_active(ProfileKey.TRAVEL):
            return WorkoutRecommendation(
                type="bodyweight",
                duration=20,
                exercises=BODYWEIGHT_CIRCUIT,
                message="Quick hotel room workout, no equipment needed!",
            )

        if context.is_active(ProfileKey.HIGH_STRESS):
            return WorkoutRecommendation(
                type="stress-relief",
                duration=30,
                options=STRESS_RELIEF_WORKOUTS,
                message="Focus on movement that feels good",
            )

        multiplier = context.adjustments.get("energy_multiplier", 1.0)
        if multiplier < 0.7:
            return replace(
                workout,
                intensity="light",
                duration=round(workout.duration * 0.7) if workout.duration else workout.duration,
                message="Low energy day, we've lightened your workout",
            )
        if multiplier > 1.1:
            return replace(
                workout,
                intensity="high",
                message="You're feeling energized, let's make it count!",
            )
        return workout

    def daily_priorities(self, context: DailyContext) -> tuple[DailyPriority, ...]:
        if context.is_active(ProfileKey.SICK):
            return (
                DailyPriority(1, "Rest and hydration", "🛌"),
                DailyPriority(2, "Protein-rich meals", "🥩"),
                DailyPriority(3, "Don't stress about goals", "💙"),
            )
        if context.is_active(ProfileKey.HIGH_STRESS):
            return (
                DailyPriority(1, "Stress management (10 min meditation)", "🧘"),
                DailyPriority(2, "Get 7-9 hours sleep tonight", "😴"),
                DailyPriority(3, "Gentle movement", "🚶"),
            )
        return (
            DailyPriority(1, "Hit protein goal", "🥩"),
            DailyPriority(2, "Stay within calorie range", "📊"),
            DailyPriority(3, "Complete workout", "💪"),
            DailyPriority(4, "Drink 8 glasses of water", "💧"),
        )

    def daily_mindset(self, context: DailyContext) -> str:
        if context.is_active(ProfileKey.SICK):
            return "Recovery is progress. Your body is working hard to heal."
        if context.is_active(ProfileKey.BIG_EVENT):
            return "Enjoy the moment! One day of celebration won't derail your progress."
        if context.is_active(ProfileKey.HIGH_STRESS):
            return "Be gentle with yourself. Managing stress IS health progress."
        if context.check_in.energy == Rating.VERY_LOW:
            return "Low energy days happen. Do what you can, and that's enough."
        return "Consistency over perfection. Every healthy choice counts!"
