"""Daily coaching flow.

DailyCoach sequences the engines for one user: recovery and check-in when
the day starts, goal and plan from the check-in, feedback for food and
exercise logs, an end-of-day summary and a weekly review. The day's goal,
context and plan are held in memory; durable writes go through the sync
manager's drafts.

Every public operation returns an AgentResponse. Library errors
(WellcoachError) become error responses; anything else propagates.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Any, Optional, Union

from wellcoach.checkin.models import CHECK_IN_QUESTIONS, DailyCheckIn
from wellcoach.coach.response import AgentResponse, create_response, error_response
from wellcoach.context.engine import ContextEngine
from wellcoach.context.models import DailyContext, DailyPlan, WorkoutRecommendation
from wellcoach.context.patterns import weekly_summary
from wellcoach.exceptions import (
    InsufficientDataError,
    MissingProfileFieldError,
    ProfileError,
    WellcoachError,
)
from wellcoach.feedback.generator import FeedbackGenerator
from wellcoach.feedback.models import FoodItem
from wellcoach.feedback.policy import NotificationKind
from wellcoach.goals.calculator import GoalCalculator
from wellcoach.goals.models import CalorieGoal
from wellcoach.logger import get_logger
from wellcoach.profiles.models import LogEntry, UserProfile
from wellcoach.sync.exercise import (
    Exercise,
    apply_exercise_calories,
    estimate_exercise_calories,
)
from wellcoach.sync.manager import SyncManager
from wellcoach.sync.models import SyncQueue

logger = get_logger(__name__)


_PROFILE_KEY_ALIASES = {"menstrual_cycle": "cycle_phase", "sex": "gender"}


def _profile_key(name: str) -> str:
    key = re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()
    return _PROFILE_KEY_ALIASES.get(key, key)


class DailyCoach:
    """Runs one user's day through the goal, context, feedback and sync engines.

    Args:
        profile: The user's profile; its log history feeds streaks and
            adherence and is extended by end_of_day
        sync_manager: Local drafts and remote writes
        goal_calculator: Defaults to the standard tables
        context_engine: Defaults to the standard life-situation profiles
        feedback: Defaults to an unseeded generator
        history: Caller-owned context history (kept across days for weekly
            patterns)
        queue: Caller-owned sync queue
    """

    def __init__(
        self,
        profile: UserProfile,
        sync_manager: SyncManager,
        goal_calculator: Optional[GoalCalculator] = None,
        context_engine: Optional[ContextEngine] = None,
        feedback: Optional[FeedbackGenerator] = None,
        history: Optional[list[DailyContext]] = None,
        queue: Optional[SyncQueue] = None,
    ):
        self.profile = profile
        self.sync = sync_manager
        self.goals = goal_calculator or GoalCalculator()
        self.context = context_engine or ContextEngine()
        self.feedback = feedback or FeedbackGenerator()
        self.history = history if history is not None else []
        self.queue = queue if queue is not None else SyncQueue()

        self.daily_context: Optional[DailyContext] = None
        self.daily_goal: Optional[CalorieGoal] = None
        self.daily_plan: Optional[DailyPlan] = None

    # ------------------------------------------------------------------
    # Morning
    # ------------------------------------------------------------------

    async def start_day(self) -> AgentResponse:
        """Offer recovered drafts first, otherwise the check-in questions."""
        try:
            recovered = self.sync.recover_unsaved()
        except WellcoachError as e:
            return error_response("start_day", e)

        if recovered:
            return create_response(
                "start_day",
                data={"type": "recovery", "drafts": [d.to_dict() for d in recovered]},
                suggestions=["Review the recovered entries before checking in"],
                human_summary=f"Recovered {len(recovered)} unsaved entries",
            )

        return create_response(
            "start_day",
            data={"type": "check_in", "questions": [dict(q) for q in CHECK_IN_QUESTIONS]},
            human_summary="Ready for today's check-in",
        )

    async def process_check_in(
        self,
        check_in: Union[DailyCheckIn, dict[str, Any]],
        base_workout: Optional[WorkoutRecommendation] = None,
    ) -> AgentResponse:
        """Build today's goal, context and plan from the check-in.

        The plan is auto-saved under ``daily_plan_<date>``.
        """
        try:
            if isinstance(check_in, dict):
                check_in = DailyCheckIn.from_dict(check_in)
            goal = self.goals.compute_daily_goal(self.profile, check_in)
        except WellcoachError as e:
            return error_response(
                "check_in", e, suggestions=["Complete the profile fields listed above"]
            )

        context = self.context.classify(check_in, self.history)
        plan = self.context.build_daily_plan(goal, context, base_workout=base_workout)

        self.daily_goal = goal
        self.daily_context = context
        self.daily_plan = plan

        plan_key = f"daily_plan_{context.date.isoformat()}"
        await self.sync.auto_save(plan.to_dict(), plan_key, self.queue)

        return create_response(
            "check_in",
            data={
                "goal": goal.to_dict(),
                "context": context.to_dict(),
                "plan": plan.to_dict(),
            },
            human_summary=goal.display_message,
        )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    async def log_food(self, food: Union[FoodItem, dict[str, Any]]) -> AgentResponse:
        """Describe a logged food and auto-save it."""
        if isinstance(food, dict):
            food = FoodItem.from_dict(food)

        await self.sync.auto_save(
            food.to_dict(), f"food_entry_{int(self.sync.clock() * 1000)}", self.queue
        )

        described = self.feedback.describe_food(food)
        warnings = []
        if not self.feedback.validate(described.message):
            logger.warning("Food feedback for %r did not pass the content check", food.name)
            warnings.append("Generated feedback contains banned words")

        return create_response(
            "log_food",
            data={"feedback": described.to_dict(), "food": food.to_dict()},
            warnings=warnings,
            human_summary=described.message,
        )

    async def log_exercise(
        self,
        exercise: Union[Exercise, dict[str, Any]],
        duration_minutes: float,
    ) -> AgentResponse:
        """Estimate an activity's burn and adjust today's budget.

        The budget follows the profile's exercise_calorie_preference. Without
        a processed check-in only the estimate is returned.
        """
        try:
            if isinstance(exercise, dict):
                exercise = Exercise.from_dict(exercise)
            if self.profile.weight is None:
                raise MissingProfileFieldError({"weight": None})
            estimate = estimate_exercise_calories(exercise, self.profile.weight, duration_minutes)
        except WellcoachError as e:
            return error_response("log_exercise", e)

        data: dict[str, Any] = {"estimate": estimate.to_dict()}
        warnings = []
        if self.daily_goal is not None:
            budget = apply_exercise_calories(
                self.daily_goal, estimate, self.profile.exercise_calorie_preference
            )
            data["budget"] = budget.to_dict()
        else:
            warnings.append("No check-in yet today, budget not adjusted")

        await self.sync.auto_save(
            {
                "type": exercise.type,
                "duration_minutes": duration_minutes,
                "calories": estimate.to_dict(),
                "timestamp": self.sync.clock(),
            },
            f"exercise_{int(self.sync.clock() * 1000)}",
            self.queue,
        )

        message = f"Great workout! You burned approximately {estimate.calories} calories."
        if estimate.note:
            message += f" {estimate.note}"
        data["feedback"] = message

        return create_response("log_exercise", data=data, warnings=warnings, human_summary=message)

    # ------------------------------------------------------------------
    # Evening and weekly
    # ------------------------------------------------------------------

    def end_of_day(self, actual_calories: float) -> AgentResponse:
        """Feedback on the day's total plus the current streak.

        Records the day as logged in both the profile history and today's
        context so streaks, adherence and weekly summaries see it.
        """
        if self.daily_goal is None or self.daily_context is None:
            return error_response(
                "end_of_day",
                InsufficientDataError("Complete today's check-in before the end-of-day summary"),
                suggestions=["Run the daily check-in first"],
            )

        goal = self.daily_goal
        self._record_day(actual_calories, goal)

        feedback = self.feedback.describe_day(actual_calories, goal)
        streak = self.feedback.streak(self.profile.history)
        achieved = goal.min <= actual_calories <= goal.max

        return create_response(
            "end_of_day",
            data={
                "feedback": feedback.to_dict(),
                "streak": streak.to_dict(),
                "goal": {"min": goal.min, "target": goal.target, "max": goal.max},
                "actual_calories": actual_calories,
                "goal_achieved": achieved,
            },
            human_summary=f"{feedback.message} {streak.message}",
        )

    def _record_day(self, actual_calories: float, goal: CalorieGoal) -> None:
        context = self.daily_context
        context.check_in = replace(
            context.check_in,
            calories_logged=actual_calories,
            calorie_target=goal.target,
            logged=True,
        )

        entry = LogEntry(
            date=context.date, logged=True, calories=actual_calories, target=goal.target
        )
        history = self.profile.history
        if history and history[-1].date == entry.date:
            history[-1] = entry
        else:
            history.append(entry)

    def weekly_review(self) -> AgentResponse:
        summary = weekly_summary(self.history)
        return create_response(
            "weekly_review",
            data={"summary": summary.to_dict()},
            human_summary=summary.celebration,
        )

    # ------------------------------------------------------------------
    # Pass-throughs
    # ------------------------------------------------------------------

    def notification(self, kind: Union[NotificationKind, str]) -> AgentResponse:
        try:
            note = self.feedback.notification(kind)
        except ValueError:
            valid = ", ".join(k.value for k in NotificationKind)
            return error_response(
                "notification",
                f"Unknown notification kind '{kind}'",
                suggestions=[f"Use one of: {valid}"],
            )
        return create_response("notification", data=note.to_dict(), human_summary=note.message)

    def welcome_back(self, days_since_last_log: int) -> AgentResponse:
        greeting = self.feedback.welcome_back(days_since_last_log)
        return create_response(
            "welcome_back", data=greeting.to_dict(), human_summary=greeting.message
        )

    def sync_status(self) -> AgentResponse:
        report = self.sync.status(self.queue)
        suggestions = [report.action] if report.action else []
        return create_response(
            "sync_status",
            data=report.to_dict(),
            suggestions=suggestions,
            human_summary=report.message,
        )

    def update_profile(self, **changes: Any) -> AgentResponse:
        """Merge changes into the profile (snake_case or camelCase keys)."""
        merged = {**self.profile.to_dict(), **{_profile_key(k): v for k, v in changes.items()}}
        try:
            profile = UserProfile.from_dict(merged)
        except ValueError as exc:
            return error_response(
                "update_profile", ProfileError(str(exc), details={"changes": changes})
            )

        self.profile = profile
        logger.info("Profile updated: %s", ", ".join(sorted(changes)))
        return create_response(
            "update_profile",
            data={"profile": profile.to_dict()},
            human_summary="Profile updated",
        )

    def state(self) -> AgentResponse:
        return create_response(
            "state",
            data={
                "date": self.daily_context.date.isoformat() if self.daily_context else None,
                "profile": self.profile.to_dict(),
                "goal": self.daily_goal.to_dict() if self.daily_goal else None,
                "context": self.daily_context.to_dict() if self.daily_context else None,
                "plan": self.daily_plan.to_dict() if self.daily_plan else None,
                "sync": self.sync.status(self.queue).to_dict(),
                "history_days": len(self.history),
            },
        )
