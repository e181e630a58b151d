"""Adaptive daily calorie goal.

Builds a day's calorie range from a running total:

    BMR (Mifflin-St Jeor)
    x activity multiplier                   -> TDEE
    + goal offset (-500 loss, +300 gain)
    + biological factors (cycle, breastfeeding, thyroid, PCOS, age, meds)
    + same-day context (sleep, stress, situations, energy)
    + adherence learning (trailing 14 days of logs)
    + weight-trend correction (least squares over the last 28 weigh-ins)
    +/- 150 kcal flexibility band           -> min / target / max

The only failure is a profile missing a field the BMR formula needs.
"Not enough history yet" is an ordinary result, not an error.
"""

from __future__ import annotations

from typing import Optional

from wellcoach.checkin.models import DailyCheckIn, Level, Situation
from wellcoach.exceptions import MissingProfileFieldError, UnsupportedGenderError
from wellcoach.goals.macros import calculate_macros
from wellcoach.goals.models import (
    AdherenceResult,
    AdjustmentStep,
    CalorieGoal,
    GoalReason,
    TrendResult,
)
from wellcoach.goals.tables import DEFAULT_GOAL_TABLES, GoalTables
from wellcoach.goals.trend import weekly_rate
from wellcoach.logger import get_logger
from wellcoach.profiles.models import (
    ActivityLevel,
    CyclePhase,
    Gender,
    GoalType,
    LogEntry,
    UserProfile,
    WeightPoint,
)

logger = get_logger(__name__)


def calculate_bmr(weight: float, height: float, age: float, gender: Gender) -> float:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Args:
        weight: Weight in kg
        height: Height in cm
        age: Age in years
        gender: Biological sex

    Returns:
        BMR in calories per day
    """
    base = (10 * weight) + (6.25 * height) - (5 * age)
    if gender == Gender.MALE:
        return base + 5
    if gender == Gender.FEMALE:
        return base - 161
    raise UnsupportedGenderError(gender)


def calculate_tdee(
    bmr: float,
    activity_level: Optional[ActivityLevel],
    tables: GoalTables = DEFAULT_GOAL_TABLES,
) -> float:
    """Calculate Total Daily Energy Expenditure.

    Unknown or missing activity levels use the moderate multiplier.
    """
    multipliers = tables.activity_multipliers
    multiplier = multipliers.get(activity_level, multipliers[tables.default_activity])
    return bmr * multiplier


class GoalCalculator:
    """Computes the adaptive daily calorie goal for a profile and check-in."""

    def __init__(self, tables: GoalTables = DEFAULT_GOAL_TABLES):
        self.tables = tables

    # ------------------------------------------------------------------
    # Baseline
    # ------------------------------------------------------------------

    def baseline(self, profile: UserProfile) -> tuple[float, float]:
        """Return (bmr, tdee) for a profile.

        Raises:
            MissingProfileFieldError: weight, height, age or gender is absent
            UnsupportedGenderError: gender is neither male nor female
        """
        required = {
            "weight": profile.weight,
            "height": profile.height,
            "age": profile.age,
            "gender": (
                profile.gender.value if isinstance(profile.gender, Gender) else profile.gender
            ),
        }
        if any(value is None for value in required.values()):
            raise MissingProfileFieldError(required)
        if not isinstance(profile.gender, Gender):
            raise UnsupportedGenderError(profile.gender)

        bmr = calculate_bmr(
            profile.weight, profile.height, profile.age, profile.gender  # type: ignore[arg-type]
        )
        tdee = calculate_tdee(bmr, profile.activity_level, self.tables)
        return bmr, tdee

    def goal_offset(self, goal: GoalType) -> int:
        return self.tables.goal_offsets.get(goal, 0)

    # ------------------------------------------------------------------
    # Adjustment stages
    # ------------------------------------------------------------------

    def biological_adjustments(self, profile: UserProfile) -> AdjustmentStep:
        """Adjustments for physiology. All applicable factors stack."""
        t = self.tables
        total = 0
        reasons: list[GoalReason] = []

        if profile.cycle_phase in (CyclePhase.LUTEAL, CyclePhase.MENSTRUATION):
            total += t.cycle_adjustment
            reasons.append(GoalReason(
                factor="Menstrual cycle",
                adjustment=t.cycle_adjustment,
                message="Your body needs extra energy during this phase",
            ))

        if profile.is_breastfeeding:
            total += t.breastfeeding_adjustment
            reasons.append(GoalReason(
                factor="Breastfeeding",
                adjustment=t.breastfeeding_adjustment,
                message="Essential calories for milk production",
            ))

        conditions = {c.strip().lower() for c in profile.medical_conditions}
        if "hypothyroidism" in conditions:
            total += t.hypothyroidism_adjustment
            reasons.append(GoalReason(
                factor="Thyroid condition",
                adjustment=t.hypothyroidism_adjustment,
                message="Adjusted for lower metabolic rate",
            ))
        if "pcos" in conditions:
            total += t.pcos_adjustment
            reasons.append(GoalReason(
                factor="PCOS",
                adjustment=t.pcos_adjustment,
                message="Adjusted for insulin resistance",
            ))

        if profile.age is not None and profile.age > t.age_decline_start:
            decades = int((profile.age - t.age_decline_start) // 10)
            age_adjustment = decades * t.age_decline_per_decade
            if age_adjustment:
                total += age_adjustment
                reasons.append(GoalReason(
                    factor="Age-related metabolism",
                    adjustment=age_adjustment,
                    message="Metabolic rate naturally decreases with age",
                ))

        medications = {m.strip().lower() for m in profile.medications}
        if medications.intersection(t.affecting_medications):
            total += t.medication_adjustment
            reasons.append(GoalReason(
                factor="Medication effects",
                adjustment=t.medication_adjustment,
                message="Some medications can affect metabolism",
            ))

        return AdjustmentStep(adjustment=total, reasons=tuple(reasons))

    def context_adjustments(self, check_in: DailyCheckIn) -> AdjustmentStep:
        """Same-day adjustments from the check-in.

        Every selected situation contributes, so a sick day while travelling
        gets both adjustments.
        """
        t = self.tables
        total = 0.0
        reasons: list[GoalReason] = []

        # Under 7 hours of sleep raises hunger hormones
        if check_in.sleep_hours < t.sleep_target_hours:
            deficit = t.sleep_target_hours - check_in.sleep_hours
            extra = deficit * t.sleep_deficit_per_hour
            total += extra
            reasons.append(GoalReason(
                factor="sleep",
                priority="high",
                adjustment=round(extra),
                message=(
                    f"You got {check_in.sleep_hours:g}hrs sleep. "
                    f"We've added {extra:g} calories for energy."
                ),
                action="Try to get 7-9 hours tonight",
            ))

        if check_in.stress_level == Level.HIGH:
            total += t.high_stress_adjustment
            reasons.append(GoalReason(
                factor="stress",
                priority="high",
                adjustment=t.high_stress_adjustment,
                message="High stress increases cortisol and energy needs.",
                action="Try 10-min meditation or a walk",
            ))

        if check_in.has(Situation.SICK):
            total += t.sick_adjustment
            reasons.append(GoalReason(
                factor="recovery",
                priority="critical",
                adjustment=t.sick_adjustment,
                message="Your body needs extra energy to heal. Focus on rest and nutrition.",
                action="Pause weight loss goals temporarily",
            ))
        if check_in.has(Situation.TRAVEL):
            total += t.travel_adjustment
            reasons.append(GoalReason(
                factor="flexibility",
                priority="medium",
                adjustment=t.travel_adjustment,
                message="Travel disrupts routines. Be gentle with yourself.",
                action="Aim for protein at each meal",
            ))
        if check_in.has(Situation.HIGH_ACTIVITY):
            total += t.high_activity_adjustment
            reasons.append(GoalReason(
                factor="fueling",
                priority="high",
                adjustment=t.high_activity_adjustment,
                message="Extra active day! Your body needs more fuel.",
                action="Add a protein-rich snack",
            ))

        if check_in.energy_level == Level.LOW:
            total += t.low_energy_adjustment
            reasons.append(GoalReason(
                factor="energy",
                priority="medium",
                adjustment=t.low_energy_adjustment,
                message="Low energy today. Make sure you're eating enough.",
                action="Have a balanced snack if hungry",
            ))

        return AdjustmentStep(adjustment=total, reasons=tuple(reasons))

    def adherence_adjustment(self, history: list[LogEntry]) -> AdherenceResult:
        """Learn from the trailing logging window.

        Feedback assignments run in order and later ones replace earlier
        ones; the numeric adjustment is never replaced.
        """
        t = self.tables
        recent = history[-t.history_window:]
        logged = [day for day in recent if day.logged]
        logged_days = len(logged)
        adherence_rate = logged_days / t.history_window

        if logged_days == 0:
            return AdherenceResult(
                adjustment=0,
                feedback=GoalReason(
                    factor="new_user",
                    message="Welcome! We'll learn your patterns as you log more days.",
                    tone="welcoming",
                ),
                adherence_rate=0.0,
                logged_days=0,
            )

        days_under = sum(1 for day in logged if day.calories < day.target * t.under_ratio)
        days_over = sum(1 for day in logged if day.calories > day.target * t.over_ratio)

        adjustment = 0
        feedback: Optional[GoalReason] = None

        # Consistently under goal means the goal is too aggressive
        if days_under / logged_days > t.pattern_fraction:
            adjustment += t.under_goal_adjustment
            feedback = GoalReason(
                factor="goal_adjustment",
                adjustment=t.under_goal_adjustment,
                message=(
                    "We noticed you're often below target. "
                    "We've increased your goal to be more realistic."
                ),
                tone="supportive",
            )

        if days_over / logged_days > t.pattern_fraction:
            consistent = all(
                abs(day.calories - prev.calories) < t.consistent_delta
                for prev, day in zip(recent, recent[1:])
            )
            if consistent:
                adjustment += t.over_goal_adjustment
                feedback = GoalReason(
                    factor="goal_adjustment",
                    adjustment=t.over_goal_adjustment,
                    message=(
                        "You're consistently eating more. "
                        "Let's adjust your goal to match your actual needs."
                    ),
                    tone="neutral",
                )
            else:
                # Periodic highs: address the pattern, keep the calories
                feedback = GoalReason(
                    factor="pattern_alert",
                    message=(
                        "We noticed some variation in your intake. "
                        "This is normal! Focus on consistency."
                    ),
                    tone="compassionate",
                    action="Would you like tips for managing cravings?",
                )

        if adherence_rate > t.celebrate_adherence:
            feedback = GoalReason(
                factor="celebration",
                message=f"Amazing! You've logged {logged_days} out of {t.history_window} days.",
                tone="celebratory",
            )

        return AdherenceResult(
            adjustment=adjustment,
            feedback=feedback,
            adherence_rate=adherence_rate,
            logged_days=logged_days,
        )

    def trend_adjustment(
        self,
        weight_history: list[WeightPoint],
        goal: GoalType,
    ) -> TrendResult:
        """Correct for the fitted weekly weight change."""
        t = self.tables
        recent = weight_history[-t.trend_window:]

        if len(recent) < t.trend_min_points:
            return TrendResult(
                adjustment=0,
                message="Building your baseline data...",
                points=len(recent),
            )

        weekly_change = weekly_rate(recent)

        if goal != GoalType.WEIGHT_LOSS:
            return TrendResult(
                adjustment=0,
                message=f"Your weight is changing by about {weekly_change:+.1f}kg per week.",
                weekly_change=weekly_change,
                points=len(recent),
            )

        if weekly_change > t.slow_loss_rate:
            return TrendResult(
                adjustment=t.slow_loss_adjustment,
                message="Progress has slowed. Let's make a small adjustment.",
                weekly_change=weekly_change,
                points=len(recent),
            )
        if weekly_change < t.fast_loss_rate:
            return TrendResult(
                adjustment=t.fast_loss_adjustment,
                message="Great progress, but let's slow down slightly for sustainability.",
                weekly_change=weekly_change,
                points=len(recent),
            )
        return TrendResult(
            adjustment=0,
            message=f"Perfect pace! You're losing about {abs(weekly_change):.1f}kg per week.",
            weekly_change=weekly_change,
            points=len(recent),
        )

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def compute_daily_goal(self, profile: UserProfile, check_in: DailyCheckIn) -> CalorieGoal:
        """Compute the adaptive calorie goal for one day.

        Args:
            profile: User profile (weight, height, age and gender required)
            check_in: Today's check-in

        Returns:
            CalorieGoal with min/target/max, breakdown and reasons

        Raises:
            MissingProfileFieldError: A BMR field is missing
            UnsupportedGenderError: Gender is not male or female
        """
        bmr, tdee = self.baseline(profile)
        goal_offset = self.goal_offset(profile.goal)
        biological = self.biological_adjustments(profile)
        context = self.context_adjustments(check_in)
        adherence = self.adherence_adjustment(profile.history)
        trend = self.trend_adjustment(profile.weight_history, profile.goal)

        target = (
            tdee
            + goal_offset
            + biological.adjustment
            + context.adjustment
            + adherence.adjustment
            + trend.adjustment
        )
        logger.debug(
            "goal: bmr=%.1f tdee=%.1f goal=%+d bio=%+d context=%+.0f adherence=%+d trend=%+d",
            bmr, tdee, goal_offset, biological.adjustment, context.adjustment,
            adherence.adjustment, trend.adjustment,
        )

        band = self.tables.flexibility_band
        mid = round(target)
        low, high = mid - band, mid + band

        reasons: list[GoalReason] = [*biological.reasons, *context.reasons]
        if adherence.feedback is not None:
            reasons.append(adherence.feedback)
        if trend.message:
            reasons.append(GoalReason(factor="Progress", message=trend.message))

        return CalorieGoal(
            min=low,
            target=mid,
            max=high,
            breakdown={
                "bmr": round(bmr),
                "tdee": round(tdee),
                "goal_adjustment": goal_offset,
                "biological_factors": round(biological.adjustment),
                "daily_context": round(context.adjustment),
                "adherence_pattern": adherence.adjustment,
                "progress_trend": trend.adjustment,
            },
            reasons=tuple(reasons),
            display_message=self.display_message(low, high, check_in),
            macros=calculate_macros(
                mid, profile.weight, profile.goal, self.tables  # type: ignore[arg-type]
            ),
            adherence_rate=adherence.adherence_rate,
            weekly_change=trend.weekly_change,
        )

    def display_message(self, low: int, high: int, check_in: DailyCheckIn) -> str:
        """One situational line for the goal card. First match wins."""
        if check_in.has(Situation.SICK):
            return f"Focus on recovery today. Aim for {low}-{high} calories with plenty of protein."
        if check_in.sleep_hours < self.tables.display_low_sleep_hours:
            return (
                f"You're tired today. Your goal is {low}-{high} cal. "
                "We've adjusted for your energy needs."
            )
        if check_in.stress_level == Level.HIGH:
            return f"High stress day. Your flexible goal: {low}-{high} cal. Be kind to yourself."
        return f"Today's goal: {low}-{high} calories. Any number in this range is a win!"
