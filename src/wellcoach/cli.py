"""CLI interface using Typer."""

from __future__ import annotations

import json
import time
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from wellcoach.checkin.models import DailyCheckIn, Situation
from wellcoach.coach.response import AgentResponse, create_response, error_response
from wellcoach.config import get_settings, reload_settings
from wellcoach.context.engine import ContextEngine
from wellcoach.context.models import WorkoutRecommendation
from wellcoach.exceptions import WellcoachError
from wellcoach.feedback.generator import FeedbackGenerator
from wellcoach.goals.calculator import GoalCalculator
from wellcoach.goals.models import CalorieGoal
from wellcoach.logger import configure_logging
from wellcoach.profiles.loader import load_profile
from wellcoach.sync.conflicts import CalorieSource, resolve_conflict
from wellcoach.sync.exercise import Exercise, estimate_exercise_calories

app = typer.Typer(
    help="Adaptive calorie goals, daily plans and compassionate feedback",
    no_args_is_help=True,
)
console = Console()

drafts_app = typer.Typer(help="Inspect local drafts waiting to sync")
config_app = typer.Typer(help="Show configuration")

app.add_typer(drafts_app, name="drafts")
app.add_typer(config_app, name="config")


@app.callback()
def main(
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml (default ~/.wellcoach/config.yaml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Load settings and configure logging before any command."""
    try:
        settings = reload_settings(config_path)
    except WellcoachError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)
    configure_logging("DEBUG" if verbose else settings.logging.level)


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: AgentResponse) -> None:
    """Print a response envelope as JSON to stdout."""
    print(response.to_json())


def fail(command: str, error: str | WellcoachError, json_output: bool) -> None:
    """Report an error in the requested format and exit with status 1."""
    if json_output:
        output_json(error_response(command, error))
    else:
        message = error.message if isinstance(error, WellcoachError) else error
        console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def build_check_in(
    sleep: float,
    stress: str,
    energy: str,
    mood: int,
    hunger: int,
    situations: Optional[list[str]],
    date_str: Optional[str],
) -> DailyCheckIn:
    try:
        return DailyCheckIn(
            date=date.fromisoformat(date_str) if date_str else date.today(),
            sleep_hours=sleep,
            stress=stress,
            energy=energy,
            mood=mood,
            hunger=hunger,
            situations=tuple(Situation.parse(s) for s in situations or ()),
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))


def print_goal(goal: CalorieGoal) -> None:
    console.print(Panel(goal.display_message, title="Today's calorie range"))

    table = Table(title="Breakdown")
    table.add_column("Step", style="cyan")
    table.add_column("kcal", justify="right")
    for step, value in goal.breakdown.items():
        shown = str(value) if step in ("bmr", "tdee") else f"{value:+.0f}"
        table.add_row(step.replace("_", " "), shown)
    console.print(table)

    if goal.reasons:
        console.print("\n[bold]Why[/bold]")
        for reason in goal.reasons:
            adjustment = f" ({reason.adjustment:+.0f})" if reason.adjustment else ""
            console.print(f"  • {reason.message}{adjustment}")


# Check-in options shared by goal and plan
SLEEP_OPTION = typer.Option(7.0, "--sleep", help="Hours slept (0-12)")
STRESS_OPTION = typer.Option("medium", "--stress", help="very_low, low, medium, high, very_high")
ENERGY_OPTION = typer.Option("medium", "--energy", help="very_low, low, medium, high, very_high")
MOOD_OPTION = typer.Option(5, "--mood", help="Mood 1-10")
HUNGER_OPTION = typer.Option(5, "--hunger", help="Hunger 1-10")
SITUATION_OPTION = typer.Option(
    None, "--situation", "-s", help="Situation tag (repeatable): sick, travel, period, ..."
)
DATE_OPTION = typer.Option(None, "--date", help="Check-in date (YYYY-MM-DD, default today)")


# ============================================================================
# Goal and plan
# ============================================================================


@app.command()
def goal(
    profile_file: Path = typer.Argument(..., help="Profile YAML file"),
    sleep: float = SLEEP_OPTION,
    stress: str = STRESS_OPTION,
    energy: str = ENERGY_OPTION,
    mood: int = MOOD_OPTION,
    hunger: int = HUNGER_OPTION,
    situation: Optional[list[str]] = SITUATION_OPTION,
    date_str: Optional[str] = DATE_OPTION,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Compute today's calorie range for a profile."""
    check_in = build_check_in(sleep, stress, energy, mood, hunger, situation, date_str)
    try:
        profile = load_profile(profile_file)
        daily_goal = GoalCalculator().compute_daily_goal(profile, check_in)
    except WellcoachError as e:
        fail("goal", e, json_output)

    if json_output:
        output_json(create_response(
            "goal",
            data={"goal": daily_goal.to_dict()},
            human_summary=daily_goal.display_message,
        ))
        return

    print_goal(daily_goal)


@app.command()
def plan(
    profile_file: Path = typer.Argument(..., help="Profile YAML file"),
    sleep: float = SLEEP_OPTION,
    stress: str = STRESS_OPTION,
    energy: str = ENERGY_OPTION,
    mood: int = MOOD_OPTION,
    hunger: int = HUNGER_OPTION,
    situation: Optional[list[str]] = SITUATION_OPTION,
    date_str: Optional[str] = DATE_OPTION,
    workout_minutes: int = typer.Option(30, "--workout-minutes", help="Planned workout length"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Build today's plan: calories, macros, workout and priorities."""
    check_in = build_check_in(sleep, stress, energy, mood, hunger, situation, date_str)
    try:
        profile = load_profile(profile_file)
        daily_goal = GoalCalculator().compute_daily_goal(profile, check_in)
    except WellcoachError as e:
        fail("plan", e, json_output)

    engine = ContextEngine()
    context = engine.classify(check_in)
    base_workout = WorkoutRecommendation(
        type="general",
        duration=workout_minutes,
        intensity="medium",
        message="Your planned workout",
    )
    daily_plan = engine.build_daily_plan(daily_goal, context, base_workout=base_workout)

    if json_output:
        output_json(create_response(
            "plan",
            data={"goal": daily_goal.to_dict(), "plan": daily_plan.to_dict()},
            human_summary=daily_plan.mindset,
        ))
        return

    calories = daily_plan.calories
    console.print(Panel(
        f"{round(calories.min)}-{round(calories.max)} calories (target {round(calories.target)})\n"
        f"[dim]{daily_plan.mindset}[/dim]",
        title=f"Plan for {daily_plan.date.isoformat()}",
    ))

    macros = daily_plan.macros
    console.print(
        f"Protein {macros.protein:.0f}g  Carbs {macros.carbs:.0f}g  Fat {macros.fat:.0f}g"
        + (f"  Iron {macros.iron_mg:.0f}mg" if macros.iron_mg else "")
    )

    workout = daily_plan.workout
    duration = f", {workout.duration} min" if workout.duration else ""
    console.print(f"\n[bold]Workout:[/bold] {workout.type}{duration}")
    if workout.message:
        console.print(f"  {workout.message}")

    console.print("\n[bold]Priorities[/bold]")
    for priority in daily_plan.priorities:
        console.print(f"  {priority.rank}. {priority.icon} {priority.priority}")

    for insight in daily_plan.insights:
        console.print(f"\n{insight.icon} [bold]{insight.title}[/bold]: {insight.action}")


# ============================================================================
# Feedback
# ============================================================================


@app.command()
def streak(
    profile_file: Path = typer.Argument(..., help="Profile YAML file"),
    freezes: Optional[int] = typer.Option(None, "--freezes", help="Freezes available"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the logging streak from a profile's history."""
    try:
        profile = load_profile(profile_file)
    except WellcoachError as e:
        fail("streak", e, json_output)

    summary = FeedbackGenerator().streak(profile.history, freezes=freezes)

    if json_output:
        output_json(create_response(
            "streak", data=summary.to_dict(), human_summary=summary.message
        ))
        return

    console.print(Panel(summary.message, title="Streak"))
    console.print(f"Current: {summary.current_streak} days")
    console.print(f"Longest: {summary.longest_streak} days")
    console.print(f"Freezes left: {summary.freezes_remaining}")
    console.print(f"This week: {summary.weekly_consistency}%")


@app.command()
def validate(
    message: str = typer.Argument(..., help="Message to check"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Check a message against the banned-word list (exit 1 on a match)."""
    generator = FeedbackGenerator()
    found = generator.banned_words_in(message)
    passed = generator.validate(message)

    if json_output:
        output_json(create_response(
            "validate",
            data={"valid": passed, "banned_words": found},
            human_summary="Message passes" if passed else f"Banned words: {', '.join(found)}",
        ))
    elif passed:
        console.print("[green]Message passes the content check[/green]")
    else:
        console.print(f"[yellow]Banned words: {', '.join(found)}[/yellow]")

    if not passed:
        raise typer.Exit(1)


# ============================================================================
# Sync helpers
# ============================================================================


@app.command()
def exercise(
    activity: str = typer.Argument(..., help="Activity type, e.g. running_6mph"),
    weight: float = typer.Option(..., "--weight", "-w", help="Body weight in kg"),
    minutes: float = typer.Option(..., "--minutes", "-m", help="Duration in minutes"),
    avg_hr: Optional[float] = typer.Option(None, "--avg-hr", help="Average heart rate"),
    max_hr: Optional[float] = typer.Option(None, "--max-hr", help="Max heart rate"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Estimate calories burned from the MET table."""
    try:
        estimate = estimate_exercise_calories(
            Exercise(type=activity, avg_heart_rate=avg_hr, max_heart_rate=max_hr),
            weight,
            minutes,
        )
    except ValueError as e:
        fail("exercise", str(e), json_output)

    if json_output:
        output_json(create_response(
            "exercise", data=estimate.to_dict(), human_summary=estimate.display_text
        ))
        return

    console.print(estimate.display_text)
    console.print(f"Range: {estimate.min}-{estimate.max} ({estimate.confidence} confidence)")
    if estimate.note:
        console.print(f"[dim]{estimate.note}[/dim]")


@app.command()
def resolve(
    sources: list[str] = typer.Option(
        ..., "--source", help="TYPE:CALORIES[:NAME], e.g. user_manual:500:My entry"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Resolve conflicting calorie values from several sources."""
    parsed = []
    for raw in sources:
        parts = raw.split(":", 2)
        try:
            parsed.append(CalorieSource(
                type=parts[0],
                calories=float(parts[1]),
                name=parts[2] if len(parts) > 2 else None,
            ))
        except (IndexError, ValueError):
            fail("resolve", f"Invalid source '{raw}', expected TYPE:CALORIES[:NAME]", json_output)

    result = resolve_conflict(parsed)

    if json_output:
        output_json(create_response(
            "resolve", data=result.to_dict(), human_summary=result.display_value
        ))
        return

    console.print(f"[bold]{result.display_value}[/bold] ({result.confidence} confidence)")
    if result.explanation:
        console.print(result.explanation)
    if result.needs_user_choice:
        console.print(f"\n{result.user_prompt}")
        for option in result.user_options:
            console.print(f"  • {option}")


# ============================================================================
# Drafts
# ============================================================================


def open_draft_store():
    from wellcoach.db import DatabaseConnection
    from wellcoach.sync.store import DraftStore

    return DraftStore(DatabaseConnection(get_settings().database.path))


@drafts_app.command("list")
def drafts_list(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List local drafts that have not synced yet."""
    store = open_draft_store()
    now = time.time()
    entries = store.entries()

    rows = []
    for entry in entries:
        try:
            key = json.loads(entry.value).get("key", entry.storage_key)
        except ValueError:
            key = entry.storage_key
        rows.append({"key": key, "age_minutes": round((now - entry.saved_at) / 60)})

    if json_output:
        output_json(create_response(
            "drafts list",
            data={"drafts": rows},
            human_summary=f"{len(rows)} drafts",
        ))
        return

    if not rows:
        console.print("No drafts")
        return

    table = Table(title="Local drafts")
    table.add_column("Key", style="cyan")
    table.add_column("Age (min)", justify="right")
    for row in rows:
        table.add_row(row["key"], str(row["age_minutes"]))
    console.print(table)


@drafts_app.command("clear")
def drafts_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete all local drafts."""
    if not yes and not json_output:
        typer.confirm("Delete all local drafts?", abort=True)

    removed = open_draft_store().clear()

    if json_output:
        output_json(create_response(
            "drafts clear", data={"removed": removed}, human_summary=f"Removed {removed} drafts"
        ))
    else:
        console.print(f"[green]Removed {removed} drafts[/green]")


# ============================================================================
# Config
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the effective configuration."""
    settings = get_settings().to_dict()

    if json_output:
        output_json(create_response("config show", data=settings))
        return

    for section, values in settings.items():
        console.print(f"[bold]{section}[/bold]")
        for key, value in values.items():
            console.print(f"  {key}: {value}")


if __name__ == "__main__":
    app()
