"""Macronutrient targets derived from a calorie target."""

from __future__ import annotations

from typing import Optional

from wellcoach.goals.models import MacroTargets
from wellcoach.goals.tables import DEFAULT_GOAL_TABLES, GoalTables
from wellcoach.profiles.models import GoalType

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


def calculate_macros(
    target_calories: float,
    weight_kg: float,
    goal: GoalType,
    tables: Optional[GoalTables] = None,
) -> MacroTargets:
    """Split a calorie target into protein, carbs and fat.

    Protein comes from body weight and goal, fat is a fixed share of
    calories, and carbohydrates take what is left (never negative).

    Args:
        target_calories: Daily calorie target
        weight_kg: Body weight in kg
        goal: Goal direction
        tables: Constant tables (defaults to DEFAULT_GOAL_TABLES)

    Returns:
        MacroTargets in grams
    """
    tables = tables or DEFAULT_GOAL_TABLES
    protein = weight_kg * tables.protein_per_kg.get(goal, 1.6)
    fat = target_calories * tables.fat_fraction / KCAL_PER_GRAM_FAT
    remaining = target_calories - protein * KCAL_PER_GRAM_PROTEIN - fat * KCAL_PER_GRAM_FAT
    carbs = max(remaining, 0.0) / KCAL_PER_GRAM_CARBS
    return MacroTargets(protein=protein, carbs=carbs, fat=fat)


def split_calories(target_calories: float) -> MacroTargets:
    """Split calories 25/45/30 (protein/carbs/fat) when body weight is unknown."""
    return MacroTargets(
        protein=target_calories * 0.25 / KCAL_PER_GRAM_PROTEIN,
        carbs=target_calories * 0.45 / KCAL_PER_GRAM_CARBS,
        fat=target_calories * 0.30 / KCAL_PER_GRAM_FAT,
    )
