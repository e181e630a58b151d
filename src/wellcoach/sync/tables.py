"""Fixed tables for conflict resolution and exercise estimates."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# Lower number is more trusted
SOURCE_PRIORITY: Mapping[str, int] = MappingProxyType({
    "user_manual": 1,
    "verified_database": 2,
    "user_contributed": 3,
    "estimated": 4,
    "generic_database": 5,
})

# Metabolic equivalents (kcal per kg per hour)
MET_VALUES: Mapping[str, float] = MappingProxyType({
    # Cardio
    "walking_slow": 2.5,
    "walking_moderate": 3.5,
    "walking_fast": 4.5,
    "running_5mph": 8.0,
    "running_6mph": 9.8,
    "running_7mph": 11.0,
    "running_8mph": 11.8,
    "cycling_leisure": 4.0,
    "cycling_moderate": 8.0,
    "cycling_vigorous": 12.0,
    "swimming_leisure": 6.0,
    "swimming_vigorous": 10.0,
    # Strength
    "weight_training_light": 3.0,
    "weight_training_moderate": 5.0,
    "weight_training_vigorous": 6.0,
    # Sports and studio
    "basketball": 6.5,
    "soccer": 7.0,
    "tennis": 7.3,
    "yoga": 2.5,
    "pilates": 3.0,
})

# Share of exercise calories added back to the day's budget
EXERCISE_EAT_BACK: Mapping[str, float] = MappingProxyType({
    "maintain_deficit": 0.0,
    "eat_half_back": 0.5,
    "eat_all_back": 1.0,
})

EXERCISE_EXPLANATIONS: Mapping[str, str] = MappingProxyType({
    "maintain_deficit": "Exercise creates additional deficit for faster progress",
    "eat_half_back": "Eating back half of exercise calories maintains steady progress",
    "eat_all_back": "Eating exercise calories back maintains current weight",
})


@dataclass(frozen=True)
class SyncTables:
    source_priority: Mapping[str, int] = field(default_factory=lambda: SOURCE_PRIORITY)
    met_values: Mapping[str, float] = field(default_factory=lambda: MET_VALUES)
    default_met: float = 5.0
    eat_back: Mapping[str, float] = field(default_factory=lambda: EXERCISE_EAT_BACK)
    spread_threshold_pct: float = 20.0
    # Raw kcal spread above which a confident result still mentions the others
    note_spread_kcal: float = 50.0
    heart_rate_margin: float = 0.15
    met_only_margin: float = 0.25


DEFAULT_SYNC_TABLES = SyncTables()
