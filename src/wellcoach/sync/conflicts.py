"""Resolve conflicting calorie values reported by different sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from wellcoach.sync.tables import DEFAULT_SYNC_TABLES, SyncTables


@dataclass(frozen=True)
class CalorieSource:
    type: str
    calories: float
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CalorieSource":
        return cls(
            type=str(data["type"]),
            calories=float(data["calories"]),
            name=data.get("name"),
        )

    @property
    def label(self) -> str:
        return self.name or self.type

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.label, "calories": _fmt(self.calories), "type": self.type}


@dataclass(frozen=True)
class ConflictResolution:
    """Outcome of resolving calorie sources.

    primary_value is always the most trusted source's value and is what
    downstream arithmetic should use. When sources disagree widely the
    display shows a range and user_prompt asks the user to pick.
    """

    display_value: str
    primary_value: float
    confidence: str
    sources: tuple[CalorieSource, ...]
    spread_pct: float
    explanation: Optional[str] = None
    source: Optional[str] = None
    user_prompt: Optional[str] = None
    user_options: tuple[str, ...] = field(default_factory=tuple)

    @property
    def needs_user_choice(self) -> bool:
        return self.user_prompt is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "display_value": self.display_value,
            "primary_value": _fmt(self.primary_value),
            "confidence": self.confidence,
            "spread_pct": round(self.spread_pct, 1),
            "explanation": self.explanation,
            "sources": [s.to_dict() for s in self.sources],
        }
        if self.source:
            data["source"] = self.source
        if self.user_prompt:
            data["user_action"] = {
                "prompt": self.user_prompt,
                "options": list(self.user_options),
            }
        return data


def _fmt(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else value


def resolve_conflict(
    sources: Iterable[Union[CalorieSource, dict[str, Any]]],
    tables: SyncTables = DEFAULT_SYNC_TABLES,
) -> ConflictResolution:
    """Pick the calorie value to use when sources disagree.

    Args:
        sources: Candidate values with their source types
        tables: Trust ranking and spread threshold

    Returns:
        ConflictResolution

    Raises:
        ValueError: If no sources are given
    """
    candidates = [
        s if isinstance(s, CalorieSource) else CalorieSource.from_dict(s) for s in sources
    ]
    if not candidates:
        raise ValueError("resolve_conflict needs at least one source")

    # Unknown types rank after every known one; sorted() is stable so input
    # order breaks ties.
    unknown_rank = max(tables.source_priority.values(), default=0) + 1
    ranked = tuple(
        sorted(candidates, key=lambda s: tables.source_priority.get(s.type, unknown_rank))
    )
    best = ranked[0]

    values = [s.calories for s in candidates]
    low, high = min(values), max(values)
    mean = sum(values) / len(values)
    spread = high - low
    spread_pct = spread / mean * 100 if mean else 0.0

    if spread_pct > tables.spread_threshold_pct:
        return ConflictResolution(
            display_value=f"{_fmt(low)}-{_fmt(high)} cal",
            primary_value=best.calories,
            confidence="low",
            sources=ranked,
            spread_pct=spread_pct,
            explanation="Calorie estimates vary by source. We're showing the range.",
            user_prompt="Which seems most accurate to you?",
            user_options=tuple(f"{_fmt(s.calories)} cal ({s.label})" for s in ranked),
        )

    explanation = None
    if spread > tables.note_spread_kcal:
        explanation = f"Other sources showed {_fmt(low)}-{_fmt(high)} cal"

    return ConflictResolution(
        display_value=f"{_fmt(best.calories)} cal",
        primary_value=best.calories,
        confidence="high",
        sources=ranked,
        spread_pct=spread_pct,
        explanation=explanation,
        source=best.label,
    )
