"""Feedback result types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from wellcoach.feedback.policy import Tone


@dataclass(frozen=True)
class Feedback:
    """A message for the user with its tone and optional follow-ups.

    flag_for_review marks severe under-eating for downstream monitoring;
    nothing in wellcoach acts on it.
    """

    message: str
    tone: Tone
    question: Optional[str] = None
    suggestions: tuple[str, ...] = ()
    action: Optional[str] = None
    educational_note: Optional[str] = None
    flag_for_review: bool = False
    reset_suggestion: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"message": self.message, "tone": self.tone.value}
        if self.question:
            data["question"] = self.question
        if self.suggestions:
            data["suggestions"] = list(self.suggestions)
        if self.action:
            data["action"] = self.action
        if self.educational_note:
            data["educational_note"] = self.educational_note
        if self.flag_for_review:
            data["flag_for_review"] = True
        if self.reset_suggestion:
            data["reset_suggestion"] = True
        return data


@dataclass(frozen=True)
class FoodItem:
    """A logged food as the feedback generator sees it."""

    name: str
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    iron: bool = False
    potassium: bool = False
    vitamin_c: bool = False
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FoodItem":
        micros = data.get("micronutrients") or {}
        return cls(
            name=str(data["name"]),
            calories=float(data.get("calories") or 0),
            protein=float(data.get("protein") or 0),
            carbs=float(data.get("carbs") or 0),
            fat=float(data.get("fat") or 0),
            fiber=float(data.get("fiber") or 0),
            iron=bool(data.get("iron", micros.get("iron", False))),
            potassium=bool(data.get("potassium", micros.get("potassium", False))),
            vitamin_c=bool(data.get("vitamin_c", micros.get("vitaminC", False))),
            category=data.get("category"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "iron": self.iron,
            "potassium": self.potassium,
            "vitamin_c": self.vitamin_c,
            "category": self.category,
        }


@dataclass(frozen=True)
class FoodFeedback:
    message: str
    tone: Tone
    calories: Optional[float] = None
    show_calories: bool = False
    educational_note: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"message": self.message, "tone": self.tone.value}
        if self.show_calories:
            data["calories"] = self.calories
            data["show_calories"] = True
        if self.educational_note:
            data["educational_note"] = self.educational_note
        return data


@dataclass(frozen=True)
class StreakSummary:
    current_streak: int
    longest_streak: int
    freezes_remaining: int
    weekly_consistency: int  # Percent of the last 7 days logged
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "freezes_remaining": self.freezes_remaining,
            "weekly_consistency": self.weekly_consistency,
            "message": self.message,
        }


@dataclass(frozen=True)
class Notification:
    message: str
    tone: Tone
    sound: str
    priority: str
    action: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "tone": self.tone.value,
            "sound": self.sound,
            "priority": self.priority,
            "action": self.action,
        }
