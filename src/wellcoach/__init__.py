"""Adaptive calorie goals, daily context plans, supportive feedback and draft sync."""

from __future__ import annotations

__version__ = "0.1.0"
