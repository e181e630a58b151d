"""Daily coaching flow and its response envelope."""

from __future__ import annotations

from wellcoach.coach.orchestrator import DailyCoach
from wellcoach.coach.response import AgentResponse, create_response, error_response

__all__ = ["AgentResponse", "DailyCoach", "create_response", "error_response"]
