"""Result envelope for DailyCoach operations and ``wellcoach --json``.

The coach does not raise to its caller for errors the library raises on
purpose. A WellcoachError becomes a failed envelope whose
``data["error_details"]`` carries the error's details, such as the missing
profile fields or the rejected weight change, so a front end can point at
the offending input without parsing the message.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from wellcoach.exceptions import WellcoachError


@dataclass
class AgentResponse:
    """One coach result.

    ``command`` is the coach operation (start_day, check_in, log_food,
    end_of_day, ...) or the CLI subcommand that produced it. ``data`` holds
    that operation's payload, e.g. the check-in questions or the day's goal
    and plan. Feedback that failed the banned-word check is reported in
    ``warnings``, never in ``errors``.
    """

    success: bool
    command: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""
    schema_version: str = "1.0"

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "human_summary": self.human_summary,
            "timestamp": datetime.now().isoformat(),
            "schema_version": self.schema_version,
        }

    def to_json(self, indent: int = 2) -> str:
        # Log dates and enum values in data are written with str()
        return json.dumps(self.to_dict(), indent=indent, default=str, ensure_ascii=False)


def create_response(
    command: str,
    success: bool = True,
    data: Optional[dict[str, Any]] = None,
    errors: Optional[list[str]] = None,
    warnings: Optional[list[str]] = None,
    suggestions: Optional[list[str]] = None,
    human_summary: str = "",
) -> AgentResponse:
    """Build the envelope for a finished coach operation.

    Args:
        command: Coach operation or CLI subcommand name
        data: Payload shown by the front end; omitted means empty
        warnings: Soft problems, e.g. feedback containing a banned word
        suggestions: What the user could do next, e.g. "Run the daily
            check-in first"
        human_summary: The line the CLI prints without --json

    Returns:
        AgentResponse with empty lists in place of omitted arguments
    """
    return AgentResponse(
        success=success,
        command=command,
        data=data or {},
        errors=errors or [],
        warnings=warnings or [],
        suggestions=suggestions or [],
        human_summary=human_summary,
    )


def error_response(
    command: str,
    error: str | WellcoachError,
    suggestions: Optional[list[str]] = None,
) -> AgentResponse:
    """Build a failed envelope.

    A WellcoachError contributes its message to ``errors`` and, when it
    has any, its details to ``data["error_details"]``. A plain string
    leaves ``data`` empty.
    """
    data: dict[str, Any] = {}
    if isinstance(error, WellcoachError):
        if error.details:
            data["error_details"] = error.details
        message = error.message
    else:
        message = error
    return AgentResponse(
        success=False,
        command=command,
        data=data,
        errors=[message],
        suggestions=suggestions or [],
        human_summary=f"Error: {message}",
    )
