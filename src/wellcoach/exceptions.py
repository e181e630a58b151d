"""Exception classes raised by wellcoach.

Every error raised on purpose by the library derives from WellcoachError so
callers (the CLI and the daily coach) can turn it into a structured response.
"""

from __future__ import annotations

from typing import Any, Optional


class WellcoachError(Exception):
    """Base class for all wellcoach errors.

    Attributes:
        message: Human-readable error message.
        details: Additional context for structured output.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ProfileError(WellcoachError):
    """Raised when a user profile cannot be used for a calculation."""


class MissingProfileFieldError(ProfileError):
    """Raised when a field required by the BMR formula is absent."""

    def __init__(self, fields: dict[str, Any]):
        """Initialize with the values of all required fields.

        Args:
            fields: Mapping of required field name to its (possibly None) value.
        """
        missing = [name for name, value in fields.items() if value is None]
        values = ", ".join(f"{name}={value}" for name, value in fields.items())
        super().__init__(
            f"Missing required user properties: {values}",
            details={"missing": missing, "values": dict(fields)},
        )
        self.missing = missing


class UnsupportedGenderError(ProfileError):
    """Raised when the profile gender is not one the BMR formula supports."""

    def __init__(self, gender: Any):
        super().__init__(
            f"gender must be 'male' or 'female', got '{gender}'",
            details={"gender": gender},
        )


class ConfigurationError(WellcoachError):
    """Raised when a settings file contains an invalid value."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, details=details)


class InsufficientDataError(WellcoachError):
    """Raised when an operation needs more history than the caller has."""

    def __init__(self, message: str, minimum_required: Optional[int] = None):
        details = {"minimum_required": minimum_required} if minimum_required else {}
        super().__init__(message, details=details)


class SyncError(WellcoachError):
    """Base class for remote sync failures."""


class SyncTransportError(SyncError):
    """Raised by a transport when a remote write is rejected."""

    def __init__(self, key: str, message: str, status_code: Optional[int] = None):
        details: dict[str, Any] = {"key": key}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details=details)
        self.key = key
        self.status_code = status_code
