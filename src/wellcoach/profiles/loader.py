"""Load user profiles from YAML files."""

from __future__ import annotations

from pathlib import Path

import yaml

from wellcoach.exceptions import ProfileError
from wellcoach.profiles.models import UserProfile


def load_profile(path: Path) -> UserProfile:
    """Load a UserProfile from a YAML (or JSON) file.

    Args:
        path: Path to the profile file

    Returns:
        Parsed UserProfile

    Raises:
        ProfileError: If the file is missing or malformed
    """
    if not path.exists():
        raise ProfileError(f"Profile file not found: {path}", details={"path": str(path)})

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ProfileError(f"{path} must contain a mapping", details={"path": str(path)})

    try:
        return UserProfile.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ProfileError(f"Invalid profile in {path}: {e}", details={"path": str(path)}) from e


def save_profile(profile: UserProfile, path: Path) -> None:
    """Write a UserProfile to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(profile.to_dict(), f, default_flow_style=False, sort_keys=False)
