"""Tests for user profiles and the profile loader."""

from __future__ import annotations

from datetime import date

import pytest
import yaml

from wellcoach.exceptions import ProfileError
from wellcoach.profiles.loader import load_profile, save_profile
from wellcoach.profiles.models import (
    ActivityLevel,
    CyclePhase,
    Gender,
    GoalType,
    UserProfile,
    parse_activity_level,
    parse_goal,
)


class TestUserProfile:
    """Tests for UserProfile parsing."""

    def test_camel_case_export(self) -> None:
        profile = UserProfile.from_dict({
            "weight": 62,
            "height": 165,
            "age": 34,
            "sex": "Female",
            "activityLevel": "veryActive",
            "goal": "weightLoss",
            "medicalConditions": ["PCOS"],
            "isBreastfeeding": True,
            "menstrualCycle": {"currentPhase": "luteal"},
            "weightHistory": [{"date": "2024-01-01", "weight": 62.5}],
            "exerciseCaloriePreference": "eat_half_back",
        })
        assert profile.gender == Gender.FEMALE
        assert profile.activity_level == ActivityLevel.VERY_ACTIVE
        assert profile.goal == GoalType.WEIGHT_LOSS
        assert profile.medical_conditions == ["PCOS"]
        assert profile.is_breastfeeding is True
        assert profile.cycle_phase == CyclePhase.LUTEAL
        assert profile.weight_history[0].date == date(2024, 1, 1)
        assert profile.exercise_calorie_preference == "eat_half_back"

    def test_defaults(self) -> None:
        profile = UserProfile.from_dict({})
        assert profile.activity_level == ActivityLevel.MODERATE
        assert profile.goal == GoalType.MAINTAIN
        assert profile.exercise_calorie_preference == "maintain_deficit"

    def test_unsupported_gender_kept(self) -> None:
        assert UserProfile(gender="other").gender == "other"

    @pytest.mark.parametrize("field", ["weight", "height", "age"])
    def test_non_positive_rejected(self, field) -> None:
        with pytest.raises(ValueError):
            UserProfile(**{field: 0})

    def test_unknown_activity_level(self) -> None:
        assert parse_activity_level("couch") is None
        assert parse_activity_level("Lightly Active") == ActivityLevel.LIGHT

    def test_unknown_goal_means_maintain(self) -> None:
        assert parse_goal("bulk forever") == GoalType.MAINTAIN
        assert parse_goal("weight-gain") == GoalType.WEIGHT_GAIN

    def test_to_dict_round_trip(self) -> None:
        profile = UserProfile(
            weight=70, height=170, age=30, gender="male", cycle_phase="follicular"
        )
        assert UserProfile.from_dict(profile.to_dict()).to_dict() == profile.to_dict()


class TestLoader:
    """Tests for load_profile and save_profile."""

    def test_save_and_load(self, tmp_path) -> None:
        path = tmp_path / "me.yaml"
        profile = UserProfile(weight=70, height=170, age=30, gender="male", goal="weight_loss")
        save_profile(profile, path)
        loaded = load_profile(path)
        assert loaded.to_dict() == profile.to_dict()

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ProfileError) as exc_info:
            load_profile(tmp_path / "missing.yaml")
        assert exc_info.value.details["path"].endswith("missing.yaml")

    def test_not_a_mapping(self, tmp_path) -> None:
        path = tmp_path / "me.yaml"
        path.write_text("- 70\n- 170\n")
        with pytest.raises(ProfileError):
            load_profile(path)

    def test_invalid_values(self, tmp_path) -> None:
        path = tmp_path / "me.yaml"
        path.write_text(yaml.safe_dump({"weight": -70}))
        with pytest.raises(ProfileError) as exc_info:
            load_profile(path)
        assert "weight must be positive" in exc_info.value.message

    def test_bad_history_date(self, tmp_path) -> None:
        path = tmp_path / "me.yaml"
        path.write_text(yaml.safe_dump({"history": [{"date": "yesterday", "logged": True}]}))
        with pytest.raises(ProfileError):
            load_profile(path)
