"""Tests for CLI commands."""

from __future__ import annotations

import json
import time
from datetime import date, timedelta

import pytest
import yaml
from typer.testing import CliRunner

from wellcoach.cli import app
from wellcoach.db.connection import DatabaseConnection
from wellcoach.sync.store import DraftStore

runner = CliRunner()


@pytest.fixture
def config_args(tmp_path):
    """--config pointing at a temp config whose draft database lives in tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        "database": {"path": str(tmp_path / "drafts.db")},
        "logging": {"level": "WARNING"},
    }))
    return ["--config", str(path)]


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "profile.yaml"
    start = date(2024, 3, 1)
    path.write_text(yaml.safe_dump({
        "weight": 70,
        "height": 170,
        "age": 30,
        "gender": "male",
        "activityLevel": "moderate",
        "history": [
            {"date": (start + timedelta(days=i)).isoformat(), "logged": True}
            for i in range(6)
        ],
    }))
    return path


def invoke_json(args):
    result = runner.invoke(app, args)
    return result, json.loads(result.stdout)


class TestMainCommands:
    """Tests for main CLI commands."""

    def test_help(self):
        """Test that --help works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "calorie" in result.output.lower()

    def test_goal_requires_profile(self, config_args):
        result = runner.invoke(app, [*config_args, "goal"])
        assert result.exit_code != 0

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("sync:\n  max_attempts: 0\n")
        result = runner.invoke(app, ["--config", str(path), "config", "show"])
        assert result.exit_code == 1


class TestGoalAndPlan:
    """Tests for goal and plan commands."""

    def test_goal_json(self, config_args, profile_file):
        result, payload = invoke_json([*config_args, "goal", str(profile_file), "--json"])
        assert result.exit_code == 0
        assert payload["success"] is True
        assert payload["command"] == "goal"
        goal = payload["data"]["goal"]
        assert (goal["min"], goal["target"], goal["max"]) == (2357, 2507, 2657)

    def test_goal_with_situations(self, config_args, profile_file):
        _, payload = invoke_json([
            *config_args, "goal", str(profile_file), "--sleep", "5", "-s", "sick", "--json"
        ])
        assert payload["data"]["goal"]["display_message"].startswith("Focus on recovery today.")

    def test_goal_table(self, config_args, profile_file):
        result = runner.invoke(app, [*config_args, "goal", str(profile_file)])
        assert result.exit_code == 0
        assert "2357-2657" in result.output
        assert "Breakdown" in result.output

    def test_goal_missing_profile(self, config_args, tmp_path):
        result, payload = invoke_json([
            *config_args, "goal", str(tmp_path / "nobody.yaml"), "--json"
        ])
        assert result.exit_code == 1
        assert payload["success"] is False
        assert "Profile file not found" in payload["errors"][0]

    def test_goal_rejects_out_of_range_sleep(self, config_args, profile_file):
        result = runner.invoke(app, [*config_args, "goal", str(profile_file), "--sleep", "20"])
        assert result.exit_code == 2

    def test_plan_json(self, config_args, profile_file):
        result, payload = invoke_json([
            *config_args, "plan", str(profile_file), "-s", "travel", "--date", "2024-03-07", "--json"
        ])
        assert result.exit_code == 0
        plan = payload["data"]["plan"]
        assert plan["date"] == "2024-03-07"
        assert plan["workout"]["type"] == "bodyweight"
        assert plan["calories"]["target"] == payload["data"]["goal"]["target"] + 76

    def test_plan_low_energy(self, config_args, profile_file):
        _, payload = invoke_json([
            *config_args, "plan", str(profile_file), "--energy", "low",
            "--workout-minutes", "40", "--json",
        ])
        workout = payload["data"]["plan"]["workout"]
        assert workout["intensity"] == "light"
        assert workout["duration"] == 28

    def test_plan_text(self, config_args, profile_file):
        result = runner.invoke(app, [*config_args, "plan", str(profile_file)])
        assert result.exit_code == 0
        assert "Priorities" in result.output


class TestFeedbackCommands:
    """Tests for streak and validate."""

    def test_streak_json(self, config_args, profile_file):
        _, payload = invoke_json([*config_args, "streak", str(profile_file), "--json"])
        assert payload["data"]["current_streak"] == 6
        assert payload["data"]["message"] == "6 day streak! Keep it going! 🔥"

    def test_streak_text(self, config_args, profile_file):
        result = runner.invoke(app, [*config_args, "streak", str(profile_file)])
        assert result.exit_code == 0
        assert "Current: 6 days" in result.output

    def test_validate_passes(self, config_args):
        result = runner.invoke(app, [*config_args, "validate", "Nice work today!"])
        assert result.exit_code == 0

    def test_validate_banned(self, config_args):
        result, payload = invoke_json([*config_args, "validate", "You failed", "--json"])
        assert result.exit_code == 1
        assert payload["data"] == {"valid": False, "banned_words": ["fail", "failed"]}


class TestSyncCommands:
    """Tests for exercise and resolve."""

    def test_exercise_json(self, config_args):
        _, payload = invoke_json([
            *config_args, "exercise", "running_6mph", "-w", "70", "-m", "60", "--json"
        ])
        assert payload["data"]["calories"] == 686
        assert payload["data"]["range"] == {"min": 514, "max": 858}

    def test_exercise_with_heart_rate(self, config_args):
        result = runner.invoke(app, [
            *config_args, "exercise", "walking_moderate", "-w", "80", "-m", "30",
            "--avg-hr", "150", "--max-hr", "150",
        ])
        assert result.exit_code == 0
        assert "high confidence" in result.output

    def test_exercise_invalid_weight(self, config_args):
        result = runner.invoke(app, [*config_args, "exercise", "yoga", "-w", "0", "-m", "30"])
        assert result.exit_code == 1

    def test_resolve_json(self, config_args):
        _, payload = invoke_json([
            *config_args, "resolve",
            "--source", "estimated:800:AI guess",
            "--source", "user_manual:500:My scale",
            "--json",
        ])
        assert payload["data"]["display_value"] == "500-800 cal"
        assert payload["data"]["primary_value"] == 500

    def test_resolve_invalid_source(self, config_args):
        result = runner.invoke(app, [*config_args, "resolve", "--source", "user_manual"])
        assert result.exit_code == 1


class TestDraftsAndConfig:
    """Tests for drafts and config subcommands."""

    def test_drafts_list_empty(self, config_args):
        result = runner.invoke(app, [*config_args, "drafts", "list"])
        assert result.exit_code == 0
        assert "No drafts" in result.output

    def test_drafts_list_and_clear(self, config_args, tmp_path):
        store = DraftStore(DatabaseConnection(tmp_path / "drafts.db"))
        store.save("food_entry_1", {"name": "Oats"}, time.time())
        store.save("exercise_2", {"type": "yoga"}, time.time())

        _, payload = invoke_json([*config_args, "drafts", "list", "--json"])
        assert sorted(d["key"] for d in payload["data"]["drafts"]) == ["exercise_2", "food_entry_1"]

        _, payload = invoke_json([*config_args, "drafts", "clear", "--yes", "--json"])
        assert payload["data"] == {"removed": 2}
        assert store.entries() == []

    def test_drafts_clear_asks_first(self, config_args, tmp_path):
        store = DraftStore(DatabaseConnection(tmp_path / "drafts.db"))
        store.save("food_entry_1", {}, time.time())
        result = runner.invoke(app, [*config_args, "drafts", "clear"], input="n\n")
        assert result.exit_code != 0
        assert len(store.entries()) == 1

    def test_config_show(self, config_args, tmp_path):
        _, payload = invoke_json([*config_args, "config", "show", "--json"])
        assert payload["data"]["database"]["path"] == str(tmp_path / "drafts.db")
        assert payload["data"]["sync"]["max_attempts"] == 3
        assert payload["data"]["logging"]["level"] == "WARNING"
