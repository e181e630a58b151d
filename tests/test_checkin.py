"""Tests for the daily check-in model."""

from __future__ import annotations

from datetime import date

import pytest

from wellcoach.checkin.models import (
    CHECK_IN_QUESTIONS,
    DailyCheckIn,
    Level,
    Rating,
    Situation,
)


class TestRating:
    """Tests for Rating parsing and collapsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Very High", Rating.VERY_HIGH),
            ("very_low", Rating.VERY_LOW),
            ("veryHigh", Rating.VERY_HIGH),
            ("medium", Rating.MEDIUM),
            (Level.HIGH, Rating.HIGH),
            (None, Rating.MEDIUM),
            ("sort of", Rating.MEDIUM),
        ],
    )
    def test_parse(self, value, expected) -> None:
        assert Rating.parse(value) == expected

    def test_collapse(self) -> None:
        assert Rating.VERY_LOW.collapse() == Level.LOW
        assert Rating.MEDIUM.collapse() == Level.MEDIUM
        assert Rating.VERY_HIGH.collapse() == Level.HIGH


class TestSituation:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("sick", Situation.SICK),
            ("Feeling sick", Situation.SICK),
            ("Period/PMS", Situation.PERIOD),
            ("highActivity", Situation.HIGH_ACTIVITY),
            ("high_stress", Situation.HIGH_STRESS),
            ("working late", Situation.WORKING_LATE),
        ],
    )
    def test_parse(self, value, expected) -> None:
        assert Situation.parse(value) == expected

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            Situation.parse("moon landing")


class TestDailyCheckIn:
    """Tests for DailyCheckIn."""

    def test_defaults(self) -> None:
        check_in = DailyCheckIn()
        assert check_in.sleep_hours == 7.0
        assert check_in.stress_level == Level.MEDIUM
        assert check_in.situations == ()

    def test_from_form_responses(self) -> None:
        check_in = DailyCheckIn.from_dict({
            "date": "2024-03-04",
            "sleep": 5.5,
            "stress": "Very High",
            "energy": "Low",
            "mood": 3,
            "situation": ["Traveling", "Extra active day"],
            "hungerLevel": 8,
        })
        assert check_in.date == date(2024, 3, 4)
        assert check_in.sleep_hours == 5.5
        assert check_in.stress_level == Level.HIGH
        assert check_in.energy_level == Level.LOW
        assert check_in.situations == (Situation.TRAVEL, Situation.HIGH_ACTIVITY)
        assert check_in.hunger == 8

    def test_single_situation_string(self) -> None:
        check_in = DailyCheckIn.from_dict({"situation": "sick"})
        assert check_in.has(Situation.SICK)

    @pytest.mark.parametrize(
        "fields",
        [{"sleep_hours": 13}, {"sleep_hours": -1}, {"mood": 0}, {"hunger": 11}],
    )
    def test_out_of_range(self, fields) -> None:
        with pytest.raises(ValueError):
            DailyCheckIn(**fields)

    def test_frozen(self) -> None:
        check_in = DailyCheckIn()
        with pytest.raises(AttributeError):
            check_in.mood = 9  # type: ignore[misc]

    def test_to_dict_round_trip(self) -> None:
        check_in = DailyCheckIn(
            date=date(2024, 3, 4), stress="high", situations=("period",), logged=True
        )
        assert DailyCheckIn.from_dict(check_in.to_dict()) == check_in

    def test_question_battery(self) -> None:
        assert len(CHECK_IN_QUESTIONS) == 6
        situation = next(q for q in CHECK_IN_QUESTIONS if q["id"] == "situation")
        for label in situation["options"]:
            Situation.parse(label)
