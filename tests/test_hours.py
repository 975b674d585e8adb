"""Tests for reduced-hour days and horario handling."""

import datetime

import pytest

from shiftcal.core.schedule import (
    adjusted_horario,
    is_reduced_hour_day,
    parse_horario,
    reduced_hour_dates,
    turno_from_horario,
    weekly_hours,
)


class TestReducedHourDates:
    def test_tuesday_and_thursday(self):
        assert reduced_hour_dates(datetime.date(2026, 1, 5)) == (
            datetime.date(2026, 1, 6),
            datetime.date(2026, 1, 8),
        )

    def test_two_dates_inside_the_week_for_any_start(self):
        start = datetime.date(2025, 1, 6)
        for week in range(104):
            week_start = start + datetime.timedelta(weeks=week)
            dates = reduced_hour_dates(week_start)
            assert len(dates) == 2
            for d in dates:
                assert week_start < d <= week_start + datetime.timedelta(days=6)
            assert [(d - week_start).days for d in dates] == [1, 3]

    def test_accepts_string(self):
        assert reduced_hour_dates("2025-12-29") == (datetime.date(2025, 12, 30), datetime.date(2026, 1, 1))

    def test_invalid_input_gives_empty_tuple(self):
        assert reduced_hour_dates("not-a-date") == ()

    @pytest.mark.parametrize("week_start", [datetime.date(9999, 12, 31), datetime.date(9999, 12, 30)])
    def test_week_past_date_max_gives_empty_tuple(self, week_start):
        assert reduced_hour_dates(week_start) == ()

    def test_last_representable_monday(self):
        assert reduced_hour_dates(datetime.date(9999, 12, 27)) == (
            datetime.date(9999, 12, 28),
            datetime.date(9999, 12, 30),
        )

    def test_is_reduced_hour_day(self):
        assert is_reduced_hour_day(datetime.date(2026, 1, 6))
        assert is_reduced_hour_day("2026-01-08")
        assert not is_reduced_hour_day(datetime.date(2026, 1, 7))
        assert not is_reduced_hour_day("bad")


class TestWeeklyHours:
    def test_full_week_with_reductions(self):
        assert weekly_hours(3, 2) == 43

    def test_full_week_without_reductions(self):
        assert weekly_hours(5, 0) == 45

    def test_custom_hours(self):
        assert weekly_hours(4, 1, regular_hours=8, reduced_hours=7) == 39


class TestHorario:
    def test_reduced_day_starts_one_hour_later(self):
        assert adjusted_horario("10:00-20:00", True) == "11:00-20:00"

    def test_regular_day_unchanged(self):
        assert adjusted_horario("10:00-20:00", False) == "10:00-20:00"

    def test_night_start_wraps(self):
        assert adjusted_horario("23:00-07:00", True) == "00:00-07:00"

    @pytest.mark.parametrize("horario", [None, "", "todo el día"])
    def test_unparseable_unchanged(self, horario):
        assert adjusted_horario(horario, True) == horario

    @pytest.mark.parametrize(
        "horario,expected",
        [
            ("08:00-18:00", "DIA"),
            ("19:59-06:00", "DIA"),
            ("20:00-08:00", "NOCHE"),
            ("22:00-08:00", "NOCHE"),
            ("05:00-15:00", "NOCHE"),
            ("06:00-16:00", "DIA"),
            (None, "DIA"),
            ("sin horario", "DIA"),
        ],
    )
    def test_turno(self, horario, expected):
        assert turno_from_horario(horario) == expected

    def test_parse_horario(self):
        assert parse_horario("20:00-08:00") == (datetime.time(20, 0), datetime.time(8, 0))
        assert parse_horario("25:00-08:00") is None
        assert parse_horario(None) is None
