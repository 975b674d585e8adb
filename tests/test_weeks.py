"""Tests for week/month helpers and date comparisons."""

import datetime
from unittest.mock import patch

import pytest

from shiftcal.core.schedule import (
    days_in_month,
    format_day_of_week,
    format_week_range,
    get_month_dates,
    get_week_dates,
    get_week_start,
    is_date_in_range,
    is_past_date,
    is_today,
    month_name,
    next_week,
    parse_date,
    previous_week,
    to_date,
    weekday_index,
)


class TestParseDate:
    def test_iso_string(self):
        assert parse_date("2026-01-05") == datetime.date(2026, 1, 5)

    def test_datetime_drops_time(self):
        assert parse_date(datetime.datetime(2026, 1, 5, 23, 59)) == datetime.date(2026, 1, 5)

    def test_full_iso_datetime_string(self):
        assert parse_date("2026-01-05T08:30:00") == datetime.date(2026, 1, 5)

    @pytest.mark.parametrize("value", ["", "05/01/2026", "2026-02-30", None, 3.5])
    def test_unparseable_gives_none(self, value):
        assert parse_date(value) is None

    def test_to_date_raises(self):
        with pytest.raises(ValueError):
            to_date("2026-02-30")


class TestWeeks:
    def test_weekday_index_sunday_is_zero(self):
        assert weekday_index(datetime.date(2026, 1, 4)) == 0
        assert weekday_index(datetime.date(2026, 1, 5)) == 1
        assert weekday_index(datetime.date(2026, 1, 3)) == 6

    def test_sunday_belongs_to_previous_monday(self):
        assert get_week_start(datetime.date(2026, 1, 4)) == datetime.date(2025, 12, 29)

    def test_monday_is_its_own_week_start(self):
        assert get_week_start("2026-01-05") == datetime.date(2026, 1, 5)

    def test_week_dates_round_trip(self):
        start = datetime.date(2024, 2, 20)
        for offset in range(400):
            day = start + datetime.timedelta(days=offset)
            dates = get_week_dates(get_week_start(day))
            assert len(dates) == 7
            assert day in dates
            assert dates == sorted(dates)
            assert dates[0].weekday() == 0

    def test_previous_and_next_week(self):
        monday = datetime.date(2026, 1, 5)
        assert previous_week(monday) == datetime.date(2025, 12, 29)
        assert next_week(monday) == datetime.date(2026, 1, 12)

    def test_invalid_week_start_raises(self):
        with pytest.raises(ValueError):
            get_week_start("nope")

    def test_last_week_of_date_range(self):
        monday = datetime.date(9999, 12, 27)
        assert get_week_start(datetime.date.max) == monday
        with pytest.raises(ValueError):
            get_week_dates(monday)
        with pytest.raises(ValueError):
            next_week(monday)
        assert previous_week(monday) == datetime.date(9999, 12, 20)

    def test_first_week_of_date_range(self):
        assert get_week_start(datetime.date.min) == datetime.date.min
        with pytest.raises(ValueError):
            previous_week(datetime.date.min)


class TestMonths:
    def test_days_in_february(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2026, 2) == 28

    def test_month_dates(self):
        dates = get_month_dates(2026, 1)
        assert len(dates) == 31
        assert dates[0] == datetime.date(2026, 1, 1)
        assert dates[-1] == datetime.date(2026, 1, 31)

    def test_month_name(self):
        assert month_name(1) == "Enero"
        assert month_name(12) == "Diciembre"


class TestFormatting:
    def test_week_inside_one_month(self):
        assert format_week_range(datetime.date(2026, 1, 5)) == "5 - 11 Ene 2026"

    def test_week_across_months(self):
        assert format_week_range(datetime.date(2025, 12, 29)) == "29 Dic - 4 Ene 2026"

    def test_day_of_week(self):
        assert format_day_of_week("2026-01-05") == "Lun"
        assert format_day_of_week("bad") == ""


class TestComparisons:
    def test_in_range_inclusive(self):
        assert is_date_in_range("2026-01-01", "2026-01-01", "2026-01-31")
        assert is_date_in_range("2026-01-31", "2026-01-01", "2026-01-31")
        assert not is_date_in_range("2026-02-01", "2026-01-01", "2026-01-31")

    def test_in_range_invalid(self):
        assert not is_date_in_range("bad", "2026-01-01", "2026-01-31")

    def test_today_and_past(self):
        with patch("shiftcal.core.schedule.weeks.get_today", return_value=datetime.date(2026, 1, 7)):
            assert is_today("2026-01-07")
            assert not is_today(datetime.date(2026, 1, 8))
            assert is_past_date(datetime.date(2026, 1, 6))
            assert not is_past_date("2026-01-07")
            assert not is_past_date("bad")
