"""Tests for calendar and clock helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from habits.tracking.dates import (
    calculate_sleep_hours,
    day_of_week,
    format_date,
    format_time,
    get_day_name,
    get_month_dates,
    get_month_name,
    get_month_year,
    get_today_string,
    get_week_dates,
    get_week_end,
    get_week_start,
    parse_clock,
    parse_date,
)


# ---- format / parse ----


def test_format_date_pads_components():
    assert format_date(date(2025, 3, 9)) == "2025-03-09"


def test_format_date_uses_local_fields_of_datetime():
    # Late evening must not roll over to the next day
    assert format_date(datetime(2025, 1, 5, 23, 59)) == "2025-01-05"


def test_parse_date_components():
    d = parse_date("2024-02-29")
    assert (d.year, d.month, d.day) == (2024, 2, 29)


def test_parse_date_rejects_garbage():
    with pytest.raises(ValueError):
        parse_date("not-a-date")


@pytest.mark.parametrize(
    "d", [date(2025, 1, 1), date(2024, 2, 29), date(1999, 12, 31), date(2025, 3, 9)]
)
def test_format_parse_roundtrip(d):
    assert parse_date(format_date(d)) == d


def test_today_string_matches_today():
    assert get_today_string() == date.today().isoformat()


# ---- week windowing ----


def test_day_of_week_sunday_is_zero():
    assert day_of_week(date(2025, 3, 9)) == 0  # Sunday
    assert day_of_week(date(2025, 3, 15)) == 6  # Saturday


def test_week_start_of_wednesday():
    assert get_week_start(date(2025, 3, 12)) == date(2025, 3, 9)


def test_week_start_of_sunday_is_itself():
    assert get_week_start(date(2025, 3, 9)) == date(2025, 3, 9)


def test_week_start_keeps_time_of_day():
    assert get_week_start(datetime(2025, 3, 12, 15, 30)) == datetime(2025, 3, 9, 15, 30)


def test_week_start_crosses_month_boundary():
    # Saturday March 1st belongs to the week starting Sunday Feb 23rd
    assert get_week_start(date(2025, 3, 1)) == date(2025, 2, 23)


def test_week_end_is_saturday():
    assert get_week_end(date(2025, 3, 12)) == date(2025, 3, 15)


def test_week_bounds_for_every_day():
    start = date(2025, 2, 20)
    for offset in range(21):
        d = start + timedelta(days=offset)
        assert day_of_week(get_week_start(d)) == 0
        assert day_of_week(get_week_end(d)) == 6
        assert get_week_start(d) <= d <= get_week_end(d)


def test_week_dates_are_consecutive():
    dates = get_week_dates(date(2025, 3, 9))
    assert len(dates) == 7
    assert dates[0] == date(2025, 3, 9)
    for prev, cur in zip(dates, dates[1:]):
        assert cur - prev == timedelta(days=1)


def test_week_dates_does_not_require_sunday():
    dates = get_week_dates(date(2025, 3, 12))
    assert dates[0] == date(2025, 3, 12)
    assert dates[-1] == date(2025, 3, 18)


# ---- month windowing ----


@pytest.mark.parametrize(
    "year,month_index,length",
    [(2025, 1, 28), (2024, 1, 29), (2025, 0, 31), (2025, 3, 30), (2025, 11, 31)],
)
def test_month_lengths(year, month_index, length):
    assert len(get_month_dates(year, month_index)) == length


def test_month_dates_ascending():
    dates = get_month_dates(2025, 3)
    assert dates[0] == date(2025, 4, 1)
    assert dates[-1] == date(2025, 4, 30)
    assert dates == sorted(dates)


# ---- clock formatting ----


@pytest.mark.parametrize(
    "value,expected",
    [
        ("00:00", "12:00 AM"),
        ("12:00", "12:00 PM"),
        ("09:05", "9:05 AM"),
        ("13:45", "1:45 PM"),
        ("23:59", "11:59 PM"),
        ("11:30", "11:30 AM"),
    ],
)
def test_format_time(value, expected):
    assert format_time(value) == expected


@pytest.mark.parametrize("value", ["invalid", "12", "ab:cd", ""])
def test_format_time_returns_unparseable_unchanged(value):
    assert format_time(value) == value


def test_parse_clock():
    assert parse_clock("07:05") == (7, 5)
    assert parse_clock("7") is None
    assert parse_clock(None) is None


# ---- sleep ----


@pytest.mark.parametrize(
    "bed,wake,hours",
    [
        ("22:00", "06:00", 8),
        ("08:00", "16:00", 8),
        ("22:30", "06:45", 8.25),
        ("00:00", "07:30", 7.5),
        ("12:00", "12:00", 0),
    ],
)
def test_sleep_hours(bed, wake, hours):
    assert calculate_sleep_hours(bed, wake) == hours


def test_sleep_hours_one_minute_before_bed_wraps():
    assert calculate_sleep_hours("22:00", "21:59") == pytest.approx(23 + 59 / 60)


@pytest.mark.parametrize("bed,wake", [("invalid", "06:00"), ("22:00", "x"), ("", "")])
def test_sleep_hours_unparseable_is_zero(bed, wake):
    assert calculate_sleep_hours(bed, wake) == 0


# ---- names ----


def test_day_names():
    names = [get_day_name(d) for d in get_week_dates(date(2025, 3, 9))]
    assert names == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def test_month_name_and_year():
    assert get_month_name(date(2025, 1, 15)) == "January"
    assert get_month_name(date(2025, 12, 1)) == "December"
    assert get_month_year(date(2025, 3, 9)) == "March 2025"
