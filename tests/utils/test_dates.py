"""Tests for user date parsing."""

from datetime import datetime

import pytest

from diligence_cli.utils.dates import end_of_day, parse_date, start_of_day

NOW = datetime(2024, 3, 15, 14, 30)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", datetime(2024, 3, 15)),
        ("Tomorrow", datetime(2024, 3, 16)),
        ("+3d", datetime(2024, 3, 18)),
        ("+2w", datetime(2024, 3, 29)),
        ("+1m", datetime(2024, 4, 14)),
        ("2024-01-31", datetime(2024, 1, 31)),
        ("2024-01-31 08:15", datetime(2024, 1, 31, 8, 15)),
    ],
)
def test_parse_date(text, expected):
    assert parse_date(text, now=NOW) == expected


def test_aware_input_becomes_naive():
    parsed = parse_date("2024-01-31T08:00:00+02:00", now=NOW)
    assert parsed.tzinfo is None
    assert parsed == datetime(2024, 1, 31, 8, 0)


@pytest.mark.parametrize("text", ["someday", "2024-13-45", ""])
def test_invalid_dates(text):
    with pytest.raises(ValueError, match="Invalid date"):
        parse_date(text, now=NOW)


def test_start_of_day():
    assert start_of_day(NOW) == datetime(2024, 3, 15)


def test_end_of_day():
    assert end_of_day(NOW) == datetime(2024, 3, 15, 23, 59, 59, 999999)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", datetime(2024, 3, 15, 23, 59, 59, 999999)),
        ("tomorrow", datetime(2024, 3, 16, 23, 59, 59, 999999)),
        ("+3d", datetime(2024, 3, 18, 23, 59, 59, 999999)),
        ("2024-01-31", datetime(2024, 1, 31, 23, 59, 59, 999999)),
        ("Jan 31 2024", datetime(2024, 1, 31, 23, 59, 59, 999999)),
        ("2024-01-31 08:15", datetime(2024, 1, 31, 8, 15)),
        ("2024-01-31 00:00", datetime(2024, 1, 31, 0, 0)),
        ("2024-01-31T23:30:00", datetime(2024, 1, 31, 23, 30)),
    ],
)
def test_inclusive_parse_covers_whole_day(text, expected):
    assert parse_date(text, now=NOW, inclusive=True) == expected
