"""Tests for date parsing and month arithmetic helpers."""
from datetime import date, datetime

import pytest

from utils.date_helpers import (
    add_months_rollover,
    epoch_millis,
    format_display_date,
    month_range,
    next_month,
    parse_date,
    parse_display_date,
    prev_month,
    trailing_months,
)


@pytest.mark.parametrize("value, expected", [
    ("2024-02-29", date(2024, 2, 29)),
    ("2024-02-29T23:59:59", date(2024, 2, 29)),
    ("2024/02/29", date(2024, 2, 29)),
    (datetime(2024, 2, 29, 8, 30), date(2024, 2, 29)),
    (date(2024, 2, 29), date(2024, 2, 29)),
    ("2023-02-29", None),
    ("", None),
    (None, None),
])
def test_parse_date(value, expected):
    assert parse_date(value) == expected


def test_add_months_rollover():
    assert add_months_rollover(date(2024, 1, 31), 1) == date(2024, 3, 2)
    assert add_months_rollover(date(2024, 12, 15), 1) == date(2025, 1, 15)
    assert add_months_rollover(date(2024, 3, 15), -6) == date(2023, 9, 15)
    assert add_months_rollover(date(2024, 5, 31), 12) == date(2025, 5, 31)


def test_epoch_millis_is_utc_midnight():
    assert epoch_millis(date(1970, 1, 1)) == 0
    assert epoch_millis(date(2024, 2, 1)) == 1706745600000


def test_month_navigation():
    assert prev_month("2024-01") == "2023-12"
    assert next_month("2024-12") == "2025-01"
    assert month_range("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert trailing_months(date(2024, 2, 10), 3) == ["2023-12", "2024-01", "2024-02"]
    with pytest.raises(ValueError):
        prev_month("2024-13")


def test_display_dates():
    assert format_display_date("2024-03-05", "DD.MM.YYYY") == "05.03.2024"
    assert parse_display_date("05/03/2024", "DD/MM/YYYY") == date(2024, 3, 5)
    assert parse_display_date("2024-03-05", "MM/DD/YYYY") == date(2024, 3, 5)
    assert parse_display_date("", "MM/DD/YYYY") is None
