"""Unit tests for the recurrence engine (pure functions, fixed dates)."""
from datetime import date, datetime, timedelta

import pytest

from utils.date_helpers import last_day_of_month
from utils.recurrence import (
    expected_dates,
    is_due,
    is_recurring,
    monthly_equivalent,
    next_occurrence,
    normalize_recurrence,
    pending_id,
    pending_transactions,
    recurrence_key,
    recurrence_label,
)


# ── Monthly normalizer ────────────────────────────────────────────────────────

@pytest.mark.parametrize("amount", [0.0, 1.0, 99.99, 1234.5, -20.0])
def test_monthly_equivalent_identity_for_none_and_monthly(amount):
    assert monthly_equivalent(amount, "none") == amount
    assert monthly_equivalent(amount, "monthly") == amount


@pytest.mark.parametrize("amount, recurrence, expected", [
    (100, "daily", 3000),
    (100, "weekly", 433),
    (100, "biweekly", 200),
    (300, "quarterly", 100),
    (1200, "yearly", 100),
])
def test_monthly_equivalent_multiplier_table(amount, recurrence, expected):
    assert monthly_equivalent(amount, recurrence) == pytest.approx(expected)


@pytest.mark.parametrize("recurrence", [None, "", "fortnightly", "MONTHLY"])
def test_monthly_equivalent_unknown_kind_is_unchanged(recurrence):
    assert monthly_equivalent(75.0, recurrence) == 75.0


def test_normalize_recurrence_falls_back_to_none():
    assert normalize_recurrence("weekly") == "weekly"
    assert normalize_recurrence("sometimes") == "none"
    assert normalize_recurrence(None) == "none"
    assert not is_recurring("sometimes")
    assert is_recurring("yearly")


def test_recurrence_label():
    assert recurrence_label("biweekly") == "Twice monthly (15th & last day)"
    assert recurrence_label(None) == "No recurrence"


# ── Date engine ───────────────────────────────────────────────────────────────

def test_next_occurrence_simple_steps():
    base = date(2024, 3, 10)
    assert next_occurrence(base, "daily") == date(2024, 3, 11)
    assert next_occurrence(base, "weekly") == date(2024, 3, 17)
    assert next_occurrence(base, "monthly") == date(2024, 4, 10)
    assert next_occurrence(base, "quarterly") == date(2024, 6, 10)
    assert next_occurrence(base, "yearly") == date(2025, 3, 10)


def test_next_occurrence_crosses_year_end():
    assert next_occurrence(date(2023, 12, 31), "daily") == date(2024, 1, 1)
    assert next_occurrence(date(2023, 11, 15), "quarterly") == date(2024, 2, 15)


def test_next_occurrence_none_returns_base():
    base = date(2024, 5, 5)
    assert next_occurrence(base, "none") == base
    assert next_occurrence(base, "whenever") == base


def test_month_step_rolls_over_short_months():
    # missing days overflow into the next month instead of clamping
    assert next_occurrence(date(2023, 1, 31), "monthly") == date(2023, 3, 3)
    assert next_occurrence(date(2024, 1, 31), "monthly") == date(2024, 3, 2)
    assert next_occurrence(date(2024, 2, 29), "yearly") == date(2025, 3, 1)
    assert next_occurrence(date(2023, 11, 30), "quarterly") == date(2024, 3, 1)


def test_biweekly_concrete_cases():
    assert next_occurrence(date(2024, 2, 10), "biweekly") == date(2024, 2, 15)
    assert next_occurrence(date(2024, 2, 15), "biweekly") == date(2024, 2, 29)
    assert next_occurrence(date(2024, 2, 29), "biweekly") == date(2024, 3, 15)


def test_biweekly_non_leap_february_and_december():
    assert next_occurrence(date(2023, 2, 20), "biweekly") == date(2023, 2, 28)
    assert next_occurrence(date(2023, 12, 31), "biweekly") == date(2024, 1, 15)


def test_biweekly_always_lands_on_an_anchor_day():
    d = date(2023, 1, 1)
    while d < date(2025, 1, 1):
        nxt = next_occurrence(d, "biweekly")
        assert nxt > d
        assert nxt.day in (15, last_day_of_month(nxt.year, nxt.month))
        d += timedelta(days=1)


def test_is_due():
    today = date(2024, 4, 1)
    assert is_due(date(2024, 3, 1), "monthly", today)
    assert not is_due(date(2024, 3, 15), "monthly", today)
    assert not is_due(date(2020, 1, 1), "none", today)


# ── Generator ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("recurrence", ["none", None, "bogus"])
def test_expected_dates_terminates_for_non_recurring(recurrence):
    assert expected_dates(date(2024, 1, 1), recurrence, date(2030, 1, 1)) == []


@pytest.mark.parametrize("recurrence", ["daily", "weekly", "biweekly", "monthly", "quarterly", "yearly"])
def test_expected_dates_are_bounded_and_ascending(recurrence):
    start, limit = date(2023, 1, 31), date(2024, 6, 30)
    dates = expected_dates(start, recurrence, limit)
    assert dates
    assert all(start < d <= limit for d in dates)
    assert all(a < b for a, b in zip(dates, dates[1:]))


def test_expected_dates_excludes_start_and_includes_limit():
    dates = expected_dates(date(2024, 1, 1), "monthly", date(2024, 4, 1))
    assert dates == [date(2024, 2, 1), date(2024, 3, 1), date(2024, 4, 1)]


def test_expected_dates_limit_before_start():
    assert expected_dates(date(2024, 5, 1), "daily", date(2024, 4, 1)) == []


def test_expected_dates_accepts_datetimes():
    dates = expected_dates(datetime(2024, 1, 1, 9, 0), "monthly", datetime(2024, 3, 1, 0, 30))
    assert dates == [date(2024, 2, 1), date(2024, 3, 1)]


# ── Reconciler ────────────────────────────────────────────────────────────────

def test_pending_fills_gaps(make_tx):
    series = make_tx(id=7, date="2024-01-01")
    existing = [series, make_tx(id=8, date="2024-03-01")]

    pending = pending_transactions([series], existing, date(2024, 4, 1))

    assert [p.date for p in pending] == ["2024-02-01", "2024-04-01"]
    assert all(p.is_pending for p in pending)
    assert all(recurrence_key(p) == recurrence_key(series) for p in pending)


def test_pending_id_format(make_tx):
    series = make_tx(id=42, date="2024-01-01")
    pending = pending_transactions([series], [series], date(2024, 2, 1))

    assert [p.id for p in pending] == ["pending-42-1706745600000"]
    assert pending_id(42, date(2024, 2, 1)) == "pending-42-1706745600000"


def test_pending_is_idempotent_and_does_not_mutate_inputs(make_tx):
    series = make_tx(date="2024-01-15", recurrence="weekly")
    all_tx = [series]
    today = date(2024, 3, 1)

    first = pending_transactions([series], all_tx, today)
    second = pending_transactions([series], all_tx, today)

    assert first == second
    assert series.date == "2024-01-15"
    assert not series.is_pending
    assert all_tx == [series]


def test_pending_empty_when_everything_is_recorded(make_tx):
    series = make_tx(date="2024-01-01")
    all_tx = [make_tx(id=i, date=f"2024-0{i}-01") for i in range(1, 5)]
    assert pending_transactions([series], all_tx, date(2024, 4, 20)) == []


def test_pending_ignores_time_of_day(make_tx):
    series = make_tx(date="2024-01-01")
    recorded = make_tx(id=2, date="2024-02-01T18:30:00")
    assert pending_transactions([series], [series, recorded], date(2024, 2, 10)) == []


def test_pending_requires_exact_key_match(make_tx):
    series = make_tx(date="2024-01-01", amount=50.0)
    edited = make_tx(id=2, date="2024-02-01", amount=55.0)

    pending = pending_transactions([series], [series, edited], date(2024, 2, 1))

    assert [p.date for p in pending] == ["2024-02-01"]


def test_pending_skips_non_recurring_and_bad_dates(make_tx):
    one_off = make_tx(recurrence="none")
    broken = make_tx(id=2, date="not a date")
    assert pending_transactions([one_off, broken], [], date(2024, 6, 1)) == []


def test_pending_keeps_series_order(make_tx):
    rent = make_tx(id=1, description="Rent", amount=900.0, date="2024-03-01")
    gym = make_tx(id=2, description="Gym", amount=30.0, date="2024-02-20", recurrence="weekly")

    pending = pending_transactions([rent, gym], [rent, gym], date(2024, 4, 1))

    assert [p.description for p in pending] == ["Rent", "Gym", "Gym", "Gym", "Gym", "Gym"]
    assert [p.date for p in pending if p.description == "Gym"] == [
        "2024-02-27", "2024-03-05", "2024-03-12", "2024-03-19", "2024-03-26",
    ]


def test_pending_empty_inputs():
    assert pending_transactions([], [], date(2024, 1, 1)) == []


def test_pending_accepts_a_datetime_today(make_tx):
    series = make_tx(date="2024-01-01")
    pending = pending_transactions([series], [series], datetime(2024, 3, 1, 23, 15))
    assert [p.date for p in pending] == ["2024-02-01", "2024-03-01"]


def test_pending_does_not_merge_series_sharing_a_key(make_tx):
    first = make_tx(id=1, date="2024-01-01")
    second = make_tx(id=2, date="2024-02-01")
    pending = pending_transactions([first, second], [first, second], date(2024, 3, 1))
    assert [p.id for p in pending] == [pending_id(1, date(2024, 3, 1)), pending_id(2, date(2024, 3, 1))]
