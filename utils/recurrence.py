"""Recurrence engine: monthly normalisation, next-date rules and pending-occurrence reconciliation.

Everything here is pure. Callers pass "today" explicitly and get new objects
back; input lists are never mutated.
"""
from dataclasses import replace
from datetime import date, datetime, timedelta

from models.transaction import Transaction
from utils.constants import (
    BIWEEKLY_MID_DAY,
    DAY_STEPS,
    MONTH_STEPS,
    MONTHLY_DIVISORS,
    MONTHLY_MULTIPLIERS,
    RECURRENCE_LABELS,
    RECURRENCE_NONE,
    RECURRENCES,
)
from utils.date_helpers import add_months_rollover, epoch_millis, last_day_of_month, parse_date


def normalize_recurrence(recurrence: str | None) -> str:
    """Map missing or unrecognized recurrence values to 'none'."""
    return recurrence if recurrence in RECURRENCES else RECURRENCE_NONE


def recurrence_label(recurrence: str | None) -> str:
    if not recurrence or recurrence == RECURRENCE_NONE:
        return RECURRENCE_LABELS[RECURRENCE_NONE]
    return RECURRENCE_LABELS.get(recurrence, recurrence)


def is_recurring(recurrence: str | None) -> bool:
    return normalize_recurrence(recurrence) != RECURRENCE_NONE


# ── Monthly normalizer ────────────────────────────────────────────────────────

def monthly_equivalent(amount: float, recurrence: str | None) -> float:
    """Convert an amount charged every `recurrence` into a per-month value.

    none, monthly and unrecognized kinds return the amount unchanged.
    """
    if recurrence in MONTHLY_MULTIPLIERS:
        return amount * MONTHLY_MULTIPLIERS[recurrence]
    if recurrence in MONTHLY_DIVISORS:
        return amount / MONTHLY_DIVISORS[recurrence]
    return amount


# ── Date engine ───────────────────────────────────────────────────────────────

def next_biweekly_date(base: date) -> date:
    """Twice-monthly schedule pinned to the 15th and the last day of each month."""
    last = last_day_of_month(base.year, base.month)
    if base.day < BIWEEKLY_MID_DAY:
        return base.replace(day=BIWEEKLY_MID_DAY)
    if base.day < last:
        return base.replace(day=last)
    if base.month == 12:
        return date(base.year + 1, 1, BIWEEKLY_MID_DAY)
    return date(base.year, base.month + 1, BIWEEKLY_MID_DAY)


def next_occurrence(base: date, recurrence: str | None) -> date:
    """Return the occurrence following `base`; `base` itself for none/unknown kinds."""
    if recurrence == "biweekly":
        return next_biweekly_date(base)
    if recurrence in DAY_STEPS:
        return base + timedelta(days=DAY_STEPS[recurrence])
    if recurrence in MONTH_STEPS:
        return add_months_rollover(base, MONTH_STEPS[recurrence])
    return base


def is_due(last_date: date, recurrence: str | None, today: date) -> bool:
    """True when the occurrence after `last_date` falls on or before `today`."""
    if not is_recurring(recurrence):
        return False
    return next_occurrence(last_date, recurrence) <= today


# ── Expected-occurrence generator ─────────────────────────────────────────────

def expected_dates(
    start: date | datetime, recurrence: str | None, limit: date | datetime
) -> list[date]:
    """All occurrences after `start` up to and including `limit`, ascending.

    datetime arguments are reduced to their calendar date.
    """
    start, limit = parse_date(start), parse_date(limit)
    if not is_recurring(recurrence) or start is None or limit is None:
        return []

    dates: list[date] = []
    current = start
    while current <= limit:
        following = next_occurrence(current, recurrence)
        if following <= current:
            # a step that does not advance would never reach limit
            break
        current = following
        if current <= limit:
            dates.append(current)
    return dates


# ── Pending-transaction reconciler ────────────────────────────────────────────

def recurrence_key(tx: Transaction) -> tuple:
    """Series identity: exact match on description, category, amount, type and recurrence."""
    return (tx.description, tx.category, tx.amount, tx.type, tx.recurrence)


def pending_id(original_id, occurrence: date) -> str:
    return f"pending-{original_id}-{epoch_millis(occurrence)}"


def pending_transactions(
    recurring_series: list[Transaction],
    all_transactions: list[Transaction],
    today: date | datetime,
) -> list[Transaction]:
    """Synthesize the occurrences of each series that have no stored transaction yet.

    For every series record, expected dates run from the record's own date
    (exclusive) to `today` (inclusive). A date counts as covered when any
    transaction sharing the series key falls on the same calendar day.
    Results keep the order of `recurring_series`, ascending by date within
    a series, and are marked with `is_pending=True`. A datetime `today`
    counts as its calendar date.
    """
    today = parse_date(today)
    pending: list[Transaction] = []
    if today is None:
        return pending

    for series in recurring_series:
        if not is_recurring(series.recurrence):
            continue
        start = parse_date(series.date)
        if start is None:
            continue

        key = recurrence_key(series)
        existing = {
            parse_date(t.date) for t in all_transactions if recurrence_key(t) == key
        }

        for occurrence in expected_dates(start, series.recurrence, today):
            if occurrence in existing:
                continue
            pending.append(replace(
                series,
                id=pending_id(series.id, occurrence),
                date=occurrence.isoformat(),
                is_pending=True,
            ))

    return pending
