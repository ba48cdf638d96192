"""Tests for transaction validation, totals and queries."""
from datetime import date

import pytest


def test_create_normalizes_date_and_description(tx_service):
    """Dates are stored as YYYY-MM-DD and descriptions are trimmed."""
    tx = tx_service.create("income", 3000.0, "2024/03/01", "Salary", description="  Paycheck ")

    assert tx.date == "2024-03-01"
    assert tx.description == "Paycheck"
    assert tx.recurrence == "none"


@pytest.mark.parametrize("kwargs, message", [
    (dict(type_="gift"), "Invalid type"),
    (dict(description="  "), "Description cannot be empty"),
    (dict(amount=0), "Amount must be positive"),
    (dict(date="yesterday"), "Invalid date"),
    (dict(recurrence="hourly"), "Invalid recurrence"),
    (dict(category="Nope"), "Unknown category"),
    (dict(category="Salary"), "cannot be used for expense"),
])
def test_create_rejects_invalid_input(tx_service, kwargs, message):
    """Each invalid field raises ValueError with a readable message."""
    fields = dict(type_="expense", amount=10.0, date="2024-01-01",
                  category="Food & Dining", description="Lunch")
    fields.update(kwargs)
    with pytest.raises(ValueError, match=message):
        tx_service.create(**fields)


def test_both_category_accepts_either_type(tx_service):
    """A 'both' category works for income and expense."""
    tx_service.create("income", 20.0, "2024-01-01", "Other", description="Refund")
    tx_service.create("expense", 20.0, "2024-01-01", "Other", description="Gift")
    assert len(tx_service.get_all()) == 2


def test_get_totals_uses_monthly_equivalents(tx_service):
    """Recurring amounts are normalized to a monthly value."""
    tx_service.create("income", 1000.0, "2024-03-15", "Salary",
                      description="Paycheck", recurrence="biweekly")
    tx_service.create("expense", 100.0, "2024-03-02", "Food & Dining",
                      description="Groceries", recurrence="weekly")
    tx_service.create("expense", 1200.0, "2024-03-10", "Utilities",
                      description="Insurance", recurrence="yearly")
    tx_service.create("expense", 99.0, "2024-04-01", "Food & Dining", description="Next month")

    totals = tx_service.get_totals("2024-03")

    assert totals["income"] == pytest.approx(2000.0)
    assert totals["expense"] == pytest.approx(533.0)
    assert totals["net"] == pytest.approx(1467.0)


def test_update_and_delete(tx_service):
    """Updated fields persist and deleted rows disappear."""
    tx = tx_service.create("expense", 10.0, "2024-01-01", "Transport", description="Bus")

    updated = tx_service.update(tx.id, "expense", 12.5, "2024-01-02", "Transport",
                                description="Bus pass", recurrence="monthly")
    assert (updated.amount, updated.date, updated.recurrence) == (12.5, "2024-01-02", "monthly")

    tx_service.delete(tx.id)
    assert tx_service.get_by_id(tx.id) is None


def test_get_recent_newest_first(tx_service):
    """Recent transactions are ordered newest first and limited."""
    for day in (1, 3, 2):
        tx_service.create("expense", 5.0, f"2024-01-0{day}", "Other", description=f"Day {day}")

    recent = tx_service.get_recent(2)

    assert [t.date for t in recent] == ["2024-01-03", "2024-01-02"]


def test_upcoming_payments_window(tx_service):
    """Only expenses inside [ref, ref + days] are returned."""
    tx_service.create("expense", 5.0, "2024-01-09", "Other", description="Before")
    tx_service.create("expense", 5.0, "2024-01-10", "Other", description="Start")
    tx_service.create("expense", 5.0, "2024-01-20", "Other", description="End")
    tx_service.create("expense", 5.0, "2024-01-21", "Other", description="After")
    tx_service.create("income", 5.0, "2024-01-15", "Other", description="Income")

    upcoming = tx_service.upcoming_payments(days=10, ref_date=date(2024, 1, 10))

    assert [t.description for t in upcoming] == ["Start", "End"]


def test_filtered_search(tx_service):
    """Search matches description text within the month."""
    tx_service.create("expense", 5.0, "2024-01-01", "Food & Dining", description="Coffee beans")
    tx_service.create("expense", 5.0, "2024-01-02", "Transport", description="Taxi")

    rows = tx_service.get_filtered(month="2024-01", search="coffee")

    assert [t.description for t in rows] == ["Coffee beans"]


def test_income_and_expense_aggregates(tx_service):
    """Raw totals and per-category expense sums ignore recurrence."""
    tx_service.create("income", 1000.0, "2024-01-01", "Salary",
                      description="Paycheck", recurrence="biweekly")
    tx_service.create("expense", 40.0, "2024-01-02", "Transport", description="Fuel")
    tx_service.create("expense", 60.0, "2024-02-02", "Transport", description="Fuel")
    tx_service.create("expense", 25.0, "2024-02-03", "Other", description="Gift")

    assert tx_service.get_total_income() == 1000.0
    assert tx_service.get_total_expenses() == 125.0
    assert tx_service.expenses_by_category() == {"Transport": 100.0, "Other": 25.0}
