"""Tests for report aggregates."""
from datetime import date

import pytest

REF = date(2024, 3, 15)


@pytest.fixture
def history(tx_service):
    tx_service.create("income", 3000.0, "2024-01-01", "Salary", description="Paycheck")
    tx_service.create("expense", 1000.0, "2024-01-05", "Rent/Mortgage",
                      description="Rent", recurrence="monthly")
    tx_service.create("income", 1000.0, "2024-02-15", "Salary",
                      description="Half pay", recurrence="biweekly")
    tx_service.create("expense", 300.0, "2024-02-10", "Food & Dining", description="Groceries")
    tx_service.create("expense", 5000.0, "2024-03-01", "Healthcare", description="Surgery")
    tx_service.create("income", 1000.0, "2024-03-02", "Freelance", description="Gig")


def test_monthly_totals(report_service, history):
    """Trailing months oldest first, with monthly-equivalent amounts."""
    rows = report_service.get_monthly_totals(3, REF)

    assert [r["month"] for r in rows] == ["2024-01", "2024-02", "2024-03"]
    assert [r["income"] for r in rows] == [3000.0, 2000.0, 1000.0]
    assert [r["expense"] for r in rows] == [1000.0, 300.0, 5000.0]
    assert [r["net"] for r in rows] == [2000.0, 1700.0, -4000.0]


def test_months_without_data_are_zero(report_service, history):
    """Empty months still appear in the series."""
    rows = report_service.get_monthly_totals(4, REF)
    assert rows[0] == {"month": "2023-12", "income": 0.0, "expense": 0.0, "net": 0.0}


def test_savings_rate_is_clamped(report_service, history):
    """Rates stay within [-100, 100] and are 0 without income."""
    rates = [r["rate"] for r in report_service.get_savings_rate_series(4, REF)]

    assert rates[0] == 0.0
    assert rates[1] == pytest.approx(2000 / 3000 * 100)
    assert rates[2] == pytest.approx(85.0)
    assert rates[3] == -100.0


def test_category_breakdown_largest_first(report_service, tx_service):
    """Expenses are grouped by category with their colors."""
    tx_service.create("expense", 40.0, "2024-03-01", "Transport", description="Bus")
    tx_service.create("expense", 60.0, "2024-03-02", "Food & Dining", description="Lunch")
    tx_service.create("expense", 30.0, "2024-03-03", "Food & Dining", description="Coffee")

    rows = report_service.get_category_breakdown("2024-03")

    assert [(r["category"], r["total"]) for r in rows] == [
        ("Food & Dining", 90.0), ("Transport", 40.0),
    ]
    assert rows[0]["color_hex"] == "#FF9800"


def test_financial_summary(report_service, history):
    """Totals use raw amounts and averages use the last six months."""
    summary = report_service.get_financial_summary(REF)

    assert summary["total_income"] == 5000.0
    assert summary["total_expenses"] == 6300.0
    assert summary["net_worth"] == -1300.0
    assert summary["avg_monthly_income"] == pytest.approx(6000.0 / 6)
    assert summary["avg_monthly_expense"] == pytest.approx(6300.0 / 6)
    assert summary["avg_savings_rate"] == pytest.approx(-5.0)


def test_expense_overview_splits_fixed_and_variable(report_service, history):
    """Recurring expenses count as fixed."""
    overview = report_service.get_expense_overview(REF)

    assert overview["fixed_count"] == 1
    assert overview["fixed_total"] == 1000.0
    assert overview["variable_count"] == 2
    assert overview["variable_total"] == 5300.0
    assert overview["total"] == 6300.0
    assert overview["monthly_average"] == pytest.approx(6300.0 / 6)


def test_summary_for_empty_month(report_service):
    """No transactions gives zero totals."""
    assert report_service.get_summary("2024-03") == {"income": 0, "expense": 0, "net": 0}
