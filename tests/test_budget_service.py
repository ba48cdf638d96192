"""Tests for budget limits, normalization and status."""
import pytest

from models.budget import Budget


@pytest.fixture
def food_id(category_dao):
    return category_dao.get_by_name("Food & Dining").id


def test_yearly_limit_is_normalized_to_monthly(budget_service, tx_service, food_id):
    """A yearly limit compares against a twelfth of itself each month."""
    budget_service.create(food_id, 1200.0, "yearly")
    tx_service.create("expense", 25.0, "2024-03-04", "Food & Dining",
                      description="Groceries", recurrence="weekly")

    [budget] = budget_service.get_budget_status("2024-03")

    assert budget.monthly_limit == pytest.approx(100.0)
    assert budget.spent_amount == pytest.approx(108.25)
    assert budget.status(0.8) == "over"


def test_overview_counts(budget_service, tx_service, category_dao, food_id):
    """Over and near budgets are counted separately."""
    transport_id = category_dao.get_by_name("Transport").id
    budget_service.create(food_id, 100.0)
    budget_service.create(transport_id, 100.0)
    tx_service.create("expense", 120.0, "2024-03-01", "Food & Dining", description="Party")
    tx_service.create("expense", 85.0, "2024-03-01", "Transport", description="Fuel")

    overview = budget_service.get_overview("2024-03", threshold=0.8)

    assert overview["total_budgeted"] == pytest.approx(200.0)
    assert overview["total_spent"] == pytest.approx(205.0)
    assert (overview["over_count"], overview["near_count"]) == (1, 1)


def test_other_months_do_not_count(budget_service, tx_service, food_id):
    """Spending outside the month is ignored."""
    budget_service.create(food_id, 100.0)
    tx_service.create("expense", 80.0, "2024-02-28", "Food & Dining", description="Dinner")

    [budget] = budget_service.get_budget_status("2024-03")

    assert budget.spent_amount == 0.0
    assert budget.status(0.8) == "ok"


def test_create_rejects_duplicates_and_income_categories(budget_service, category_dao, food_id):
    """One budget per category, and only on expense categories."""
    budget_service.create(food_id, 100.0)
    with pytest.raises(ValueError, match="already exists"):
        budget_service.create(food_id, 50.0)

    salary_id = category_dao.get_by_name("Salary").id
    with pytest.raises(ValueError, match="expense categories"):
        budget_service.create(salary_id, 50.0)


@pytest.mark.parametrize("limit, period", [(-1.0, "monthly"), (10.0, "daily")])
def test_create_rejects_invalid_limit_or_period(budget_service, food_id, limit, period):
    """Negative limits and unknown periods are refused."""
    with pytest.raises(ValueError):
        budget_service.create(food_id, limit, period)


def test_update_and_delete(budget_service, food_id):
    """Budgets can be changed and removed."""
    budget = budget_service.create(food_id, 100.0)

    updated = budget_service.update(budget.id, 50.0, "weekly")
    assert (updated.limit_amount, updated.period) == (50.0, "weekly")

    budget_service.delete(budget.id)
    assert budget_service.get_budget_status("2024-03") == []


class TestBudgetModel:
    def test_status_thresholds(self):
        """Status moves from ok to near to over as spending grows."""
        budget = Budget(id=1, category_id=1, category_name="Food", limit_amount=100.0,
                        monthly_limit=100.0)
        budget.spent_amount = 80.0
        assert budget.status(0.8) == "ok"
        budget.spent_amount = 80.5
        assert budget.status(0.8) == "near"
        budget.spent_amount = 100.5
        assert budget.status(0.8) == "over"

    def test_zero_limit(self):
        """A zero limit never divides by zero."""
        budget = Budget(id=1, category_id=1, category_name="Food", limit_amount=0.0,
                        spent_amount=10.0)
        assert budget.percent_used == 0.0
        assert budget.remaining == 0.0
