"""Tests for startup reminders."""
from datetime import date

REF = date(2024, 3, 10)


def test_reminders_sorted_by_severity(reminder_service, budget_service, tx_service,
                                      debt_service, category_dao):
    """Budget errors come first, then overdue debts, then information."""
    budget_service.create(category_dao.get_by_name("Food & Dining").id, 100.0)
    tx_service.create("expense", 150.0, "2024-03-05", "Food & Dining", description="Party")
    debt_service.create("Card", 500.0, 500.0, 50.0, "2024-03-01")
    debt_service.create("Phone", 300.0, 300.0, 20.0, "2024-03-11", creditor="Telco")
    tx_service.create("expense", 40.0, "2024-01-01", "Utilities",
                      description="Internet", recurrence="monthly")

    reminders = reminder_service.get_reminders(REF, upcoming_days=3, threshold=0.8)

    assert [r.type for r in reminders] == [
        "over_budget", "debt_overdue", "debt_due", "pending_recurring",
    ]
    assert reminders[2].title == "Phone payment due tomorrow"
    assert reminders[2].detail.endswith("Telco")
    assert reminders[3].title == "2 recurring transactions pending"


def test_near_budget_is_a_warning(reminder_service, budget_service, tx_service, category_dao):
    """Spending past the threshold but under the limit warns."""
    budget_service.create(category_dao.get_by_name("Transport").id, 100.0)
    tx_service.create("expense", 90.0, "2024-03-02", "Transport", description="Fuel")

    [reminder] = reminder_service.get_reminders(REF, threshold=0.8)

    assert (reminder.type, reminder.severity) == ("near_budget", "warning")


def test_far_and_paid_debts_are_quiet(reminder_service, debt_service):
    """Debts due beyond the window or already paid off raise nothing."""
    debt_service.create("Later", 500.0, 500.0, 50.0, "2024-04-01")
    debt_service.create("Done", 500.0, 0.0, 50.0, "2024-03-01")

    assert reminder_service.get_reminders(REF, upcoming_days=3) == []
