"""Tests for reading recurring series and storing their missing occurrences."""
from datetime import date

import pytest


@pytest.fixture
def internet(tx_service):
    return tx_service.create(
        "expense", 50.0, "2024-01-01", "Utilities",
        description="Internet", recurrence="monthly",
    )


class TestGetSeries:
    def test_rows_on_the_cadence_fold_into_the_first(self, tx_service, recurring_service, internet):
        """A later row on the same schedule is not listed as a new series."""
        tx_service.create("expense", 50.0, "2024-02-01", "Utilities",
                          description="Internet", recurrence="monthly")

        series = recurring_service.get_series()

        assert [s.id for s in series] == [internet.id]

    def test_one_off_rows_are_not_series(self, tx_service, recurring_service):
        """Rows without a recurrence never appear as series."""
        tx_service.create("expense", 12.0, "2024-01-05", "Food & Dining", description="Lunch")
        assert recurring_service.get_series() == []

    def test_different_amount_is_a_different_series(self, tx_service, recurring_service, internet):
        """The series key includes the amount."""
        tx_service.create("expense", 60.0, "2024-03-01", "Utilities",
                          description="Internet", recurrence="monthly")
        assert len(recurring_service.get_series()) == 2

    def test_same_key_on_another_weekday_is_its_own_series(self, tx_service, recurring_service):
        """Rows sharing a key but off each other's schedule are listed separately."""
        monday = tx_service.create("expense", 10.0, "2024-01-01", "Other",
                                   description="Gym", recurrence="weekly")
        tx_service.create("expense", 10.0, "2024-01-08", "Other",
                          description="Gym", recurrence="weekly")
        thursday = tx_service.create("expense", 10.0, "2024-01-04", "Other",
                                     description="Gym", recurrence="weekly")

        assert [s.id for s in recurring_service.get_series()] == [monday.id, thursday.id]


class TestPending:
    def test_get_pending_lists_missing_occurrences(self, recurring_service, internet):
        """Every month after the anchor up to the reference date is pending."""
        pending = recurring_service.get_pending(date(2024, 4, 15))

        assert [p.date for p in pending] == ["2024-02-01", "2024-03-01", "2024-04-01"]
        assert all(p.id.startswith(f"pending-{internet.id}-") for p in pending)

    def test_apply_pending_stores_rows(self, tx_dao, recurring_service, internet):
        """Generated rows are real transactions carrying the series fields."""
        created = recurring_service.apply_pending(date(2024, 3, 1))

        assert [t.date for t in created] == ["2024-02-01", "2024-03-01"]
        assert all(isinstance(t.id, int) for t in created)
        assert all(not t.is_pending for t in created)
        assert [t.date for t in tx_dao.get_all()] == ["2024-01-01", "2024-02-01", "2024-03-01"]

    def test_apply_pending_twice_creates_nothing_new(self, recurring_service, internet):
        """A second run on the same day has nothing left to generate."""
        recurring_service.apply_pending(date(2024, 3, 1))

        assert recurring_service.apply_pending(date(2024, 3, 1)) == []
        assert recurring_service.get_pending(date(2024, 3, 1)) == []

    def test_apply_pending_skips_exact_matches(self, monkeypatch, tx_dao, recurring_service, internet):
        """An existing identical row stops a duplicate insert."""
        pending = recurring_service.get_pending(date(2024, 2, 1))
        tx_dao.create(type_="expense", amount=50.0, date="2024-02-01",
                      description="Internet", category="Utilities", recurrence="monthly")
        monkeypatch.setattr(recurring_service, "get_pending", lambda ref=None: pending)

        assert recurring_service.apply_pending(date(2024, 2, 1)) == []
        assert len(tx_dao.get_all()) == 2

    def test_apply_pending_with_nothing_due(self, recurring_service, internet):
        """Nothing is generated before the first step."""
        assert recurring_service.apply_pending(date(2024, 1, 20)) == []

    def test_every_stored_row_keeps_its_own_cadence(self, tx_service, recurring_service):
        """Two same-key weekly rows on different weekdays both produce occurrences."""
        tx_service.create("expense", 10.0, "2024-01-01", "Other",
                          description="Gym", recurrence="weekly")
        tx_service.create("expense", 10.0, "2024-01-04", "Other",
                          description="Gym", recurrence="weekly")

        pending = recurring_service.get_pending(date(2024, 1, 12))

        assert [p.date for p in pending] == ["2024-01-08", "2024-01-11"]

    def test_overlapping_rows_list_each_date_once(self, tx_service, recurring_service, internet):
        """A stored occurrence and its anchor expect the same dates; each is pending once."""
        tx_service.create("expense", 50.0, "2024-02-01", "Utilities",
                          description="Internet", recurrence="monthly")

        pending = recurring_service.get_pending(date(2024, 4, 1))

        assert [p.date for p in pending] == ["2024-03-01", "2024-04-01"]

    def test_apply_pending_stores_both_cadences(self, tx_service, tx_dao, recurring_service):
        """Generation stores the occurrences of every same-key row, once each."""
        tx_service.create("expense", 10.0, "2024-01-01", "Other",
                          description="Gym", recurrence="weekly")
        tx_service.create("expense", 10.0, "2024-01-04", "Other",
                          description="Gym", recurrence="weekly")

        created = recurring_service.apply_pending(date(2024, 1, 19))

        assert sorted(t.date for t in created) == [
            "2024-01-08", "2024-01-11", "2024-01-15", "2024-01-18",
        ]
        assert recurring_service.apply_pending(date(2024, 1, 19)) == []


class TestNextDue:
    def test_stored_occurrences_keep_the_cadence(self, tx_service, recurring_service, internet):
        """The next due date is the first cadence date after the reference."""
        tx_service.create("expense", 50.0, "2024-02-01", "Utilities",
                          description="Internet", recurrence="monthly")
        assert recurring_service.next_due(internet, date(2024, 2, 10)) == date(2024, 3, 1)

    def test_steps_past_the_reference_date(self, recurring_service, internet):
        """Missed occurrences are skipped over."""
        assert recurring_service.next_due(internet, date(2024, 5, 1)) == date(2024, 6, 1)

    def test_future_row_is_next_due(self, tx_service, recurring_service):
        """A series starting after the reference date is due on its own date."""
        rent = tx_service.create("expense", 900.0, "2024-07-01", "Rent/Mortgage",
                                 description="Rent", recurrence="monthly")
        assert recurring_service.next_due(rent, date(2024, 6, 10)) == date(2024, 7, 1)

    def test_one_off_has_no_next_due(self, tx_service, recurring_service):
        """Non-recurring transactions return None."""
        tx = tx_service.create("expense", 9.0, "2024-01-01", "Other", description="Parking")
        assert recurring_service.next_due(tx, date(2024, 1, 2)) is None


class TestUpcomingDue:
    def test_lists_expense_series_due_in_window(self, tx_service, recurring_service, internet):
        """Recurring expenses next due within the window are returned soonest first."""
        tx_service.create("expense", 900.0, "2024-01-20", "Rent/Mortgage",
                          description="Rent", recurrence="monthly")
        tx_service.create("income", 3000.0, "2024-01-25", "Salary",
                          description="Paycheck", recurrence="monthly")
        tx_service.create("expense", 200.0, "2024-01-10", "Utilities",
                          description="Insurance", recurrence="yearly")

        due = recurring_service.upcoming_due(30, date(2024, 2, 5))

        assert [(tx.description, d) for tx, d in due] == [
            ("Rent", date(2024, 2, 20)),
            ("Internet", date(2024, 3, 1)),
        ]

    def test_nothing_due(self, recurring_service):
        """No recurring rows means nothing upcoming."""
        assert recurring_service.upcoming_due(30, date(2024, 2, 5)) == []
