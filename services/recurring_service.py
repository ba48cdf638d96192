import logging
from datetime import date, timedelta
from models.transaction import Transaction
from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from utils.date_helpers import parse_date, today
from utils.recurrence import (
    expected_dates, is_recurring, next_occurrence, pending_transactions, recurrence_key,
)

logger = logging.getLogger(__name__)


class RecurringService:
    """Reads recurring series from storage and persists their missing occurrences."""

    def __init__(self, db: DatabaseManager, tx_dao: TransactionDAO):
        self._db = db
        self._tx_dao = tx_dao

    def get_series(self) -> list[Transaction]:
        """One row per distinct cadence, for display.

        A recurring row is folded into an earlier row with the same key when its
        date is one of that row's expected occurrences. Rows sharing a key but
        running on another schedule (e.g. a different weekday) stay separate.
        """
        rows = list(reversed(self._tx_dao.get_recurring()))
        dates = [d for d in (parse_date(tx.date) for tx in rows) if d]
        if not dates:
            return []
        limit = max(dates)

        anchors: list[Transaction] = []
        cadences: dict[tuple, list[set[date]]] = {}
        for tx in rows:
            d = parse_date(tx.date)
            if d is None:
                continue
            key = recurrence_key(tx)
            if any(d in cadence for cadence in cadences.get(key, [])):
                continue
            anchors.append(tx)
            cadences.setdefault(key, []).append(set(expected_dates(d, tx.recurrence, limit)))
        return anchors

    def get_pending(self, reference_date: date | None = None) -> list[Transaction]:
        """Occurrences due up to reference_date (default: today) with no stored row.

        Every stored recurring row is reconciled as its own series. Rows of one
        key produce overlapping expectations, so the result keeps the first
        pending record per (key, date).
        """
        ref = reference_date or today()
        recurring = list(reversed(self._tx_dao.get_recurring()))
        pending: list[Transaction] = []
        seen: set[tuple] = set()
        for p in pending_transactions(recurring, self._tx_dao.get_all(), ref):
            slot = (recurrence_key(p), p.date)
            if slot not in seen:
                seen.add(slot)
                pending.append(p)
        return pending

    def apply_pending(self, reference_date: date | None = None) -> list[Transaction]:
        """
        Store every pending occurrence that has no exact-match row yet.
        Returns the newly created transactions.
        """
        ref = reference_date or today()
        pending = self.get_pending(ref)
        created: list[Transaction] = []

        with self._db.write_transaction():
            for p in pending:
                existing = self._tx_dao.find_exact(
                    description=p.description,
                    amount=p.amount,
                    date=p.date,
                    type_=p.type,
                    category=p.category,
                    recurrence=p.recurrence,
                )
                if existing:
                    logger.debug("Skipping %s: already stored as %s", p.id, existing.id)
                    continue
                created.append(self._tx_dao.create(
                    type_=p.type,
                    amount=p.amount,
                    date=p.date,
                    description=p.description,
                    category=p.category,
                    recurrence=p.recurrence,
                    notes=p.notes,
                    commit=False,
                ))

        logger.info(
            "Generated %d recurring transaction(s) from %d pending", len(created), len(pending)
        )
        return created

    def next_due(self, tx: Transaction, reference_date: date | None = None) -> date | None:
        """First occurrence of tx's cadence after reference_date (default: today).

        A row dated after reference_date is itself the next occurrence.
        """
        if not is_recurring(tx.recurrence):
            return None
        current = parse_date(tx.date)
        if current is None:
            return None
        ref = reference_date or today()
        while current <= ref:
            following = next_occurrence(current, tx.recurrence)
            if following <= current:
                return None
            current = following
        return current

    def upcoming_due(
        self, days: int = 30, reference_date: date | None = None
    ) -> list[tuple[Transaction, date]]:
        """(series, due date) for recurring expenses next due within `days`, soonest first."""
        ref = reference_date or today()
        horizon = ref + timedelta(days=days)
        due = []
        for tx in self.get_series():
            if tx.type != "expense":
                continue
            next_date = self.next_due(tx, ref)
            if next_date is not None and next_date <= horizon:
                due.append((tx, next_date))
        return sorted(due, key=lambda item: item[1])
