import logging
from datetime import date, timedelta
from models.transaction import Transaction
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from utils.constants import RECURRENCES, TRANSACTION_TYPES
from utils.date_helpers import parse_date, format_date, today
from utils.recurrence import monthly_equivalent

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO, category_dao: CategoryDAO):
        self._dao = tx_dao
        self._category_dao = category_dao

    def get_all(self) -> list[Transaction]:
        return self._dao.get_all()

    def get_by_id(self, tx_id: int) -> Transaction | None:
        return self._dao.get_by_id(tx_id)

    def get_filtered(
        self,
        month: str | None = None,
        type_filter: str | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> list[Transaction]:
        return self._dao.get_filtered(month, type_filter, category, search)

    def get_incomes(self) -> list[Transaction]:
        return self._dao.get_by_type("income")

    def get_expenses(self) -> list[Transaction]:
        return self._dao.get_by_type("expense")

    def get_total_income(self) -> float:
        return sum(t.amount for t in self.get_incomes())

    def get_total_expenses(self) -> float:
        return sum(t.amount for t in self.get_expenses())

    def get_totals(self, month: str) -> dict:
        """Monthly-equivalent income/expense/net for one YYYY-MM month."""
        rows = self._dao.get_filtered(month=month)
        income = sum(monthly_equivalent(t.amount, t.recurrence) for t in rows if t.type == "income")
        expense = sum(monthly_equivalent(t.amount, t.recurrence) for t in rows if t.type == "expense")
        return {"income": income, "expense": expense, "net": income - expense}

    def get_recent(self, limit: int = 10) -> list[Transaction]:
        """Newest transactions first."""
        return list(reversed(self._dao.get_all()))[:limit]

    def upcoming_payments(self, days: int = 30, ref_date: date | None = None) -> list[Transaction]:
        """Expenses dated from ref_date (default: today) through ref_date + days."""
        ref = ref_date or today()
        return self._dao.get_between(
            format_date(ref), format_date(ref + timedelta(days=days)), type_="expense"
        )

    def expenses_by_category(self) -> dict[str, float]:
        totals: dict[str, float] = {}
        for tx in self.get_expenses():
            totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
        return totals

    def create(
        self,
        type_: str,
        amount: float,
        date: str,
        category: str,
        description: str = "",
        recurrence: str = "none",
        notes: str = "",
    ) -> Transaction:
        description = description.strip()
        self._validate(type_, amount, date, category, description, recurrence)
        tx = self._dao.create(
            type_=type_,
            amount=amount,
            date=format_date(parse_date(date)),
            description=description,
            category=category,
            recurrence=recurrence,
            notes=notes,
        )
        logger.info("Created %s transaction %s (%s)", type_, tx.id, recurrence)
        return tx

    def update(
        self,
        tx_id: int,
        type_: str,
        amount: float,
        date: str,
        category: str,
        description: str = "",
        recurrence: str = "none",
        notes: str = "",
    ) -> Transaction:
        description = description.strip()
        self._validate(type_, amount, date, category, description, recurrence)
        return self._dao.update(
            tx_id, type_, amount, format_date(parse_date(date)),
            description, category, recurrence, notes,
        )

    def delete(self, tx_id: int):
        self._dao.delete(tx_id)
        logger.info("Deleted transaction %s", tx_id)

    def _validate(self, type_, amount, date, category, description, recurrence):
        if type_ not in TRANSACTION_TYPES:
            raise ValueError(f"Invalid type: {type_}")
        if not description:
            raise ValueError("Description cannot be empty.")
        if amount <= 0:
            raise ValueError("Amount must be positive.")
        if not parse_date(date):
            raise ValueError("Invalid date format. Use YYYY-MM-DD.")
        if recurrence not in RECURRENCES:
            raise ValueError(f"Invalid recurrence: {recurrence}")
        if type_ != "transfer":
            cat = self._category_dao.get_by_name(category)
            if cat is None:
                raise ValueError(f"Unknown category: {category}")
            if not cat.accepts(type_):
                raise ValueError(f"Category '{category}' cannot be used for {type_}.")
