import logging
from datetime import date
from database.db_manager import DatabaseManager
from database.debt_dao import DebtDAO
from database.transaction_dao import TransactionDAO
from models.debt import Debt
from models.transaction import Transaction
from utils.constants import DEBT_CATEGORY, RECURRENCES
from utils.date_helpers import parse_date, format_date, today
from utils.recurrence import monthly_equivalent, next_occurrence

logger = logging.getLogger(__name__)


class DebtService:
    def __init__(self, db: DatabaseManager, debt_dao: DebtDAO, tx_dao: TransactionDAO):
        self._db = db
        self._dao = debt_dao
        self._tx_dao = tx_dao

    def get_all(self) -> list[Debt]:
        return self._dao.get_all()

    def get_by_id(self, debt_id: int) -> Debt | None:
        return self._dao.get_by_id(debt_id)

    def create(
        self,
        description: str,
        total_amount: float,
        remaining_amount: float,
        payment_amount: float,
        next_payment_date: str,
        frequency: str = "monthly",
        creditor: str = "",
        interest_rate: float | None = None,
        interest_frequency: str = "monthly",
    ) -> Debt:
        description = description.strip()
        self._validate(description, total_amount, remaining_amount, payment_amount,
                       next_payment_date, frequency)
        debt = self._dao.create(
            description=description,
            total_amount=total_amount,
            remaining_amount=remaining_amount,
            payment_amount=payment_amount,
            next_payment_date=format_date(parse_date(next_payment_date)),
            frequency=frequency,
            creditor=creditor.strip(),
            interest_rate=interest_rate,
            interest_frequency=interest_frequency,
        )
        logger.info("Created debt %s (%s)", debt.id, description)
        return debt

    def update(
        self,
        debt_id: int,
        description: str,
        total_amount: float,
        remaining_amount: float,
        payment_amount: float,
        next_payment_date: str,
        frequency: str = "monthly",
        creditor: str = "",
        interest_rate: float | None = None,
        interest_frequency: str = "monthly",
    ) -> Debt:
        description = description.strip()
        self._validate(description, total_amount, remaining_amount, payment_amount,
                       next_payment_date, frequency)
        return self._dao.update(
            debt_id=debt_id,
            description=description,
            total_amount=total_amount,
            remaining_amount=remaining_amount,
            payment_amount=payment_amount,
            next_payment_date=format_date(parse_date(next_payment_date)),
            frequency=frequency,
            creditor=creditor.strip(),
            interest_rate=interest_rate,
            interest_frequency=interest_frequency,
        )

    def delete(self, debt_id: int):
        self._dao.delete(debt_id)

    def register_payment(
        self,
        debt_id: int,
        amount: float,
        on_date: date | None = None,
        notes: str = "",
    ) -> tuple[Debt, Transaction]:
        """
        Record a payment: lower the remaining balance (never below zero), move the
        next payment date one step along the debt's frequency, and book the payment
        as an expense in the Debts category.
        """
        debt = self._dao.get_by_id(debt_id)
        if debt is None:
            raise ValueError("Debt not found.")
        if amount <= 0:
            raise ValueError("Payment amount must be positive.")

        paid_on = on_date or today()
        remaining = max(0.0, debt.remaining_amount - amount)
        current_due = parse_date(debt.next_payment_date) or paid_on
        next_due = next_occurrence(current_due, debt.frequency)

        with self._db.write_transaction():
            self._dao.apply_payment(debt_id, remaining, format_date(next_due))
            tx = self._tx_dao.create(
                type_="expense",
                amount=amount,
                date=format_date(paid_on),
                description=f"Payment: {debt.description}",
                category=DEBT_CATEGORY,
                notes=notes,
                commit=False,
            )

        logger.info("Registered payment of %.2f on debt %s; %.2f remaining", amount, debt_id, remaining)
        return self._dao.get_by_id(debt_id), tx

    def get_summary(self) -> dict:
        debts = self._dao.get_all()
        total = sum(d.total_amount for d in debts)
        remaining = sum(d.remaining_amount for d in debts)
        return {
            "total_debt": total,
            "total_remaining": remaining,
            "total_monthly": sum(
                monthly_equivalent(d.payment_amount, d.frequency) for d in debts
            ),
            "paid_percentage": (total - remaining) / total * 100 if total > 0 else 0.0,
        }

    def _validate(self, description, total_amount, remaining_amount, payment_amount,
                  next_payment_date, frequency):
        if not description:
            raise ValueError("Description cannot be empty.")
        if total_amount <= 0:
            raise ValueError("Total amount must be positive.")
        if remaining_amount < 0 or remaining_amount > total_amount:
            raise ValueError("Remaining amount must be between 0 and the total amount.")
        if payment_amount <= 0:
            raise ValueError("Payment amount must be positive.")
        if not parse_date(next_payment_date):
            raise ValueError("Invalid next payment date.")
        if frequency not in RECURRENCES:
            raise ValueError(f"Invalid frequency: {frequency}")
