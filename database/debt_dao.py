from typing import Optional
from database.db_manager import DatabaseManager
from models.debt import Debt


class DebtDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Debt:
        return Debt(
            id=row["id"],
            description=row["description"],
            total_amount=row["total_amount"],
            remaining_amount=row["remaining_amount"],
            payment_amount=row["payment_amount"],
            next_payment_date=row["next_payment_date"],
            frequency=row["frequency"],
            creditor=row["creditor"],
            interest_rate=row["interest_rate"],
            interest_frequency=row["interest_frequency"],
            created_at=row["created_at"],
        )

    def get_all(self) -> list[Debt]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM debts ORDER BY next_payment_date ASC, id ASC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, debt_id: int) -> Optional[Debt]:
        conn = self._db.get_connection()
        row = conn.execute("SELECT * FROM debts WHERE id = ?", (debt_id,)).fetchone()
        return self._row_to_model(row) if row else None

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
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO debts
               (description, total_amount, remaining_amount, payment_amount,
                next_payment_date, frequency, creditor, interest_rate, interest_frequency)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                description, total_amount, remaining_amount, payment_amount,
                next_payment_date, frequency, creditor, interest_rate, interest_frequency,
            ),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

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
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE debts
               SET description=?, total_amount=?, remaining_amount=?, payment_amount=?,
                   next_payment_date=?, frequency=?, creditor=?, interest_rate=?,
                   interest_frequency=?
               WHERE id=?""",
            (
                description, total_amount, remaining_amount, payment_amount,
                next_payment_date, frequency, creditor, interest_rate,
                interest_frequency, debt_id,
            ),
        )
        conn.commit()
        return self.get_by_id(debt_id)

    def apply_payment(self, debt_id: int, remaining_amount: float, next_payment_date: str):
        """Store the post-payment balance and due date. Caller commits."""
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE debts SET remaining_amount=?, next_payment_date=? WHERE id=?",
            (remaining_amount, next_payment_date, debt_id),
        )

    def delete(self, debt_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM debts WHERE id = ?", (debt_id,))
        conn.commit()
