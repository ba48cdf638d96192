from typing import Optional
from database.db_manager import DatabaseManager
from models.transaction import Transaction


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            type=row["type"],
            amount=row["amount"],
            category=row["category"],
            description=row["description"],
            date=row["date"],
            recurrence=row["recurrence"],
            notes=row["notes"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def get_all(self) -> list[Transaction]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM transactions ORDER BY date ASC, id ASC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_filtered(
        self,
        month: str | None = None,
        type_filter: str | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> list[Transaction]:
        conn = self._db.get_connection()
        sql = "SELECT * FROM transactions WHERE 1=1"
        params: list = []

        if month:
            sql += " AND strftime('%Y-%m', date) = ?"
            params.append(month)
        if type_filter and type_filter != "all":
            sql += " AND type = ?"
            params.append(type_filter)
        if category:
            sql += " AND category = ?"
            params.append(category)
        if search:
            sql += " AND (description LIKE ? OR category LIKE ?)"
            params.extend([f"%{search}%", f"%{search}%"])

        sql += " ORDER BY date ASC, id ASC"
        rows = conn.execute(sql, params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_type(self, type_: str) -> list[Transaction]:
        return self.get_filtered(type_filter=type_)

    def get_recurring(self) -> list[Transaction]:
        """Rows carrying a recurrence other than 'none', newest first."""
        conn = self._db.get_connection()
        rows = conn.execute(
            """SELECT * FROM transactions
               WHERE recurrence IS NOT NULL AND recurrence != 'none'
               ORDER BY date DESC, id DESC"""
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_between(self, start: str, end: str, type_: str | None = None) -> list[Transaction]:
        """Rows dated in [start, end] (inclusive, YYYY-MM-DD)."""
        conn = self._db.get_connection()
        sql = "SELECT * FROM transactions WHERE date(date) BETWEEN ? AND ?"
        params: list = [start, end]
        if type_:
            sql += " AND type = ?"
            params.append(type_)
        rows = conn.execute(sql + " ORDER BY date ASC, id ASC", params).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, tx_id: int) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM transactions WHERE id = ?", (tx_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def find_exact(
        self,
        description: str,
        amount: float,
        date: str,
        type_: str,
        category: str,
        recurrence: str,
    ) -> Optional[Transaction]:
        """First row matching every identifying field on the same calendar day."""
        conn = self._db.get_connection()
        row = conn.execute(
            """SELECT * FROM transactions
               WHERE description = ? AND amount = ? AND date(date) = date(?)
                 AND type = ? AND category = ? AND recurrence = ?
               LIMIT 1""",
            (description, amount, date, type_, category, recurrence),
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        type_: str,
        amount: float,
        date: str,
        description: str = "",
        category: str = "",
        recurrence: str = "none",
        notes: str = "",
        commit: bool = True,
    ) -> Transaction:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO transactions
               (type, amount, category, description, date, recurrence, notes)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (type_, amount, category, description, date, recurrence, notes),
        )
        if commit:
            conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        tx_id: int,
        type_: str,
        amount: float,
        date: str,
        description: str = "",
        category: str = "",
        recurrence: str = "none",
        notes: str = "",
    ) -> Transaction:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE transactions
               SET type=?, amount=?, category=?, description=?, date=?,
                   recurrence=?, notes=?, updated_at=datetime('now')
               WHERE id=?""",
            (type_, amount, category, description, date, recurrence, notes, tx_id),
        )
        conn.commit()
        return self.get_by_id(tx_id)

    def rename_category(self, old_name: str, new_name: str):
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE transactions SET category=?, updated_at=datetime('now') WHERE category=?",
            (new_name, old_name),
        )
        conn.commit()

    def count_by_category(self, name: str) -> int:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT COUNT(*) AS n FROM transactions WHERE category = ?", (name,)
        ).fetchone()
        return row["n"]

    def delete(self, tx_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
        conn.commit()
