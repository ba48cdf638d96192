from typing import Optional
from database.db_manager import DatabaseManager
from models.budget import Budget


class BudgetDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    _SELECT = """
        SELECT b.*, c.name AS category_name, c.color_hex
        FROM budgets b
        JOIN categories c ON b.category_id = c.id
    """

    def _row_to_model(self, row) -> Budget:
        return Budget(
            id=row["id"],
            category_id=row["category_id"],
            category_name=row["category_name"],
            limit_amount=row["limit_amount"],
            period=row["period"],
            color_hex=row["color_hex"] or "#888888",
        )

    def get_all(self) -> list[Budget]:
        conn = self._db.get_connection()
        rows = conn.execute(self._SELECT + " ORDER BY c.name").fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, budget_id: int) -> Optional[Budget]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._SELECT + " WHERE b.id = ?", (budget_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def get_by_category(self, category_id: int) -> Optional[Budget]:
        conn = self._db.get_connection()
        row = conn.execute(
            self._SELECT + " WHERE b.category_id = ?", (category_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, category_id: int, limit_amount: float, period: str) -> Budget:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "INSERT INTO budgets(category_id, limit_amount, period) VALUES (?, ?, ?)",
            (category_id, limit_amount, period),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(self, budget_id: int, limit_amount: float, period: str) -> Budget:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE budgets SET limit_amount = ?, period = ? WHERE id = ?",
            (limit_amount, period, budget_id),
        )
        conn.commit()
        return self.get_by_id(budget_id)

    def delete(self, budget_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM budgets WHERE id = ?", (budget_id,))
        conn.commit()
