from typing import Optional
from database.db_manager import DatabaseManager
from models.saving_goal import SavingGoal


class SavingGoalDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> SavingGoal:
        return SavingGoal(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            target_amount=row["target_amount"],
            current_amount=row["current_amount"],
            deadline=row["deadline"],
            color_hex=row["color_hex"],
            status=row["status"],
            created_at=row["created_at"],
        )

    def get_all(self) -> list[SavingGoal]:
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM saving_goals ORDER BY status ASC, deadline IS NULL, deadline ASC, id ASC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, goal_id: int) -> Optional[SavingGoal]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM saving_goals WHERE id = ?", (goal_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(
        self,
        name: str,
        target_amount: float,
        description: str = "",
        deadline: str | None = None,
        color_hex: str = "#009688",
        current_amount: float = 0.0,
    ) -> SavingGoal:
        conn = self._db.get_connection()
        cursor = conn.execute(
            """INSERT INTO saving_goals
               (name, description, target_amount, current_amount, deadline, color_hex)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (name, description, target_amount, current_amount, deadline, color_hex),
        )
        conn.commit()
        return self.get_by_id(cursor.lastrowid)

    def update(
        self,
        goal_id: int,
        name: str,
        target_amount: float,
        description: str = "",
        deadline: str | None = None,
        color_hex: str = "#009688",
    ) -> SavingGoal:
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE saving_goals
               SET name=?, description=?, target_amount=?, deadline=?, color_hex=?
               WHERE id=?""",
            (name, description, target_amount, deadline, color_hex, goal_id),
        )
        conn.commit()
        return self.get_by_id(goal_id)

    def set_progress(self, goal_id: int, current_amount: float, status: str) -> SavingGoal:
        conn = self._db.get_connection()
        conn.execute(
            "UPDATE saving_goals SET current_amount=?, status=? WHERE id=?",
            (current_amount, status, goal_id),
        )
        conn.commit()
        return self.get_by_id(goal_id)

    def delete(self, goal_id: int):
        conn = self._db.get_connection()
        conn.execute("DELETE FROM saving_goals WHERE id = ?", (goal_id,))
        conn.commit()
