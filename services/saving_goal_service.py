import logging
from database.saving_goal_dao import SavingGoalDAO
from models.saving_goal import SavingGoal
from utils.date_helpers import parse_date, format_date

logger = logging.getLogger(__name__)


class SavingGoalService:
    def __init__(self, goal_dao: SavingGoalDAO):
        self._dao = goal_dao

    def get_all(self) -> list[SavingGoal]:
        return self._dao.get_all()

    def get_by_id(self, goal_id: int) -> SavingGoal | None:
        return self._dao.get_by_id(goal_id)

    def create(
        self,
        name: str,
        target_amount: float,
        description: str = "",
        deadline: str | None = None,
        color_hex: str = "#009688",
    ) -> SavingGoal:
        name = name.strip()
        self._validate(name, target_amount, deadline)
        goal = self._dao.create(
            name=name,
            target_amount=target_amount,
            description=description.strip(),
            deadline=self._normalize_deadline(deadline),
            color_hex=color_hex,
        )
        logger.info("Created saving goal %s (%s)", goal.id, name)
        return goal

    def update(
        self,
        goal_id: int,
        name: str,
        target_amount: float,
        description: str = "",
        deadline: str | None = None,
        color_hex: str = "#009688",
    ) -> SavingGoal:
        name = name.strip()
        self._validate(name, target_amount, deadline)
        return self._dao.update(
            goal_id=goal_id,
            name=name,
            target_amount=target_amount,
            description=description.strip(),
            deadline=self._normalize_deadline(deadline),
            color_hex=color_hex,
        )

    def contribute(self, goal_id: int, amount: float) -> SavingGoal:
        """Add to the saved amount; the goal completes once it reaches its target."""
        goal = self._dao.get_by_id(goal_id)
        if goal is None:
            raise ValueError("Saving goal not found.")
        if amount <= 0:
            raise ValueError("Contribution must be positive.")

        current = goal.current_amount + amount
        status = goal.status
        if current >= goal.target_amount and status != "completed":
            status = "completed"
            logger.info("Saving goal %s (%s) completed", goal_id, goal.name)
        return self._dao.set_progress(goal_id, current, status)

    def delete(self, goal_id: int):
        self._dao.delete(goal_id)

    def get_summary(self) -> dict:
        goals = self._dao.get_all()
        return {
            "total_target": sum(g.target_amount for g in goals),
            "total_saved": sum(g.current_amount for g in goals),
            "completed_count": sum(1 for g in goals if g.is_completed),
            "active_count": sum(1 for g in goals if not g.is_completed),
        }

    @staticmethod
    def _normalize_deadline(deadline: str | None) -> str | None:
        return format_date(parse_date(deadline)) if deadline else None

    def _validate(self, name, target_amount, deadline):
        if not name:
            raise ValueError("Goal name cannot be empty.")
        if target_amount <= 0:
            raise ValueError("Target amount must be positive.")
        if deadline and not parse_date(deadline):
            raise ValueError("Invalid deadline.")
