import logging
from models.budget import Budget
from database.budget_dao import BudgetDAO
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from utils.constants import BUDGET_ALERT_THRESHOLD, BUDGET_PERIODS
from utils.date_helpers import current_month_str
from utils.recurrence import monthly_equivalent

logger = logging.getLogger(__name__)


class BudgetService:
    def __init__(
        self,
        budget_dao: BudgetDAO,
        tx_dao: TransactionDAO,
        category_dao: CategoryDAO,
    ):
        self._budget_dao = budget_dao
        self._tx_dao = tx_dao
        self._category_dao = category_dao

    def get_spending_by_category(self, month: str) -> dict[str, float]:
        """Monthly-equivalent expense totals per category name for a YYYY-MM month."""
        spending: dict[str, float] = {}
        for tx in self._tx_dao.get_filtered(month=month, type_filter="expense"):
            spending[tx.category] = (
                spending.get(tx.category, 0.0) + monthly_equivalent(tx.amount, tx.recurrence)
            )
        return spending

    def get_budget_status(self, month: str | None = None) -> list[Budget]:
        """All budgets with monthly limit and spent filled in, most-used first."""
        if month is None:
            month = current_month_str()
        budgets = self._budget_dao.get_all()
        spending = self.get_spending_by_category(month)
        for b in budgets:
            b.monthly_limit = monthly_equivalent(b.limit_amount, b.period)
            b.spent_amount = spending.get(b.category_name, 0.0)
        return sorted(budgets, key=lambda b: b.percent_used, reverse=True)

    def get_overview(
        self, month: str | None = None, threshold: float = BUDGET_ALERT_THRESHOLD
    ) -> dict:
        budgets = self.get_budget_status(month)
        return {
            "total_budgeted": sum(b.monthly_limit for b in budgets),
            "total_spent": sum(b.spent_amount for b in budgets),
            "over_count": sum(1 for b in budgets if b.status(threshold) == "over"),
            "near_count": sum(1 for b in budgets if b.status(threshold) == "near"),
        }

    def create(self, category_id: int, limit_amount: float, period: str = "monthly") -> Budget:
        self._validate(limit_amount, period)
        category = self._category_dao.get_by_id(category_id)
        if category is None:
            raise ValueError("Category does not exist.")
        if not category.accepts("expense"):
            raise ValueError("Budgets can only be set on expense categories.")
        if self._budget_dao.get_by_category(category_id):
            raise ValueError(f"A budget for '{category.name}' already exists.")
        budget = self._budget_dao.create(category_id, limit_amount, period)
        logger.info("Created %s budget for %s", period, category.name)
        return budget

    def update(self, budget_id: int, limit_amount: float, period: str) -> Budget:
        self._validate(limit_amount, period)
        return self._budget_dao.update(budget_id, limit_amount, period)

    def delete(self, budget_id: int):
        self._budget_dao.delete(budget_id)

    def get_expense_categories(self):
        """Return categories valid for budgeting (expense or both)."""
        return self._category_dao.get_for_transaction_type("expense")

    def _validate(self, limit_amount: float, period: str):
        if limit_amount < 0:
            raise ValueError("Budget limit must be non-negative.")
        if period not in BUDGET_PERIODS:
            raise ValueError(f"Invalid budget period: {period}")
