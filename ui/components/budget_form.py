from models.budget import Budget
from services.budget_service import BudgetService
from ui.components.dialog import FormDialog, parse_amount
from utils.constants import BUDGET_PERIODS


class BudgetForm(FormDialog):
    """Add or edit the spending limit of one expense category."""

    def __init__(
        self,
        master,
        budget_service: BudgetService,
        budget: Budget | None = None,
        **kwargs,
    ):
        super().__init__(master, "Edit Budget" if budget else "New Budget", **kwargs)
        self._svc = budget_service
        self._budget = budget
        self._categories = budget_service.get_expense_categories()

        names = [c.name for c in self._categories]
        self._cat_var = self._combo(
            "Category:", names,
            budget.category_name if budget else (names[0] if names else ""),
            state="disabled" if budget else "readonly",
        )
        self._limit_var = self._entry("Limit:", f"{budget.limit_amount:.2f}" if budget else "")
        self._period_var = self._combo(
            "Period:", BUDGET_PERIODS, budget.period if budget else "monthly"
        )
        self._finish(on_delete=self._on_delete if budget else None)

    def _on_save(self):
        limit = parse_amount(self._limit_var.get())
        period = self._period_var.get()
        if self._budget:
            self._svc.update(self._budget.id, limit, period)
            return
        cat = next((c for c in self._categories if c.name == self._cat_var.get()), None)
        if cat is None:
            raise ValueError("Please select a category.")
        self._svc.create(cat.id, limit, period)

    def _on_delete(self):
        self._svc.delete(self._budget.id)
