from dataclasses import dataclass
from datetime import date, timedelta
from services.recurring_service import RecurringService
from services.budget_service import BudgetService
from services.debt_service import DebtService
from utils.date_helpers import today, current_month_str, parse_date
from utils.constants import UPCOMING_REMINDER_DAYS, BUDGET_ALERT_THRESHOLD


@dataclass
class Reminder:
    type: str       # 'over_budget' | 'near_budget' | 'debt_due' | 'debt_overdue' | 'pending_recurring'
    severity: str   # 'info' | 'warning' | 'error'
    title: str
    detail: str
    key: str = ""   # e.g. "budget:3" or "debt:5"


class ReminderService:
    def __init__(
        self,
        recurring_service: RecurringService,
        budget_service: BudgetService,
        debt_service: DebtService,
    ):
        self._recurring = recurring_service
        self._budget = budget_service
        self._debts = debt_service

    def get_reminders(
        self,
        ref_date: date | None = None,
        upcoming_days: int = UPCOMING_REMINDER_DAYS,
        threshold: float = BUDGET_ALERT_THRESHOLD,
    ) -> list[Reminder]:
        ref = ref_date or today()
        reminders: list[Reminder] = []
        reminders += self._check_budgets(ref, threshold)
        reminders += self._check_debts(ref, upcoming_days)
        reminders += self._check_pending(ref)
        order = {"error": 0, "warning": 1, "info": 2}
        return sorted(reminders, key=lambda r: order[r.severity])

    def _check_pending(self, ref: date) -> list[Reminder]:
        pending = self._recurring.get_pending(ref)
        if not pending:
            return []
        count = len(pending)
        return [Reminder(
            type="pending_recurring",
            severity="info",
            title=f"{count} recurring transaction{'s' if count != 1 else ''} pending",
            detail="Open the Recurring tab to generate them.",
            key="recurring:pending",
        )]

    def _check_debts(self, ref: date, upcoming_days: int) -> list[Reminder]:
        reminders = []
        horizon = ref + timedelta(days=upcoming_days)
        for debt in self._debts.get_all():
            if debt.is_paid_off:
                continue
            due = parse_date(debt.next_payment_date)
            if due is None or due > horizon:
                continue
            if due < ref:
                reminders.append(Reminder(
                    type="debt_overdue",
                    severity="warning",
                    title=f"{debt.description} payment is overdue",
                    detail=(
                        f"Was due on {due.strftime('%b %d')} · "
                        f"${debt.payment_amount:,.2f}"
                    ),
                    key=f"debt:{debt.id}",
                ))
            else:
                days_away = (due - ref).days
                day_label = "today" if days_away == 0 else (
                    "tomorrow" if days_away == 1 else f"in {days_away} days"
                )
                reminders.append(Reminder(
                    type="debt_due",
                    severity="info",
                    title=f"{debt.description} payment due {day_label}",
                    detail=(
                        f"Due on {due.strftime('%b %d')} · "
                        f"${debt.payment_amount:,.2f}"
                        + (f" · {debt.creditor}" if debt.creditor else "")
                    ),
                    key=f"debt:{debt.id}",
                ))
        return reminders

    def _check_budgets(self, ref: date, threshold: float) -> list[Reminder]:
        reminders = []
        for budget in self._budget.get_budget_status(current_month_str(ref)):
            if budget.monthly_limit <= 0:
                continue
            status = budget.status(threshold)
            detail = (
                f"Spent ${budget.spent_amount:,.2f} of "
                f"${budget.monthly_limit:,.2f} limit "
                f"({budget.percent_used:.0f}%)"
            )
            if status == "over":
                reminders.append(Reminder(
                    type="over_budget",
                    severity="error",
                    title=f"{budget.category_name} is over budget",
                    detail=detail,
                    key=f"budget:{budget.category_id}",
                ))
            elif status == "near":
                reminders.append(Reminder(
                    type="near_budget",
                    severity="warning",
                    title=f"{budget.category_name} near budget limit",
                    detail=detail,
                    key=f"budget:{budget.category_id}",
                ))
        return reminders
