import customtkinter as ctk
from services.transaction_service import TransactionService
from services.budget_service import BudgetService
from services.recurring_service import RecurringService
from services.report_service import ReportService
from services.reminder_service import Reminder
from services.debt_service import DebtService
from services.saving_goal_service import SavingGoalService
from services.category_service import CategoryService
from database.db_manager import DatabaseManager
from ui.components.alert_banner import AlertBanner
from ui.components.reminder_dialog import ReminderDialog
from ui.tabs.dashboard_tab import DashboardTab
from ui.tabs.transactions_tab import TransactionsTab
from ui.tabs.recurring_tab import RecurringTab
from ui.tabs.budgets_tab import BudgetsTab
from ui.tabs.debts_tab import DebtsTab
from ui.tabs.savings_tab import SavingsTab
from ui.tabs.reports_tab import ReportsTab
from ui.tabs.categories_tab import CategoriesTab
from ui.tabs.settings_tab import SettingsTab
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT, BUDGET_ALERT_THRESHOLD

TAB_NAMES = [
    "Dashboard", "Transactions", "Recurring", "Budgets",
    "Debts", "Savings", "Reports", "Categories", "Settings",
]

# Which tabs must reload after a change of the given kind
_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"Dashboard", "Transactions", "Recurring", "Budgets", "Debts", "Reports", "Categories"},
    "recurring":   {"Dashboard", "Transactions", "Recurring", "Budgets", "Reports"},
    "budget":      {"Dashboard", "Budgets"},
    "debt":        {"Dashboard", "Debts"},
    "goal":        {"Dashboard", "Savings"},
    "category":    {"Transactions", "Budgets", "Reports", "Categories"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        tx_service: TransactionService,
        budget_service: BudgetService,
        recurring_service: RecurringService,
        report_service: ReportService,
        debt_service: DebtService,
        goal_service: SavingGoalService,
        category_service: CategoryService,
        db: DatabaseManager,
        startup_reminders: list[Reminder] | None = None,
        pending_count: int = 0,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "$",
        budget_threshold: float = BUDGET_ALERT_THRESHOLD,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._startup_reminders = startup_reminders or []

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=0, column=0, sticky="ew", padx=8, pady=(4, 0))

        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))
        for name in TAB_NAMES:
            self._tabview.add(name)
            self._tabview.tab(name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(name).grid_rowconfigure(0, weight=1)

        fmt = dict(date_format=date_format, currency_symbol=currency_symbol)
        refresh = self.notify_tabs_refresh
        self._tabs = {
            "Dashboard": DashboardTab(
                self._tab("Dashboard"), tx_service, budget_service, debt_service, goal_service,
                recurring_service,
                budget_threshold=budget_threshold, **fmt,
            ),
            "Transactions": TransactionsTab(
                self._tab("Transactions"), tx_service, category_service, refresh, **fmt,
            ),
            "Recurring": RecurringTab(self._tab("Recurring"), recurring_service, refresh, **fmt),
            "Budgets": BudgetsTab(
                self._tab("Budgets"), budget_service, refresh,
                currency_symbol=currency_symbol, budget_threshold=budget_threshold,
            ),
            "Debts": DebtsTab(self._tab("Debts"), debt_service, refresh, **fmt),
            "Savings": SavingsTab(self._tab("Savings"), goal_service, refresh, **fmt),
            "Reports": ReportsTab(
                self._tab("Reports"), report_service, currency_symbol=currency_symbol,
            ),
            "Categories": CategoriesTab(self._tab("Categories"), category_service, refresh),
            "Settings": SettingsTab(self._tab("Settings"), db),
        }
        for tab in self._tabs.values():
            tab.grid(row=0, column=0, sticky="nsew")

        if pending_count:
            self.after(300, lambda: self._show_pending_banner(pending_count))
        if self._startup_reminders:
            self.after(200, self._show_reminder_dialog)

    def _tab(self, name: str):
        return self._tabview.tab(name)

    def notify_tabs_refresh(self, scope: str = "full"):
        names = _REFRESH_SCOPES.get(scope, set(TAB_NAMES))
        for name in TAB_NAMES:
            if name in names:
                self._tabs[name].refresh()

    def _show_pending_banner(self, count: int):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        AlertBanner(
            self._banner_frame,
            message=(f"{count} recurring transaction{'s are' if count != 1 else ' is'} "
                     "due but not yet recorded."),
            color="#2196F3",
            action_text="Review",
            action_cmd=lambda: self._tabview.set("Recurring"),
        ).pack(fill="x", pady=2)

    def _show_reminder_dialog(self):
        ReminderDialog(
            self, self._startup_reminders,
            on_open_recurring=lambda: self._tabview.set("Recurring"),
        )
