import customtkinter as ctk
from services.transaction_service import TransactionService
from services.budget_service import BudgetService
from services.debt_service import DebtService
from services.saving_goal_service import SavingGoalService
from services.recurring_service import RecurringService
from utils.constants import BUDGET_ALERT_THRESHOLD
from utils.currency import format_currency
from utils.date_helpers import (
    current_month_str, friendly_month, prev_month, next_month, format_display_date, format_date,
    parse_date, today,
)
from utils.recurrence import recurrence_key, recurrence_label

INCOME_COLOR = "#4CAF50"
EXPENSE_COLOR = "#F44336"
NEUTRAL_COLOR = "#2196F3"
WARN_COLOR = "#FF9800"

_STATUS_COLORS = {"ok": INCOME_COLOR, "near": WARN_COLOR, "over": EXPENSE_COLOR}
UPCOMING_DAYS = 30
_MAX_UPCOMING = 8


class DashboardTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        budget_service: BudgetService,
        debt_service: DebtService,
        goal_service: SavingGoalService,
        recurring_service: RecurringService,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "$",
        budget_threshold: float = BUDGET_ALERT_THRESHOLD,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._budget_svc = budget_service
        self._debt_svc = debt_service
        self._goal_svc = goal_service
        self._recurring_svc = recurring_service
        self._date_format = date_format
        self._symbol = currency_symbol
        self._threshold = budget_threshold
        self._month = current_month_str()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_month_nav()
        self._card_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._card_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=12)
        self._card_frame.grid_columnconfigure((0, 1, 2, 3, 4), weight=1)
        self._build_lists()
        self._load()

    def refresh(self):
        self._load()

    def _build_month_nav(self):
        nav = ctk.CTkFrame(self, fg_color="transparent")
        nav.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))
        ctk.CTkButton(nav, text="◀", width=28, command=lambda: self._shift(prev_month)).pack(side="left")
        self._month_label = ctk.CTkLabel(
            nav, font=ctk.CTkFont(size=15, weight="bold"), width=150, anchor="center"
        )
        self._month_label.pack(side="left", padx=8)
        ctk.CTkButton(nav, text="▶", width=28, command=lambda: self._shift(next_month)).pack(side="left")
        ctk.CTkLabel(
            nav, text="Amounts are monthly equivalents", text_color="gray60",
            font=ctk.CTkFont(size=11),
        ).pack(side="right")

    def _shift(self, step):
        self._month = step(self._month)
        self._load()

    def _build_lists(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        bottom.grid_columnconfigure((0, 1, 2), weight=1)
        bottom.grid_rowconfigure(0, weight=1)

        self._recent_frame = ctk.CTkScrollableFrame(bottom, label_text="Recent Transactions")
        self._recent_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        self._budget_frame = ctk.CTkScrollableFrame(bottom, label_text="Budget Usage")
        self._budget_frame.grid(row=0, column=1, sticky="nsew", padx=8)
        self._upcoming_frame = ctk.CTkScrollableFrame(bottom, label_text="Upcoming Payments")
        self._upcoming_frame.grid(row=0, column=2, sticky="nsew", padx=(8, 0))

    def _clear(self, *frames):
        for frame in frames:
            for w in frame.winfo_children():
                w.destroy()

    def _load(self):
        self._month_label.configure(text=friendly_month(self._month))
        self._clear(self._card_frame, self._recent_frame, self._budget_frame, self._upcoming_frame)

        totals = self._tx_svc.get_totals(self._month)
        debts = self._debt_svc.get_summary()
        goals = self._goal_svc.get_summary()
        cards = [
            ("Income", totals["income"], INCOME_COLOR),
            ("Expenses", totals["expense"], EXPENSE_COLOR),
            ("Net", totals["net"], NEUTRAL_COLOR if totals["net"] >= 0 else WARN_COLOR),
            ("Debt Remaining", debts["total_remaining"], EXPENSE_COLOR),
            ("Saved", goals["total_saved"], INCOME_COLOR),
        ]
        for col, (label, value, color) in enumerate(cards):
            self._make_card(col, label, value, color)

        self._load_recent()
        self._load_budgets()
        self._load_upcoming()

    def _load_recent(self):
        recent = self._tx_svc.get_recent(10)
        if not recent:
            ctk.CTkLabel(self._recent_frame, text="No transactions yet.", text_color="gray60").pack(pady=20)
        for idx, tx in enumerate(recent):
            bg = ("gray90", "gray20") if idx % 2 == 0 else ("gray86", "gray24")
            f = ctk.CTkFrame(self._recent_frame, fg_color=bg, corner_radius=4)
            f.pack(fill="x", pady=1)
            f.grid_columnconfigure(1, weight=1)

            income = tx.type == "income"
            ctk.CTkLabel(
                f, text=format_display_date(tx.date, self._date_format), width=85, anchor="w"
            ).grid(row=0, column=0, padx=6, pady=3)
            label = tx.description or tx.category
            if tx.is_recurring:
                label = f"↻ {label}"
            ctk.CTkLabel(f, text=label, anchor="w").grid(row=0, column=1, padx=4, sticky="ew")
            ctk.CTkLabel(
                f, text=f"{'+' if income else '-'}{format_currency(tx.amount, self._symbol)}",
                text_color=INCOME_COLOR if income else EXPENSE_COLOR, anchor="e", width=100,
            ).grid(row=0, column=2, padx=6)

    def _load_budgets(self):
        budgets = self._budget_svc.get_budget_status(self._month)
        if not budgets:
            ctk.CTkLabel(self._budget_frame, text="No budgets set.", text_color="gray60").pack(pady=20)
        for b in budgets:
            color = _STATUS_COLORS[b.status(self._threshold)]
            f = ctk.CTkFrame(self._budget_frame, fg_color="transparent")
            f.pack(fill="x", pady=4, padx=4)
            top = ctk.CTkFrame(f, fg_color="transparent")
            top.pack(fill="x")
            ctk.CTkLabel(top, text=b.category_name, anchor="w").pack(side="left")
            ctk.CTkLabel(
                top,
                text=(f"{format_currency(b.spent_amount, self._symbol)} / "
                      f"{format_currency(b.monthly_limit, self._symbol)}"),
                anchor="e", text_color="gray60",
            ).pack(side="right")
            bar = ctk.CTkProgressBar(f, progress_color=color)
            bar.pack(fill="x", pady=2)
            bar.set(min(b.percent_used / 100, 1.0))

    def _load_upcoming(self):
        ref = today()
        due = self._recurring_svc.upcoming_due(UPCOMING_DAYS, ref)
        # stored future rows already counted as a series' next occurrence are skipped
        covered = {(recurrence_key(tx), d) for tx, d in due}
        for tx in self._tx_svc.upcoming_payments(UPCOMING_DAYS, ref):
            d = parse_date(tx.date)
            if (recurrence_key(tx), d) not in covered:
                due.append((tx, d))
        due.sort(key=lambda item: item[1])

        if not due:
            ctk.CTkLabel(
                self._upcoming_frame, text="No payments scheduled.", text_color="gray60",
            ).pack(pady=20)
        for tx, d in due[:_MAX_UPCOMING]:
            f = ctk.CTkFrame(self._upcoming_frame, fg_color="transparent")
            f.pack(fill="x", pady=3, padx=4)
            f.grid_columnconfigure(0, weight=1)
            ctk.CTkLabel(f, text=tx.description or tx.category, anchor="w").grid(
                row=0, column=0, sticky="w"
            )
            ctk.CTkLabel(
                f, text=format_currency(tx.amount, self._symbol), anchor="e",
                text_color=EXPENSE_COLOR,
            ).grid(row=0, column=1, sticky="e")
            ctk.CTkLabel(
                f, text=format_display_date(format_date(d), self._date_format),
                anchor="w", text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=1, column=0, sticky="w")
            ctk.CTkLabel(
                f, text=recurrence_label(tx.recurrence),
                anchor="e", text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=1, column=1, sticky="e")

    def _make_card(self, col, label, value, color):
        card = ctk.CTkFrame(self._card_frame, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=0, column=col, padx=6, sticky="ew")
        card.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(card, text=label, font=ctk.CTkFont(size=12), text_color="gray60").grid(
            row=0, column=0, pady=(12, 0), padx=16
        )
        ctk.CTkLabel(
            card, text=format_currency(value, self._symbol),
            font=ctk.CTkFont(size=20, weight="bold"), text_color=color,
        ).grid(row=1, column=0, pady=(4, 12), padx=16)
