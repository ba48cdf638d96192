import customtkinter as ctk
from models.budget import Budget
from services.budget_service import BudgetService
from ui.components.budget_form import BudgetForm
from utils.constants import BUDGET_ALERT_THRESHOLD
from utils.currency import format_currency, format_percent
from utils.date_helpers import current_month_str, friendly_month, prev_month, next_month

_STATUS_COLORS = {"ok": "#4CAF50", "near": "#FF9800", "over": "#F44336"}


class BudgetsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        budget_service: BudgetService,
        notify_refresh,
        currency_symbol: str = "$",
        budget_threshold: float = BUDGET_ALERT_THRESHOLD,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = budget_service
        self._notify_refresh = notify_refresh
        self._symbol = currency_symbol
        self._threshold = budget_threshold
        self._month = current_month_str()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_toolbar()
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkButton(bar, text="◀", width=28, command=lambda: self._shift(prev_month)).pack(
            side="left", padx=(8, 0), pady=6
        )
        self._month_label = ctk.CTkLabel(
            bar, width=150, anchor="center", font=ctk.CTkFont(size=13, weight="bold"),
        )
        self._month_label.pack(side="left", padx=4)
        ctk.CTkButton(bar, text="▶", width=28, command=lambda: self._shift(next_month)).pack(
            side="left", padx=(0, 12)
        )
        ctk.CTkButton(bar, text="+ Add Budget", command=lambda: self._open_form()).pack(
            side="left", padx=4
        )
        self._overview_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._overview_label.pack(side="right", padx=12)

    def _shift(self, step):
        self._month = step(self._month)
        self._load()

    def _load(self):
        self._month_label.configure(text=friendly_month(self._month))
        for w in self._scroll.winfo_children():
            w.destroy()

        overview = self._svc.get_overview(self._month, self._threshold)
        self._overview_label.configure(text=(
            f"Spent {format_currency(overview['total_spent'], self._symbol)} of "
            f"{format_currency(overview['total_budgeted'], self._symbol)}"
            f"  ·  {overview['over_count']} over, {overview['near_count']} near"
        ))

        budgets = self._svc.get_budget_status(self._month)
        if not budgets:
            ctk.CTkLabel(
                self._scroll,
                text="No budgets yet. Click '+ Add Budget' to limit a category.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return
        for idx, b in enumerate(budgets):
            self._add_card(idx, b)

    def _add_card(self, idx, b: Budget):
        color = _STATUS_COLORS[b.status(self._threshold)]
        card = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        card.grid(row=idx, column=0, sticky="ew", padx=4, pady=4)
        card.grid_columnconfigure(0, weight=1)

        hdr = ctk.CTkFrame(card, fg_color="transparent")
        hdr.grid(row=0, column=0, sticky="ew", padx=12, pady=(10, 4))
        hdr.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            hdr, text=f"{b.category_name}  ({b.period})",
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w")
        ctk.CTkLabel(hdr, text=format_percent(b.percent_used, 1), text_color=color).grid(
            row=0, column=1, padx=(8, 0)
        )
        ctk.CTkButton(
            hdr, text="Edit", width=50, height=24,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda budget=b: self._open_form(budget),
        ).grid(row=0, column=2, padx=(8, 0))

        ctk.CTkLabel(
            card,
            text=(f"Spent: {self._fmt(b.spent_amount)}  /  Monthly limit: {self._fmt(b.monthly_limit)}"
                  f"  |  Remaining: {self._fmt(b.remaining)}"),
            text_color="gray60", anchor="w",
        ).grid(row=1, column=0, padx=12, sticky="ew")

        bar = ctk.CTkProgressBar(card, progress_color=color)
        bar.grid(row=2, column=0, padx=12, pady=(4, 10), sticky="ew")
        bar.set(min(b.percent_used / 100, 1.0))

    def _open_form(self, budget: Budget | None = None):
        form = BudgetForm(self.winfo_toplevel(), self._svc, budget=budget)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("budget")

    def _fmt(self, value: float) -> str:
        return format_currency(value, self._symbol)
