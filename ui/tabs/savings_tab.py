import customtkinter as ctk
from models.saving_goal import SavingGoal
from services.saving_goal_service import SavingGoalService
from ui.components.goal_form import GoalForm, ContributionForm
from utils.currency import format_currency
from utils.date_helpers import format_display_date


class SavingsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        goal_service: SavingGoalService,
        notify_refresh,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = goal_service
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._symbol = currency_symbol

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkButton(bar, text="+ Add Goal", command=lambda: self._open_form()).pack(
            side="left", padx=8, pady=6
        )
        self._summary_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._summary_label.pack(side="right", padx=12)

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure((0, 1), weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        s = self._svc.get_summary()
        self._summary_label.configure(text=(
            f"Saved {format_currency(s['total_saved'], self._symbol)} of "
            f"{format_currency(s['total_target'], self._symbol)}"
            f"  ·  {s['completed_count']} completed, {s['active_count']} active"
        ))

        goals = self._svc.get_all()
        if not goals:
            ctk.CTkLabel(
                self._scroll, text="No saving goals yet. Click '+ Add Goal' to start one.",
                text_color="gray60",
            ).grid(row=0, column=0, columnspan=2, pady=40)
            return
        for idx, g in enumerate(goals):
            self._add_card(idx // 2, idx % 2, g)

    def _add_card(self, row, col, g: SavingGoal):
        card = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=10)
        card.grid(row=row, column=col, sticky="nsew", padx=4, pady=4)
        card.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            card, text=g.name, font=ctk.CTkFont(size=14, weight="bold"), anchor="w",
        ).grid(row=0, column=0, padx=12, pady=(10, 0), sticky="w")
        ctk.CTkLabel(
            card, text="Completed" if g.is_completed else f"{g.progress}%",
            text_color="#4CAF50" if g.is_completed else g.color_hex,
        ).grid(row=0, column=1, padx=12, pady=(10, 0))

        info = (f"{format_currency(g.current_amount, self._symbol)} of "
                f"{format_currency(g.target_amount, self._symbol)}")
        if g.deadline:
            info += f"  ·  by {format_display_date(g.deadline, self._date_format)}"
        ctk.CTkLabel(card, text=info, text_color="gray60", anchor="w").grid(
            row=1, column=0, columnspan=2, padx=12, sticky="ew"
        )
        if g.description:
            ctk.CTkLabel(
                card, text=g.description, anchor="w", wraplength=320,
                font=ctk.CTkFont(size=11),
            ).grid(row=2, column=0, columnspan=2, padx=12, sticky="ew")

        bar = ctk.CTkProgressBar(card, progress_color=g.color_hex)
        bar.grid(row=3, column=0, columnspan=2, padx=12, pady=6, sticky="ew")
        bar.set(g.progress / 100)

        btns = ctk.CTkFrame(card, fg_color="transparent")
        btns.grid(row=4, column=0, columnspan=2, padx=12, pady=(0, 10), sticky="e")
        if not g.is_completed:
            ctk.CTkButton(
                btns, text="Contribute", width=90, height=24,
                command=lambda goal=g: self._open_contribution(goal),
            ).pack(side="left", padx=(0, 6))
        ctk.CTkButton(
            btns, text="Edit", width=50, height=24,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda goal=g: self._open_form(goal),
        ).pack(side="left")

    def _open_form(self, goal: SavingGoal | None = None):
        form = GoalForm(self.winfo_toplevel(), self._svc, goal=goal, date_format=self._date_format)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("goal")

    def _open_contribution(self, goal: SavingGoal):
        form = ContributionForm(self.winfo_toplevel(), self._svc, goal)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("goal")
