import customtkinter as ctk
import tkinter as tk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from services.report_service import ReportService
from utils.constants import ANALYTICS_MONTHS
from utils.currency import format_currency, format_percent
from utils.date_helpers import current_month_str, friendly_month, prev_month, next_month, short_month

INCOME_COLOR = "#4CAF50"
EXPENSE_COLOR = "#F44336"
RATE_COLOR = "#2196F3"
_LEGEND_ITEMS = 8


class ReportsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        report_service: ReportService,
        currency_symbol: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = report_service
        self._symbol = currency_symbol
        self._month = current_month_str()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._summary_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._summary_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=10)
        self._summary_frame.grid_columnconfigure(tuple(range(6)), weight=1)
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkLabel(bar, text="Breakdown month:").pack(side="left", padx=(12, 4), pady=8)
        ctk.CTkButton(bar, text="◀", width=28, command=lambda: self._shift(prev_month)).pack(side="left")
        self._month_label = ctk.CTkLabel(bar, width=140, anchor="center")
        self._month_label.pack(side="left", padx=4)
        ctk.CTkButton(bar, text="▶", width=28, command=lambda: self._shift(next_month)).pack(side="left")

    def _shift(self, step):
        self._month = step(self._month)
        self._load()

    def _chart_panel(self, parent, col, title, figsize):
        outer = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=0, column=col, sticky="nsew", padx=(0, 8) if col == 0 else 0)
        ctk.CTkLabel(outer, text=title, font=ctk.CTkFont(size=13, weight="bold")).pack(pady=(10, 0))
        fig = Figure(figsize=figsize, dpi=80, tight_layout=True)
        canvas = FigureCanvasTkAgg(fig, master=outer)
        canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))
        return outer, fig, canvas

    def _build_charts(self):
        charts = ctk.CTkFrame(self, fg_color="transparent")
        charts.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        charts.grid_columnconfigure(0, weight=3)
        charts.grid_columnconfigure(1, weight=2)
        charts.grid_rowconfigure(0, weight=1)

        _, self._bar_fig, self._bar_canvas = self._chart_panel(
            charts, 0, f"Income vs Expenses, last {ANALYTICS_MONTHS} months", (5, 3)
        )
        self._bar_ax = self._bar_fig.add_subplot(111)
        self._rate_ax = self._bar_ax.twinx()

        pie_outer, self._pie_fig, self._pie_canvas = self._chart_panel(
            charts, 1, "Expenses by Category", (3, 3)
        )
        self._pie_ax = self._pie_fig.add_subplot(111)
        self._legend_frame = ctk.CTkFrame(pie_outer, fg_color="transparent")
        self._legend_frame.pack(fill="x", padx=8, pady=(0, 8))

    def _style_ax(self, ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    def _load(self):
        self._month_label.configure(text=friendly_month(self._month))
        self._load_summary()
        breakdown = self._svc.get_category_breakdown(self._month)
        self._load_legend(breakdown)
        self.after(50, self._draw_bar_chart)
        self.after(50, lambda: self._draw_pie_chart(breakdown))

    def _load_summary(self):
        for w in self._summary_frame.winfo_children():
            w.destroy()
        fin = self._svc.get_financial_summary()
        exp = self._svc.get_expense_overview()
        cards = [
            ("Net Worth", format_currency(fin["net_worth"], self._symbol),
             INCOME_COLOR if fin["net_worth"] >= 0 else EXPENSE_COLOR),
            ("Avg Monthly Income", format_currency(fin["avg_monthly_income"], self._symbol), INCOME_COLOR),
            ("Avg Monthly Expense", format_currency(fin["avg_monthly_expense"], self._symbol), EXPENSE_COLOR),
            ("Avg Savings Rate", format_percent(fin["avg_savings_rate"], 1), RATE_COLOR),
            ("Emergency Fund", f"{fin['emergency_fund_months']:.1f} months", RATE_COLOR),
            ("Fixed / Variable",
             f"{format_currency(exp['fixed_total'], self._symbol)} / "
             f"{format_currency(exp['variable_total'], self._symbol)}", "gray60"),
        ]
        for i, (label, text, color) in enumerate(cards):
            card = ctk.CTkFrame(self._summary_frame, fg_color=("gray90", "gray20"), corner_radius=10)
            card.grid(row=0, column=i, padx=4, sticky="ew")
            ctk.CTkLabel(card, text=label, text_color="gray60", font=ctk.CTkFont(size=11)).pack(
                pady=(10, 0), padx=10
            )
            ctk.CTkLabel(
                card, text=text, font=ctk.CTkFont(size=15, weight="bold"), text_color=color,
            ).pack(pady=(4, 10), padx=10)

    def _load_legend(self, breakdown):
        for w in self._legend_frame.winfo_children():
            w.destroy()
        for item in breakdown[:_LEGEND_ITEMS]:
            row = ctk.CTkFrame(self._legend_frame, fg_color="transparent")
            row.pack(fill="x", pady=1)
            tk.Label(row, bg=item["color_hex"], width=2).pack(side="left", padx=(0, 4))
            ctk.CTkLabel(
                row, text=f"{item['category']}: {format_currency(item['total'], self._symbol)}",
                anchor="w", font=ctk.CTkFont(size=11),
            ).pack(side="left")

    def _draw_bar_chart(self):
        ax, rate_ax = self._bar_ax, self._rate_ax
        ax.clear()
        rate_ax.clear()
        self._style_ax(ax, self._bar_fig)
        self._style_ax(rate_ax, self._bar_fig)

        totals = self._svc.get_monthly_totals(ANALYTICS_MONTHS)
        if not any(t["income"] or t["expense"] for t in totals):
            ax.text(0.5, 0.5, "No data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._bar_canvas.draw_idle()
            return

        rates = self._svc.get_savings_rate_series(ANALYTICS_MONTHS)
        x = list(range(len(totals)))
        w = 0.38
        ax.bar([i - w / 2 for i in x], [t["income"] for t in totals], w, color=INCOME_COLOR)
        ax.bar([i + w / 2 for i in x], [t["expense"] for t in totals], w, color=EXPENSE_COLOR)
        ax.set_xticks(x)
        ax.set_xticklabels([short_month(t["month"]).split()[0] for t in totals])
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v/1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        rate_ax.plot(x, [r["rate"] for r in rates], color=RATE_COLOR, marker="o", linewidth=1.5)
        rate_ax.set_ylim(-100, 100)
        rate_ax.yaxis.set_major_formatter(lambda v, _: f"{v:.0f}%")
        self._bar_canvas.draw_idle()

    def _draw_pie_chart(self, breakdown):
        ax = self._pie_ax
        ax.clear()
        self._style_ax(ax, self._pie_fig)

        if not breakdown or sum(d["total"] for d in breakdown) == 0:
            ax.text(0.5, 0.5, "No expense data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._pie_canvas.draw_idle()
            return
        ax.pie(
            [d["total"] for d in breakdown],
            colors=[d["color_hex"] for d in breakdown],
            startangle=90,
        )
        ax.set_aspect("equal")
        self._pie_canvas.draw_idle()
