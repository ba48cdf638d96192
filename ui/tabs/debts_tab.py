import customtkinter as ctk
from models.debt import Debt
from services.debt_service import DebtService
from ui.components.debt_form import DebtForm, PaymentForm
from utils.currency import format_currency, format_percent
from utils.date_helpers import format_display_date, parse_date, today
from utils.recurrence import recurrence_label


class DebtsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        debt_service: DebtService,
        notify_refresh,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = debt_service
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._symbol = currency_symbol

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkButton(bar, text="+ Add Debt", command=lambda: self._open_form()).pack(
            side="left", padx=8, pady=6
        )
        self._summary_label = ctk.CTkLabel(bar, text="", text_color="gray60")
        self._summary_label.pack(side="right", padx=12)

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def _fmt(self, value: float) -> str:
        return format_currency(value, self._symbol)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        s = self._svc.get_summary()
        self._summary_label.configure(text=(
            f"Remaining {self._fmt(s['total_remaining'])} of {self._fmt(s['total_debt'])}"
            f"  ·  {format_percent(s['paid_percentage'])} paid"
            f"  ·  {self._fmt(s['total_monthly'])}/month"
        ))

        debts = self._svc.get_all()
        if not debts:
            ctk.CTkLabel(
                self._scroll, text="No debts tracked. Click '+ Add Debt' to add one.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return
        for idx, d in enumerate(debts):
            self._add_card(idx, d)

    def _add_card(self, idx, d: Debt):
        card = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        card.grid(row=idx, column=0, sticky="ew", padx=4, pady=4)
        card.grid_columnconfigure(0, weight=1)

        hdr = ctk.CTkFrame(card, fg_color="transparent")
        hdr.grid(row=0, column=0, sticky="ew", padx=12, pady=(10, 4))
        hdr.grid_columnconfigure(0, weight=1)
        title = d.description + (f"  ·  {d.creditor}" if d.creditor else "")
        ctk.CTkLabel(
            hdr, text=title, font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w")

        if d.is_paid_off:
            ctk.CTkLabel(hdr, text="Paid off", text_color="#4CAF50").grid(row=0, column=1, padx=8)
        else:
            ctk.CTkButton(
                hdr, text="Pay", width=50, height=24,
                command=lambda debt=d: self._open_payment(debt),
            ).grid(row=0, column=1, padx=(8, 0))
        ctk.CTkButton(
            hdr, text="Edit", width=50, height=24,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda debt=d: self._open_form(debt),
        ).grid(row=0, column=2, padx=(8, 0))

        due = parse_date(d.next_payment_date)
        overdue = not d.is_paid_off and due is not None and due < today()
        details = (
            f"Remaining {self._fmt(d.remaining_amount)} of {self._fmt(d.total_amount)}"
            f"  |  {self._fmt(d.payment_amount)} {recurrence_label(d.frequency).lower()}"
            f"  |  Next: {format_display_date(d.next_payment_date, self._date_format)}"
        )
        if d.interest_rate is not None:
            details += f"  |  {d.interest_rate:g}% interest"
        ctk.CTkLabel(
            card, text=details, anchor="w",
            text_color="#F44336" if overdue else "gray60",
        ).grid(row=1, column=0, padx=12, sticky="ew")

        bar = ctk.CTkProgressBar(card, progress_color="#4CAF50")
        bar.grid(row=2, column=0, padx=12, pady=(4, 10), sticky="ew")
        bar.set(min(d.paid_percentage / 100, 1.0))

    def _open_form(self, debt: Debt | None = None):
        form = DebtForm(self.winfo_toplevel(), self._svc, debt=debt, date_format=self._date_format)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("debt")

    def _open_payment(self, debt: Debt):
        form = PaymentForm(self.winfo_toplevel(), self._svc, debt, date_format=self._date_format)
        self.wait_window(form)
        if form.saved:
            # a payment also books an expense transaction
            self._notify_refresh("transaction")
