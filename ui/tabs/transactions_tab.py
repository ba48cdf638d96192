import customtkinter as ctk
from models.transaction import Transaction
from services.category_service import CategoryService
from services.transaction_service import TransactionService
from ui.components.confirm_dialog import ConfirmDialog
from ui.components.transaction_form import TransactionForm
from utils.currency import format_currency
from utils.date_helpers import current_month_str, friendly_month, prev_month, next_month, format_display_date
from utils.recurrence import recurrence_label

_MAX_RENDERED_ROWS = 100
_ALL = "all"
_ALL_CATEGORIES = "All categories"
_TYPE_COLORS = {"income": "#4CAF50", "expense": "#F44336", "transfer": "#2196F3"}

_COLUMNS = [("Date", 85), ("Type", 72), ("Category", 130), ("Description", 200),
            ("Repeats", 110), ("Amount", 100), ("Actions", 100)]


class TransactionsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        notify_refresh,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._symbol = currency_symbol

        self._month = current_month_str()
        self._type_var = ctk.StringVar(value=_ALL)
        self._cat_var = ctk.StringVar(value=_ALL_CATEGORIES)
        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._load())

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_filter_bar()
        self._build_header()
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._cat_combo.configure(values=self._category_choices())
        self._load()

    def _category_choices(self) -> list[str]:
        return [_ALL_CATEGORIES] + [c.name for c in self._cat_svc.get_all()]

    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkButton(bar, text="◀", width=28, command=lambda: self._shift(prev_month)).pack(
            side="left", padx=(8, 0), pady=6
        )
        self._month_label = ctk.CTkLabel(bar, width=120, anchor="center")
        self._month_label.pack(side="left", padx=4)
        ctk.CTkButton(bar, text="▶", width=28, command=lambda: self._shift(next_month)).pack(
            side="left", padx=(0, 8)
        )

        ctk.CTkSegmentedButton(
            bar, values=[_ALL, "income", "expense"], variable=self._type_var,
            command=lambda _: self._load(),
        ).pack(side="left", padx=8)
        self._cat_combo = ctk.CTkComboBox(
            bar, values=self._category_choices(), variable=self._cat_var,
            width=150, state="readonly", command=lambda _: self._load(),
        )
        self._cat_combo.pack(side="left", padx=4)
        ctk.CTkEntry(
            bar, textvariable=self._search_var, placeholder_text="Search…", width=160,
        ).pack(side="left", padx=8)

        for label, type_ in (("+ Expense", "expense"), ("+ Income", "income")):
            ctk.CTkButton(
                bar, text=label, width=88, command=lambda t=type_: self._open_form(initial_type=t),
            ).pack(side="right", padx=(0, 8))

    def _shift(self, step):
        self._month = step(self._month)
        self._load()

    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=1, column=0, sticky="ew", padx=8, pady=(4, 0))
        for i, (label, width) in enumerate(_COLUMNS):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w", font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    def _load(self):
        self._month_label.configure(text=friendly_month(self._month))
        for w in self._scroll.winfo_children():
            w.destroy()

        type_f = self._type_var.get()
        cat_f = self._cat_var.get()
        rows = self._tx_svc.get_filtered(
            month=self._month,
            type_filter=None if type_f == _ALL else type_f,
            category=None if cat_f == _ALL_CATEGORIES else cat_f,
            search=self._search_var.get().strip() or None,
        )
        if not rows:
            ctk.CTkLabel(
                self._scroll, text="No transactions for this period.", text_color="gray60",
            ).grid(row=0, column=0, pady=20)
            return

        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx)
        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)}. Narrow the filters to see more.",
                text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, tx: Transaction):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        sign = {"income": "+", "expense": "-"}.get(tx.type, "")
        cells = [
            (format_display_date(tx.date, self._date_format), None),
            (tx.type.title(), _TYPE_COLORS.get(tx.type)),
            (tx.category or "—", None),
            (tx.description or "—", None),
            (recurrence_label(tx.recurrence) if tx.is_recurring else "", "gray60"),
            (f"{sign}{format_currency(tx.amount, self._symbol)}", _TYPE_COLORS.get(tx.type)),
        ]
        for col, (text, color) in enumerate(cells):
            kwargs = {"text_color": color} if color else {}
            ctk.CTkLabel(
                row, text=text, width=_COLUMNS[col][1],
                anchor="e" if col == 5 else "w", **kwargs,
            ).grid(row=0, column=col, padx=4, pady=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=len(cells), padx=(4, 6))
        ctk.CTkButton(
            acts, text="Edit", width=44, height=24,
            command=lambda t=tx: self._open_form(transaction=t),
        ).pack(side="left", padx=2)
        ctk.CTkButton(
            acts, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda t=tx: self._delete(t),
        ).pack(side="left")

    def _open_form(self, initial_type: str = "expense", transaction: Transaction | None = None):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, self._cat_svc,
            initial_type=initial_type,
            transaction=transaction,
            date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("transaction")

    def _delete(self, tx: Transaction):
        message = f"Delete this {tx.type} of {format_currency(tx.amount, self._symbol)}?"
        if tx.is_recurring:
            message += " Earlier and later occurrences of the series are kept."
        if ConfirmDialog(self.winfo_toplevel(), "Delete Transaction", message).result:
            self._tx_svc.delete(tx.id)
            self._notify_refresh("transaction")
