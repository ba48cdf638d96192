import logging
import customtkinter as ctk
from services.recurring_service import RecurringService
from utils.currency import format_currency
from utils.date_helpers import format_date, format_display_date, today
from utils.recurrence import recurrence_label, monthly_equivalent

logger = logging.getLogger(__name__)

_SERIES_COLUMNS = [("Description", 180), ("Category", 120), ("Type", 70), ("Amount", 90),
                   ("Repeats", 150), ("Monthly", 90), ("Next Due", 100)]
_PENDING_COLUMNS = [("Date", 100), ("Description", 200), ("Category", 120), ("Amount", 100)]


class RecurringTab(ctk.CTkFrame):
    """Recurring series overview plus the occurrences still missing from the ledger."""

    def __init__(
        self,
        master,
        recurring_service: RecurringService,
        notify_refresh,
        date_format: str = "MM/DD/YYYY",
        currency_symbol: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = recurring_service
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._symbol = currency_symbol

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure((1, 3), weight=1)

        self._pending_title = self._section_bar(0, "Pending", "Generate All", self._generate)
        self._pending_scroll = self._section_list(1)
        self._section_bar(2, "Series")
        self._series_scroll = self._section_list(3)
        self._load()

    def refresh(self):
        self._load()

    def _section_bar(self, row, title, action_text=None, action=None):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=row, column=0, sticky="ew", padx=8, pady=(8, 0))
        label = ctk.CTkLabel(bar, text=title, font=ctk.CTkFont(size=14, weight="bold"))
        label.pack(side="left", padx=12, pady=8)
        if action_text:
            self._action_btn = ctk.CTkButton(bar, text=action_text, command=action)
            self._action_btn.pack(side="right", padx=8, pady=6)
        return label

    def _section_list(self, row):
        scroll = ctk.CTkScrollableFrame(self)
        scroll.grid(row=row, column=0, sticky="nsew", padx=8, pady=8)
        scroll.grid_columnconfigure(0, weight=1)
        return scroll

    def _header(self, parent, columns):
        hdr = ctk.CTkFrame(parent, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=0, column=0, sticky="ew", pady=(0, 2))
        for i, (col, w) in enumerate(columns):
            ctk.CTkLabel(
                hdr, text=col, width=w, anchor="w", font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4)

    def _row(self, parent, idx, columns, values):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(parent, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)
        for i, text in enumerate(values):
            ctk.CTkLabel(row, text=text, width=columns[i][1], anchor="w").grid(
                row=0, column=i, padx=4, pady=4
            )

    def _empty(self, parent, text):
        ctk.CTkLabel(parent, text=text, text_color="gray60").grid(row=0, column=0, pady=30)

    def _load(self):
        for scroll in (self._pending_scroll, self._series_scroll):
            for w in scroll.winfo_children():
                w.destroy()

        ref = today()
        pending = self._svc.get_pending(ref)
        self._pending_title.configure(text=f"Pending ({len(pending)})")
        self._action_btn.configure(state="normal" if pending else "disabled")
        if pending:
            self._header(self._pending_scroll, _PENDING_COLUMNS)
            for idx, p in enumerate(pending, start=1):
                self._row(self._pending_scroll, idx, _PENDING_COLUMNS, [
                    format_display_date(p.date, self._date_format),
                    p.description,
                    p.category,
                    format_currency(p.amount, self._symbol),
                ])
        else:
            self._empty(self._pending_scroll, "Every recurring transaction is up to date.")

        series = self._svc.get_series()
        if not series:
            self._empty(
                self._series_scroll,
                "No recurring transactions. Set 'Repeats' when adding a transaction.",
            )
            return
        self._header(self._series_scroll, _SERIES_COLUMNS)
        for idx, tx in enumerate(series, start=1):
            next_due = self._svc.next_due(tx, ref)
            self._row(self._series_scroll, idx, _SERIES_COLUMNS, [
                tx.description,
                tx.category,
                tx.type.title(),
                format_currency(tx.amount, self._symbol),
                recurrence_label(tx.recurrence),
                format_currency(monthly_equivalent(tx.amount, tx.recurrence), self._symbol),
                format_display_date(format_date(next_due), self._date_format) if next_due else "—",
            ])

    def _generate(self):
        created = self._svc.apply_pending(today())
        logger.debug("Generate All stored %d transaction(s)", len(created))
        self._notify_refresh("recurring")
