import customtkinter as ctk
from models.transaction import Transaction
from services.category_service import CategoryService
from services.transaction_service import TransactionService
from ui.components.date_picker import DatePickerWidget
from ui.components.dialog import FormDialog, parse_amount
from utils.constants import RECURRENCE_LABELS, RECURRENCE_NONE
from utils.date_helpers import format_date, today
from utils.recurrence import normalize_recurrence, recurrence_label

_LABEL_TO_RECURRENCE = {label: kind for kind, label in RECURRENCE_LABELS.items()}


class TransactionForm(FormDialog):
    """Add or edit an income/expense, optionally recurring."""

    _last_date: str = format_date(today())  # sticky across forms for one session

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        initial_type: str = "expense",
        transaction: Transaction | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        tx = transaction
        type_ = tx.type if tx else initial_type
        super().__init__(master, f"{'Edit' if tx else 'Add'} {type_.title()}", **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._transaction = tx

        self._type_var = ctk.StringVar(value=type_)
        type_frame = ctk.CTkFrame(self, fg_color="transparent")
        for t in ("income", "expense"):
            ctk.CTkRadioButton(
                type_frame, text=t.title(), variable=self._type_var, value=t,
                command=self._reload_categories,
            ).pack(side="left", padx=4)
        self._field("Type:", type_frame)

        self._desc_var = self._entry("Description:", tx.description if tx else "")
        self._amount_var = self._entry("Amount:", f"{tx.amount:.2f}" if tx else "")
        self._date_picker = self._field("Date:", DatePickerWidget(
            self, initial_date=tx.date if tx else TransactionForm._last_date,
            date_format=date_format,
        ))

        self._cat_var = ctk.StringVar()
        self._cat_combo = self._field("Category:", ctk.CTkComboBox(
            self, values=[], variable=self._cat_var, width=220, state="readonly",
        ))
        self._reload_categories(keep=tx.category if tx else None)

        self._recurrence_var = self._combo(
            "Repeats:", list(RECURRENCE_LABELS.values()),
            recurrence_label(tx.recurrence if tx else RECURRENCE_NONE),
        )
        self._notes_var = self._entry("Notes:", tx.notes if tx else "")
        self._finish()

    def _reload_categories(self, keep: str | None = None):
        names = [c.name for c in self._cat_svc.get_for_transaction_type(self._type_var.get())]
        self._cat_combo.configure(values=names)
        choice = keep if keep in names else (names[0] if names else "")
        self._cat_var.set(choice)
        self._cat_combo.set(choice)

    def _on_save(self):
        amount = parse_amount(self._amount_var.get())
        if not self._date_picker.is_valid():
            raise ValueError("Invalid date.")
        fields = dict(
            type_=self._type_var.get(),
            amount=amount,
            date=self._date_picker.get(),
            category=self._cat_var.get(),
            description=self._desc_var.get(),
            recurrence=normalize_recurrence(
                _LABEL_TO_RECURRENCE.get(self._recurrence_var.get(), RECURRENCE_NONE)
            ),
            notes=self._notes_var.get().strip(),
        )
        if self._transaction:
            self._tx_svc.update(self._transaction.id, **fields)
        else:
            self._tx_svc.create(**fields)
        TransactionForm._last_date = fields["date"]
