from models.debt import Debt
from services.debt_service import DebtService
from ui.components.date_picker import DatePickerWidget
from ui.components.dialog import FormDialog, parse_amount
from utils.constants import RECURRENCE_LABELS, RECURRENCE_NONE
from utils.date_helpers import format_date, parse_date, today

_FREQUENCIES = [k for k in RECURRENCE_LABELS if k != RECURRENCE_NONE]


class DebtForm(FormDialog):
    """Add or edit a debt."""

    def __init__(
        self,
        master,
        debt_service: DebtService,
        debt: Debt | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, "Edit Debt" if debt else "New Debt", **kwargs)
        self._svc = debt_service
        self._debt = debt

        self._desc_var = self._entry("Description:", debt.description if debt else "")
        self._creditor_var = self._entry("Creditor:", debt.creditor if debt else "")
        self._total_var = self._entry("Total:", f"{debt.total_amount:.2f}" if debt else "")
        self._remaining_var = self._entry(
            "Remaining:", f"{debt.remaining_amount:.2f}" if debt else ""
        )
        self._payment_var = self._entry(
            "Payment:", f"{debt.payment_amount:.2f}" if debt else ""
        )
        self._freq_var = self._combo(
            "Frequency:", _FREQUENCIES, debt.frequency if debt else "monthly"
        )
        self._date_picker = self._field("Next payment:", DatePickerWidget(
            self,
            initial_date=debt.next_payment_date if debt else format_date(today()),
            date_format=date_format,
        ))
        rate = debt.interest_rate if debt and debt.interest_rate is not None else ""
        self._rate_var = self._entry("Interest %:", str(rate))
        self._finish(on_delete=self._on_delete if debt else None)

    def _on_save(self):
        total = parse_amount(self._total_var.get())
        remaining_text = self._remaining_var.get().strip()
        rate_text = self._rate_var.get().strip()
        fields = dict(
            description=self._desc_var.get(),
            total_amount=total,
            remaining_amount=parse_amount(remaining_text) if remaining_text else total,
            payment_amount=parse_amount(self._payment_var.get()),
            next_payment_date=self._date_picker.get(),
            frequency=self._freq_var.get(),
            creditor=self._creditor_var.get(),
            interest_rate=parse_amount(rate_text) if rate_text else None,
        )
        if self._debt:
            self._svc.update(self._debt.id, **fields)
        else:
            self._svc.create(**fields)

    def _on_delete(self):
        self._svc.delete(self._debt.id)


class PaymentForm(FormDialog):
    """Register one payment against a debt."""

    def __init__(
        self,
        master,
        debt_service: DebtService,
        debt: Debt,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, f"Pay {debt.description}", **kwargs)
        self._svc = debt_service
        self._debt = debt

        self._amount_var = self._entry(
            "Amount:", f"{min(debt.payment_amount, debt.remaining_amount):.2f}"
        )
        self._date_picker = self._field("Paid on:", DatePickerWidget(
            self, initial_date=format_date(today()), date_format=date_format,
        ))
        self._notes_var = self._entry("Notes:")
        self._finish(save_text="Register")

    def _on_save(self):
        if not self._date_picker.is_valid():
            raise ValueError("Invalid date.")
        self._svc.register_payment(
            self._debt.id,
            parse_amount(self._amount_var.get()),
            on_date=parse_date(self._date_picker.get()),
            notes=self._notes_var.get().strip(),
        )
