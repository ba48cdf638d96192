from dataclasses import dataclass
from typing import Optional


@dataclass
class Debt:
    id: int
    description: str
    total_amount: float
    remaining_amount: float
    payment_amount: float
    next_payment_date: str      # 'YYYY-MM-DD'
    frequency: str = "monthly"  # any recurrence kind
    creditor: str = ""
    interest_rate: Optional[float] = None
    interest_frequency: str = "monthly"
    created_at: str = ""

    @property
    def paid_amount(self) -> float:
        return self.total_amount - self.remaining_amount

    @property
    def paid_percentage(self) -> float:
        if self.total_amount <= 0:
            return 0.0
        return self.paid_amount / self.total_amount * 100

    @property
    def is_paid_off(self) -> bool:
        return self.remaining_amount <= 0
