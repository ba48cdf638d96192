from dataclasses import dataclass


@dataclass
class Transaction:
    id: int | str           # str only for synthesized 'pending-…' rows
    type: str               # 'income' | 'expense' | 'transfer'
    amount: float
    category: str           # category name
    description: str
    date: str               # 'YYYY-MM-DD'
    recurrence: str = "none"
    notes: str = ""
    is_pending: bool = False
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_recurring(self) -> bool:
        return bool(self.recurrence) and self.recurrence != "none"
