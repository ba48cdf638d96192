from dataclasses import dataclass
from typing import Optional


@dataclass
class SavingGoal:
    id: int
    name: str
    target_amount: float
    current_amount: float = 0.0
    description: str = ""
    deadline: Optional[str] = None   # 'YYYY-MM-DD'
    color_hex: str = "#009688"
    status: str = "active"           # 'active' | 'completed'
    created_at: str = ""

    @property
    def progress(self) -> int:
        """Whole-number percent towards the target, capped at 100."""
        if self.target_amount <= 0:
            return 0
        return min(round(self.current_amount / self.target_amount * 100), 100)

    @property
    def remaining(self) -> float:
        return max(0.0, self.target_amount - self.current_amount)

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"
