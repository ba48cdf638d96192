from dataclasses import dataclass


@dataclass
class Budget:
    id: int
    category_id: int
    category_name: str
    limit_amount: float
    period: str = "monthly"     # 'weekly' | 'monthly' | 'yearly'
    color_hex: str = "#888888"
    monthly_limit: float = 0.0
    spent_amount: float = 0.0

    @property
    def percent_used(self) -> float:
        if self.monthly_limit <= 0:
            return 0.0
        return self.spent_amount / self.monthly_limit * 100

    @property
    def remaining(self) -> float:
        return max(0.0, self.monthly_limit - self.spent_amount)

    def status(self, threshold: float) -> str:
        """'over' past 100%, 'near' past threshold (a 0-1 fraction), else 'ok'."""
        pct = self.percent_used
        if pct > 100:
            return "over"
        if pct > threshold * 100:
            return "near"
        return "ok"
