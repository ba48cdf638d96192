from datetime import date
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from models.transaction import Transaction
from utils.constants import ANALYTICS_MONTHS, AVERAGE_WINDOW_MONTHS
from utils.date_helpers import current_month_str, parse_date, format_month, trailing_months, add_months_rollover, today
from utils.recurrence import monthly_equivalent


def _normalized_sum(transactions: list[Transaction]) -> float:
    return sum(monthly_equivalent(t.amount, t.recurrence) for t in transactions)


class ReportService:
    def __init__(self, tx_dao: TransactionDAO, category_dao: CategoryDAO):
        self._tx_dao = tx_dao
        self._category_dao = category_dao

    def get_monthly_totals(
        self, months: int = ANALYTICS_MONTHS, ref_date: date | None = None
    ) -> list[dict]:
        """[{month, income, expense, net}] for the trailing `months` months, oldest first.

        Each transaction contributes its monthly-equivalent amount to the month it is dated in.
        """
        ref = ref_date or today()
        by_month = {m: {"income": 0.0, "expense": 0.0} for m in trailing_months(ref, months)}
        for tx in self._tx_dao.get_all():
            d = parse_date(tx.date)
            if d is None or tx.type not in ("income", "expense"):
                continue
            bucket = by_month.get(format_month(d))
            if bucket is not None:
                bucket[tx.type] += monthly_equivalent(tx.amount, tx.recurrence)
        return [
            {"month": m, "income": v["income"], "expense": v["expense"],
             "net": v["income"] - v["expense"]}
            for m, v in by_month.items()
        ]

    def get_savings_rate_series(
        self, months: int = ANALYTICS_MONTHS, ref_date: date | None = None
    ) -> list[dict]:
        """[{month, rate}] with rate clamped to [-100, 100]; 0 for months without income."""
        result = []
        for row in self.get_monthly_totals(months, ref_date):
            rate = 0.0
            if row["income"] > 0:
                rate = (row["income"] - row["expense"]) / row["income"] * 100
            result.append({"month": row["month"], "rate": max(-100.0, min(100.0, rate))})
        return result

    def get_category_breakdown(self, month: str | None = None) -> list[dict]:
        """Return [{category, color_hex, total}, ...] for pie chart, largest first."""
        m = month or current_month_str()
        colors = self._category_dao.get_color_map()
        totals: dict[str, float] = {}
        for tx in self._tx_dao.get_filtered(month=m, type_filter="expense"):
            name = tx.category or "Uncategorized"
            totals[name] = totals.get(name, 0.0) + tx.amount
        rows = [
            {"category": name, "color_hex": colors.get(name, "#888888"), "total": total}
            for name, total in totals.items()
        ]
        return sorted(rows, key=lambda r: r["total"], reverse=True)

    def get_summary(self, month: str | None = None) -> dict:
        m = month or current_month_str()
        rows = self._tx_dao.get_filtered(month=m)
        income = _normalized_sum([t for t in rows if t.type == "income"])
        expense = _normalized_sum([t for t in rows if t.type == "expense"])
        return {"income": income, "expense": expense, "net": income - expense}

    def get_financial_summary(self, ref_date: date | None = None) -> dict:
        """Headline indicators for the analytics view."""
        ref = ref_date or today()
        total_income = sum(t.amount for t in self._tx_dao.get_by_type("income"))
        total_expenses = sum(t.amount for t in self._tx_dao.get_by_type("expense"))
        net_worth = total_income - total_expenses

        recent = self.get_monthly_totals(ANALYTICS_MONTHS, ref)[-AVERAGE_WINDOW_MONTHS:]
        n = len(recent)
        avg_income = sum(r["income"] for r in recent) / n if n else 0.0
        avg_expense = sum(r["expense"] for r in recent) / n if n else 0.0
        avg_savings_rate = (
            (avg_income - avg_expense) / avg_income * 100 if avg_income > 0 else 0.0
        )
        emergency_fund_months = net_worth / avg_expense if avg_expense > 0 else 0.0

        return {
            "total_income": total_income,
            "total_expenses": total_expenses,
            "net_worth": net_worth,
            "avg_monthly_income": avg_income,
            "avg_monthly_expense": avg_expense,
            "avg_savings_rate": avg_savings_rate,
            "emergency_fund_months": emergency_fund_months,
        }

    def get_expense_overview(self, ref_date: date | None = None) -> dict:
        """Fixed (recurring) vs variable expense totals plus a six-month average.

        Total and fixed amounts are monthly equivalents; variable amounts are raw.
        """
        ref = ref_date or today()
        expenses = self._tx_dao.get_by_type("expense")
        fixed = [t for t in expenses if t.is_recurring]
        variable = [t for t in expenses if not t.is_recurring]

        window_start = add_months_rollover(ref, -AVERAGE_WINDOW_MONTHS)
        recent = [t for t in expenses if (parse_date(t.date) or date.min) >= window_start]

        return {
            "total": _normalized_sum(expenses),
            "fixed_total": _normalized_sum(fixed),
            "variable_total": sum(t.amount for t in variable),
            "fixed_count": len(fixed),
            "variable_count": len(variable),
            "monthly_average": sum(t.amount for t in recent) / AVERAGE_WINDOW_MONTHS,
        }
