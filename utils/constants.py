APP_NAME = "Finance Tracker"
APP_WIDTH = 1200
APP_HEIGHT = 750
DB_FILE = "finance.db"
LOG_FILE = "finance.log"

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"
BUDGET_ALERT_THRESHOLD = 0.80  # default 80%
UPCOMING_REMINDER_DAYS = 3
ANALYTICS_MONTHS = 12
AVERAGE_WINDOW_MONTHS = 6
DEBT_CATEGORY = "Debts"

DEFAULT_CATEGORIES = [
    {"name": "Salary",         "type": "income",   "color_hex": "#4CAF50", "is_system": 1},
    {"name": "Freelance",      "type": "income",   "color_hex": "#8BC34A", "is_system": 1},
    {"name": "Food & Dining",  "type": "expense",  "color_hex": "#FF9800", "is_system": 1},
    {"name": "Rent/Mortgage",  "type": "expense",  "color_hex": "#F44336", "is_system": 1},
    {"name": "Utilities",      "type": "expense",  "color_hex": "#9C27B0", "is_system": 1},
    {"name": "Transport",      "type": "expense",  "color_hex": "#2196F3", "is_system": 1},
    {"name": "Healthcare",     "type": "expense",  "color_hex": "#00BCD4", "is_system": 1},
    {"name": "Entertainment",  "type": "expense",  "color_hex": "#FF5722", "is_system": 1},
    {"name": DEBT_CATEGORY,    "type": "expense",  "color_hex": "#795548", "is_system": 1},
    {"name": "Savings",        "type": "both",     "color_hex": "#009688", "is_system": 1},
    {"name": "Other",          "type": "both",     "color_hex": "#888888", "is_system": 1},
]

SEVERITY_COLORS = {
    "error":   "#F44336",
    "warning": "#FF9800",
    "info":    "#2196F3",
}

SEVERITY_ICONS = {
    "error":   "❗",
    "warning": "⚠",
    "info":    "ℹ",
}

TRANSACTION_TYPES = ["income", "expense", "transfer"]

# ── Recurrence ────────────────────────────────────────────────────────────────

RECURRENCE_NONE = "none"
RECURRENCES = ["none", "daily", "weekly", "biweekly", "monthly", "quarterly", "yearly"]

RECURRENCE_LABELS = {
    "none":      "No recurrence",
    "daily":     "Daily",
    "weekly":    "Weekly",
    "biweekly":  "Twice monthly (15th & last day)",
    "monthly":   "Monthly",
    "quarterly": "Quarterly",
    "yearly":    "Yearly",
}

# Monthly-equivalent conversion. Kinds absent here (none, monthly, anything
# unrecognized) convert at x1.
MONTHLY_MULTIPLIERS = {
    "daily":     30,
    "weekly":    4.33,
    "biweekly":  2,
}
MONTHLY_DIVISORS = {
    "quarterly": 3,
    "yearly":    12,
}

# Calendar months advanced per step for month-based recurrences
MONTH_STEPS = {
    "monthly":   1,
    "quarterly": 3,
    "yearly":    12,
}
DAY_STEPS = {
    "daily":  1,
    "weekly": 7,
}

BIWEEKLY_MID_DAY = 15

BUDGET_PERIODS = ["weekly", "monthly", "yearly"]
GOAL_STATUSES = ["active", "completed"]
