import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from database.budget_dao import BudgetDAO
from database.debt_dao import DebtDAO
from database.saving_goal_dao import SavingGoalDAO

from services.transaction_service import TransactionService
from services.budget_service import BudgetService
from services.recurring_service import RecurringService
from services.report_service import ReportService
from services.reminder_service import ReminderService
from services.debt_service import DebtService
from services.saving_goal_service import SavingGoalService
from services.category_service import CategoryService

from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_level
from utils.constants import BUDGET_ALERT_THRESHOLD, LOG_FILE, UPCOMING_REMINDER_DAYS
from utils.log_setup import setup_logging

logger = logging.getLogger(__name__)


def main():
    # ── Bootstrap: read DB folder and log level from pre-DB config ────────────
    db_folder = get_db_folder()
    log_file = os.path.join(db_folder, LOG_FILE) if db_folder else LOG_FILE
    setup_logging(get_log_level(), log_file)

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open(db_folder=db_folder)

    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(db)
    category_dao = CategoryDAO(db)
    budget_dao = BudgetDAO(db)
    debt_dao = DebtDAO(db)
    goal_dao = SavingGoalDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    tx_svc = TransactionService(tx_dao, category_dao)
    budget_svc = BudgetService(budget_dao, tx_dao, category_dao)
    recurring_svc = RecurringService(db, tx_dao)
    report_svc = ReportService(tx_dao, category_dao)
    debt_svc = DebtService(db, debt_dao, tx_dao)
    goal_svc = SavingGoalService(goal_dao)
    category_svc = CategoryService(category_dao, tx_dao)
    reminder_svc = ReminderService(recurring_svc, budget_svc, debt_svc)

    # ── Startup reminders ────────────────────────────────────────────────────
    threshold = db.get_float_setting("budget_alert_threshold", BUDGET_ALERT_THRESHOLD)
    reminder_days = int(db.get_float_setting("reminder_days", UPCOMING_REMINDER_DAYS))
    reminders = reminder_svc.get_reminders(upcoming_days=reminder_days, threshold=threshold)
    pending_count = len(recurring_svc.get_pending())
    logger.info("Startup: %d reminder(s), %d pending recurring", len(reminders), pending_count)

    # ── Appearance ───────────────────────────────────────────────────────────
    appearance = db.get_setting("appearance_mode", "system")
    date_format = db.get_setting("date_format", "MM/DD/YYYY")
    currency_symbol = db.get_setting("currency_symbol", "$")
    ctk.set_appearance_mode(appearance)
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        tx_service=tx_svc,
        budget_service=budget_svc,
        recurring_service=recurring_svc,
        report_service=report_svc,
        debt_service=debt_svc,
        goal_service=goal_svc,
        category_service=category_svc,
        db=db,
        startup_reminders=reminders,
        pending_count=pending_count,
        date_format=date_format,
        currency_symbol=currency_symbol,
        budget_threshold=threshold,
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
