"""Shared fixtures: an in-memory database with every DAO and service wired up."""
import pytest

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from database.budget_dao import BudgetDAO
from database.debt_dao import DebtDAO
from database.saving_goal_dao import SavingGoalDAO
from models.transaction import Transaction
from services.transaction_service import TransactionService
from services.budget_service import BudgetService
from services.recurring_service import RecurringService
from services.report_service import ReportService
from services.debt_service import DebtService
from services.saving_goal_service import SavingGoalService
from services.category_service import CategoryService
from services.reminder_service import ReminderService


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def tx_dao(db):
    return TransactionDAO(db)


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def tx_service(tx_dao, category_dao):
    return TransactionService(tx_dao, category_dao)


@pytest.fixture
def recurring_service(db, tx_dao):
    return RecurringService(db, tx_dao)


@pytest.fixture
def budget_service(db, tx_dao, category_dao):
    return BudgetService(BudgetDAO(db), tx_dao, category_dao)


@pytest.fixture
def report_service(tx_dao, category_dao):
    return ReportService(tx_dao, category_dao)


@pytest.fixture
def debt_service(db, tx_dao):
    return DebtService(db, DebtDAO(db), tx_dao)


@pytest.fixture
def goal_service(db):
    return SavingGoalService(SavingGoalDAO(db))


@pytest.fixture
def category_service(category_dao, tx_dao):
    return CategoryService(category_dao, tx_dao)


@pytest.fixture
def reminder_service(recurring_service, budget_service, debt_service):
    return ReminderService(recurring_service, budget_service, debt_service)


@pytest.fixture
def make_tx():
    """Build an unsaved Transaction; keyword arguments override the defaults."""
    def _make(**overrides):
        fields = dict(
            id=1,
            type="expense",
            amount=50.0,
            category="Utilities",
            description="Internet",
            date="2024-01-01",
            recurrence="monthly",
        )
        fields.update(overrides)
        return Transaction(**fields)
    return _make
