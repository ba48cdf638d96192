import logging
import os
import sqlite3
from contextlib import contextmanager
from utils.constants import DB_FILE, DEFAULT_CATEGORIES, BUDGET_ALERT_THRESHOLD, UPCOMING_REMINDER_DAYS

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._migrate_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    @contextmanager
    def write_transaction(self):
        """Run a block under a RESERVED lock; commit on success, roll back on error."""
        conn = self.get_connection()
        if conn.in_transaction:
            conn.commit()
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        else:
            conn.commit()

    def _migrate_schema(self, conn: sqlite3.Connection):
        """Idempotent ALTER TABLE for columns added after initial release."""
        cols = {row[1] for row in conn.execute("PRAGMA table_info(transactions)").fetchall()}
        if "notes" not in cols:
            conn.execute(
                "ALTER TABLE transactions ADD COLUMN notes TEXT NOT NULL DEFAULT ''"
            )
        cols = {row[1] for row in conn.execute("PRAGMA table_info(debts)").fetchall()}
        if "interest_frequency" not in cols:
            conn.execute(
                "ALTER TABLE debts ADD COLUMN interest_frequency TEXT NOT NULL DEFAULT 'monthly'"
            )

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS categories (
                id         INTEGER PRIMARY KEY AUTOINCREMENT,
                name       TEXT NOT NULL UNIQUE,
                type       TEXT NOT NULL CHECK(type IN ('income','expense','both')),
                color_hex  TEXT NOT NULL DEFAULT '#888888',
                is_system  INTEGER NOT NULL DEFAULT 0
            );

            CREATE TABLE IF NOT EXISTS transactions (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                type        TEXT NOT NULL CHECK(type IN ('income','expense','transfer')),
                amount      REAL NOT NULL CHECK(amount > 0),
                category    TEXT NOT NULL DEFAULT '',
                description TEXT NOT NULL DEFAULT '',
                date        TEXT NOT NULL,
                recurrence  TEXT NOT NULL DEFAULT 'none',
                notes       TEXT NOT NULL DEFAULT '',
                created_at  TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at  TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date       ON transactions(date);
            CREATE INDEX IF NOT EXISTS idx_transactions_category   ON transactions(category);
            CREATE INDEX IF NOT EXISTS idx_transactions_recurrence ON transactions(recurrence);

            CREATE TABLE IF NOT EXISTS budgets (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                category_id  INTEGER NOT NULL UNIQUE REFERENCES categories(id) ON DELETE CASCADE,
                limit_amount REAL NOT NULL CHECK(limit_amount >= 0),
                period       TEXT NOT NULL DEFAULT 'monthly'
                             CHECK(period IN ('weekly','monthly','yearly'))
            );

            CREATE TABLE IF NOT EXISTS debts (
                id                 INTEGER PRIMARY KEY AUTOINCREMENT,
                description        TEXT NOT NULL,
                total_amount       REAL NOT NULL CHECK(total_amount > 0),
                remaining_amount   REAL NOT NULL CHECK(remaining_amount >= 0),
                payment_amount     REAL NOT NULL CHECK(payment_amount > 0),
                next_payment_date  TEXT NOT NULL,
                frequency          TEXT NOT NULL DEFAULT 'monthly',
                creditor           TEXT NOT NULL DEFAULT '',
                interest_rate      REAL,
                interest_frequency TEXT NOT NULL DEFAULT 'monthly',
                created_at         TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS saving_goals (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                name           TEXT NOT NULL,
                description    TEXT NOT NULL DEFAULT '',
                target_amount  REAL NOT NULL CHECK(target_amount > 0),
                current_amount REAL NOT NULL DEFAULT 0.0,
                deadline       TEXT,
                color_hex      TEXT NOT NULL DEFAULT '#009688',
                status         TEXT NOT NULL DEFAULT 'active'
                               CHECK(status IN ('active','completed')),
                created_at     TEXT NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        # Default settings
        defaults = [
            ("appearance_mode", "system"),
            ("currency_symbol", "$"),
            ("budget_alert_threshold", f"{BUDGET_ALERT_THRESHOLD:.2f}"),
            ("reminder_days", str(UPCOMING_REMINDER_DAYS)),
            ("date_format", "MM/DD/YYYY"),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

        # Default categories
        for cat in DEFAULT_CATEGORIES:
            conn.execute(
                """INSERT OR IGNORE INTO categories(name, type, color_hex, is_system)
                   VALUES (?, ?, ?, ?)""",
                (cat["name"], cat["type"], cat["color_hex"], cat["is_system"]),
            )

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def get_float_setting(self, key: str, default: float) -> float:
        try:
            return float(self.get_setting(key, str(default)))
        except ValueError:
            return default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: open (creating if needed) the database in db_folder or CWD."""
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
            path = os.path.join(db_folder, DB_FILE)
        else:
            path = DB_FILE
        logger.info("Opening database at %s", path)
        db = DatabaseManager(path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
