"""
Schema and migration management for SQLite database.
"""

import logging
import sqlite3
from contextlib import closing

from config import SQLITE_BUSY_TIMEOUT_MS

logger = logging.getLogger("account_gateway.schema")


class SchemaManager:
    """
    Owns schema creation and migrations.

    Call initialize() to ensure schema is present and migrations are applied.
    """

    def __init__(self, db_path: str, busy_timeout_ms: int = SQLITE_BUSY_TIMEOUT_MS):
        self.db_path = db_path
        self.busy_timeout_ms = busy_timeout_ms

    def initialize(self) -> None:
        """Create base schema and apply migrations."""
        logger.info(f"Initializing database schema: {self.db_path}")
        # Closing the last connection checkpoints the WAL into the main file.
        with closing(self._connect()) as conn:
            cursor = conn.cursor()
            self._create_base_schema(cursor)
            self._create_schema_migrations_table(cursor)
            self._run_migrations(cursor)
            conn.commit()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout_ms)}")
        return conn

    def _create_base_schema(self, cursor) -> None:
        # Accounts table
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS accounts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                email TEXT NOT NULL DEFAULT '',
                password TEXT NOT NULL,
                type INTEGER NOT NULL DEFAULT 1,
                premdays INTEGER NOT NULL DEFAULT 0,
                lastday INTEGER NOT NULL DEFAULT 0
            )
            """
        )

        # Characters owned by accounts
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                account_id INTEGER NOT NULL,
                deletion INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (account_id) REFERENCES accounts(id) ON DELETE CASCADE
            )
            """
        )

    # --- Migration helpers ---

    def _add_column_if_not_exists(self, cursor, table: str, column: str, column_type: str) -> None:
        try:
            cursor.execute(f"ALTER TABLE {table} ADD COLUMN {column} {column_type}")
        except sqlite3.OperationalError:
            pass

    def _create_schema_migrations_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                name TEXT PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )

    def _run_migrations(self, cursor) -> None:
        applied = {row["name"] for row in cursor.execute("SELECT name FROM schema_migrations")}
        for name, action in self._get_migrations():
            if name in applied:
                continue
            logger.info(f"Applying migration: {name}")
            action(cursor)
            cursor.execute(
                "INSERT INTO schema_migrations (name) VALUES (?)",
                (name,),
            )

    def _get_migrations(self):
        return [
            ("add_account_creation_column", self._migration_add_account_creation_column),
            ("add_coins_column", self._migration_add_coins_column),
            ("create_coins_transactions_table", self._migration_create_coins_transactions_table),
            ("add_tournament_coins_column", self._migration_add_tournament_coins_column),
            ("create_account_sessions_table", self._migration_create_account_sessions_table),
            ("add_premdays_purchased_column", self._migration_add_premdays_purchased_column),
            ("add_coins_transferable_column", self._migration_add_coins_transferable_column),
            ("add_indexes_v1", self._migration_add_indexes_v1),
        ]

    # --- Migrations ---

    def _migration_add_account_creation_column(self, cursor) -> None:
        self._add_column_if_not_exists(cursor, "accounts", "creation", "INTEGER NOT NULL DEFAULT 0")

    def _migration_add_coins_column(self, cursor) -> None:
        self._add_column_if_not_exists(cursor, "accounts", "coins", "INTEGER NOT NULL DEFAULT 0")

    def _migration_create_coins_transactions_table(self, cursor) -> None:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS coins_transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                account_id INTEGER NOT NULL,
                type INTEGER NOT NULL,
                coin_type INTEGER NOT NULL DEFAULT 1,
                amount INTEGER NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (account_id) REFERENCES accounts(id) ON DELETE CASCADE
            )
            """
        )

    def _migration_add_tournament_coins_column(self, cursor) -> None:
        self._add_column_if_not_exists(
            cursor, "accounts", "tournament_coins", "INTEGER NOT NULL DEFAULT 0"
        )

    def _migration_create_account_sessions_table(self, cursor) -> None:
        # id holds the SHA-1 digest of the session token, never the token itself
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS account_sessions (
                id TEXT PRIMARY KEY,
                account_id INTEGER NOT NULL,
                expires INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (account_id) REFERENCES accounts(id) ON DELETE CASCADE
            )
            """
        )

    def _migration_add_premdays_purchased_column(self, cursor) -> None:
        self._add_column_if_not_exists(
            cursor, "accounts", "premdays_purchased", "INTEGER NOT NULL DEFAULT 0"
        )

    def _migration_add_coins_transferable_column(self, cursor) -> None:
        self._add_column_if_not_exists(
            cursor, "accounts", "coins_transferable", "INTEGER NOT NULL DEFAULT 0"
        )

    def _migration_add_indexes_v1(self, cursor) -> None:
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_accounts_email ON accounts(email)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_players_account_id ON players(account_id)")
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_account_sessions_account_id ON account_sessions(account_id)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_coins_transactions_account_id "
            "ON coins_transactions(account_id)"
        )
