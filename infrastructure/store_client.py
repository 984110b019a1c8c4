"""
SQLite store client used by the repositories.

Exposes the query-and-fetch contract the account gateway depends on. Every
store failure is logged here and collapsed into a "no result" return value.
"""

import hashlib
import logging
import sqlite3
from collections.abc import Sequence
from contextlib import contextmanager

from config import SQLITE_BUSY_TIMEOUT_MS

logger = logging.getLogger("account_gateway.store")


class SQLiteStoreClient:
    """
    Thin wrapper around sqlite3 connections.

    A new connection is opened per call; the client itself holds no mutable
    state and can be shared between threads.
    """

    def __init__(self, db_path: str, busy_timeout_ms: int = SQLITE_BUSY_TIMEOUT_MS):
        """
        Initialize the store client.

        Args:
            db_path: Path to SQLite database file
            busy_timeout_ms: How long a statement waits on a locked database
        """
        self.db_path = db_path
        self.busy_timeout_ms = busy_timeout_ms

    def get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory enabled."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout_ms)}")
        return conn

    @contextmanager
    def connection(self):
        """
        Context manager for database connections.

        Automatically commits on success, rolls back on exception,
        and always closes the connection.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextmanager
    def atomic_transaction(self):
        """
        Context manager for atomic transactions with immediate write lock.

        Uses BEGIN IMMEDIATE so a read-modify-write sequence cannot interleave
        with another writer.
        """
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def fetch_one(self, query: str, params: Sequence = ()) -> sqlite3.Row | None:
        """Return the first matching row, or None if nothing matched or the query failed."""
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(query, tuple(params))
                return cursor.fetchone()
        except sqlite3.Error:
            logger.exception(f"Query failed: {query.strip()}")
            return None

    def fetch_all(self, query: str, params: Sequence = ()) -> list[sqlite3.Row] | None:
        """Return all matching rows (possibly empty), or None if the query failed."""
        try:
            with self.connection() as conn:
                cursor = conn.cursor()
                cursor.execute(query, tuple(params))
                return cursor.fetchall()
        except sqlite3.Error:
            logger.exception(f"Query failed: {query.strip()}")
            return None

    def execute(self, query: str, params: Sequence = ()) -> bool:
        """Run a write statement. Returns False if the statement failed."""
        try:
            with self.connection() as conn:
                conn.execute(query, tuple(params))
            return True
        except sqlite3.Error:
            logger.exception(f"Statement failed: {query.strip()}")
            return False

    @staticmethod
    def digest(value: str) -> str:
        """One-way digest used to key stored session tokens (lowercase hex SHA-1)."""
        return hashlib.sha1(value.encode("utf-8")).hexdigest()
