"""
Pytest fixtures for tests.

Uses a session-scoped schema template: migrations run once and each test
copies the resulting database file instead of re-initializing it.
"""

import shutil

import pytest

from infrastructure.schema_manager import SchemaManager
from infrastructure.store_client import SQLiteStoreClient
from repositories.account_repository import AccountRepository
from services.account_service import AccountService

# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

FIXED_NOW = 1_700_000_000
"""Epoch seconds returned by the fixed clock fixture."""

DAY = 86400


@pytest.fixture(scope="session")
def _schema_template_path(tmp_path_factory):
    """Create a schema template database once per test session."""
    template_dir = tmp_path_factory.mktemp("schema_template")
    template_path = str(template_dir / "template.db")
    SchemaManager(template_path).initialize()
    yield template_path


@pytest.fixture
def repo_db_path(_schema_template_path, tmp_path):
    """Create a temporary database with initialized schema for repository tests."""
    test_db_path = str(tmp_path / "test.db")
    shutil.copy2(_schema_template_path, test_db_path)
    yield test_db_path


@pytest.fixture
def clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def store(repo_db_path):
    """Create a store client on the temp database."""
    return SQLiteStoreClient(repo_db_path)


@pytest.fixture
def account_repository(store, clock):
    """Create an account repository with temp database and fixed clock."""
    return AccountRepository(store, clock=clock)


@pytest.fixture
def account_service(account_repository):
    """Create an account service with reconciliation enabled."""
    return AccountService(account_repository, reconcile_on_load=True)


# =============================================================================
# DATA FIXTURES
# =============================================================================


@pytest.fixture
def create_account(store):
    """
    Insert an account row and return its id.

    Defaults describe a consistent account (creation set, no premium).
    """

    def _create(
        account_id: int,
        name: str | None = None,
        email: str | None = None,
        password: str = "secret",
        account_type: int = 1,
        lastday: int = 0,
        premdays: int = 0,
        premdays_purchased: int = 0,
        creation: int = FIXED_NOW - 30 * DAY,
        coins: int = 0,
    ) -> int:
        with store.connection() as conn:
            conn.execute(
                """
                INSERT INTO accounts
                (id, name, email, password, type, premdays, lastday, creation,
                 premdays_purchased, coins)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    account_id,
                    name or f"account{account_id}",
                    email or f"account{account_id}@example.com",
                    password,
                    account_type,
                    premdays,
                    lastday,
                    creation,
                    premdays_purchased,
                    coins,
                ),
            )
        return account_id

    return _create


@pytest.fixture
def create_player(store):
    """Insert a character row owned by an account."""

    def _create(account_id: int, name: str, deletion: int = 0) -> None:
        with store.connection() as conn:
            conn.execute(
                "INSERT INTO players (name, account_id, deletion) VALUES (?, ?, ?)",
                (name, account_id, deletion),
            )

    return _create


@pytest.fixture
def create_session(store):
    """Insert a session keyed by the digest of its token."""

    def _create(account_id: int, token: str, expires: int = FIXED_NOW + DAY) -> None:
        with store.connection() as conn:
            conn.execute(
                "INSERT INTO account_sessions (id, account_id, expires) VALUES (?, ?, ?)",
                (store.digest(token), account_id, expires),
            )

    return _create


@pytest.fixture
def fetch_account_row(store):
    """Read an account row directly, bypassing the repository."""

    def _fetch(account_id: int):
        with store.connection() as conn:
            return conn.execute("SELECT * FROM accounts WHERE id = ?", (account_id,)).fetchone()

    return _fetch
