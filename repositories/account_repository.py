"""
Repository for account data access.
"""

import logging
import time
from collections.abc import Callable, Sequence
from types import MappingProxyType

from domain.models.account import Account, AccountPlayer
from domain.models.coins import COIN_TYPE_COLUMNS, CoinTransactionType, CoinType, parse_coin_type
from domain.services.loyalty_service import LoyaltyService
from infrastructure.store_client import SQLiteStoreClient
from repositories.base_repository import BaseRepository
from repositories.interfaces import IAccountRepository

logger = logging.getLogger("account_gateway.repositories.account")

_ACCOUNT_COLUMNS = (
    "accounts.id, accounts.type, accounts.premdays, accounts.lastday, "
    "accounts.creation, accounts.premdays_purchased"
)

# Legacy clients identify accounts by name, current clients by email.
_LOGIN_FIELDS = MappingProxyType({True: "name", False: "email"})


class AccountRepository(BaseRepository, IAccountRepository):
    """
    Handles all account-related database operations.

    Responsibilities:
    - Account lookups by id, email/name and session token
    - Premium and loyalty persistence
    - Coin balances and the coin transaction log
    - Character ownership queries

    Lookups never write. The loyalty write-back lives in setup_loyalty_info
    and is driven by the account service.
    """

    def __init__(
        self,
        store: SQLiteStoreClient,
        clock: Callable[[], float] = time.time,
        loyalty_service: LoyaltyService | None = None,
    ):
        super().__init__(store, clock)
        self.loyalty_service = loyalty_service or LoyaltyService()
        self.coin_type_to_column = MappingProxyType(dict(COIN_TYPE_COLUMNS))

    # --- Lookups ---

    def load_by_id(self, account_id: int) -> Account | None:
        """
        Get account by primary key.

        Returns:
            Populated Account, or None if not found or the store failed
        """
        query = f"SELECT {_ACCOUNT_COLUMNS}, 0 AS expires FROM accounts WHERE accounts.id = ?"
        return self._load(query, (account_id,))

    def load_by_email_or_name(self, use_name_field: bool, value: str) -> Account | None:
        """
        Get account by login identifier.

        Args:
            use_name_field: True to match the account name, False to match the email
            value: Name or email supplied by the client
        """
        column = _LOGIN_FIELDS[bool(use_name_field)]
        query = f"SELECT {_ACCOUNT_COLUMNS}, 0 AS expires FROM accounts WHERE accounts.{column} = ?"
        return self._load(query, (value,))

    def load_by_session(self, session_token: str) -> Account | None:
        """
        Get account owning a session token.

        Sessions are stored under the digest of their token, so the raw token
        is digested before the lookup. The returned account carries the
        session expiry.
        """
        query = f"""
            SELECT {_ACCOUNT_COLUMNS}, account_sessions.expires AS expires
            FROM accounts
            INNER JOIN account_sessions ON account_sessions.account_id = accounts.id
            WHERE account_sessions.id = ?
        """
        return self._load(query, (self.store.digest(session_token),))

    def _load(self, query: str, params: Sequence) -> Account | None:
        # Unlike the legacy server, an account without characters still loads;
        # only a failed character query aborts.
        row = self.store.fetch_one(query, params)
        if row is None:
            return None

        account = self._row_to_account(row)
        if not self.load_account_players(account):
            return None
        return account

    def _row_to_account(self, row) -> Account:
        premium_last_day = int(row["lastday"] or 0)
        return Account(
            id=int(row["id"]),
            account_type=int(row["type"]),
            premium_last_day=premium_last_day,
            premium_remaining_days=self.loyalty_service.compute_premium_remaining_days(
                premium_last_day, self.now()
            ),
            premium_days_purchased=int(row["premdays_purchased"] or 0),
            creation_time=int(row["creation"] or 0),
            session_expires=int(row["expires"] or 0),
        )

    def load_account_players(self, account: Account) -> bool:
        """
        Load the account's non-deleted characters in ascending name order.

        Returns:
            False if the character query failed
        """
        rows = self.store.fetch_all(
            "SELECT name, deletion FROM players WHERE account_id = ? ORDER BY name ASC",
            (account.id,),
        )
        if rows is None:
            logger.error(f"Failed to load account[{account.id}] players!")
            return False

        for row in rows:
            deletion = int(row["deletion"] or 0)
            if deletion != 0:
                continue
            if not account.add_player(AccountPlayer(name=row["name"], deletion_timestamp=deletion)):
                logger.warning(f"Duplicate character name on account[{account.id}]: {row['name']}")
        return True

    # --- Persistence ---

    def save(self, account: Account) -> bool:
        """
        Persist type, premium and loyalty fields of an account.

        lastday stores the absolute premium expiry. premdays stores the derived
        remaining days as a snapshot for external readers; loads never read it.
        """
        successful = self.store.execute(
            """
            UPDATE accounts
            SET type = ?, premdays = ?, lastday = ?, creation = ?, premdays_purchased = ?
            WHERE id = ?
            """,
            (
                int(account.account_type),
                account.premium_remaining_days,
                account.premium_last_day,
                account.creation_time,
                account.premium_days_purchased,
                account.id,
            ),
        )
        if not successful:
            logger.error(f"Failed to save account:[{account.id}]")
        return successful

    def setup_loyalty_info(self, account: Account) -> bool:
        """
        Repair purchased premium days and creation time, persisting any change.

        Returns:
            True if the account is consistent afterwards (nothing to fix, or
            the fix was saved), False if the write-back failed
        """
        if not self.loyalty_service.reconcile(account, self.now()):
            return True

        logger.info(
            f"Reconciled loyalty info for account[{account.id}]: "
            f"premdays_purchased={account.premium_days_purchased}, creation={account.creation_time}"
        )
        return self.save(account)

    # --- Characters and credentials ---

    def get_character_by_account_id_and_name(self, account_id: int, name: str) -> bool:
        """Check that exactly one character with this name belongs to the account."""
        rows = self.store.fetch_all(
            "SELECT id FROM players WHERE account_id = ? AND name = ?",
            (account_id, name),
        )
        if not rows:
            logger.error(f"Failed to get character: [{name}] from account: [{account_id}]!")
            return False
        return len(rows) == 1

    def get_password(self, account_id: int) -> str | None:
        """Get the stored password representation. Treated as an opaque string."""
        row = self.store.fetch_one("SELECT password FROM accounts WHERE id = ?", (account_id,))
        if row is None:
            logger.error(f"Failed to get account:[{account_id}] password!")
            return None
        return row["password"]

    # --- Coins ---

    def _coin_column(self, coin_type: CoinType | int, operation: str) -> str | None:
        parsed = parse_coin_type(coin_type)
        if parsed is None or parsed not in self.coin_type_to_column:
            logger.error(f"[{operation}]: invalid coin type:[{coin_type}]")
            return None
        return self.coin_type_to_column[parsed]

    def get_coins(self, account_id: int, coin_type: CoinType | int) -> int | None:
        """
        Get one coin balance of an account.

        Returns:
            The balance, or None for an unknown coin type, a missing account
            or a store failure
        """
        column = self._coin_column(coin_type, "get_coins")
        if column is None:
            return None

        row = self.store.fetch_one(f"SELECT {column} FROM accounts WHERE id = ?", (account_id,))
        if row is None:
            return None
        return int(row[column] or 0)

    def set_coins(self, account_id: int, coin_type: CoinType | int, amount: int) -> bool:
        """Set one coin balance to an absolute amount."""
        column = self._coin_column(coin_type, "set_coins")
        if column is None:
            return False

        successful = self.store.execute(
            f"UPDATE accounts SET {column} = ? WHERE id = ?",
            (amount, account_id),
        )
        if not successful:
            logger.error(f"Error setting account[{account_id}] coins to [{amount}]")
        return successful

    def register_coins_transaction(
        self,
        account_id: int,
        transaction_type: CoinTransactionType | int,
        amount: int,
        coin_type: CoinType | int,
        description: str,
    ) -> bool:
        """Append one row to the coin transaction log."""
        successful = self.store.execute(
            """
            INSERT INTO coins_transactions (account_id, type, coin_type, amount, description)
            VALUES (?, ?, ?, ?, ?)
            """,
            (account_id, int(transaction_type), int(coin_type), amount, description),
        )
        if not successful:
            logger.error(
                "Error registering coin transaction! "
                f"account_id:[{account_id}], type:[{int(transaction_type)}], "
                f"coin_type:[{int(coin_type)}], coins:[{amount}], description:[{description!r}]"
            )
        return successful
