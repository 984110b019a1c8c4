"""
Service for loading accounts and moving coins.

Loading is a two-phase operation: the repository lookup is a pure read, and
the loyalty write-back runs as a separate, switchable second phase.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from config import LOYALTY_RECONCILE_ON_LOAD
from domain.models.account import Account
from domain.models.coins import CoinTransaction, CoinTransactionType, CoinType, parse_coin_type
from repositories.interfaces import IAccountRepository
from services import error_codes
from services.interfaces import IAccountService
from services.result import Result

logger = logging.getLogger("account_gateway.services.account")


class LookupKind(Enum):
    ID = "id"
    EMAIL_OR_NAME = "email_or_name"
    SESSION = "session"


@dataclass(frozen=True)
class AccountLookup:
    """Key an account is resolved by."""

    kind: LookupKind
    value: int | str
    use_name_field: bool = False

    @classmethod
    def by_id(cls, account_id: int) -> "AccountLookup":
        return cls(LookupKind.ID, account_id)

    @classmethod
    def by_email_or_name(cls, value: str, use_name_field: bool = False) -> "AccountLookup":
        return cls(LookupKind.EMAIL_OR_NAME, value, use_name_field)

    @classmethod
    def by_session(cls, session_token: str) -> "AccountLookup":
        return cls(LookupKind.SESSION, session_token)

    def describe(self) -> str:
        if self.kind is LookupKind.SESSION:
            # Never log the raw token
            return "session"
        if self.kind is LookupKind.EMAIL_OR_NAME:
            field = "name" if self.use_name_field else "email"
            return f"{field}={self.value}"
        return f"id={self.value}"


class AccountService(IAccountService):
    """
    Orchestrates account loads and coin ledger changes.

    When an account is loaded with reconciliation enabled:
    1. The repository resolves the account (no writes)
    2. Loyalty fields are repaired and persisted if they drifted
    """

    def __init__(self, account_repo: IAccountRepository, reconcile_on_load: bool | None = None):
        self.account_repo = account_repo
        self.reconcile_on_load = (
            reconcile_on_load if reconcile_on_load is not None else LOYALTY_RECONCILE_ON_LOAD
        )

    # --- Loading ---

    def _lookup(self, lookup: AccountLookup) -> Account | None:
        if lookup.kind is LookupKind.ID:
            return self.account_repo.load_by_id(int(lookup.value))
        if lookup.kind is LookupKind.EMAIL_OR_NAME:
            return self.account_repo.load_by_email_or_name(lookup.use_name_field, str(lookup.value))
        return self.account_repo.load_by_session(str(lookup.value))

    def load_and_reconcile(
        self, lookup: AccountLookup, *, reconcile: bool | None = None
    ) -> Result[Account]:
        account = self._lookup(lookup)
        if account is None:
            return Result.fail(
                f"Account not found ({lookup.describe()})", code=error_codes.ACCOUNT_NOT_FOUND
            )

        should_reconcile = self.reconcile_on_load if reconcile is None else reconcile
        if should_reconcile and not self.account_repo.setup_loyalty_info(account):
            return Result.fail(
                f"Failed to persist loyalty info for account {account.id}",
                code=error_codes.WRITE_FAILED,
            )

        return Result.ok(account)

    def load_by_id(self, account_id: int, *, reconcile: bool | None = None) -> Result[Account]:
        return self.load_and_reconcile(AccountLookup.by_id(account_id), reconcile=reconcile)

    def load_by_email_or_name(
        self, use_name_field: bool, value: str, *, reconcile: bool | None = None
    ) -> Result[Account]:
        return self.load_and_reconcile(
            AccountLookup.by_email_or_name(value, use_name_field), reconcile=reconcile
        )

    def load_by_session(self, session_token: str, *, reconcile: bool | None = None) -> Result[Account]:
        return self.load_and_reconcile(AccountLookup.by_session(session_token), reconcile=reconcile)

    # --- Coins ---

    def get_coins(self, account_id: int, coin_type: CoinType | int) -> Result[int]:
        parsed = parse_coin_type(coin_type)
        if parsed is None:
            return Result.fail(f"Invalid coin type: {coin_type}", code=error_codes.INVALID_COIN_TYPE)

        coins = self.account_repo.get_coins(account_id, parsed)
        if coins is None:
            return Result.fail(
                f"Could not read {parsed.name.lower()} coins of account {account_id}",
                code=error_codes.ACCOUNT_NOT_FOUND,
            )
        return Result.ok(coins)

    def set_coins(self, account_id: int, coin_type: CoinType | int, amount: int) -> Result[int]:
        parsed = parse_coin_type(coin_type)
        if parsed is None:
            return Result.fail(f"Invalid coin type: {coin_type}", code=error_codes.INVALID_COIN_TYPE)
        if amount < 0:
            return Result.fail("Coin balance cannot be negative", code=error_codes.VALIDATION_ERROR)

        if not self.account_repo.set_coins(account_id, parsed, amount):
            return Result.fail(
                f"Failed to set coins of account {account_id}", code=error_codes.WRITE_FAILED
            )
        return Result.ok(amount)

    def add_coins(
        self, account_id: int, coin_type: CoinType | int, amount: int, description: str = ""
    ) -> Result[int]:
        return self._change_coins(account_id, coin_type, amount, CoinTransactionType.ADD, description)

    def remove_coins(
        self, account_id: int, coin_type: CoinType | int, amount: int, description: str = ""
    ) -> Result[int]:
        return self._change_coins(
            account_id, coin_type, amount, CoinTransactionType.REMOVE, description
        )

    def _change_coins(
        self,
        account_id: int,
        coin_type: CoinType | int,
        amount: int,
        transaction_type: CoinTransactionType,
        description: str,
    ) -> Result[int]:
        if amount <= 0:
            return Result.fail("Amount must be positive", code=error_codes.VALIDATION_ERROR)

        current = self.get_coins(account_id, coin_type)
        if not current:
            return current

        parsed = parse_coin_type(coin_type)
        if transaction_type is CoinTransactionType.REMOVE:
            if current.value < amount:
                return Result.fail(
                    f"Insufficient coins: has {current.value}, needs {amount}",
                    code=error_codes.INSUFFICIENT_FUNDS,
                )
            new_balance = current.value - amount
        else:
            new_balance = current.value + amount

        if not self.account_repo.set_coins(account_id, parsed, new_balance):
            return Result.fail(
                f"Failed to update coins of account {account_id}", code=error_codes.WRITE_FAILED
            )

        transaction = CoinTransaction(
            account_id=account_id,
            transaction_type=transaction_type,
            coin_type=parsed,
            amount=amount,
            description=description,
        )
        # The balance is already updated; a failed log entry is reported but not undone.
        if not self.account_repo.register_coins_transaction(
            transaction.account_id,
            transaction.transaction_type,
            transaction.amount,
            transaction.coin_type,
            transaction.description,
        ):
            logger.warning(
                f"Coins of account {account_id} changed to {new_balance} without a transaction record"
            )

        return Result.ok(new_balance)

    # --- Characters ---

    def owns_character(self, account_id: int, name: str) -> bool:
        return self.account_repo.get_character_by_account_id_and_name(account_id, name)
