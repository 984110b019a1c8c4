"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts for the services in the application.

Usage:
    class MyService(IMyService):
        def my_method(self, param: str) -> Result[dict]:
            ...
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.account import Account
    from domain.models.coins import CoinType
    from services.account_service import AccountLookup
    from services.result import Result


class IAccountService(ABC):
    """Interface for account loading and coin ledger operations."""

    @abstractmethod
    def load_and_reconcile(
        self, lookup: "AccountLookup", *, reconcile: bool | None = None
    ) -> "Result[Account]":
        """
        Load an account and repair its loyalty fields.

        Args:
            lookup: Which key to resolve the account by
            reconcile: Override for the loyalty write-back (None uses config)

        Returns:
            Result with the Account on success
        """
        ...

    @abstractmethod
    def get_coins(self, account_id: int, coin_type: "CoinType | int") -> "Result[int]":
        """Get one coin balance."""
        ...

    @abstractmethod
    def set_coins(self, account_id: int, coin_type: "CoinType | int", amount: int) -> "Result[int]":
        """Set one coin balance to an absolute amount."""
        ...

    @abstractmethod
    def add_coins(
        self, account_id: int, coin_type: "CoinType | int", amount: int, description: str = ""
    ) -> "Result[int]":
        """Credit coins and log the transaction. Returns the new balance."""
        ...

    @abstractmethod
    def remove_coins(
        self, account_id: int, coin_type: "CoinType | int", amount: int, description: str = ""
    ) -> "Result[int]":
        """Debit coins and log the transaction. Returns the new balance."""
        ...

    @abstractmethod
    def owns_character(self, account_id: int, name: str) -> bool:
        """Check if a character belongs to the account."""
        ...
