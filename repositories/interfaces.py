"""
Abstract repository interfaces for data access.

These interfaces define the contracts implemented by concrete repositories.
"""

from abc import ABC, abstractmethod

from domain.models.account import Account
from domain.models.coins import CoinTransactionType, CoinType


class IAccountRepository(ABC):
    @abstractmethod
    def load_by_id(self, account_id: int) -> Account | None: ...

    @abstractmethod
    def load_by_email_or_name(self, use_name_field: bool, value: str) -> Account | None: ...

    @abstractmethod
    def load_by_session(self, session_token: str) -> Account | None: ...

    @abstractmethod
    def save(self, account: Account) -> bool: ...

    @abstractmethod
    def setup_loyalty_info(self, account: Account) -> bool:
        """Repair loyalty fields and persist them if they changed."""
        ...

    @abstractmethod
    def load_account_players(self, account: Account) -> bool: ...

    @abstractmethod
    def get_character_by_account_id_and_name(self, account_id: int, name: str) -> bool: ...

    @abstractmethod
    def get_password(self, account_id: int) -> str | None: ...

    @abstractmethod
    def get_coins(self, account_id: int, coin_type: CoinType | int) -> int | None: ...

    @abstractmethod
    def set_coins(self, account_id: int, coin_type: CoinType | int, amount: int) -> bool: ...

    @abstractmethod
    def register_coins_transaction(
        self,
        account_id: int,
        transaction_type: CoinTransactionType | int,
        amount: int,
        coin_type: CoinType | int,
        description: str,
    ) -> bool: ...
