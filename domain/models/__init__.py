"""
Domain models - pure data structures representing business entities.
"""

from domain.models.account import Account, AccountPlayer, AccountType
from domain.models.coins import (
    COIN_TYPE_COLUMNS,
    CoinTransaction,
    CoinTransactionType,
    CoinType,
    parse_coin_type,
)

__all__ = [
    "Account",
    "AccountPlayer",
    "AccountType",
    "COIN_TYPE_COLUMNS",
    "CoinTransaction",
    "CoinTransactionType",
    "CoinType",
    "parse_coin_type",
]
