"""
Coin ledger domain types.
"""

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType


class CoinType(IntEnum):
    """Closed set of virtual-currency ledgers kept on an account."""

    NORMAL = 1
    TOURNAMENT = 4
    TRANSFERABLE = 8


class CoinTransactionType(IntEnum):
    """Direction of a coin transaction audit row."""

    ADD = 1
    REMOVE = 2


# Single source of truth for which balance columns exist on accounts.
COIN_TYPE_COLUMNS = MappingProxyType(
    {
        CoinType.NORMAL: "coins",
        CoinType.TOURNAMENT: "tournament_coins",
        CoinType.TRANSFERABLE: "coins_transferable",
    }
)


@dataclass(frozen=True)
class CoinTransaction:
    """Append-only audit row describing a balance change."""

    account_id: int
    transaction_type: CoinTransactionType
    coin_type: CoinType
    amount: int
    description: str = ""


def parse_coin_type(value) -> CoinType | None:
    """
    Convert a raw coin type into a CoinType.

    Returns None for values outside the enumeration, including bools and
    non-integer input.
    """
    if isinstance(value, CoinType):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    try:
        return CoinType(value)
    except ValueError:
        return None
