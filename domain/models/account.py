"""
Account domain model.
"""

from dataclasses import dataclass, field
from enum import IntEnum


class AccountType(IntEnum):
    """Privilege tiers stored in accounts.type."""

    NORMAL = 1
    TUTOR = 2
    SENIOR_TUTOR = 3
    GAMEMASTER = 4
    COMMUNITY_MANAGER = 5
    GOD = 6


@dataclass(frozen=True)
class AccountPlayer:
    """Summary of a character owned by an account."""

    name: str
    deletion_timestamp: int = 0


@dataclass
class Account:
    """
    Represents a player's login, premium and currency record.

    This is a pure domain model with no infrastructure dependencies. A fresh
    instance is built on every load and belongs to the calling request.
    """

    id: int = 0
    account_type: int = AccountType.NORMAL
    # Premium subscription
    premium_last_day: int = 0  # Epoch seconds; 0 means premium was never granted
    premium_remaining_days: int = 0  # Derived from premium_last_day on every load
    premium_days_purchased: int = 0
    creation_time: int = 0  # Epoch seconds; 0 means not yet set
    session_expires: int = 0  # Only set when resolved through a session lookup
    # Non-deleted characters keyed by name, in ascending name order
    players: dict[str, AccountPlayer] = field(default_factory=dict)

    @property
    def is_premium(self) -> bool:
        return self.premium_remaining_days > 0

    @property
    def character_names(self) -> list[str]:
        return list(self.players)

    def add_player(self, player: AccountPlayer) -> bool:
        """
        Register a character on this account.

        Returns False without replacing anything when a character with the
        same name is already present (first insert wins).
        """
        if player.name in self.players:
            return False
        self.players[player.name] = player
        return True

    def __str__(self) -> str:
        premium = f"{self.premium_remaining_days}d premium" if self.is_premium else "free"
        return f"Account {self.id} (type {int(self.account_type)}, {premium}, {len(self.players)} characters)"
