"""
Loyalty reconciliation domain service.

Keeps purchased premium days and the account creation time consistent with
the premium time an account actually has left.
"""

from domain.models.account import Account

SECONDS_PER_DAY = 86400


class LoyaltyService:
    """
    Pure domain service for premium and loyalty bookkeeping.

    Responsibilities:
    - Derive remaining premium days from the absolute expiry
    - Detect records whose loyalty fields drifted
    - Repair drifted records in place
    """

    def __init__(self, seconds_per_day: int = SECONDS_PER_DAY):
        self.seconds_per_day = seconds_per_day

    def compute_premium_remaining_days(self, premium_last_day: int, now: int) -> int:
        """
        Whole days of premium left at `now`.

        Partial days are floored, so an expiry 86399 seconds away yields 0
        and one 86400 seconds away yields 1. Past expiries yield 0.
        """
        if premium_last_day <= now:
            return 0
        return (premium_last_day - now) // self.seconds_per_day

    @staticmethod
    def needs_update(account: Account) -> bool:
        return (
            account.premium_days_purchased < account.premium_remaining_days
            or account.creation_time == 0
        )

    def reconcile(self, account: Account, now: int) -> bool:
        """
        Repair the loyalty fields of an account in place.

        Args:
            account: Account loaded from storage (remaining days already derived)
            now: Current epoch seconds, used when the creation time is missing

        Returns:
            True if the account was changed and needs to be persisted
        """
        if not self.needs_update(account):
            return False

        if account.premium_days_purchased < account.premium_remaining_days:
            account.premium_days_purchased = account.premium_remaining_days

        if account.creation_time == 0:
            account.creation_time = int(now)

        return True
