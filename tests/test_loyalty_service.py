"""
Tests for LoyaltyService domain logic.
"""

import pytest

from domain.models.account import Account
from domain.services.loyalty_service import LoyaltyService

NOW = 1_700_000_000
DAY = 86400


@pytest.fixture
def loyalty():
    return LoyaltyService()


class TestRemainingDays:
    @pytest.mark.parametrize(
        "last_day,expected",
        [
            (0, 0),
            (NOW - 1, 0),
            (NOW, 0),
            (NOW + DAY - 1, 0),
            (NOW + DAY, 1),
            (NOW + 30 * DAY + 5, 30),
        ],
    )
    def test_floor_and_clamp(self, loyalty, last_day, expected):
        assert loyalty.compute_premium_remaining_days(last_day, NOW) == expected

    def test_custom_day_length(self):
        assert LoyaltyService(seconds_per_day=60).compute_premium_remaining_days(NOW + 125, NOW) == 2


class TestReconcile:
    def test_consistent_account_untouched(self, loyalty):
        account = Account(id=1, premium_remaining_days=3, premium_days_purchased=3, creation_time=NOW - 1)

        assert loyalty.needs_update(account) is False
        assert loyalty.reconcile(account, NOW) is False
        assert account.premium_days_purchased == 3
        assert account.creation_time == NOW - 1

    def test_raises_purchased_days(self, loyalty):
        account = Account(id=1, premium_remaining_days=8, premium_days_purchased=2, creation_time=NOW - 1)

        assert loyalty.reconcile(account, NOW) is True
        assert account.premium_days_purchased == 8
        assert account.creation_time == NOW - 1

    def test_sets_missing_creation_time(self, loyalty):
        account = Account(id=1, premium_remaining_days=0, premium_days_purchased=4, creation_time=0)

        assert loyalty.reconcile(account, NOW) is True
        assert account.creation_time == NOW
        assert account.premium_days_purchased == 4

    def test_second_run_is_noop(self, loyalty):
        account = Account(id=1, premium_remaining_days=5, premium_days_purchased=0, creation_time=0)

        assert loyalty.reconcile(account, NOW) is True
        assert loyalty.reconcile(account, NOW + 10) is False
        assert account.creation_time == NOW

    def test_remaining_days_never_modified(self, loyalty):
        account = Account(id=1, premium_remaining_days=5, premium_days_purchased=0, creation_time=0)

        loyalty.reconcile(account, NOW)

        assert account.premium_remaining_days == 5
