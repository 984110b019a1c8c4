"""
Standard error codes for service layer.

Usage:
    from services import error_codes
    from services.result import Result

    if account is None:
        return Result.fail("Account not found", code=error_codes.ACCOUNT_NOT_FOUND)
"""

# General errors
VALIDATION_ERROR = "validation_error"

# Account errors
ACCOUNT_NOT_FOUND = "account_not_found"
WRITE_FAILED = "write_failed"

# Coin errors
INVALID_COIN_TYPE = "invalid_coin_type"
INSUFFICIENT_FUNDS = "insufficient_funds"
