"""
Application services layer.

Services orchestrate business operations using repositories and domain services.
"""

from services.account_service import AccountLookup, AccountService

# Result type for consistent error handling
from services.result import Result

# Service interfaces (ABCs)
from services.interfaces import IAccountService

__all__ = [
    "AccountLookup",
    "AccountService",
    "IAccountService",
    "Result",
]
