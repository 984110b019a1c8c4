"""
Repository layer for data access abstraction.
"""

from repositories.account_repository import AccountRepository
from repositories.base_repository import BaseRepository
from repositories.interfaces import IAccountRepository

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "IAccountRepository",
]
