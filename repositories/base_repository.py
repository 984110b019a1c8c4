"""
Base repository with common database operations.
"""

import logging
import time
from abc import ABC
from collections.abc import Callable

from infrastructure.store_client import SQLiteStoreClient

logger = logging.getLogger("account_gateway.repositories")


class BaseRepository(ABC):
    """
    Base class for all repositories.

    Holds the injected store client and the clock used for time-derived
    fields.
    """

    def __init__(self, store: SQLiteStoreClient, clock: Callable[[], float] = time.time):
        """
        Initialize repository with a store client.

        Args:
            store: Store client executing the repository's queries
            clock: Returns current epoch seconds; replaced by tests
        """
        self.store = store
        self._clock = clock

    def now(self) -> int:
        """Current epoch seconds as an integer."""
        return int(self._clock())
