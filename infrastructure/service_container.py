"""
Service container for dependency injection and initialization.

Usage:
    container = ServiceContainer(config)
    container.initialize()

    # Access services
    account_service = container.account_service
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from config import (
    DB_PATH,
    LOG_LEVEL,
    LOYALTY_RECONCILE_ON_LOAD,
    SECONDS_PER_DAY,
    SQLITE_BUSY_TIMEOUT_MS,
)
from domain.services.loyalty_service import LoyaltyService
from infrastructure.schema_manager import SchemaManager
from infrastructure.store_client import SQLiteStoreClient
from repositories.account_repository import AccountRepository
from services.account_service import AccountService

logger = logging.getLogger("account_gateway.infrastructure.container")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging for processes embedding the gateway."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    # Database
    db_path: str = DB_PATH
    busy_timeout_ms: int = SQLITE_BUSY_TIMEOUT_MS

    # Loyalty
    reconcile_on_load: bool = LOYALTY_RECONCILE_ON_LOAD

    # Epoch seconds source
    clock: Callable[[], float] = field(default=time.time)


class ServiceContainer:
    """
    Central container for the gateway's store, repository and service.

    Handles initialization order and dependency injection.
    """

    def __init__(self, config: ServiceConfig | None = None):
        """
        Initialize the container with configuration.

        Args:
            config: Service configuration (uses defaults if None)
        """
        self.config = config or ServiceConfig()
        self._initialized = False

        self._store: SQLiteStoreClient | None = None
        self._account_repo: AccountRepository | None = None
        self._account_service: AccountService | None = None

    @property
    def is_initialized(self) -> bool:
        """Check if container has been initialized."""
        return self._initialized

    def initialize(self) -> None:
        """
        Initialize schema, store, repository and service in order.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")

        SchemaManager(self.config.db_path, self.config.busy_timeout_ms).initialize()
        self._store = SQLiteStoreClient(self.config.db_path, self.config.busy_timeout_ms)
        self._account_repo = AccountRepository(
            self._store,
            clock=self.config.clock,
            loyalty_service=LoyaltyService(seconds_per_day=SECONDS_PER_DAY),
        )
        self._account_service = AccountService(
            self._account_repo, reconcile_on_load=self.config.reconcile_on_load
        )

        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("ServiceContainer not initialized. Call initialize() first.")

    @property
    def store(self) -> SQLiteStoreClient:
        self._require_initialized()
        return self._store

    @property
    def account_repository(self) -> AccountRepository:
        self._require_initialized()
        return self._account_repo

    @property
    def account_service(self) -> AccountService:
        self._require_initialized()
        return self._account_service
