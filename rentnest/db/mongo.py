"""
MongoDB client manager.

Owns client lifecycle and exposes database/health helpers for jobs.
"""

from typing import Any

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from rentnest.config import Settings, settings as default_settings
from rentnest.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class MongoConnectionError(Exception):
    """Raised when MongoDB cannot be reached or is misconfigured."""

    pass


class MongoClientManager:
    """Manage a MongoDB client for async usage."""

    def __init__(self, config: Settings | None = None) -> None:
        self._config = config or default_settings
        self._client: AsyncMongoClient | None = None
        self._initialized = False
        self._closed = False

    async def initialize(self) -> None:
        """Create the client and verify connectivity with a ping."""
        if self._initialized:
            return
        if self._closed:
            raise RuntimeError("Cannot reinitialize closed Mongo client")

        if self._config.mongo_uri_has_placeholder():
            raise MongoConnectionError(
                "Invalid MONGO_URI: replace the placeholder password with the real "
                "database user password (URL-encode special characters)"
            )
        if self._config.using_default_mongo_uri():
            logger.warning(
                "No MONGO_URI or MONGODB_URI set, using default local MongoDB",
                uri=self._config.mongo_uri(),
            )

        logger.info("Initializing Mongo client", database=self._config.mongo_db_name())

        try:
            self._client = AsyncMongoClient(
                self._config.mongo_uri(), **self._config.get_mongo_client_config()
            )
            await self._client.admin.command("ping")
        except PyMongoError as exc:
            await self._discard_client()
            raise MongoConnectionError(f"MongoDB connection failed: {exc}") from exc

        self._initialized = True
        logger.info("Mongo client initialized", database=self._config.mongo_db_name())

    async def _discard_client(self) -> None:
        if self._client is None:
            return
        try:
            await self._client.close()
        finally:
            self._client = None

    async def close(self) -> None:
        """Close the client cleanly."""
        if not self._initialized or self._closed:
            return

        try:
            await self._discard_client()
        finally:
            self._initialized = False
            self._closed = True
            logger.info("Mongo client closed")

    def database(self) -> Any:
        """Configured database handle."""
        if not self._initialized:
            raise RuntimeError("Mongo client not initialized")
        if self._closed:
            raise RuntimeError("Mongo client is closed")
        return self._client.get_database(self._config.mongo_db_name())

    async def health_check(self) -> dict[str, Any]:
        """Return Mongo client health status."""
        if not self._initialized:
            return {
                "healthy": False,
                "service": "mongodb",
                "error": "Client not initialized",
            }
        if self._closed:
            return {
                "healthy": False,
                "service": "mongodb",
                "error": "Client is closed",
            }

        try:
            await self._client.admin.command("ping")
            return {
                "healthy": True,
                "service": "mongodb",
                "database": self._config.mongo_db_name(),
            }
        except PyMongoError as exc:
            return {
                "healthy": False,
                "service": "mongodb",
                "error": str(exc),
                "error_type": type(exc).__name__,
            }
