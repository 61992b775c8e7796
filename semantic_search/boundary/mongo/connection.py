"""
MongoDB connection management.

Holds one lazily created MongoClient per worker process. The client is
created on first use, reused by every later invocation handled by the same
process, and closed by close() or on SIGTERM.

Dependencies: pymongo, boto3 (via secrets lookup)
System role: Document store connection lifecycle
"""

import logging
import signal
import sys
from typing import Any, Callable

from pymongo import MongoClient
from pymongo.collection import Collection

from semantic_search.boundary.aws.secrets import resolve_connection_string
from semantic_search.configs.mongodb import MongoSettings

logger = logging.getLogger(__name__)


class MongoConnection:
    """Lazily memoized MongoDB client and target collection."""

    def __init__(
        self,
        settings: MongoSettings,
        client_factory: Callable[..., Any] = MongoClient,
        secrets_client: Any | None = None,
    ) -> None:
        """
        Args:
            settings: MongoDB settings
            client_factory: Callable building the client from a connection string
            secrets_client: boto3 Secrets Manager client used for the URI lookup
        """
        self._settings = settings
        self._client_factory = client_factory
        self._secrets_client = secrets_client
        self._client: Any | None = None
        self._collection: Collection | None = None
        self._previous_sigterm: Any = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def get_collection(self) -> Collection:
        """
        Get the target collection, connecting on first use.

        Returns:
            Collection: Target collection
        """
        if self._collection is None:
            url = resolve_connection_string(self._settings, client=self._secrets_client)
            self._client = self._client_factory(
                url,
                connectTimeoutMS=self._settings.connect_timeout_ms,
            )
            self._collection = self._client[self._settings.database][self._settings.collection]
            logger.info(
                "get_collection - MongoDB client created",
                extra={
                    "database": self._settings.database,
                    "collection": self._settings.collection,
                },
            )
        return self._collection

    def close(self) -> None:
        """Close the client if one was created."""
        if self._client is not None:
            logger.info("Closing MongoDB connection")
            self._client.close()
        self._client = None
        self._collection = None

    def install_signal_handlers(self) -> None:
        """Close the connection when the process receives SIGTERM."""
        try:
            self._previous_sigterm = signal.signal(signal.SIGTERM, self._handle_sigterm)
        except ValueError:
            # signal handlers can only be installed from the main thread
            logger.debug("install_signal_handlers - Not in main thread, skipping")

    def _handle_sigterm(self, signum: int, frame: Any) -> None:
        self.close()
        if callable(self._previous_sigterm):
            self._previous_sigterm(signum, frame)
        else:
            sys.exit(0)

    def ping(self) -> bool:
        """Run the ping command against the server."""
        collection = self.get_collection()
        collection.database.client.admin.command("ping")
        return True
