"""
Document Store Connection Management.

This module wraps a MongoDB client behind a small DocumentStore class.
It provides:
- Construction from settings
- Readiness checks that raise a typed "unavailable" error
- Index setup for the collections queried by user

One instance is built at application startup and handed to the request
handlers; nothing here is a module-level singleton.
"""
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from interview_coach.core.config import Settings
from interview_coach.core.exceptions import DatabaseUnavailableError
from interview_coach.core.logging_config import LoggerMixin
from interview_coach.database import collections


class DocumentStore(LoggerMixin):
    """
    Access point for every collection used by the application.

    Example:
        >>> store = DocumentStore.from_settings(get_settings())
        >>> store.check_connection()
        True
        >>> store.collection(collections.USERS).find_one({"email": "a@b.c"})
    """

    def __init__(self, client: MongoClient, database_name: str):
        """
        Initialize the store around an existing client.

        Args:
            client: A pymongo MongoClient (or API-compatible client)
            database_name: Database holding all collections
        """
        self._client = client
        self._db = client[database_name]
        self._ready = False
        self.database_name = database_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        """
        Build a store from application settings.

        MongoClient connects lazily, so this never blocks; call
        check_connection() to verify the server answers.
        """
        client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.db_timeout_ms,
            tz_aware=True,
        )
        store = cls(client, settings.mongodb_database)
        host = settings.mongodb_uri.split("@")[-1]
        store.logger.info(f"Document store configured: {host}/{settings.mongodb_database}")
        return store

    def check_connection(self) -> bool:
        """
        Test document-store connectivity.

        Returns:
            True if the server answered, False otherwise.
        """
        try:
            self._client.server_info()
            if not self._ready:
                self.logger.info("Document store connection check: OK")
            self._ready = True
        except PyMongoError as e:
            self.logger.error(f"Document store connection check failed: {e}")
            self._ready = False
        return self._ready

    def require_ready(self) -> None:
        """
        Raise DatabaseUnavailableError unless the store is reachable.

        A store that failed its startup check is probed again, so the
        service recovers once the database comes back.
        """
        if not self._ready and not self.check_connection():
            raise DatabaseUnavailableError()

    def collection(self, name: str) -> Collection:
        """Get a collection by name after the readiness check."""
        self.require_ready()
        return self._db[name]

    def ensure_indexes(self) -> None:
        """Create the indexes the handlers rely on."""
        self.collection(collections.USERS).create_index(
            [("email", ASCENDING)], unique=True, name="email_unique"
        )
        for name in (collections.LEARNING_HISTORY, collections.INTERVIEW_HISTORY):
            self.collection(name).create_index([("userId", ASCENDING)], name="user_lookup")
        self.logger.info("Document store indexes ensured")

    def close(self) -> None:
        """Close all pooled connections."""
        self._client.close()
        self._ready = False
        self.logger.info("Document store connections closed")


def build_store(settings: Settings, client: Optional[MongoClient] = None) -> DocumentStore:
    """Create a store for scripts and the app factory."""
    if client is not None:
        return DocumentStore(client, settings.mongodb_database)
    return DocumentStore.from_settings(settings)
