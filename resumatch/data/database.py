"""
MongoDB connection management for resumatch.

Repositories talk to MongoDB through Motor. A short-lived PyMongo client is
used only by the CLI to check that the server is reachable before doing
any work.
"""

from typing import Optional
from urllib.parse import quote_plus

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, IndexModel, MongoClient
from pymongo.errors import PyMongoError

from resumatch.utils.config import DatabaseSettings, get_settings
from resumatch.utils.logger import get_logger

logger = get_logger(__name__)

SERVER_SELECTION_TIMEOUT_MS = 5000
MAX_POOL_SIZE = 50

# Characters that would let a host setting smuggle extra URI components
FORBIDDEN_HOST_CHARS = frozenset(";&|$`/@")


def build_mongo_uri(db_settings: DatabaseSettings) -> str:
    """
    Connection URI from host, port and optional credentials.

    Credentials are URL-encoded. Raises ValueError for an empty host or one
    containing URI syntax.
    """
    host = db_settings.host.strip()
    if not host or FORBIDDEN_HOST_CHARS.intersection(host):
        raise ValueError(f"Invalid database host: {db_settings.host!r}")

    auth = ""
    if db_settings.username and db_settings.password:
        auth = f"{quote_plus(db_settings.username)}:{quote_plus(db_settings.password)}@"
    return f"mongodb://{auth}{host}:{db_settings.port}"


class DatabaseManager:
    """Owns the Motor client for one database. The client is created on first use."""

    def __init__(self, db_settings: Optional[DatabaseSettings] = None) -> None:
        self.settings = db_settings or get_settings().database
        self.uri = build_mongo_uri(self.settings)
        self._client: Optional[AsyncIOMotorClient] = None

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            logger.info(f"Connecting to MongoDB database {self.settings.name!r}")
            self._client = AsyncIOMotorClient(
                self.uri,
                serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
                connectTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
                maxPoolSize=MAX_POOL_SIZE,
            )
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self.client[self.settings.name]

    def collection(self, name: str) -> AsyncIOMotorCollection:
        return self.database[name]

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def is_reachable(self) -> bool:
        """Ping the server with a throwaway synchronous client."""
        client: MongoClient = MongoClient(
            self.uri,
            serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
            connectTimeoutMS=SERVER_SELECTION_TIMEOUT_MS,
        )
        try:
            client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB at {self.settings.host}:{self.settings.port} unreachable: {e}")
            return False
        finally:
            client.close()

    async def ping(self) -> bool:
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    # -------------------------------------------------------------------------
    # Setup and teardown
    # -------------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """Indexes backing the candidate and job lookups."""
        candidate_indexes = [
            IndexModel([("email", ASCENDING)]),
            IndexModel([("skills", ASCENDING)]),
            IndexModel([("embeddingIsPlaceholder", ASCENDING)]),
        ]
        job_indexes = [
            IndexModel([("status", ASCENDING)]),
            IndexModel([("company", ASCENDING)]),
            IndexModel([("requiredSkills", ASCENDING)]),
        ]

        await self.collection(self.settings.candidates_collection).create_indexes(candidate_indexes)
        await self.collection(self.settings.jobs_collection).create_indexes(job_indexes)
        logger.info(
            f"Indexes ensured on {self.settings.candidates_collection!r} "
            f"and {self.settings.jobs_collection!r}"
        )

    def close(self) -> None:
        if self._client is not None:
            logger.info("Closing MongoDB client")
            self._client.close()
            self._client = None


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
