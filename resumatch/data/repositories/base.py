"""
Base repository class providing common MongoDB operations.

Entity repositories inherit from this base class and add the queries the
matching pipeline needs.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from resumatch.data.database import DatabaseManager, get_database_manager
from resumatch.data.models import StoredModel
from resumatch.utils.exceptions import StorageError
from resumatch.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=StoredModel)

# Only documents with a non-empty embedding array
HAS_EMBEDDING: dict[str, Any] = {"embedding.0": {"$exists": True}}


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository over one MongoDB collection.

    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        """Initialize repository with database connection."""
        self._db_manager = db_manager or get_database_manager()

    def _get_collection(self) -> AsyncIOMotorCollection:
        return self._db_manager.collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: dict[str, Any]) -> T:
        """Convert a MongoDB document to a model, mapping _id onto id."""
        data = dict(document)
        object_id = data.pop("_id", None)
        if object_id is not None:
            data["id"] = str(object_id)
        return self.model_class.model_validate(data)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        return [self._to_model(doc) for doc in documents if doc is not None]

    def _to_document(self, model: T) -> dict[str, Any]:
        return model.model_dump_mongo()

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> ObjectId:
        """Convert string to ObjectId if needed."""
        if isinstance(id_value, ObjectId):
            return id_value
        try:
            return ObjectId(id_value)
        except (InvalidId, TypeError) as e:
            raise StorageError(f"Invalid document id: {id_value}", cause=e) from e

    def _storage_error(self, operation: str, error: Exception) -> StorageError:
        logger.error(f"{operation} on {self.collection_name} failed: {error}")
        return StorageError(
            f"{operation} failed: {error}",
            collection=self.collection_name,
            cause=error,
        )

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def save(self, model: T) -> T:
        """Insert a new document, or replace the stored one when the model has an id."""
        collection = self._get_collection()
        document = self._to_document(model)
        try:
            if model.id is None:
                result = await collection.insert_one(document)
                saved = model.model_copy(update={"id": str(result.inserted_id)})
            else:
                await collection.replace_one(
                    {"_id": self._to_object_id(model.id)}, document, upsert=True
                )
                saved = model
        except PyMongoError as e:
            raise self._storage_error("save", e) from e

        logger.debug(f"Saved {self.collection_name} document: {saved.id}")
        return saved

    async def find(self, query: dict[str, Any]) -> list[T]:
        """Find documents matching a query."""
        try:
            documents = await self._get_collection().find(query).to_list(length=None)
        except PyMongoError as e:
            raise self._storage_error("find", e) from e
        return self._to_models(documents)
