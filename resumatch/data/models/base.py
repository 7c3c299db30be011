"""
Base model classes for resumatch data models.

Provides the shared configuration for all models: camelCase wire aliases,
population by either field name or alias, and enum values stored as strings.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model whose JSON form uses camelCase keys.

    Python code uses snake_case attributes; `model_dump(by_alias=True)` and
    FastAPI responses emit `matchScore`, `requiredSkills` and so on.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class StoredModel(CamelModel):
    """
    Base model for records kept in a repository.

    The repository assigns `id`; MongoDB's `_id` is mapped onto it on load.
    """

    id: Optional[str] = None

    # Attached by the embedding pipeline
    embedding: Optional[list[float]] = Field(default=None, repr=False)
    embedding_is_placeholder: bool = False

    def model_dump_mongo(self) -> dict[str, Any]:
        """Convert model to a MongoDB-compatible dictionary (without the id)."""
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
