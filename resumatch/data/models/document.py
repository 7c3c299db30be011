"""
Raw document model.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resumatch.utils.constants import DocumentFormat


class Document(BaseModel):
    """An uploaded document: raw bytes plus its declared format. Immutable."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(repr=False)
    format: DocumentFormat
    filename: Optional[str] = None

    @field_validator("format", mode="before")
    @classmethod
    def resolve_format(cls, v):
        """Accept 'pdf', '.DOCX' and similar; reject anything else."""
        return DocumentFormat.parse(v)

    @property
    def size(self) -> int:
        return len(self.content)
