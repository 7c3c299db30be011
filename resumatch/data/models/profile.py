"""
Parsed candidate profile model.

A profile is derived once from a document's text and is not edited
afterwards; attaching an embedding or a repository id returns a copy.
"""

from typing import Any, Optional

from pydantic import ConfigDict, Field, field_validator

from resumatch.utils.constants import UNKNOWN_NAME

from .base import StoredModel


class ParsedProfile(StoredModel):
    """Structured facts extracted from a resume."""

    model_config = ConfigDict(frozen=True)

    filename: Optional[str] = None
    name: str = UNKNOWN_NAME
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    raw_text: str = Field(default="", repr=False)
    word_count: int = Field(default=0, ge=0)

    @field_validator("skills")
    @classmethod
    def fold_skills(cls, v: list[str]) -> list[str]:
        """Case-fold and deduplicate, keeping first occurrence order."""
        seen: dict[str, None] = {}
        for skill in v:
            folded = skill.strip().lower()
            if folded:
                seen.setdefault(folded, None)
        return list(seen)

    def with_embedding(
        self, embedding: list[float], is_placeholder: bool = False
    ) -> "ParsedProfile":
        """Return a copy with the embedding attached."""
        return self.model_copy(
            update={
                "embedding": list(embedding),
                "embedding_is_placeholder": is_placeholder,
            }
        )

    def with_id(self, id_value: str) -> "ParsedProfile":
        return self.model_copy(update={"id": id_value})

    def summary(self) -> dict[str, Any]:
        """Short overview used by listings and the CLI."""
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "skill_count": len(self.skills),
            "top_skills": self.skills[:5],
            "education_count": len(self.education),
            "word_count": self.word_count,
        }
