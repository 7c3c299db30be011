"""
Job posting data model.

Job postings are created and edited by the surrounding CRUD layer; the
matching core only reads them.
"""

from typing import Optional

from pydantic import Field, field_validator

from resumatch.utils.constants import JobStatus

from .base import StoredModel


class JobPosting(StoredModel):
    """A job posting with its required skills."""

    title: str
    company: str
    location: Optional[str] = None
    description: str = ""
    required_skills: list[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    status: JobStatus = JobStatus.ACTIVE

    @field_validator("title", "company")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("required_skills")
    @classmethod
    def strip_skills(cls, v: list[str]) -> list[str]:
        return [s.strip() for s in v if s and s.strip()]

    @property
    def is_active(self) -> bool:
        return self.status == JobStatus.ACTIVE

    def embedding_text(self) -> str:
        """Text that represents this job for embedding."""
        return f"{self.title} {self.description} {' '.join(self.required_skills)}"
