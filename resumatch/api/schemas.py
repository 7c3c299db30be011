"""
Request and response bodies for the HTTP API.

All bodies use camelCase keys on the wire.
"""

from pydantic import Field

from resumatch.data.models import ATSReport, KeywordAnalysis, KeywordPlacement
from resumatch.data.models.base import CamelModel


class SearchRequest(CamelModel):
    query_text: str = Field(min_length=1)
    top_n: int = Field(default=10, ge=1)


class KeywordRequest(CamelModel):
    resume_text: str
    job_text: str


class KeywordResponse(CamelModel):
    keyword_analysis: KeywordAnalysis
    ats_report: ATSReport
    suggestions: list[str] = Field(default_factory=list)
    placements: list[KeywordPlacement] = Field(default_factory=list)


class HealthResponse(CamelModel):
    status: str = "ok"
    version: str
    embedding_model: str
