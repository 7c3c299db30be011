"""
Data models for resumatch.

Pydantic models for documents, parsed profiles, job postings, and the
derived match, search and ATS results.
"""

from .base import CamelModel, StoredModel
from .document import Document
from .job import JobPosting
from .match import (
    ATSFactors,
    ATSReport,
    ImportReport,
    KeywordAnalysis,
    KeywordPlacement,
    MatchResult,
    RankingResult,
    SearchHit,
    SearchResponse,
    SearchStats,
    SkillSearchHit,
    SkippedItem,
)
from .profile import ParsedProfile

__all__ = [
    # Base
    "CamelModel",
    "StoredModel",
    # Inputs
    "Document",
    "ParsedProfile",
    "JobPosting",
    # Results
    "MatchResult",
    "SkippedItem",
    "RankingResult",
    "SearchHit",
    "SearchResponse",
    "SearchStats",
    "SkillSearchHit",
    "KeywordAnalysis",
    "KeywordPlacement",
    "ATSFactors",
    "ATSReport",
    "ImportReport",
]
