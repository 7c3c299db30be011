"""
Derived result models: matches, rankings, search hits and keyword/ATS reports.

None of these are persisted by the matching core. Each is computed on
demand and handed to the caller.
"""

from typing import Optional

from pydantic import ConfigDict, Field

from resumatch.utils.constants import Grade

from .base import CamelModel
from .profile import ParsedProfile


class MatchResult(CamelModel):
    """Composite skill and semantic match between a candidate and a job."""

    model_config = ConfigDict(frozen=True)

    subject_id: Optional[str] = None
    target_id: Optional[str] = None

    skill_match_percentage: int = Field(ge=0, le=100)
    semantic_score: int = Field(ge=0, le=100)
    match_score: int = Field(ge=0, le=100)

    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)

    # Display fields
    target_title: Optional[str] = None
    target_company: Optional[str] = None
    candidate_name: Optional[str] = None
    candidate_email: Optional[str] = None


class SkippedItem(CamelModel):
    """An item left out of a batch, with the reason."""

    item_id: Optional[str] = None
    reason: str


class RankingResult(CamelModel):
    """Ranked matches plus the items that could not be scored."""

    results: list[MatchResult] = Field(default_factory=list)
    skipped: list[SkippedItem] = Field(default_factory=list)


class SearchHit(CamelModel):
    """
    One semantic search result.

    This is the published result schema; stored profile fields beyond these
    are never copied into a hit.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    match_score: int = Field(ge=0, le=100)
    similarity: float
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)


class SearchResponse(CamelModel):
    """Search hits plus stored candidates that were not ranked."""

    results: list[SearchHit] = Field(default_factory=list)
    skipped: list[SkippedItem] = Field(default_factory=list)


class SearchStats(CamelModel):
    """Summary statistics over a list of search hits."""

    total_results: int = 0
    average_match: int = 0
    top_match: int = 0
    bottom_match: int = 0


class SkillSearchHit(CamelModel):
    """Result of a skill-only search."""

    profile: ParsedProfile
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    skill_match_percentage: int = 0


class KeywordAnalysis(CamelModel):
    """Keyword and skill gap between a resume and a job description."""

    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    match_score: int = Field(default=0, ge=0, le=100)
    total_job_keywords: int = 0
    total_matched_keywords: int = 0


class KeywordPlacement(CamelModel):
    """Suggested resume section for a missing keyword."""

    keyword: str
    section: str
    priority: str = "high"


class ATSFactors(CamelModel):
    """Individual checks that feed the ATS score."""

    has_email: bool = False
    has_phone: bool = False
    has_standard_sections: bool = False
    keyword_match: int = 0
    skill_match: int = 0


class ATSReport(CamelModel):
    """Composite ATS readiness score with letter grade."""

    overall_score: int = Field(ge=0, le=100)
    keyword_score: int = Field(ge=0, le=100)
    skill_score: int = Field(ge=0, le=100)
    formatting_score: int = Field(ge=0, le=100)
    grade: Grade
    factors: ATSFactors = Field(default_factory=ATSFactors)


class ImportReport(CamelModel):
    """Outcome of a batch resume import."""

    imported: list[ParsedProfile] = Field(default_factory=list)
    failed: list[SkippedItem] = Field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.imported)

    @property
    def failure_count(self) -> int:
        return len(self.failed)
