"""
Application-wide constants for resumatch.

This module contains the fixed vocabularies, scoring weights and thresholds
used throughout the matching pipeline. Vocabularies are versioned: bump
VOCABULARY_VERSION whenever a list below changes, since stored profiles were
parsed against the version current at import time.
"""

from enum import Enum
from pathlib import Path
from typing import Final

from resumatch.utils.exceptions import UnsupportedFormatError


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "resumatch"
APP_DISPLAY_NAME: Final[str] = "Resume Matching Engine"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Document Formats
# =============================================================================


class DocumentFormat(str, Enum):
    """Closed set of document formats accepted for extraction."""

    PDF = "pdf"
    DOCX = "docx"

    @classmethod
    def parse(cls, value: "str | DocumentFormat") -> "DocumentFormat":
        """Resolve a format name such as 'pdf' or 'DOCX'."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().lstrip("."))
        except ValueError:
            raise UnsupportedFormatError(value) from None

    @classmethod
    def from_filename(cls, filename: str | Path) -> "DocumentFormat":
        """Resolve a format from a file extension."""
        suffix = Path(filename).suffix.lower()
        if not suffix:
            raise UnsupportedFormatError(filename)
        return cls.parse(suffix)

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "DocumentFormat":
        """Resolve a format from an upload MIME type."""
        fmt = MIME_TYPES.get((mime_type or "").split(";")[0].strip().lower())
        if fmt is None:
            raise UnsupportedFormatError(mime_type)
        return cls(fmt)


MIME_TYPES: Final[dict[str, str]] = {
    "application/pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}

SUPPORTED_RESUME_FORMATS: Final[tuple[str, ...]] = (".pdf", ".docx")


# =============================================================================
# Vocabularies
# =============================================================================

VOCABULARY_VERSION: Final[str] = "1"

# Matched case-insensitively as substrings; order here is the output order
SKILL_VOCABULARY: Final[tuple[str, ...]] = (
    "JavaScript", "Python", "Java", "C++", "React", "Node.js", "Angular",
    "Vue.js", "MongoDB", "MySQL", "PostgreSQL", "Docker", "Kubernetes",
    "AWS", "Azure", "GCP", "Git", "TypeScript", "HTML", "CSS", "Redux",
    "Express", "Django", "Flask", "TensorFlow", "PyTorch", "Machine Learning",
    "AI", "Data Science", "Agile", "Scrum", "REST API", "GraphQL", "SQL",
    "NoSQL", "Redis", "CI/CD", "Jenkins",
)

# Case-sensitive line markers for education entries
DEGREE_KEYWORDS: Final[tuple[str, ...]] = (
    "Bachelor", "Master", "PhD", "B.S.", "M.S.", "B.Tech", "M.Tech", "MBA",
)

STOP_WORDS: Final[frozenset[str]] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would", "should",
    "could", "may", "might", "must", "can", "this", "that", "these", "those",
})

EXPERIENCE_LEVEL_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    "junior": ("junior", "entry", "graduate", "0-2 years", "fresher"),
    "mid": ("mid", "intermediate", "2-5 years", "experienced"),
    "senior": ("senior", "lead", "principal", "5+ years", "expert", "architect"),
}


# =============================================================================
# Parsing Constants
# =============================================================================

NAME_MAX_LENGTH: Final[int] = 50
UNKNOWN_NAME: Final[str] = "Unknown"

KEYWORD_LIMIT: Final[int] = 30
KEYWORD_MIN_LENGTH: Final[int] = 3
MISSING_KEYWORD_CAP: Final[int] = 15


# =============================================================================
# Scoring Constants
# =============================================================================

ATS_WEIGHTS: Final[dict[str, float]] = {
    "keyword": 0.5,
    "skill": 0.3,
    "formatting": 0.2,
}

FORMATTING_POINTS: Final[dict[str, int]] = {
    "email": 33,
    "phone": 33,
    "sections": 34,
}

GRADE_THRESHOLDS: Final[dict[str, int]] = {
    "A": 90,
    "B": 80,
    "C": 70,
    "D": 60,
}

MATCH_EXPLANATION_THRESHOLDS: Final[dict[str, int]] = {
    "excellent": 90,
    "good": 75,
    "moderate": 60,
}

PLACEHOLDER_REASON: Final[str] = "placeholder embedding"
MISSING_EMBEDDING_REASON: Final[str] = "missing embedding"
NO_REQUIRED_SKILLS_REASON: Final[str] = "no required skills"


# =============================================================================
# Enums
# =============================================================================


class JobStatus(str, Enum):
    """Status of a job posting."""

    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"


class Grade(str, Enum):
    """Letter grade attached to an ATS score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @classmethod
    def from_score(cls, score: float) -> "Grade":
        """Convert a 0-100 score to a grade. Band lower bounds are inclusive."""
        if score >= GRADE_THRESHOLDS["A"]:
            return cls.A
        elif score >= GRADE_THRESHOLDS["B"]:
            return cls.B
        elif score >= GRADE_THRESHOLDS["C"]:
            return cls.C
        elif score >= GRADE_THRESHOLDS["D"]:
            return cls.D
        return cls.F


class ExperienceLevel(str, Enum):
    """Experience bands used by keyword filtering."""

    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
