"""Resume-to-job keyword analysis and ATS scoring."""

from .ats_scorer import ATSScorer, get_ats_scorer
from .keyword_analyzer import KeywordAnalyzer, get_keyword_analyzer

__all__ = [
    "ATSScorer",
    "get_ats_scorer",
    "KeywordAnalyzer",
    "get_keyword_analyzer",
]
