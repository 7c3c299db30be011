"""
Candidate-job matching and search.
"""

from .matching_engine import (
    MatchScorer,
    fold_skills,
    get_match_scorer,
    partition_rankable,
    skill_overlap,
)
from .search import (
    CandidateSearch,
    SearchFilters,
    search_by_experience,
    search_by_skills,
    search_stats,
)

__all__ = [
    "MatchScorer",
    "get_match_scorer",
    "fold_skills",
    "skill_overlap",
    "partition_rankable",
    "CandidateSearch",
    "SearchFilters",
    "search_by_skills",
    "search_by_experience",
    "search_stats",
]
