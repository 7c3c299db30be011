"""
Keyword gap analysis between a resume and a job description.

Keywords are the most frequent non-trivial words of a text. The analyzer
reports which of the job's keywords and vocabulary skills the resume
covers, turns the gap into suggestions, and proposes a resume section for
each missing keyword.
"""

import re
from collections import Counter
from typing import Iterable, Optional

from resumatch.core.matching import fold_skills
from resumatch.data.models import KeywordAnalysis, KeywordPlacement
from resumatch.ml.nlp import ResumeParser, Vocabulary, get_resume_parser
from resumatch.utils.constants import (
    KEYWORD_LIMIT,
    KEYWORD_MIN_LENGTH,
    MISSING_KEYWORD_CAP,
)
from resumatch.utils.exceptions import InvalidArgumentError
from resumatch.utils.logger import get_logger
from resumatch.utils.scoring import percentage, round_half_up

logger = get_logger(__name__)


# Substrings that point a missing keyword at a resume section
PLACEMENT_HINTS: dict[str, tuple[str, ...]] = {
    "experience": ("led", "managed", "developed", "implemented", "designed"),
    "projects": ("project", "built", "created"),
}
DEFAULT_PLACEMENT_SECTION = "skills"
PLACEMENT_LIMIT = 10
SUGGESTION_LIST_SIZE = 5
SKILL_RATE_HINT_THRESHOLD = 60


class KeywordAnalyzer:
    """Compares the keywords and skills of a resume against a job description."""

    PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        parser: Optional[ResumeParser] = None,
    ):
        """
        Args:
            vocabulary: Skills and stop words. Defaults to the parser's vocabulary.
            parser: Skill extractor. Built from the vocabulary when omitted.
        """
        if parser is None:
            parser = ResumeParser(vocabulary) if vocabulary else get_resume_parser()
        elif vocabulary is not None and vocabulary != parser.vocabulary:
            raise InvalidArgumentError(
                f"Vocabulary v{vocabulary.version} differs from the parser's "
                f"v{parser.vocabulary.version}",
                field="vocabulary",
            )
        self.parser = parser
        self.vocabulary = parser.vocabulary

    # -------------------------------------------------------------------------
    # Keywords
    # -------------------------------------------------------------------------

    def tokenize(self, text: str) -> list[str]:
        """Lowercased words with punctuation, short words and stop words removed."""
        words = self.PUNCTUATION_PATTERN.sub(" ", text.lower()).split()
        return [
            word for word in words
            if len(word) >= KEYWORD_MIN_LENGTH and word not in self.vocabulary.stop_words
        ]

    def extract_keywords(self, text: str, limit: int = KEYWORD_LIMIT) -> list[str]:
        """
        Most frequent keywords of a text.

        Equal frequencies keep first-seen order.
        """
        counts = Counter(self.tokenize(text))
        # Counter preserves insertion order and sorted() is stable
        ranked = sorted(counts, key=lambda word: counts[word], reverse=True)
        return ranked[:limit]

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze(self, resume_text: str, job_text: str) -> KeywordAnalysis:
        """
        Keyword and skill gap of a resume against a job description.

        Matched and missing lists follow the job's order. The score is the
        share of job keywords the resume also has among its own top keywords.
        """
        resume_keywords = set(self.extract_keywords(resume_text))
        job_keywords = self.extract_keywords(job_text)

        resume_skills = set(fold_skills(self.parser.extract_skills(resume_text)))
        job_skills = fold_skills(self.parser.extract_skills(job_text))

        matched_keywords = [kw for kw in job_keywords if kw in resume_keywords]
        missing_keywords = [kw for kw in job_keywords if kw not in resume_keywords]

        analysis = KeywordAnalysis(
            matched_keywords=matched_keywords,
            missing_keywords=missing_keywords[:MISSING_KEYWORD_CAP],
            matched_skills=[s for s in job_skills if s in resume_skills],
            missing_skills=[s for s in job_skills if s not in resume_skills],
            match_score=round_half_up(percentage(len(matched_keywords), len(job_keywords))),
            total_job_keywords=len(job_keywords),
            total_matched_keywords=len(matched_keywords),
        )
        logger.debug(
            f"Keyword analysis: {analysis.total_matched_keywords}/{analysis.total_job_keywords} "
            f"keywords, {len(analysis.matched_skills)} skills matched"
        )
        return analysis

    @staticmethod
    def skill_match_rate(analysis: KeywordAnalysis) -> Optional[float]:
        """Percentage of the job's skills the resume has, or None if the job names none."""
        total = len(analysis.matched_skills) + len(analysis.missing_skills)
        if total == 0:
            return None
        return percentage(len(analysis.matched_skills), total)

    def optimization_suggestions(self, analysis: KeywordAnalysis) -> list[str]:
        """Advice for improving the resume's fit, most specific first."""
        suggestions = []

        if analysis.missing_skills:
            top_skills = ", ".join(analysis.missing_skills[:SUGGESTION_LIST_SIZE])
            suggestions.append(f"Add these key skills to your resume if you have them: {top_skills}")

        if analysis.match_score < 50:
            suggestions.append(
                "Your resume has low keyword overlap with the job description. "
                "Consider tailoring it more specifically to this role."
            )
        elif analysis.match_score < 70:
            suggestions.append(
                "Good keyword match, but there's room for improvement. "
                "Review missing keywords and add relevant ones."
            )
        else:
            suggestions.append(
                "Excellent keyword match! Your resume aligns well with the job requirements."
            )

        if analysis.missing_keywords:
            top_keywords = ", ".join(analysis.missing_keywords[:SUGGESTION_LIST_SIZE])
            suggestions.append(f"Consider incorporating these keywords: {top_keywords}")

        rate = self.skill_match_rate(analysis)
        if rate is not None and rate < SKILL_RATE_HINT_THRESHOLD:
            suggestions.append(
                "Focus on highlighting technical skills that match the job requirements."
            )

        return suggestions

    @staticmethod
    def keyword_placement(missing_keywords: Iterable[str]) -> list[KeywordPlacement]:
        """Suggested resume section for each of the first missing keywords."""
        placements = []
        for keyword in list(missing_keywords)[:PLACEMENT_LIMIT]:
            section = DEFAULT_PLACEMENT_SECTION
            for candidate_section, hints in PLACEMENT_HINTS.items():
                if any(hint in keyword for hint in hints):
                    section = candidate_section
                    break
            placements.append(KeywordPlacement(keyword=keyword, section=section))
        return placements


# Singleton instance
_keyword_analyzer: Optional[KeywordAnalyzer] = None


def get_keyword_analyzer() -> KeywordAnalyzer:
    """Get the keyword analyzer singleton instance."""
    global _keyword_analyzer
    if _keyword_analyzer is None:
        _keyword_analyzer = KeywordAnalyzer()
    return _keyword_analyzer
