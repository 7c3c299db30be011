"""
ATS readiness scoring.

Combines keyword coverage, skill coverage and basic formatting checks into
a 0-100 score with a letter grade:

    overall = 0.5 * keyword + 0.3 * skill + 0.2 * formatting

Formatting awards 33 points for an email address, 33 for a phone number
and 34 for a standard section word (experience, education, skills).
"""

import re
from typing import Optional

from resumatch.data.models import ATSFactors, ATSReport
from resumatch.ml.nlp import ContactParser
from resumatch.utils.constants import ATS_WEIGHTS, FORMATTING_POINTS, Grade
from resumatch.utils.logger import get_logger
from resumatch.utils.scoring import percentage, round_half_up

from .keyword_analyzer import KeywordAnalyzer, get_keyword_analyzer

logger = get_logger(__name__)


class ATSScorer:
    """Scores how well a resume would fare in an applicant tracking system."""

    # Whole words only: "Experienced" is not a section heading
    SECTION_PATTERN = re.compile(r"\b(experience|education|skills)\b", re.IGNORECASE)

    def __init__(self, analyzer: Optional[KeywordAnalyzer] = None):
        self.analyzer = analyzer or get_keyword_analyzer()
        self.contact_parser = ContactParser()

    def has_standard_sections(self, text: str) -> bool:
        return self.SECTION_PATTERN.search(text) is not None

    def formatting_score(self, text: str) -> tuple[int, ATSFactors]:
        """Formatting points and the checks that produced them."""
        factors = ATSFactors(
            has_email=self.contact_parser.has_email(text),
            has_phone=self.contact_parser.has_phone(text),
            has_standard_sections=self.has_standard_sections(text),
        )
        score = (
            (FORMATTING_POINTS["email"] if factors.has_email else 0)
            + (FORMATTING_POINTS["phone"] if factors.has_phone else 0)
            + (FORMATTING_POINTS["sections"] if factors.has_standard_sections else 0)
        )
        return score, factors

    def ats_score(self, resume_text: str, job_text: str) -> ATSReport:
        """
        Score a resume against a job description.

        Args:
            resume_text: Plain resume text
            job_text: Plain job description text

        Returns:
            ATSReport with component scores, grade and factors
        """
        analysis = self.analyzer.analyze(resume_text, job_text)

        keyword_score = analysis.match_score
        matched = len(analysis.matched_skills)
        skill_score = (
            percentage(matched, matched + len(analysis.missing_skills)) if matched else 0.0
        )
        formatting, factors = self.formatting_score(resume_text)

        overall = round_half_up(
            ATS_WEIGHTS["keyword"] * keyword_score
            + ATS_WEIGHTS["skill"] * skill_score
            + ATS_WEIGHTS["formatting"] * formatting
        )

        report = ATSReport(
            overall_score=overall,
            keyword_score=keyword_score,
            skill_score=round_half_up(skill_score),
            formatting_score=formatting,
            grade=Grade.from_score(overall),
            factors=factors.model_copy(
                update={"keyword_match": analysis.match_score, "skill_match": matched}
            ),
        )
        logger.info(f"ATS score {report.overall_score} ({report.grade})")
        return report


# Singleton instance
_ats_scorer: Optional[ATSScorer] = None


def get_ats_scorer() -> ATSScorer:
    """Get the ATS scorer singleton instance."""
    global _ats_scorer
    if _ats_scorer is None:
        _ats_scorer = ATSScorer()
    return _ats_scorer
