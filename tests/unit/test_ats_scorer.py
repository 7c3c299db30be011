"""
Tests for resumatch.core.analysis.ats_scorer.
"""

import pytest

from resumatch.core.analysis import ATSScorer, KeywordAnalyzer
from resumatch.ml.nlp import Vocabulary
from resumatch.utils.constants import Grade

JOB = "Python developer needed. Docker experience required."


@pytest.fixture
def ats():
    analyzer = KeywordAnalyzer(
        vocabulary=Vocabulary(version="test", skills=["Python", "Docker", "Kubernetes"])
    )
    return ATSScorer(analyzer=analyzer)


class TestFormatting:
    def test_contact_without_section_heading(self):
        text = "Experienced in Python and SQL, email me at a@b.com, call 555-123-4567"
        score, factors = ATSScorer().formatting_score(text)

        assert score == 66
        assert factors.has_email
        assert factors.has_phone
        # "Experienced" is not the section word "experience"
        assert not factors.has_standard_sections

    @pytest.mark.parametrize("heading", ["EXPERIENCE", "Education:", "skills"])
    def test_section_words(self, heading):
        assert ATSScorer().has_standard_sections(f"Jane\n{heading}\nstuff")

    def test_all_checks(self, sample_resume_text):
        score, _ = ATSScorer().formatting_score(sample_resume_text)
        assert score == 100

    def test_nothing(self):
        score, factors = ATSScorer().formatting_score("just some words")
        assert score == 0
        assert factors.model_dump() == {
            "has_email": False,
            "has_phone": False,
            "has_standard_sections": False,
            "keyword_match": 0,
            "skill_match": 0,
        }


class TestATSScore:
    def test_weighted_overall(self, ats):
        resume = "Jane Doe\njane@example.com\n555-123-4567\nSkills\nPython developer building services"
        report = ats.ats_score(resume, JOB)

        assert report.keyword_score == 33
        assert report.skill_score == 50
        assert report.formatting_score == 100
        # 0.5 * 33 + 0.3 * 50 + 0.2 * 100 = 51.5
        assert report.overall_score == 52
        assert report.grade == Grade.F
        assert report.factors.keyword_match == 33
        assert report.factors.skill_match == 1

    def test_no_skill_overlap(self, ats):
        report = ats.ats_score("Gardening and cooking", JOB)
        assert report.skill_score == 0
        assert report.factors.skill_match == 0

    def test_job_without_skills(self, ats):
        report = ats.ats_score("Python developer", "Friendly greeter wanted")
        assert report.skill_score == 0

    def test_strong_resume_grades_a(self, ats):
        resume = f"Jane Doe\njane@example.com\n555-123-4567\nExperience\n{JOB}"
        report = ats.ats_score(resume, JOB)
        assert report.keyword_score == 100
        assert report.skill_score == 100
        assert report.overall_score == 100
        assert report.grade == Grade.A
