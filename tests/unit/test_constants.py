"""
Tests for resumatch.utils.constants: document formats, grades, vocabularies.
"""

import pytest

from resumatch.utils.constants import (
    ATS_WEIGHTS,
    EXPERIENCE_LEVEL_KEYWORDS,
    FORMATTING_POINTS,
    SKILL_VOCABULARY,
    STOP_WORDS,
    DocumentFormat,
    Grade,
    JobStatus,
)
from resumatch.utils.exceptions import UnsupportedFormatError


# ── DocumentFormat ──────────────────────────────────────────────────────────


class TestDocumentFormatParse:
    def test_lowercase_name(self):
        assert DocumentFormat.parse("pdf") == DocumentFormat.PDF

    def test_uppercase_with_dot(self):
        assert DocumentFormat.parse(".DOCX") == DocumentFormat.DOCX

    def test_enum_passthrough(self):
        assert DocumentFormat.parse(DocumentFormat.PDF) is DocumentFormat.PDF

    @pytest.mark.parametrize("value", ["txt", "doc", "rtf", ""])
    def test_unsupported_raises(self, value):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            DocumentFormat.parse(value)
        assert exc_info.value.error_code == "UNSUPPORTED_FORMAT"


class TestDocumentFormatFromFilename:
    def test_pdf_extension(self):
        assert DocumentFormat.from_filename("resume.PDF") == DocumentFormat.PDF

    def test_docx_extension(self):
        assert DocumentFormat.from_filename("cv/jane.docx") == DocumentFormat.DOCX

    def test_no_extension_raises(self):
        with pytest.raises(UnsupportedFormatError):
            DocumentFormat.from_filename("resume")


class TestDocumentFormatFromMimeType:
    def test_pdf_mime(self):
        assert DocumentFormat.from_mime_type("application/pdf") == DocumentFormat.PDF

    def test_docx_mime(self):
        mime = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        assert DocumentFormat.from_mime_type(mime) == DocumentFormat.DOCX

    def test_mime_parameters_ignored(self):
        assert DocumentFormat.from_mime_type("application/pdf; charset=binary") == DocumentFormat.PDF

    def test_legacy_word_rejected(self):
        with pytest.raises(UnsupportedFormatError):
            DocumentFormat.from_mime_type("application/msword")


# ── Grade.from_score() ──────────────────────────────────────────────────────


class TestGradeFromScore:
    @pytest.mark.parametrize(
        "score, grade",
        [
            (100, Grade.A),
            (90, Grade.A),
            (89, Grade.B),
            (80, Grade.B),
            (79, Grade.C),
            (70, Grade.C),
            (69, Grade.D),
            (60, Grade.D),
            (59, Grade.F),
            (0, Grade.F),
        ],
    )
    def test_band_lower_bounds_inclusive(self, score, grade):
        assert Grade.from_score(score) == grade


# ── Fixed tables ────────────────────────────────────────────────────────────


class TestScoringTables:
    def test_ats_weights_sum_to_one(self):
        assert sum(ATS_WEIGHTS.values()) == pytest.approx(1.0)

    def test_formatting_points_sum_to_hundred(self):
        assert sum(FORMATTING_POINTS.values()) == 100


class TestVocabularies:
    def test_skill_vocabulary_size(self):
        assert len(SKILL_VOCABULARY) == 38

    def test_skill_vocabulary_unique(self):
        assert len(set(SKILL_VOCABULARY)) == len(SKILL_VOCABULARY)

    def test_stop_words_lowercase(self):
        assert all(word == word.lower() for word in STOP_WORDS)

    def test_experience_levels(self):
        assert set(EXPERIENCE_LEVEL_KEYWORDS) == {"junior", "mid", "senior"}
        assert "architect" in EXPERIENCE_LEVEL_KEYWORDS["senior"]


class TestJobStatus:
    def test_all_values_present(self):
        assert {s.value for s in JobStatus} == {"draft", "active", "closed"}
