"""
Resume parser.

Turns plain resume text into a ParsedProfile using deterministic
heuristics. Parsing is pure: no I/O, no randomness, and it accepts any
string including the empty string.

Extraction rules:
- name: first non-empty line, or "Unknown" when that line is 50+ characters
- email / phone: first regex match, or None
- skills: vocabulary substring matches, case-folded, vocabulary order
- education: lines containing a degree keyword, deduplicated
- word count: whitespace-delimited tokens
"""

from typing import Optional

from resumatch.data.models import Document, ParsedProfile
from resumatch.utils.logger import get_logger

from .extractors import ExtractorFactory
from .parsers import ContactParser, EducationParser, SkillsParser
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = get_logger(__name__)


class ResumeParser:
    """
    Structured parser for resume text.

    The vocabulary (skills, degree keywords) is injected so alternate
    vocabulary versions can be used side by side.
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY
        self.contact_parser = ContactParser()
        self.skills_parser = SkillsParser(self.vocabulary)
        self.education_parser = EducationParser(self.vocabulary)

    def parse(self, text: str, filename: Optional[str] = None) -> ParsedProfile:
        """
        Parse resume text into a profile.

        Args:
            text: Plain resume text
            filename: Original filename, carried onto the profile

        Returns:
            ParsedProfile without an embedding
        """
        contact = self.contact_parser.parse(text)
        profile = ParsedProfile(
            filename=filename,
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            skills=self.skills_parser.extract(text),
            education=self.education_parser.extract(text),
            raw_text=text,
            word_count=len(text.split()),
        )
        logger.debug(
            f"Parsed profile '{profile.name}': {len(profile.skills)} skills, "
            f"{len(profile.education)} education entries, {profile.word_count} words "
            f"(vocabulary v{self.vocabulary.version})"
        )
        return profile

    def parse_document(self, document: Document) -> ParsedProfile:
        """
        Extract text from a document and parse it.

        Raises:
            UnsupportedFormatError, EmptyInputError, ExtractionError
        """
        text = ExtractorFactory.extract_document(document)
        return self.parse(text, filename=document.filename)

    def extract_skills(self, text: str) -> list[str]:
        """Vocabulary skills found in text, in canonical spelling."""
        return self.skills_parser.extract(text)


# Singleton instance
_resume_parser: Optional[ResumeParser] = None


def get_resume_parser() -> ResumeParser:
    """Get the resume parser singleton instance."""
    global _resume_parser
    if _resume_parser is None:
        _resume_parser = ResumeParser()
    return _resume_parser
