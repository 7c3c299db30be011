"""
NLP pipeline for resumatch.

Provides document text extraction and heuristic resume parsing.

Main Components:
- ExtractorFactory: Document text extraction (PDF, DOCX)
- ResumeParser: Text to ParsedProfile
- Vocabulary: Versioned skill, degree and stop-word lists
- ContactParser / SkillsParser / EducationParser: field extractors
"""

from .resume_parser import (
    ResumeParser,
    get_resume_parser,
)

from .vocabulary import (
    DEFAULT_VOCABULARY,
    Vocabulary,
)

from .extractors import (
    ExtractorFactory,
    ExtractionResult,
    BaseExtractor,
    PDFExtractor,
    DOCXExtractor,
    extract_text,
    validate_upload,
)

from .parsers import (
    ContactInfo,
    ContactParser,
    EducationParser,
    SkillsParser,
)

__all__ = [
    # Parser
    "ResumeParser",
    "get_resume_parser",
    # Vocabulary
    "DEFAULT_VOCABULARY",
    "Vocabulary",
    # Extractors
    "ExtractorFactory",
    "ExtractionResult",
    "BaseExtractor",
    "PDFExtractor",
    "DOCXExtractor",
    "extract_text",
    "validate_upload",
    # Field parsers
    "ContactInfo",
    "ContactParser",
    "EducationParser",
    "SkillsParser",
]
