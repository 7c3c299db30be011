"""
Document text extractors.

Supports extraction of text from PDF and DOCX files.
"""

from .base import BaseExtractor, ExtractionResult
from .pdf_extractor import PDFExtractor
from .docx_extractor import DOCXExtractor
from .extractor_factory import ExtractorFactory, extract_text, validate_upload

__all__ = [
    "BaseExtractor",
    "ExtractionResult",
    "PDFExtractor",
    "DOCXExtractor",
    "ExtractorFactory",
    "extract_text",
    "validate_upload",
]
