"""
Factory for selecting the extractor for a declared document format.
"""

from pathlib import Path
from typing import Optional

from resumatch.data.models import Document
from resumatch.utils.config import get_settings
from resumatch.utils.constants import DocumentFormat
from resumatch.utils.exceptions import InvalidArgumentError
from resumatch.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult
from .docx_extractor import DOCXExtractor
from .pdf_extractor import PDFExtractor

logger = get_logger(__name__)


class ExtractorFactory:
    """
    Factory class for document extractors.

    Selects the extractor by declared format, never by sniffing content.
    """

    _extractors: dict[DocumentFormat, BaseExtractor] = {}
    _initialized: bool = False

    @classmethod
    def _initialize(cls) -> None:
        """Initialize available extractors."""
        if cls._initialized:
            return

        cls._extractors = {
            DocumentFormat.PDF: PDFExtractor(),
            DocumentFormat.DOCX: DOCXExtractor(),
        }
        cls._initialized = True

    @classmethod
    def get_extractor(cls, document_format: DocumentFormat | str) -> BaseExtractor:
        """
        Get the extractor for a declared format.

        Raises:
            UnsupportedFormatError: format is outside the supported set
        """
        cls._initialize()
        fmt = DocumentFormat.parse(document_format)
        return cls._extractors[fmt]

    @classmethod
    def extract_result(
        cls,
        content: bytes,
        document_format: DocumentFormat | str,
        filename: Optional[str] = None,
    ) -> ExtractionResult:
        """Extract text and metadata from document bytes."""
        extractor = cls.get_extractor(document_format)
        result = extractor.extract_from_bytes(content, filename)
        for warning in result.warnings:
            logger.warning(f"{filename or 'document'}: {warning}")
        return result

    @classmethod
    def extract(
        cls,
        content: bytes,
        document_format: DocumentFormat | str,
        filename: Optional[str] = None,
    ) -> str:
        """
        Extract plain text from document bytes.

        Raises:
            UnsupportedFormatError: format is outside the supported set
            EmptyInputError: content is empty
            ExtractionError: the document could not be read
        """
        return cls.extract_result(content, document_format, filename).text

    @classmethod
    def extract_document(cls, document: Document) -> str:
        """Extract plain text from a Document."""
        return cls.extract(document.content, document.format, document.filename)

    @classmethod
    def extract_file(cls, file_path: str | Path) -> str:
        """Extract plain text from a file on disk, using its extension as the format."""
        fmt = DocumentFormat.from_filename(file_path)
        return cls.get_extractor(fmt).extract(file_path).text


def validate_upload(
    filename: Optional[str],
    size: int,
    mime_type: Optional[str] = None,
) -> DocumentFormat:
    """
    Check an upload before extraction.

    Returns the resolved format. Raises UnsupportedFormatError for a type
    outside PDF/DOCX and InvalidArgumentError for a missing or oversized file.
    """
    if not filename:
        raise InvalidArgumentError("No file uploaded", field="file")

    if mime_type and mime_type != "application/octet-stream":
        fmt = DocumentFormat.from_mime_type(mime_type)
    else:
        fmt = DocumentFormat.from_filename(filename)

    max_size = get_settings().extraction.max_file_size_bytes
    if size > max_size:
        raise InvalidArgumentError(
            f"File size exceeds {max_size // (1024 * 1024)}MB limit",
            field="file",
            details={"size": size, "max_size": max_size},
        )
    return fmt


# Convenience function
def extract_text(content: bytes, document_format: DocumentFormat | str) -> str:
    """Extract plain text from document bytes of the declared format."""
    return ExtractorFactory.extract(content, document_format)
