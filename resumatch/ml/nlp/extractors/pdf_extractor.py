"""
PDF document text extractor.

Uses two extraction methods:
1. pdfplumber - Primary method, good for structured text
2. pypdf - Fallback when pdfplumber fails or yields little text
"""

import io
from typing import BinaryIO, Optional

import pdfplumber
from pypdf import PdfReader

from resumatch.utils.constants import DocumentFormat
from resumatch.utils.exceptions import ExtractionError
from resumatch.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult

logger = get_logger(__name__)

# Below this many non-whitespace characters pdfplumber output is treated as suspect
MIN_PRIMARY_TEXT_LENGTH = 50


class PDFExtractor(BaseExtractor):
    """Extractor for PDF documents."""

    @property
    def format(self) -> DocumentFormat:
        return DocumentFormat.PDF

    def _extract(self, content: bytes, filename: str) -> ExtractionResult:
        logger.debug(f"Parsing PDF {filename} ({len(content)} bytes)")
        file_obj = io.BytesIO(content)
        warnings: list[str] = []

        primary: Optional[tuple[str, int, dict]] = None
        try:
            primary = self._extract_with_pdfplumber(file_obj)
        except Exception as e:
            logger.debug(f"pdfplumber extraction error for {filename}: {e}")

        if primary is not None and len(primary[0].strip()) > MIN_PRIMARY_TEXT_LENGTH:
            text, page_count, metadata = primary
            return ExtractionResult(text=text, page_count=page_count, metadata=metadata)

        warnings.append("pdfplumber extraction yielded limited text, trying pypdf")
        file_obj.seek(0)
        try:
            text, page_count, metadata = self._extract_with_pypdf(file_obj)
        except Exception as e:
            if primary is None:
                logger.error(f"PDF extraction failed for {filename}: {e}")
                raise ExtractionError(
                    f"Failed to parse PDF file: {e}", filename=filename, cause=e
                ) from e
            logger.debug(f"pypdf extraction error for {filename}: {e}")
            text, page_count, metadata = primary
        else:
            if primary is not None and len(primary[0].strip()) > len(text.strip()):
                text, page_count, metadata = primary

        if len(text.strip()) < 10:
            warnings.append("PDF may be image-based or encrypted")

        return ExtractionResult(
            text=text,
            page_count=page_count,
            metadata=metadata,
            warnings=warnings,
        )

    def _extract_with_pdfplumber(self, file_obj: BinaryIO) -> tuple[str, int, dict]:
        """Extract text using pdfplumber."""
        text_parts = []
        metadata: dict = {"extractor": "pdfplumber"}

        with pdfplumber.open(file_obj) as pdf:
            page_count = len(pdf.pages)
            metadata["page_count"] = page_count

            if pdf.metadata:
                metadata["pdf_metadata"] = {
                    k: v for k, v in pdf.metadata.items()
                    if v and isinstance(v, str)
                }

            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)

        return "\n\n".join(text_parts), page_count, metadata

    def _extract_with_pypdf(self, file_obj: BinaryIO) -> tuple[str, int, dict]:
        """Extract text using pypdf."""
        text_parts = []
        metadata: dict = {"extractor": "pypdf"}

        reader = PdfReader(file_obj)
        page_count = len(reader.pages)
        metadata["page_count"] = page_count

        if reader.metadata:
            metadata["pdf_metadata"] = {
                k: str(v) for k, v in reader.metadata.items()
                if v and k.startswith("/")
            }

        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)

        return "\n\n".join(text_parts), page_count, metadata
