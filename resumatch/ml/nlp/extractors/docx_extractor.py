"""
DOCX document text extractor.

Uses python-docx. Legacy binary .doc files are not supported.
"""

import io

from docx import Document as open_docx

from resumatch.utils.constants import DocumentFormat
from resumatch.utils.exceptions import ExtractionError
from resumatch.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult

logger = get_logger(__name__)


class DOCXExtractor(BaseExtractor):
    """Extractor for Microsoft Word (.docx) documents."""

    @property
    def format(self) -> DocumentFormat:
        return DocumentFormat.DOCX

    def _extract(self, content: bytes, filename: str) -> ExtractionResult:
        try:
            doc = open_docx(io.BytesIO(content))
        except Exception as e:
            logger.error(f"DOCX extraction failed for {filename}: {e}")
            raise ExtractionError(
                f"Failed to parse DOCX file: {e}", filename=filename, cause=e
            ) from e
        return self._process_document(doc)

    def _process_document(self, doc) -> ExtractionResult:
        """Process a python-docx Document object."""
        text_parts = []
        metadata: dict = {"extractor": "python-docx"}
        warnings = []

        props = doc.core_properties
        metadata["document_properties"] = {
            "author": props.author,
            "title": props.title,
            "created": str(props.created) if props.created else None,
            "modified": str(props.modified) if props.modified else None,
        }

        for paragraph in doc.paragraphs:
            text = paragraph.text.strip()
            if text:
                text_parts.append(text)

        # Table cells, one row per line
        for table in doc.tables:
            for row in table.rows:
                row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_text:
                    text_parts.append(" | ".join(row_text))

        full_text = "\n".join(text_parts)

        if not full_text.strip():
            warnings.append("Document appears to be empty or contains only images")

        return ExtractionResult(
            text=full_text,
            page_count=len(doc.sections) or 1,
            metadata=metadata,
            warnings=warnings,
        )
