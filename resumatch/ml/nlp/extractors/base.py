"""
Base extractor class for document text extraction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from resumatch.utils.config import get_settings
from resumatch.utils.constants import DocumentFormat
from resumatch.utils.exceptions import EmptyInputError, ExtractionError


@dataclass
class ExtractionResult:
    """Result of text extraction from a document."""

    text: str
    page_count: int = 1
    metadata: dict = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        """Count words in extracted text."""
        return len(self.text.split())

    @property
    def is_empty(self) -> bool:
        """Check if extraction resulted in empty text."""
        return len(self.text.strip()) == 0


class BaseExtractor(ABC):
    """
    Abstract base class for document text extractors.

    Extractors raise on failure: EmptyInputError for zero-length input and
    ExtractionError for anything the underlying library cannot read.
    """

    @property
    @abstractmethod
    def format(self) -> DocumentFormat:
        """The document format handled by this extractor."""
        pass

    @abstractmethod
    def _extract(self, content: bytes, filename: str) -> ExtractionResult:
        """Format-specific extraction over non-empty bytes."""
        pass

    def extract_from_bytes(
        self, content: bytes, filename: Optional[str] = None
    ) -> ExtractionResult:
        """
        Extract text content from document bytes.

        Args:
            content: Raw bytes of the document
            filename: Original filename, used in error details

        Returns:
            ExtractionResult containing the extracted text and metadata

        Raises:
            EmptyInputError: content is empty
            ExtractionError: the document could not be read
        """
        filename = filename or f"document.{self.format.value}"
        if not content:
            raise EmptyInputError(filename=filename)
        return self._extract(content, filename)

    def extract(self, file_path: str | Path) -> ExtractionResult:
        """Extract text content from a document on disk."""
        path = self._validate_file(file_path)
        return self.extract_from_bytes(path.read_bytes(), path.name)

    def _validate_file(self, file_path: str | Path) -> Path:
        """Validate that the file exists, is a regular file and is within the size cap."""
        path = Path(file_path)

        if not path.exists():
            raise ExtractionError(f"File not found: {file_path}", filename=str(file_path))
        if not path.is_file():
            raise ExtractionError(f"Path is not a file: {file_path}", filename=str(file_path))

        max_size = get_settings().extraction.max_file_size_bytes
        size = path.stat().st_size
        if size > max_size:
            raise ExtractionError(
                f"File too large: {size} bytes (max: {max_size})",
                filename=path.name,
            )

        return path
