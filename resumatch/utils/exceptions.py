"""
Exception hierarchy for resumatch.

Errors are grouped by pipeline stage:
- document stage (permanent, localized to one document)
- embedding stage (transient, retryable)
- configuration/programmer errors (fatal)
"""

from typing import Any, Optional


class ResumatchError(Exception):
    """Base exception for all resumatch errors."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/response."""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


# -----------------------------------------------------------------------------
# Document stage
# -----------------------------------------------------------------------------


class DocumentError(ResumatchError):
    """Base class for errors raised while turning a document into text."""

    def __init__(self, message: str, filename: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if filename:
            details["filename"] = filename
        super().__init__(message, details=details, **kwargs)


class UnsupportedFormatError(DocumentError):
    """Raised when a document's declared format is outside the supported set."""

    def __init__(self, declared_format: Any, **kwargs):
        details = kwargs.pop("details", None) or {}
        details["declared_format"] = str(declared_format)
        super().__init__(
            f"Unsupported document format: {declared_format}. Only PDF and DOCX are accepted.",
            error_code="UNSUPPORTED_FORMAT",
            details=details,
            **kwargs,
        )


class EmptyInputError(DocumentError):
    """Raised when a document has no content."""

    def __init__(self, message: str = "Document is empty", **kwargs):
        super().__init__(message, error_code="EMPTY_INPUT", **kwargs)


class ExtractionError(DocumentError):
    """Raised when text extraction fails on a corrupt or unreadable document."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code="EXTRACTION_FAILED", **kwargs)


# -----------------------------------------------------------------------------
# Embedding stage
# -----------------------------------------------------------------------------


class EmbeddingUnavailableError(ResumatchError):
    """Raised when the embedding provider cannot produce a vector."""

    retryable = True

    def __init__(self, message: str, model_name: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if model_name:
            details["model_name"] = model_name
        super().__init__(message, error_code="EMBEDDING_UNAVAILABLE", details=details, **kwargs)


class DimensionMismatchError(ResumatchError):
    """Raised when two vectors of different dimension meet. Never recovered."""

    def __init__(self, expected: int, actual: int, **kwargs):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Vector dimension mismatch: expected {expected}, got {actual}",
            error_code="DIMENSION_MISMATCH",
            details={"expected": expected, "actual": actual},
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Caller and storage errors
# -----------------------------------------------------------------------------


class InvalidArgumentError(ResumatchError):
    """Raised when a documented precondition is violated by the caller."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if field:
            details["field"] = field
        super().__init__(message, error_code="INVALID_ARGUMENT", details=details, **kwargs)


class StorageError(ResumatchError):
    """Raised when a repository operation fails."""

    def __init__(self, message: str, collection: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if collection:
            details["collection"] = collection
        super().__init__(message, error_code="STORAGE_ERROR", details=details, **kwargs)
