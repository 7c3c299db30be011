"""
Utility modules for resumatch.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Vocabularies, weights and thresholds
- exceptions: Error taxonomy
- scoring: Rounding helpers
"""

from resumatch.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
)
from resumatch.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    SUPPORTED_RESUME_FORMATS,
    DocumentFormat,
    Grade,
    JobStatus,
)
from resumatch.utils.exceptions import (
    DimensionMismatchError,
    DocumentError,
    EmbeddingUnavailableError,
    EmptyInputError,
    ExtractionError,
    InvalidArgumentError,
    ResumatchError,
    StorageError,
    UnsupportedFormatError,
)
from resumatch.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    LoggerMixin,
    redact,
)
from resumatch.utils.scoring import round_half_up

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "SUPPORTED_RESUME_FORMATS",
    "DocumentFormat",
    "Grade",
    "JobStatus",
    # Exceptions
    "ResumatchError",
    "DocumentError",
    "UnsupportedFormatError",
    "EmptyInputError",
    "ExtractionError",
    "EmbeddingUnavailableError",
    "DimensionMismatchError",
    "InvalidArgumentError",
    "StorageError",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
    "redact",
    # Scoring
    "round_half_up",
]
