"""
Logging for resumatch, built on Loguru.

Two kinds of records are written:
- application logs, to the console and a rotating file
- audit records for ranking and import decisions, to their own file

Audit records carry an `audit_type` extra; that is what routes them to
the audit sink.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from resumatch.utils.config import LoggingSettings, get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[audit_type]} | {extra[action]} | {message}"
AUDIT_FILE_NAME = "audit.log"

# Profile fields and secrets never written to a sink
REDACTED_KEYS = frozenset({
    "password", "secret", "token", "api_key", "credential",
    "email", "phone", "raw_text",
})
REDACTED = "***REDACTED***"

# Records logged through the bare loguru logger still render {extra[name]}
logger.configure(extra={"name": "resumatch"})


def _is_audit_record(record: dict[str, Any]) -> bool:
    return "audit_type" in record["extra"]


def _add_file_sinks(log_settings: LoggingSettings, diagnose: bool) -> Path:
    """Application and audit file sinks. Returns the audit file path."""
    log_file = log_settings.file_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        format=log_settings.format,
        level=log_settings.level,
        filter=lambda record: not _is_audit_record(record),
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=diagnose,
        enqueue=True,
    )

    audit_file = log_file.parent / AUDIT_FILE_NAME
    logger.add(
        audit_file,
        format=AUDIT_FORMAT,
        level="INFO",
        filter=_is_audit_record,
        rotation="1 week",
        retention="6 months",
        compression="zip",
        enqueue=True,
    )
    return audit_file


def setup_logging() -> None:
    """
    Install the sinks described by the logging settings.

    Safe to call more than once; existing sinks are replaced.
    """
    settings = get_settings()
    log_settings = settings.logging

    logger.remove()

    # Variable values only appear in tracebacks while developing
    diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=diagnose,
        )

    if log_settings.file_output:
        audit_file = _add_file_sinks(log_settings, diagnose)
        logger.bind(name=__name__).debug(f"Audit records go to {audit_file}")

    logger.bind(name=__name__).info(
        f"Logging initialized ({settings.environment}, level {log_settings.level})"
    )


def get_logger(name: str) -> Any:
    """Logger bound to a module or class name."""
    return logger.bind(name=name)


def redact(data: Any) -> Any:
    """Copy of data with contact details and secrets masked, at any depth."""
    if isinstance(data, dict):
        return {
            key: REDACTED if str(key).lower() in REDACTED_KEYS else redact(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return type(data)(redact(item) for item in data)
    return data


def audit_log(
    action: str,
    details: dict[str, Any],
    audit_type: str = "DECISION",
) -> None:
    """
    Write an audit record.

    Args:
        action: What was decided, e.g. "candidates_ranked" or "resumes_imported"
        details: Inputs and outcome of the decision; redacted before writing
        audit_type: DECISION for rankings and searches, IMPORT for batch imports
    """
    logger.bind(name="audit", audit_type=audit_type, action=action).info(f"{redact(details)}")


class LoggerMixin:
    """Gives a class a `logger` bound to its qualified name."""

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            cls = self.__class__
            self._logger = get_logger(f"{cls.__module__}.{cls.__qualname__}")
        return self._logger
