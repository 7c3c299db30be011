"""
Configuration management for resumatch.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Repository root; log files default to ROOT_DIR/logs
ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "resumatch"
    username: str | None = None
    password: str | None = None

    candidates_collection: str = "resumes"
    jobs_collection: str = "jobs"


class EmbeddingSettings(BaseSettings):
    """Embedding provider and request policy configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_")

    model: str = "sentence-transformers/all-MiniLM-L6-v2"
    # Process-wide vector dimension; every stored and query vector must match it
    dimension: int = 384

    device: Literal["cpu", "cuda", "mps", "auto"] = "auto"
    batch_size: int = 32

    # Outbound call policy
    max_concurrency: int = 4
    timeout_seconds: float = 30.0
    retry_delays: list[float] = Field(default_factory=lambda: [1.0, 2.0, 4.0])

    # Degraded mode: substitute flagged zero vectors when the provider is down
    allow_placeholder: bool = False

    @field_validator("device")
    @classmethod
    def validate_device(cls, v: str) -> str:
        """Auto-detect device if set to auto."""
        if v == "auto":
            try:
                import torch

                if torch.cuda.is_available():
                    return "cuda"
                elif torch.backends.mps.is_available():
                    return "mps"
            except ImportError:
                pass
            return "cpu"
        return v

    @field_validator("max_concurrency", "dimension")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v


class MatchingSettings(BaseSettings):
    """Composite match scoring configuration."""

    model_config = SettingsConfigDict(env_prefix="MATCHING_")

    skill_weight: float = 0.6
    semantic_weight: float = 0.4

    default_candidates_top_n: int = 10
    default_jobs_top_n: int = 5
    advanced_search_limit: int = 20

    @model_validator(mode="after")
    def validate_weights(self) -> "MatchingSettings":
        """Weights must be non-negative and sum to 1."""
        if self.skill_weight < 0 or self.semantic_weight < 0:
            raise ValueError("Matching weights must be non-negative")
        if abs(self.skill_weight + self.semantic_weight - 1.0) > 1e-6:
            raise ValueError("Matching weights must sum to 1.0")
        return self


class ExtractionSettings(BaseSettings):
    """Document upload and extraction limits."""

    model_config = SettingsConfigDict(env_prefix="EXTRACTION_")

    max_file_size_mb: int = 10

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


class APISettings(BaseSettings):
    """HTTP service configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = 8000
    title: str = "resumatch API"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = ROOT_DIR / "logs" / "resumatch.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "resumatch"
    version: str = "0.1.0"
    description: str = "Resume and job matching with semantic ranking and ATS analysis"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
