"""
Shared test fixtures for the resumatch test suite.

Sets environment variables before any resumatch imports so settings load
in testing mode with log sinks disabled, then provides factory fixtures for
profiles and jobs, a deterministic fake embedding provider and an
in-memory store.
"""

import os

# === Set environment BEFORE any resumatch imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "resumatch_test")
os.environ.setdefault("LOG_CONSOLE_OUTPUT", "false")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")

import io
import threading
import time
from typing import Optional

import pytest
from docx import Document as DocxDocument

from resumatch.core.matching import MatchScorer
from resumatch.data.models import JobPosting, ParsedProfile
from resumatch.data.repositories import InMemoryStore
from resumatch.ml.embeddings import EmbeddingService
from resumatch.ml.nlp import ResumeParser
from resumatch.utils.exceptions import EmbeddingUnavailableError


SAMPLE_RESUME_TEXT = """Jane Smith
jane.smith@example.com | (555) 123-4567

Experience
Senior Engineer at Acme, 2019-2024
Built Python and React services, deployed with Docker.

Education
Bachelor of Science in Computer Science, MIT

Skills
Python, React, Docker, PostgreSQL
"""

SAMPLE_JOB_TEXT = """Backend Developer
We need a developer with Python, Django and PostgreSQL experience.
The developer will design REST API services and deploy with Docker.
Python developer experience with Kubernetes is a plus.
"""


# ---------------------------------------------------------------------------
# Fake embedding provider
# ---------------------------------------------------------------------------


class FakeVectorProvider:
    """
    Deterministic VectorProvider for tests.

    Texts listed in `vectors` get that vector; any other text gets
    `default`. The first `fail_times` calls raise EmbeddingUnavailableError
    and every call sleeps `delay` seconds first.
    """

    def __init__(
        self,
        vectors: Optional[dict[str, list[float]]] = None,
        default: Optional[list[float]] = None,
        dimension: int = 4,
        fail_times: int = 0,
        fail_texts: Optional[set[str]] = None,
        delay: float = 0.0,
    ):
        self.vectors = vectors or {}
        self.default = default or [1.0] + [0.0] * (dimension - 1)
        self._dimension = dimension
        self.fail_times = fail_times
        self.fail_texts = fail_texts or set()
        self.delay = delay
        self.calls: list[str] = []
        self.completed = 0
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, text: str) -> list[float]:
        with self._lock:
            self.calls.append(text)
            call_number = len(self.calls)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if call_number <= self.fail_times or text in self.fail_texts:
                raise EmbeddingUnavailableError("fake provider unavailable")
            return list(self.vectors.get(text, self.default))
        finally:
            with self._lock:
                self.in_flight -= 1
                self.completed += 1


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_profile():
    """Factory that returns a callable to build ParsedProfile models."""

    def _factory(
        name: str = "Jane Smith",
        skills: Optional[list[str]] = None,
        embedding: Optional[list[float]] = None,
        is_placeholder: bool = False,
        raw_text: Optional[str] = None,
        id: Optional[str] = None,
        **kwargs,
    ) -> ParsedProfile:
        if skills is None:
            skills = ["python", "react"]
        no_embedding = kwargs.pop("no_embedding", False)
        if embedding is None and not no_embedding:
            embedding = [1.0, 0.0, 0.0, 0.0]
        return ParsedProfile(
            id=id,
            name=name,
            email=kwargs.pop("email", f"{name.split()[0].lower()}@example.com"),
            skills=skills,
            raw_text=raw_text if raw_text is not None else f"{name}\n{' '.join(skills)}",
            embedding=embedding,
            embedding_is_placeholder=is_placeholder,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_job():
    """Factory that returns a callable to build JobPosting models."""

    def _factory(
        title: str = "Backend Developer",
        company: str = "Acme",
        required_skills: Optional[list[str]] = None,
        embedding: Optional[list[float]] = None,
        is_placeholder: bool = False,
        id: Optional[str] = None,
        **kwargs,
    ) -> JobPosting:
        if required_skills is None:
            required_skills = ["python", "react", "docker"]
        no_embedding = kwargs.pop("no_embedding", False)
        if embedding is None and not no_embedding:
            embedding = [1.0, 0.0, 0.0, 0.0]
        return JobPosting(
            id=id,
            title=title,
            company=company,
            description=kwargs.pop("description", "Build backend services"),
            required_skills=required_skills,
            embedding=embedding,
            embedding_is_placeholder=is_placeholder,
            **kwargs,
        )

    return _factory


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_provider():
    """Factory for FakeVectorProvider; accepts the same keyword arguments."""
    return FakeVectorProvider


@pytest.fixture
def fake_provider():
    return FakeVectorProvider()


@pytest.fixture
def make_embedding_service():
    """Factory for EmbeddingService around a provider, with no retry delays."""

    def _factory(
        provider: Optional[FakeVectorProvider] = None,
        retry_delays: Optional[list[float]] = None,
        **kwargs,
    ) -> EmbeddingService:
        kwargs.setdefault("timeout_seconds", 5.0)
        kwargs.setdefault("allow_placeholder", False)
        return EmbeddingService(
            provider=provider or FakeVectorProvider(),
            retry_delays=[0.0, 0.0, 0.0] if retry_delays is None else retry_delays,
            **kwargs,
        )

    return _factory


@pytest.fixture
def embedding_service(make_embedding_service, fake_provider):
    return make_embedding_service(fake_provider)


@pytest.fixture
def scorer():
    return MatchScorer(skill_weight=0.6, semantic_weight=0.4)


@pytest.fixture
def parser():
    return ResumeParser()


@pytest.fixture
def memory_store():
    return InMemoryStore()


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@pytest.fixture
def make_docx_bytes():
    """Factory that builds a DOCX file in memory from paragraphs and table rows."""

    def _factory(
        paragraphs: Optional[list[str]] = None,
        table_rows: Optional[list[list[str]]] = None,
    ) -> bytes:
        document = DocxDocument()
        for paragraph in paragraphs if paragraphs is not None else SAMPLE_RESUME_TEXT.splitlines():
            document.add_paragraph(paragraph)
        if table_rows:
            table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
            for row, values in zip(table.rows, table_rows):
                for cell, value in zip(row.cells, values):
                    cell.text = value
        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    return _factory


@pytest.fixture
def sample_resume_text() -> str:
    return SAMPLE_RESUME_TEXT


@pytest.fixture
def sample_job_text() -> str:
    return SAMPLE_JOB_TEXT
