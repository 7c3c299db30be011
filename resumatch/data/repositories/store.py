"""
Storage interface consumed by the matching pipeline, with MongoDB and
in-memory implementations.
"""

from itertools import count
from typing import Iterable, Optional, Protocol, runtime_checkable

from resumatch.data.models import JobPosting, ParsedProfile

from .candidate_repository import CandidateRepository
from .job_repository import JobRepository


@runtime_checkable
class MatchingStore(Protocol):
    """What the search and import pipelines need from storage."""

    async def list_candidates_with_embedding(self) -> list[ParsedProfile]: ...

    async def list_active_jobs_with_embedding(self) -> list[JobPosting]: ...

    async def save_profile(self, profile: ParsedProfile) -> ParsedProfile: ...

    async def save_job(self, job: JobPosting) -> JobPosting: ...


class MongoStore:
    """MatchingStore backed by the MongoDB repositories."""

    def __init__(
        self,
        candidates: Optional[CandidateRepository] = None,
        jobs: Optional[JobRepository] = None,
    ):
        self.candidates = candidates or CandidateRepository()
        self.jobs = jobs or JobRepository()

    async def list_candidates_with_embedding(self) -> list[ParsedProfile]:
        return await self.candidates.list_candidates_with_embedding()

    async def list_active_jobs_with_embedding(self) -> list[JobPosting]:
        return await self.jobs.list_active_jobs_with_embedding()

    async def save_profile(self, profile: ParsedProfile) -> ParsedProfile:
        return await self.candidates.save_profile(profile)

    async def save_job(self, job: JobPosting) -> JobPosting:
        return await self.jobs.save_job(job)


class InMemoryStore:
    """
    MatchingStore held in process memory.

    Used by tests and by CLI commands that work on local files only.
    Insertion order is preserved.
    """

    def __init__(
        self,
        profiles: Iterable[ParsedProfile] = (),
        jobs: Iterable[JobPosting] = (),
    ):
        self._ids = count(1)
        self._profiles: dict[str, ParsedProfile] = {}
        self._jobs: dict[str, JobPosting] = {}
        for profile in profiles:
            self._put_profile(profile)
        for job in jobs:
            self._put_job(job)

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def _put_profile(self, profile: ParsedProfile) -> ParsedProfile:
        if profile.id is None:
            profile = profile.with_id(self._next_id("profile"))
        self._profiles[profile.id] = profile
        return profile

    def _put_job(self, job: JobPosting) -> JobPosting:
        if job.id is None:
            job = job.model_copy(update={"id": self._next_id("job")})
        self._jobs[job.id] = job
        return job

    @property
    def profiles(self) -> list[ParsedProfile]:
        return list(self._profiles.values())

    @property
    def jobs(self) -> list[JobPosting]:
        return list(self._jobs.values())

    async def list_candidates_with_embedding(self) -> list[ParsedProfile]:
        return [p for p in self._profiles.values() if p.embedding]

    async def list_active_jobs_with_embedding(self) -> list[JobPosting]:
        return [j for j in self._jobs.values() if j.embedding and j.is_active]

    async def save_profile(self, profile: ParsedProfile) -> ParsedProfile:
        return self._put_profile(profile)

    async def save_job(self, job: JobPosting) -> JobPosting:
        return self._put_job(job)
