"""
Job posting repository.
"""

from typing import Optional

from resumatch.data.models import JobPosting
from resumatch.utils.config import get_settings
from resumatch.utils.constants import JobStatus
from resumatch.utils.logger import get_logger

from .base import HAS_EMBEDDING, BaseRepository

logger = get_logger(__name__)


class JobRepository(BaseRepository[JobPosting]):
    """Repository for job postings."""

    @property
    def collection_name(self) -> str:
        return get_settings().database.jobs_collection

    @property
    def model_class(self) -> type[JobPosting]:
        return JobPosting

    async def list_active_jobs_with_embedding(self) -> list[JobPosting]:
        """Active postings that have an embedding attached."""
        jobs = await self.find({**HAS_EMBEDDING, "status": JobStatus.ACTIVE.value})
        logger.debug(f"Loaded {len(jobs)} active jobs with embeddings")
        return jobs

    async def save_job(self, job: JobPosting) -> JobPosting:
        return await self.save(job)


# Singleton instance
_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
