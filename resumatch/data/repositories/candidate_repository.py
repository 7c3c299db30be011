"""
Candidate profile repository.
"""

from typing import Optional

from resumatch.data.models import ParsedProfile
from resumatch.utils.config import get_settings
from resumatch.utils.logger import get_logger

from .base import HAS_EMBEDDING, BaseRepository

logger = get_logger(__name__)


class CandidateRepository(BaseRepository[ParsedProfile]):
    """Repository for parsed resume profiles."""

    @property
    def collection_name(self) -> str:
        return get_settings().database.candidates_collection

    @property
    def model_class(self) -> type[ParsedProfile]:
        return ParsedProfile

    async def list_candidates_with_embedding(self) -> list[ParsedProfile]:
        """All profiles that have an embedding attached, placeholders included."""
        profiles = await self.find(HAS_EMBEDDING)
        logger.debug(f"Loaded {len(profiles)} candidate profiles with embeddings")
        return profiles

    async def save_profile(self, profile: ParsedProfile) -> ParsedProfile:
        return await self.save(profile)


# Singleton instance
_candidate_repository: Optional[CandidateRepository] = None


def get_candidate_repository() -> CandidateRepository:
    """Get the candidate repository singleton instance."""
    global _candidate_repository
    if _candidate_repository is None:
        _candidate_repository = CandidateRepository()
    return _candidate_repository
