"""
Retrieval-augmented candidate search.

A free-text query is embedded, stored candidates are retrieved by cosine
similarity, and the retrieved candidates are scored against the vocabulary
skills the query names.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from resumatch.data.models import (
    ParsedProfile,
    SearchHit,
    SearchResponse,
    SearchStats,
    SkillSearchHit,
)
from resumatch.data.repositories import MatchingStore
from resumatch.ml.embeddings import EmbeddingService, get_embedding_service, top_similar
from resumatch.ml.nlp import ResumeParser, get_resume_parser
from resumatch.utils.config import get_settings
from resumatch.utils.constants import EXPERIENCE_LEVEL_KEYWORDS
from resumatch.utils.exceptions import EmbeddingUnavailableError, InvalidArgumentError
from resumatch.utils.logger import LoggerMixin, audit_log
from resumatch.utils.scoring import percentage, round_half_up

from .matching_engine import (
    MatchScorer,
    fold_skills,
    get_match_scorer,
    partition_rankable,
    skill_overlap,
)


@dataclass
class SearchFilters:
    """Filters for advanced_search. Each one is applied only when set."""

    skills: list[str] = field(default_factory=list)
    experience_level: Optional[str] = None
    job_description: Optional[str] = None
    limit: Optional[int] = None


def search_by_skills(
    required_skills: Sequence[str], profiles: Sequence[ParsedProfile]
) -> list[SkillSearchHit]:
    """
    Profiles having at least one of the required skills, best overlap first.

    Ties keep input order.
    """
    required = fold_skills(required_skills)
    if not required:
        raise InvalidArgumentError("At least one skill is required", field="skills")

    hits = []
    for profile in profiles:
        matched, missing = skill_overlap(profile.skills, required)
        pct = round_half_up(percentage(len(matched), len(required)))
        if pct > 0:
            hits.append(
                SkillSearchHit(
                    profile=profile,
                    matched_skills=matched,
                    missing_skills=missing,
                    skill_match_percentage=pct,
                )
            )
    return sorted(hits, key=lambda h: h.skill_match_percentage, reverse=True)


def search_by_experience(
    level: str, profiles: Sequence[ParsedProfile]
) -> list[ParsedProfile]:
    """
    Profiles whose text mentions a keyword of the experience level.

    Unknown levels match nothing.
    """
    keywords = EXPERIENCE_LEVEL_KEYWORDS.get(level.strip().lower(), ())
    return [
        profile for profile in profiles
        if any(keyword in profile.raw_text.lower() for keyword in keywords)
    ]


def search_stats(hits: Sequence[SearchHit]) -> SearchStats:
    """Count, rounded average, best and worst match score."""
    if not hits:
        return SearchStats()
    scores = [hit.match_score for hit in hits]
    return SearchStats(
        total_results=len(scores),
        average_match=round_half_up(sum(scores) / len(scores)),
        top_match=max(scores),
        bottom_match=min(scores),
    )


class CandidateSearch(LoggerMixin):
    """Semantic search over stored candidate profiles."""

    def __init__(
        self,
        store: MatchingStore,
        embedding_service: Optional[EmbeddingService] = None,
        scorer: Optional[MatchScorer] = None,
        parser: Optional[ResumeParser] = None,
    ):
        self.store = store
        self.embedding_service = embedding_service or get_embedding_service()
        self.scorer = scorer or get_match_scorer()
        self.parser = parser or get_resume_parser()

    async def _embed_query(self, query_text: str) -> list[float]:
        query = await self.embedding_service.embed(query_text)
        if query.is_placeholder:
            # A zero query vector would rank every candidate at 0
            raise EmbeddingUnavailableError(
                "Query could not be embedded; degraded placeholder vectors cannot be searched"
            )
        return query.vector

    def _to_hit(
        self,
        profile: ParsedProfile,
        similarity: float,
        required_skills: list[str],
    ) -> SearchHit:
        semantic = max(similarity, 0.0) * 100
        if required_skills:
            matched, missing = skill_overlap(profile.skills, required_skills)
            skill_pct = percentage(len(matched), len(required_skills))
            match_score = self.scorer.combine(skill_pct, semantic)
        else:
            matched, missing = [], []
            match_score = round_half_up(semantic)

        return SearchHit(
            id=profile.id,
            name=profile.name,
            match_score=match_score,
            similarity=similarity,
            matched_skills=matched,
            missing_skills=missing,
        )

    async def search(self, query_text: str, top_n: Optional[int] = None) -> SearchResponse:
        """
        Rank stored candidates against a free-text query.

        The top_n most similar candidates are retrieved, scored, and returned
        ordered by match score (ties keep similarity order). Candidates with
        missing or placeholder embeddings are listed in `skipped`.

        Raises:
            InvalidArgumentError: empty query or top_n < 1
            EmbeddingUnavailableError: the query could not be embedded
            DimensionMismatchError: stored and query vectors differ in dimension
        """
        if not query_text or not query_text.strip():
            raise InvalidArgumentError("Query text must not be empty", field="query_text")
        if top_n is None:
            top_n = get_settings().matching.default_candidates_top_n
        if top_n < 1:
            raise InvalidArgumentError(f"top_n must be at least 1, got {top_n}", field="top_n")

        query_vector = await self._embed_query(query_text)
        profiles = await self.store.list_candidates_with_embedding()
        rankable, skipped = partition_rankable(profiles)

        required = fold_skills(self.parser.extract_skills(query_text))
        retrieved = top_similar(query_vector, rankable, top_n, key=lambda p: p.embedding)
        hits = [self._to_hit(profile, similarity, required) for profile, similarity in retrieved]
        hits = sorted(hits, key=lambda h: h.match_score, reverse=True)

        self.logger.info(
            f"Search returned {len(hits)} of {len(rankable)} candidates "
            f"({len(skipped)} skipped, {len(required)} query skills)"
        )
        audit_log(
            "candidates_searched",
            {
                "top_n": top_n,
                "query_skills": required,
                "results": [(h.id, h.match_score) for h in hits],
                "skipped": len(skipped),
            },
        )
        return SearchResponse(results=hits, skipped=skipped)

    async def advanced_search(
        self, filters: SearchFilters, profiles: Sequence[ParsedProfile]
    ) -> list[ParsedProfile]:
        """
        Filter by skills, then experience level, then rank by similarity to a job description.

        Each step runs only if its filter is set. Semantic ranking drops
        profiles without a real embedding.
        """
        results = list(profiles)

        if filters.skills:
            results = [hit.profile for hit in search_by_skills(filters.skills, results)]

        if filters.experience_level:
            results = search_by_experience(filters.experience_level, results)

        if filters.job_description:
            limit = filters.limit or get_settings().matching.advanced_search_limit
            query_vector = await self._embed_query(filters.job_description)
            rankable, skipped = partition_rankable(results)
            for item in skipped:
                self.logger.warning(f"Advanced search skipped {item.item_id}: {item.reason}")
            ranked = top_similar(query_vector, rankable, limit, key=lambda p: p.embedding)
            results = [profile for profile, _ in ranked]

        return results
