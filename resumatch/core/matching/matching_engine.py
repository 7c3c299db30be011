"""
Candidate-job match scoring.

Blends explicit skill overlap with embedding similarity into one 0-100
score and ranks candidates for a job or jobs for a candidate.

Scoring rules:
- skill match % = |required ∩ candidate| / |required| * 100 (case-insensitive)
- semantic score = cosine(candidate, job) * 100, negative values clamped to 0
- match score = round(skill_weight * skill % + semantic_weight * semantic)

Rounding is half-up on the unrounded components.
"""

from typing import Iterable, Optional, Sequence, TypeVar

from resumatch.data.models import (
    JobPosting,
    MatchResult,
    ParsedProfile,
    RankingResult,
    SkippedItem,
    StoredModel,
)
from resumatch.ml.embeddings.similarity import cosine_similarity
from resumatch.utils.config import get_settings
from resumatch.utils.constants import (
    MATCH_EXPLANATION_THRESHOLDS,
    MISSING_EMBEDDING_REASON,
    NO_REQUIRED_SKILLS_REASON,
    PLACEHOLDER_REASON,
)
from resumatch.utils.exceptions import InvalidArgumentError
from resumatch.utils.logger import audit_log, get_logger
from resumatch.utils.scoring import percentage, round_half_up

logger = get_logger(__name__)

S = TypeVar("S", bound=StoredModel)


def fold_skills(skills: Iterable[str]) -> list[str]:
    """Lowercase and deduplicate, keeping first-seen order."""
    return list(dict.fromkeys(s.strip().lower() for s in skills if s and s.strip()))


def skill_overlap(
    candidate_skills: Iterable[str], required_skills: Iterable[str]
) -> tuple[list[str], list[str]]:
    """
    Split required skills into matched and missing.

    Both lists are case-folded and follow the order of required_skills.
    """
    have = set(fold_skills(candidate_skills))
    required = fold_skills(required_skills)
    matched = [s for s in required if s in have]
    missing = [s for s in required if s not in have]
    return matched, missing


def embedding_skip_reason(item: StoredModel) -> Optional[str]:
    """Why an item cannot be ranked by similarity, or None if it can."""
    if not item.embedding:
        return MISSING_EMBEDDING_REASON
    if item.embedding_is_placeholder:
        return PLACEHOLDER_REASON
    return None


def partition_rankable(items: Sequence[S]) -> tuple[list[S], list[SkippedItem]]:
    """Separate items with real embeddings from those that must be skipped."""
    rankable: list[S] = []
    skipped: list[SkippedItem] = []
    for item in items:
        reason = embedding_skip_reason(item)
        if reason is None:
            rankable.append(item)
        else:
            skipped.append(SkippedItem(item_id=item.id, reason=reason))
    return rankable, skipped


class MatchScorer:
    """
    Scores a candidate profile against a job posting.

    Stateless apart from its weights; safe to share between threads and tasks.
    """

    def __init__(
        self,
        skill_weight: Optional[float] = None,
        semantic_weight: Optional[float] = None,
    ):
        settings = get_settings().matching
        self.skill_weight = settings.skill_weight if skill_weight is None else skill_weight
        self.semantic_weight = (
            settings.semantic_weight if semantic_weight is None else semantic_weight
        )

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    @staticmethod
    def skill_match_percentage(
        candidate_skills: Iterable[str], required_skills: Iterable[str]
    ) -> float:
        """
        Unrounded percentage of required skills the candidate has.

        Raises:
            InvalidArgumentError: required_skills is empty
        """
        matched, missing = skill_overlap(candidate_skills, required_skills)
        total = len(matched) + len(missing)
        if total == 0:
            raise InvalidArgumentError(
                "Skill match percentage is undefined without required skills",
                field="required_skills",
            )
        return percentage(len(matched), total)

    @staticmethod
    def semantic_percentage(a: Sequence[float], b: Sequence[float]) -> float:
        """Cosine similarity as a percentage; negative similarity counts as 0."""
        return max(cosine_similarity(a, b), 0.0) * 100

    def combine(self, skill_percentage: float, semantic_percentage: float) -> int:
        """Weighted blend of the two components, rounded half-up."""
        return round_half_up(
            self.skill_weight * skill_percentage + self.semantic_weight * semantic_percentage
        )

    # -------------------------------------------------------------------------
    # Single pair
    # -------------------------------------------------------------------------

    def score(self, profile: ParsedProfile, job: JobPosting) -> MatchResult:
        """
        Score one candidate against one job.

        Raises:
            InvalidArgumentError: the job has no required skills, or either
                side lacks a real embedding
            DimensionMismatchError: the embeddings differ in dimension
        """
        for label, item in (("profile", profile), ("job", job)):
            reason = embedding_skip_reason(item)
            if reason is not None:
                raise InvalidArgumentError(
                    f"Cannot score {label} with {reason}",
                    field=f"{label}.embedding",
                    details={"item_id": item.id},
                )

        matched, missing = skill_overlap(profile.skills, job.required_skills)
        skill_pct = self.skill_match_percentage(profile.skills, job.required_skills)
        semantic = self.semantic_percentage(profile.embedding, job.embedding)

        return MatchResult(
            subject_id=profile.id,
            target_id=job.id,
            skill_match_percentage=round_half_up(skill_pct),
            semantic_score=round_half_up(semantic),
            match_score=self.combine(skill_pct, semantic),
            matched_skills=matched,
            missing_skills=missing,
            target_title=job.title,
            target_company=job.company,
            candidate_name=profile.name,
            candidate_email=profile.email,
        )

    # -------------------------------------------------------------------------
    # Batch ranking
    # -------------------------------------------------------------------------

    @staticmethod
    def _sorted_top(results: list[MatchResult], top_n: Optional[int]) -> list[MatchResult]:
        # Stable sort: equal scores keep input order
        ranked = sorted(results, key=lambda r: r.match_score, reverse=True)
        return ranked if top_n is None else ranked[:top_n]

    @staticmethod
    def _check_top_n(top_n: Optional[int]) -> None:
        if top_n is not None and top_n < 0:
            raise InvalidArgumentError(f"top_n must be non-negative, got {top_n}", field="top_n")

    def rank_candidates_for_job(
        self,
        job: JobPosting,
        profiles: Sequence[ParsedProfile],
        top_n: Optional[int] = None,
    ) -> RankingResult:
        """
        Rank candidate profiles for a job.

        Profiles without a real embedding are reported in `skipped`.

        Raises:
            InvalidArgumentError: the job has no required skills or no real embedding
            DimensionMismatchError: embedding dimensions differ
        """
        self._check_top_n(top_n)
        if top_n is None:
            top_n = get_settings().matching.default_candidates_top_n
        if not fold_skills(job.required_skills):
            raise InvalidArgumentError(
                f"Job {job.id or job.title!r} has no required skills", field="required_skills"
            )
        reason = embedding_skip_reason(job)
        if reason is not None:
            raise InvalidArgumentError(
                f"Job {job.id or job.title!r} has {reason}", field="job.embedding"
            )

        rankable, skipped = partition_rankable(profiles)
        results = [self.score(profile, job) for profile in rankable]
        ranked = self._sorted_top(results, top_n)

        for item in skipped:
            logger.warning(f"Skipped candidate {item.item_id} for job {job.id}: {item.reason}")
        audit_log(
            "candidates_ranked",
            {
                "job_id": job.id,
                "scored": len(results),
                "skipped": len(skipped),
                "top": [(r.subject_id, r.match_score) for r in ranked],
            },
        )
        return RankingResult(results=ranked, skipped=skipped)

    def rank_jobs_for_profile(
        self,
        profile: ParsedProfile,
        jobs: Sequence[JobPosting],
        top_n: Optional[int] = None,
    ) -> RankingResult:
        """
        Rank job postings for a candidate.

        Jobs without required skills or a real embedding are reported in `skipped`.

        Raises:
            InvalidArgumentError: the profile has no real embedding
            DimensionMismatchError: embedding dimensions differ
        """
        self._check_top_n(top_n)
        if top_n is None:
            top_n = get_settings().matching.default_jobs_top_n
        reason = embedding_skip_reason(profile)
        if reason is not None:
            raise InvalidArgumentError(
                f"Profile {profile.id or profile.name!r} has {reason}", field="profile.embedding"
            )

        rankable, skipped = partition_rankable(jobs)
        results = []
        for job in rankable:
            if not fold_skills(job.required_skills):
                skipped.append(SkippedItem(item_id=job.id, reason=NO_REQUIRED_SKILLS_REASON))
                continue
            results.append(self.score(profile, job))
        ranked = self._sorted_top(results, top_n)

        for item in skipped:
            logger.warning(f"Skipped job {item.item_id} for profile {profile.id}: {item.reason}")
        audit_log(
            "jobs_recommended",
            {
                "profile_id": profile.id,
                "scored": len(results),
                "skipped": len(skipped),
                "top": [(r.target_id, r.match_score) for r in ranked],
            },
        )
        return RankingResult(results=ranked, skipped=skipped)

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    @staticmethod
    def match_explanation(match_score: int) -> str:
        """Human-readable label for a match score."""
        if match_score >= MATCH_EXPLANATION_THRESHOLDS["excellent"]:
            return "Excellent match! This candidate has most of the required skills."
        elif match_score >= MATCH_EXPLANATION_THRESHOLDS["good"]:
            return "Good match. The candidate meets many of the requirements."
        elif match_score >= MATCH_EXPLANATION_THRESHOLDS["moderate"]:
            return "Moderate match. Some key skills are present but training may be needed."
        return "Low match. Significant skill gaps exist."


# Singleton instance
_match_scorer: Optional[MatchScorer] = None


def get_match_scorer() -> MatchScorer:
    """Get the match scorer singleton instance."""
    global _match_scorer
    if _match_scorer is None:
        _match_scorer = MatchScorer()
    return _match_scorer
