"""
HTTP routes for search, keyword analysis, resume parsing and health.
"""

from fastapi import APIRouter, Depends, File, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from resumatch import __version__
from resumatch.core.analysis import ATSScorer, KeywordAnalyzer, get_ats_scorer, get_keyword_analyzer
from resumatch.core.matching import CandidateSearch
from resumatch.data.models import Document, ParsedProfile, SearchResponse
from resumatch.data.repositories import MatchingStore, MongoStore
from resumatch.ml.embeddings import EmbeddingService, get_embedding_service
from resumatch.ml.nlp import ResumeParser, get_resume_parser, validate_upload
from resumatch.utils.config import get_settings
from resumatch.utils.logger import get_logger

from .schemas import HealthResponse, KeywordRequest, KeywordResponse, SearchRequest

logger = get_logger(__name__)

router = APIRouter()


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------


def get_store(request: Request) -> MatchingStore:
    """The store injected into create_app, or MongoDB on first use."""
    if request.app.state.store is None:
        request.app.state.store = MongoStore()
    return request.app.state.store


def get_embeddings(request: Request) -> EmbeddingService:
    return request.app.state.embedding_service or get_embedding_service()


def get_search(
    store: MatchingStore = Depends(get_store),
    embedding_service: EmbeddingService = Depends(get_embeddings),
) -> CandidateSearch:
    return CandidateSearch(store, embedding_service=embedding_service)


def get_parser() -> ResumeParser:
    return get_resume_parser()


def get_analyzer() -> KeywordAnalyzer:
    return get_keyword_analyzer()


def get_scorer() -> ATSScorer:
    return get_ats_scorer()


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------


@router.post("/match/search", response_model=SearchResponse, tags=["match"])
async def search_candidates(
    body: SearchRequest,
    search: CandidateSearch = Depends(get_search),
) -> SearchResponse:
    """Rank stored candidates against a free-text query."""
    return await search.search(body.query_text, body.top_n)


@router.post("/match/keywords", response_model=KeywordResponse, tags=["match"])
def analyze_keywords(
    body: KeywordRequest,
    analyzer: KeywordAnalyzer = Depends(get_analyzer),
    scorer: ATSScorer = Depends(get_scorer),
) -> KeywordResponse:
    """Keyword gap, ATS score and suggestions for a resume against a job description."""
    analysis = analyzer.analyze(body.resume_text, body.job_text)
    return KeywordResponse(
        keyword_analysis=analysis,
        ats_report=scorer.ats_score(body.resume_text, body.job_text),
        suggestions=analyzer.optimization_suggestions(analysis),
        placements=analyzer.keyword_placement(analysis.missing_keywords),
    )


@router.post(
    "/resumes/parse",
    response_model=ParsedProfile,
    response_model_exclude={"embedding", "embedding_is_placeholder"},
    tags=["resumes"],
)
async def parse_resume(
    file: UploadFile = File(...),
    parser: ResumeParser = Depends(get_parser),
) -> ParsedProfile:
    """Extract and parse an uploaded PDF or DOCX resume. Nothing is stored."""
    content = await file.read()
    document_format = validate_upload(file.filename, len(content), file.content_type)
    document = Document(content=content, format=document_format, filename=file.filename)

    profile = await run_in_threadpool(parser.parse_document, document)
    logger.info(f"Parsed upload {file.filename}: {len(profile.skills)} skills")
    return profile


@router.get("/health", response_model=HealthResponse, tags=["health"])
def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        embedding_model=get_settings().embedding.model,
    )
