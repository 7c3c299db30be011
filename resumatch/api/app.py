"""
FastAPI application factory.

Run with:
    uvicorn resumatch.api.app:create_app --factory
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from resumatch import __version__
from resumatch.data.database import get_database_manager
from resumatch.data.repositories import MatchingStore
from resumatch.ml.embeddings import EmbeddingService
from resumatch.utils.config import get_settings
from resumatch.utils.exceptions import (
    DimensionMismatchError,
    EmbeddingUnavailableError,
    EmptyInputError,
    ExtractionError,
    InvalidArgumentError,
    ResumatchError,
    StorageError,
    UnsupportedFormatError,
)
from resumatch.utils.logger import get_logger, setup_logging

from .routes import router

logger = get_logger(__name__)

# Checked in order; the first matching class wins
ERROR_STATUS_CODES: list[tuple[type[ResumatchError], int]] = [
    (UnsupportedFormatError, 415),
    (EmptyInputError, 422),
    (ExtractionError, 422),
    (InvalidArgumentError, 422),
    (EmbeddingUnavailableError, 503),
    (StorageError, 503),
    (DimensionMismatchError, 500),
]


def status_code_for(exc: ResumatchError) -> int:
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 500


async def resumatch_error_handler(request: Request, exc: ResumatchError) -> JSONResponse:
    status_code = status_code_for(exc)
    message = f"{request.method} {request.url.path} -> {status_code}: {exc.message}"
    if status_code >= 500:
        logger.error(message)
    else:
        logger.warning(message)

    body = exc.to_dict()
    body.pop("cause", None)
    return JSONResponse(status_code=status_code, content=body)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    logger.info(f"resumatch API {__version__} starting up")
    yield
    if app.state.owns_database:
        get_database_manager().close()
    logger.info("resumatch API shut down")


def create_app(
    store: Optional[MatchingStore] = None,
    embedding_service: Optional[EmbeddingService] = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the API application.

    Args:
        store: Candidate/job store. Defaults to MongoDB, connected on first use.
        embedding_service: Embedding front end. Defaults to the shared service.
        configure_logging: Install the loguru sinks from settings.
    """
    if configure_logging:
        setup_logging()

    settings = get_settings()
    app = FastAPI(
        title=settings.api.title,
        version=__version__,
        description=settings.description,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.embedding_service = embedding_service
    app.state.owns_database = store is None

    app.add_exception_handler(ResumatchError, resumatch_error_handler)
    app.include_router(router)
    return app
