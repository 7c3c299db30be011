"""
Asynchronous embedding service.

Wraps a blocking VectorProvider with:
- bounded concurrency to respect upstream rate limits: provider calls run on
  a thread pool of max_concurrency workers owned by the service, so a call
  abandoned by a timeout still holds its slot until the thread returns
- a per-call timeout
- retry with backoff on transient failures
- fan-out/fan-in for batches, with cancellation of pending calls
- an opt-in degraded mode that returns flagged placeholder vectors
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from resumatch.data.models import JobPosting, ParsedProfile
from resumatch.utils.config import get_settings
from resumatch.utils.exceptions import EmbeddingUnavailableError
from resumatch.utils.logger import LoggerMixin

from .embedding_model import get_vector_provider
from .provider import Embedding, VectorProvider, check_dimension, placeholder_embedding


class EmbeddingService(LoggerMixin):
    """Concurrency-bounded, retrying front end for a VectorProvider."""

    def __init__(
        self,
        provider: Optional[VectorProvider] = None,
        max_concurrency: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        retry_delays: Optional[Sequence[float]] = None,
        allow_placeholder: Optional[bool] = None,
    ):
        """
        Args:
            provider: Embedding provider. Defaults to the sentence-transformers provider.
            max_concurrency: Maximum in-flight provider calls.
            timeout_seconds: Per-call timeout.
            retry_delays: Delay before each retry; its length is the retry count.
            allow_placeholder: Return a flagged zero vector instead of raising
                once retries are exhausted.
        """
        settings = get_settings().embedding
        self.provider = provider or get_vector_provider()
        self.max_concurrency = max_concurrency or settings.max_concurrency
        self.timeout_seconds = timeout_seconds or settings.timeout_seconds
        self.retry_delays = list(settings.retry_delays if retry_delays is None else retry_delays)
        self.allow_placeholder = (
            settings.allow_placeholder if allow_placeholder is None else allow_placeholder
        )

        self._executor = ThreadPoolExecutor(
            max_workers=self.max_concurrency, thread_name_prefix="embedding"
        )
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._semaphore_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def dimension(self) -> int:
        return self.provider.dimension

    def _get_semaphore(self) -> asyncio.Semaphore:
        """One semaphore per running event loop."""
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrency)
            self._semaphore_loop = loop
        return self._semaphore

    async def _call_provider(self, text: str) -> list[float]:
        # The semaphore queues callers; the pool caps running provider threads
        async with self._get_semaphore():
            loop = asyncio.get_running_loop()
            vector = await asyncio.wait_for(
                loop.run_in_executor(self._executor, self.provider.embed, text),
                timeout=self.timeout_seconds,
            )
        # Dimension errors are configuration errors and are never retried
        check_dimension(vector, self.dimension)
        return [float(x) for x in vector]

    async def embed(self, text: str) -> Embedding:
        """
        Embed one text, retrying transient failures.

        Raises:
            EmbeddingUnavailableError: retries exhausted and degraded mode is off
            DimensionMismatchError: the provider returned a wrong-sized vector
        """
        last_error: Optional[Exception] = None

        for attempt, delay in enumerate([0.0, *self.retry_delays]):
            if delay > 0:
                self.logger.info(f"Retrying embedding in {delay}s (attempt {attempt + 1})")
                await asyncio.sleep(delay)

            try:
                return Embedding(vector=await self._call_provider(text))
            except EmbeddingUnavailableError as exc:
                last_error = exc
                self.logger.warning(f"Embedding attempt {attempt + 1} failed: {exc.message}")
            except asyncio.TimeoutError as exc:
                last_error = exc
                self.logger.warning(
                    f"Embedding attempt {attempt + 1} timed out after {self.timeout_seconds}s"
                )

        if self.allow_placeholder:
            self.logger.warning("Embedding provider unavailable; returning placeholder vector")
            return placeholder_embedding(self.dimension)

        self.logger.error(f"Embedding failed after {len(self.retry_delays) + 1} attempts")
        if isinstance(last_error, EmbeddingUnavailableError):
            raise last_error
        raise EmbeddingUnavailableError(
            f"Embedding request timed out after {self.timeout_seconds}s",
            cause=last_error,
        ) from last_error

    async def _embed_outcome(self, text: str) -> Embedding | EmbeddingUnavailableError:
        try:
            return await self.embed(text)
        except EmbeddingUnavailableError as exc:
            return exc

    async def embed_many(
        self,
        texts: Sequence[str],
        timeout: Optional[float] = None,
    ) -> list[Embedding | EmbeddingUnavailableError]:
        """
        Embed many texts concurrently.

        Returns one outcome per input, in input order: an Embedding, or the
        EmbeddingUnavailableError that item ended with. Any other error, a
        batch timeout, or cancellation of the caller cancels every pending
        call and no partial result is returned.
        """
        tasks = [asyncio.ensure_future(self._embed_outcome(text)) for text in texts]
        if not tasks:
            return []

        try:
            return list(await asyncio.wait_for(asyncio.gather(*tasks), timeout=timeout))
        except asyncio.TimeoutError as exc:
            raise EmbeddingUnavailableError(
                f"Batch embedding of {len(tasks)} texts timed out after {timeout}s",
                cause=exc,
            ) from exc
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                self.logger.info(f"Cancelled {len(pending)} pending embedding calls")
                await asyncio.gather(*pending, return_exceptions=True)

    async def embed_profile(self, profile: ParsedProfile) -> ParsedProfile:
        """Return a copy of the profile with its embedding attached."""
        embedding = await self.embed(profile.raw_text)
        return profile.with_embedding(embedding.vector, embedding.is_placeholder)

    async def embed_job(self, job: JobPosting) -> JobPosting:
        """Return a copy of the job with its embedding attached."""
        embedding = await self.embed(job.embedding_text())
        return job.model_copy(
            update={
                "embedding": embedding.vector,
                "embedding_is_placeholder": embedding.is_placeholder,
            }
        )

    def embed_sync(self, text: str) -> Embedding:
        """Blocking helper for callers without an event loop."""
        return asyncio.run(self.embed(text))


# Singleton instance
_embedding_service: Optional[EmbeddingService] = None


def get_embedding_service() -> EmbeddingService:
    """Get the embedding service singleton instance."""
    global _embedding_service
    if _embedding_service is None:
        _embedding_service = EmbeddingService()
    return _embedding_service
