"""
Tests for resumatch.ml.embeddings.embedding_service: retries, degraded mode,
bounded concurrency and batch cancellation.

The provider is a deterministic fake; async calls are driven with asyncio.run.
"""

import asyncio
import sys
import types

import numpy as np
import pytest

from resumatch.ml.embeddings import SentenceTransformerProvider
from resumatch.utils.exceptions import DimensionMismatchError, EmbeddingUnavailableError


# ── embed ───────────────────────────────────────────────────────────────────


class TestEmbed:
    def test_returns_provider_vector(self, embedding_service):
        embedding = asyncio.run(embedding_service.embed("hello"))
        assert embedding.vector == [1.0, 0.0, 0.0, 0.0]
        assert not embedding.is_placeholder

    def test_retries_transient_failures(self, make_embedding_service, make_provider):
        provider = make_provider(fail_times=2)
        service = make_embedding_service(provider)

        embedding = asyncio.run(service.embed("hello"))

        assert not embedding.is_placeholder
        assert len(provider.calls) == 3

    def test_retries_exhausted(self, make_embedding_service, make_provider):
        provider = make_provider(fail_times=10)
        service = make_embedding_service(provider)

        with pytest.raises(EmbeddingUnavailableError):
            asyncio.run(service.embed("hello"))
        # one initial attempt plus one per retry delay
        assert len(provider.calls) == 4

    def test_no_retries(self, make_embedding_service, make_provider):
        provider = make_provider(fail_times=1)
        with pytest.raises(EmbeddingUnavailableError):
            asyncio.run(make_embedding_service(provider, retry_delays=[]).embed("hello"))
        assert len(provider.calls) == 1

    def test_placeholder_when_allowed(self, make_embedding_service, make_provider):
        service = make_embedding_service(
            make_provider(fail_times=10), allow_placeholder=True
        )
        embedding = asyncio.run(service.embed("hello"))
        assert embedding.is_placeholder
        assert embedding.vector == [0.0, 0.0, 0.0, 0.0]

    def test_timeout_becomes_unavailable(self, make_embedding_service, make_provider):
        service = make_embedding_service(
            make_provider(delay=0.3), retry_delays=[], timeout_seconds=0.05
        )
        with pytest.raises(EmbeddingUnavailableError) as exc_info:
            asyncio.run(service.embed("slow"))
        assert "timed out" in exc_info.value.message

    def test_dimension_mismatch_not_retried(self, make_embedding_service, make_provider):
        provider = make_provider(vectors={"short": [1.0, 0.0]})
        service = make_embedding_service(provider)

        with pytest.raises(DimensionMismatchError):
            asyncio.run(service.embed("short"))
        assert len(provider.calls) == 1

    def test_embed_sync(self, embedding_service):
        assert embedding_service.embed_sync("hello").dimension == 4


# ── embed_many ──────────────────────────────────────────────────────────────


class TestEmbedMany:
    def test_outcomes_in_input_order(self, make_embedding_service, make_provider):
        provider = make_provider(
            vectors={"a": [1.0, 0.0, 0.0, 0.0], "b": [0.0, 1.0, 0.0, 0.0], "c": [0.0, 0.0, 1.0, 0.0]}
        )
        outcomes = asyncio.run(make_embedding_service(provider).embed_many(["a", "b", "c"]))
        assert [o.vector.index(1.0) for o in outcomes] == [0, 1, 2]

    def test_per_item_failure_reported(self, make_embedding_service, make_provider):
        provider = make_provider(fail_texts={"bad"})
        outcomes = asyncio.run(make_embedding_service(provider).embed_many(["ok", "bad", "ok2"]))

        assert not isinstance(outcomes[0], Exception)
        assert isinstance(outcomes[1], EmbeddingUnavailableError)
        assert not isinstance(outcomes[2], Exception)

    def test_empty_batch(self, embedding_service):
        assert asyncio.run(embedding_service.embed_many([])) == []

    def test_concurrency_bounded(self, make_embedding_service, make_provider):
        provider = make_provider(delay=0.05)
        service = make_embedding_service(provider, max_concurrency=2)

        outcomes = asyncio.run(service.embed_many([f"text {i}" for i in range(8)]))

        assert len(outcomes) == 8
        assert provider.max_in_flight <= 2
        assert provider.completed == 8

    def test_batch_timeout_raises(self, make_embedding_service, make_provider):
        provider = make_provider(delay=0.2)
        service = make_embedding_service(provider, max_concurrency=1)

        with pytest.raises(EmbeddingUnavailableError):
            asyncio.run(service.embed_many(["a", "b", "c", "d"], timeout=0.05))
        # calls still queued behind the semaphore never reach the provider
        assert len(provider.calls) < 4

    def test_timed_out_calls_keep_their_slot(self, make_embedding_service, make_provider):
        provider = make_provider(delay=0.3)
        service = make_embedding_service(
            provider, max_concurrency=1, timeout_seconds=0.05, retry_delays=[0.01, 0.01]
        )

        outcomes = asyncio.run(service.embed_many(["a", "b", "c"]))

        assert all(isinstance(o, EmbeddingUnavailableError) for o in outcomes)
        # retries after a timeout wait for the abandoned thread instead of stacking up
        assert provider.max_in_flight == 1

    def test_cancelling_caller_cancels_pending_calls(self, make_embedding_service, make_provider):
        provider = make_provider(delay=0.2)
        service = make_embedding_service(provider, max_concurrency=1)

        async def cancel_mid_batch():
            task = asyncio.ensure_future(service.embed_many(["a", "b", "c", "d"]))
            await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
            return task

        task = asyncio.run(cancel_mid_batch())

        assert task.cancelled()
        assert provider.calls == ["a"]

    def test_dimension_mismatch_aborts_batch(self, make_embedding_service, make_provider):
        provider = make_provider(vectors={"short": [1.0]})
        with pytest.raises(DimensionMismatchError):
            asyncio.run(make_embedding_service(provider).embed_many(["ok", "short"]))


# ── Models ──────────────────────────────────────────────────────────────────


class TestEmbedModels:
    def test_embed_profile_returns_copy(self, embedding_service, make_profile):
        profile = make_profile(no_embedding=True)
        embedded = asyncio.run(embedding_service.embed_profile(profile))
        assert profile.embedding is None
        assert embedded.embedding == [1.0, 0.0, 0.0, 0.0]
        assert not embedded.embedding_is_placeholder

    def test_embed_job_uses_title_description_and_skills(
        self, make_embedding_service, make_provider, make_job
    ):
        provider = make_provider()
        job = make_job(no_embedding=True)

        embedded = asyncio.run(make_embedding_service(provider).embed_job(job))

        assert provider.calls == [job.embedding_text()]
        assert embedded.embedding == [1.0, 0.0, 0.0, 0.0]

    def test_placeholder_flag_carried(self, make_embedding_service, make_provider, make_profile):
        service = make_embedding_service(make_provider(fail_times=10), allow_placeholder=True)
        embedded = asyncio.run(service.embed_profile(make_profile(no_embedding=True)))
        assert embedded.embedding_is_placeholder


# ── SentenceTransformerProvider ─────────────────────────────────────────────


class _FakeSentenceTransformer:
    loads = 0

    def __init__(self, model_name, device=None):
        type(self).loads += 1
        self.model_name = model_name

    def encode(self, texts, **kwargs):
        return np.array([[float(len(t)), 0.0, 0.0] for t in texts])


@pytest.fixture
def fake_sentence_transformers(monkeypatch):
    _FakeSentenceTransformer.loads = 0
    module = types.SimpleNamespace(SentenceTransformer=_FakeSentenceTransformer)
    monkeypatch.setitem(sys.modules, "sentence_transformers", module)
    return _FakeSentenceTransformer


class TestSentenceTransformerProvider:
    def test_embed_loads_model_once(self, fake_sentence_transformers):
        provider = SentenceTransformerProvider(model_name="fake", device="cpu", dimension=3)

        assert provider.embed("abcd") == [4.0, 0.0, 0.0]
        provider.embed("ab")
        assert fake_sentence_transformers.loads == 1

    def test_wrong_dimension(self, fake_sentence_transformers):
        provider = SentenceTransformerProvider(model_name="fake", device="cpu", dimension=384)
        with pytest.raises(DimensionMismatchError):
            provider.embed("abcd")

    def test_load_failure_is_unavailable(self, monkeypatch):
        def _broken(*args, **kwargs):
            raise OSError("model not found")

        monkeypatch.setitem(
            sys.modules, "sentence_transformers", types.SimpleNamespace(SentenceTransformer=_broken)
        )
        provider = SentenceTransformerProvider(model_name="missing", device="cpu", dimension=3)
        with pytest.raises(EmbeddingUnavailableError) as exc_info:
            provider.embed("abcd")
        assert exc_info.value.details["model_name"] == "missing"
