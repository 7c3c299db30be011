"""
Tests for resumatch.data.repositories.

MongoDB collections are replaced with mocks; no server is needed.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from resumatch.data.repositories import (
    CandidateRepository,
    InMemoryStore,
    JobRepository,
    MatchingStore,
    MongoStore,
)
from resumatch.utils.exceptions import StorageError


@pytest.fixture
def collection():
    """Mock Motor collection whose find() cursor yields `collection.documents`."""
    mock = MagicMock()
    mock.documents = []
    cursor = MagicMock()
    cursor.to_list = AsyncMock(side_effect=lambda length=None: mock.documents)
    mock.find.return_value = cursor
    mock.insert_one = AsyncMock()
    mock.replace_one = AsyncMock()
    return mock


@pytest.fixture
def db_manager(collection):
    manager = MagicMock()
    manager.collection.return_value = collection
    return manager


# ── BaseRepository ──────────────────────────────────────────────────────────


class TestCandidateRepository:
    def test_to_model_maps_object_id(self, db_manager):
        object_id = ObjectId()
        profile = CandidateRepository(db_manager)._to_model(
            {"_id": object_id, "name": "Ann Lee", "skills": ["Python"], "wordCount": 2}
        )
        assert profile.id == str(object_id)
        assert profile.skills == ["python"]
        assert profile.word_count == 2

    def test_list_with_embedding_query(self, db_manager, collection):
        collection.documents = [
            {"_id": ObjectId(), "name": "Ann Lee", "embedding": [1.0, 0.0]},
            {"_id": ObjectId(), "name": "Bob Ray", "embedding": [0.0, 0.0],
             "embeddingIsPlaceholder": True},
        ]
        profiles = asyncio.run(CandidateRepository(db_manager).list_candidates_with_embedding())

        collection.find.assert_called_once_with({"embedding.0": {"$exists": True}})
        assert [p.name for p in profiles] == ["Ann Lee", "Bob Ray"]
        assert profiles[1].embedding_is_placeholder

    def test_insert_assigns_id(self, db_manager, collection, make_profile):
        object_id = ObjectId()
        collection.insert_one.return_value = MagicMock(inserted_id=object_id)

        saved = asyncio.run(CandidateRepository(db_manager).save_profile(make_profile()))

        assert saved.id == str(object_id)
        document = collection.insert_one.call_args.args[0]
        assert "id" not in document
        assert document["embeddingIsPlaceholder"] is False

    def test_save_with_id_replaces(self, db_manager, collection, make_profile):
        object_id = ObjectId()
        profile = make_profile(id=str(object_id))

        saved = asyncio.run(CandidateRepository(db_manager).save_profile(profile))

        assert saved == profile
        filter_, _ = collection.replace_one.call_args.args
        assert filter_ == {"_id": object_id}
        assert collection.replace_one.call_args.kwargs["upsert"] is True

    def test_invalid_id(self, db_manager, collection, make_profile):
        profile = make_profile(id="not-an-object-id")
        with pytest.raises(StorageError):
            asyncio.run(CandidateRepository(db_manager).save_profile(profile))
        collection.replace_one.assert_not_called()

    def test_driver_error_wrapped(self, db_manager, collection, make_profile):
        collection.insert_one.side_effect = PyMongoError("connection reset")
        with pytest.raises(StorageError) as exc_info:
            asyncio.run(CandidateRepository(db_manager).save_profile(make_profile()))
        assert isinstance(exc_info.value.cause, PyMongoError)


class TestJobRepository:
    def test_active_jobs_query(self, db_manager, collection):
        collection.documents = [
            {"_id": ObjectId(), "title": "Engineer", "company": "Acme", "embedding": [1.0]}
        ]
        jobs = asyncio.run(JobRepository(db_manager).list_active_jobs_with_embedding())

        collection.find.assert_called_once_with(
            {"embedding.0": {"$exists": True}, "status": "active"}
        )
        assert jobs[0].title == "Engineer"


# ── Stores ──────────────────────────────────────────────────────────────────


class TestMongoStore:
    def test_delegates_to_repositories(self, db_manager, collection):
        store = MongoStore(CandidateRepository(db_manager), JobRepository(db_manager))
        asyncio.run(store.list_candidates_with_embedding())
        assert collection.find.called
        assert isinstance(store, MatchingStore)


class TestInMemoryStore:
    def test_assigns_ids_in_order(self, memory_store, make_profile, make_job):
        first = asyncio.run(memory_store.save_profile(make_profile("Ann Lee")))
        second = asyncio.run(memory_store.save_profile(make_profile("Bob Ray")))
        job = asyncio.run(memory_store.save_job(make_job()))

        assert (first.id, second.id, job.id) == ("profile-1", "profile-2", "job-3")
        assert memory_store.profiles == [first, second]

    def test_save_with_id_replaces(self, memory_store, make_profile):
        asyncio.run(memory_store.save_profile(make_profile("Ann Lee", id="a")))
        asyncio.run(memory_store.save_profile(make_profile("Ann Smith", id="a")))
        assert [p.name for p in memory_store.profiles] == ["Ann Smith"]

    def test_embedding_filters(self, make_profile, make_job):
        store = InMemoryStore(
            profiles=[make_profile("Ann Lee"), make_profile("Bob Ray", no_embedding=True)],
            jobs=[make_job("Open"), make_job("Closed", status="closed")],
        )
        profiles = asyncio.run(store.list_candidates_with_embedding())
        jobs = asyncio.run(store.list_active_jobs_with_embedding())

        assert [p.name for p in profiles] == ["Ann Lee"]
        assert [j.title for j in jobs] == ["Open"]
        assert isinstance(store, MatchingStore)
