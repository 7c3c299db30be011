"""
Repositories for resumatch data access.

This module provides the MongoDB repositories and the MatchingStore
interface the search and import pipelines depend on.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .candidate_repository import CandidateRepository, get_candidate_repository
from .job_repository import JobRepository, get_job_repository

# Pipeline-facing store
from .store import InMemoryStore, MatchingStore, MongoStore

__all__ = [
    # Base
    "BaseRepository",
    # Candidate
    "CandidateRepository",
    "get_candidate_repository",
    # Job
    "JobRepository",
    "get_job_repository",
    # Store
    "MatchingStore",
    "MongoStore",
    "InMemoryStore",
]
