"""
Data layer for resumatch.

- models: pydantic models for documents, profiles, jobs and results
- database: MongoDB connection management
- repositories: collection access and the MatchingStore interface
"""
