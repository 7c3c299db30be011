"""
Core business logic for resumatch.

Submodules:
- matching: candidate-job scoring, ranking and semantic search
- analysis: keyword gap analysis and ATS scoring
- importer: batch resume import
"""
