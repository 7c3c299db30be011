"""
Embeddings and semantic similarity.

Main Components:
- VectorProvider / Embedding: provider interface and flagged vectors
- SentenceTransformerProvider: default sentence-transformers provider
- EmbeddingService: bounded, retrying async front end
- cosine_similarity / top_similar: similarity ranking
"""

from .embedding_model import SentenceTransformerProvider, get_vector_provider
from .embedding_service import EmbeddingService, get_embedding_service
from .provider import (
    Embedding,
    VectorProvider,
    check_dimension,
    placeholder_embedding,
)
from .similarity import cosine_similarity, similarity_percentage, top_similar

__all__ = [
    "Embedding",
    "VectorProvider",
    "check_dimension",
    "placeholder_embedding",
    "SentenceTransformerProvider",
    "get_vector_provider",
    "EmbeddingService",
    "get_embedding_service",
    "cosine_similarity",
    "similarity_percentage",
    "top_similar",
]
