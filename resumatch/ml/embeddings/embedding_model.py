"""
Embedding model wrapper for generating text embeddings.

Uses the sentence-transformers library for generating semantic
embeddings from text content.
"""

import threading
from typing import Optional

import numpy as np

from resumatch.utils.config import get_settings
from resumatch.utils.exceptions import EmbeddingUnavailableError
from resumatch.utils.logger import get_logger

from .provider import check_dimension

logger = get_logger(__name__)


class SentenceTransformerProvider:
    """
    VectorProvider backed by a sentence-transformers model.

    The model is loaded lazily on first use. Load and inference failures
    surface as EmbeddingUnavailableError; a model whose output dimension
    differs from the configured one raises DimensionMismatchError.
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        device: Optional[str] = None,
        dimension: Optional[int] = None,
    ):
        """
        Initialize the embedding model.

        Args:
            model_name: Name of the sentence-transformers model to use.
                       Defaults to config setting.
            device: Device to run model on ('cpu', 'cuda', 'mps').
                   Defaults to config setting.
            dimension: Expected vector dimension. Defaults to config setting.
        """
        settings = get_settings()
        self.model_name = model_name or settings.embedding.model
        self.device = device or settings.embedding.device
        self._dimension = dimension or settings.embedding.dimension
        self.batch_size = settings.embedding.batch_size

        self._model = None
        self._initialized = False
        # Provider calls run on executor threads; only one may load the model
        self._load_lock = threading.Lock()

    @property
    def dimension(self) -> int:
        return self._dimension

    def _load_model(self) -> None:
        """Lazy load the embedding model."""
        with self._load_lock:
            if not self._initialized:
                self._load_model_locked()

    def _load_model_locked(self) -> None:
        try:
            from sentence_transformers import SentenceTransformer

            logger.info(f"Loading embedding model: {self.model_name}")
            self._model = SentenceTransformer(
                self.model_name,
                device=self.device,
            )
        except Exception as e:
            logger.error(f"Failed to load embedding model: {e}")
            raise EmbeddingUnavailableError(
                f"Could not load embedding model {self.model_name}: {e}",
                model_name=self.model_name,
                cause=e,
            ) from e

        self._initialized = True
        logger.info(f"Embedding model loaded on device: {self.device}")

    @property
    def model(self):
        """Get the underlying sentence-transformer model."""
        if not self._initialized:
            self._load_model()
        return self._model

    def encode(
        self,
        texts: str | list[str],
        normalize: bool = True,
        show_progress: bool = False,
    ) -> np.ndarray:
        """
        Generate embeddings for text(s).

        Args:
            texts: Single text string or list of texts to encode.
            normalize: Whether to L2-normalize embeddings.
            show_progress: Whether to show progress bar for large batches.

        Returns:
            numpy array of shape (n_texts, embedding_dim) or (embedding_dim,)
            for single text input.
        """
        single_input = isinstance(texts, str)
        if single_input:
            texts = [texts]

        model = self.model
        try:
            embeddings = model.encode(
                texts,
                batch_size=self.batch_size,
                show_progress_bar=show_progress,
                normalize_embeddings=normalize,
                convert_to_numpy=True,
            )
        except Exception as e:
            logger.error(f"Embedding inference failed: {e}")
            raise EmbeddingUnavailableError(
                f"Embedding inference failed: {e}",
                model_name=self.model_name,
                cause=e,
            ) from e

        if single_input:
            return embeddings[0]
        return embeddings

    def embed(self, text: str) -> list[float]:
        """Embed a single text as a list of floats of the configured dimension."""
        vector = self.encode(text, normalize=True).tolist()
        check_dimension(vector, self._dimension)
        return vector


# Singleton instance
_vector_provider: Optional[SentenceTransformerProvider] = None


def get_vector_provider() -> SentenceTransformerProvider:
    """Get the default vector provider singleton instance."""
    global _vector_provider
    if _vector_provider is None:
        _vector_provider = SentenceTransformerProvider()
    return _vector_provider
