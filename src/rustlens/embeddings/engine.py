"""Embedding generation using sentence-transformers."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

import numpy as np

from ..errors import EmbeddingFailure

logger = logging.getLogger(__name__)

# Model configuration
DEFAULT_MODEL = "all-MiniLM-L12-v2"


class EmbeddingProvider(Protocol):
    """Anything that maps a text to a fixed-width float vector."""

    def embed_text(self, text: str) -> Sequence[float]:
        ...


class EmbeddingEngine:
    """Generate embeddings for code elements and queries."""

    def __init__(self, model_name: str = DEFAULT_MODEL):
        self.model_name = model_name
        logger.info("Loading embedding model: %s", model_name)
        try:
            from sentence_transformers import SentenceTransformer

            self.model = SentenceTransformer(model_name)
        except Exception as exc:
            raise EmbeddingFailure(f"model {model_name}", str(exc)) from exc
        self.dim = self.model.get_sentence_embedding_dimension()

    def embed_text(self, text: str) -> np.ndarray:
        """Generate embedding for a single text string.

        Parameters
        ----------
        text:
            Text to embed

        Returns
        -------
        One-dimensional float32 array of length :attr:`dim`
        """
        embedding = self.model.encode(text, convert_to_numpy=True, show_progress_bar=False)
        return np.asarray(embedding, dtype=np.float32)


# Global engine instance (lazy initialization)
_engine: EmbeddingEngine | None = None


def get_engine(model_name: str = DEFAULT_MODEL) -> EmbeddingEngine:
    """Get or create the global embedding engine.

    Parameters
    ----------
    model_name:
        Model to use (default: all-MiniLM-L12-v2)

    Returns
    -------
    EmbeddingEngine instance
    """
    global _engine
    if _engine is None or _engine.model_name != model_name:
        _engine = EmbeddingEngine(model_name)
    return _engine
