"""Embedding index operations and vector search."""

from .context import render_context
from .engine import EmbeddingEngine, EmbeddingProvider, get_engine
from .index import EmbeddingIndex, embed_snippet
from .rank import SearchResult, cosine_similarity, rank

__all__ = [
    "EmbeddingEngine",
    "EmbeddingIndex",
    "EmbeddingProvider",
    "SearchResult",
    "cosine_similarity",
    "embed_snippet",
    "get_engine",
    "rank",
    "render_context",
]
