"""In-memory embedding index over extracted code elements."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from tenacity import Retrying, before_sleep_log, stop_after_attempt, wait_exponential

from ..ast.extractor import extract_elements
from ..ast.models import CodeElement
from ..ast.parser import ParsedFile
from ..errors import EmbeddingFailure
from .context import render_context
from .engine import EmbeddingProvider
from .rank import SearchResult, rank

logger = logging.getLogger(__name__)

MAX_RETRY_WAIT = 30.0


class EmbeddingIndex:
    """Owns the corpus of embedded elements for one indexing run.

    The provider is injected so tests can substitute deterministic vectors
    for a real model.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        *,
        retry_attempts: int = 3,
        retry_wait: float = 1.0,
    ):
        if retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")
        self._provider = provider
        self._retry_attempts = retry_attempts
        self._retry_wait = retry_wait
        self._elements: Tuple[CodeElement, ...] = ()
        self._dimension: Optional[int] = None

    @property
    def elements(self) -> Tuple[CodeElement, ...]:
        return self._elements

    @property
    def dimension(self) -> Optional[int]:
        """Embedding width shared by every corpus vector, ``None`` when empty."""
        return self._dimension

    def __len__(self) -> int:
        return len(self._elements)

    def build(self, parsed_files: Iterable[ParsedFile]) -> Tuple[CodeElement, ...]:
        """Extract, embed and store every element of ``parsed_files``.

        The first embedding failure aborts the build. The previous corpus
        stays in place until the new one is complete.

        Raises
        ------
        EmbeddingFailure
            When the provider fails for any element, after retries.
        """
        corpus: List[CodeElement] = []
        dimension: Optional[int] = None
        files = 0

        for parsed in parsed_files:
            elements = extract_elements(parsed)
            for element in elements:
                text = render_context(element)
                logger.debug("Embedding context for %s:\n%s", element.describe(), text)
                vector = self._embed(text, element.describe(), dimension)
                dimension = vector.shape[0]
                element.attach_embedding(vector)
                corpus.append(element)
            files += 1
            logger.info("Indexed %d elements from %s", len(elements), parsed.path)

        self._elements = tuple(corpus)
        self._dimension = dimension
        logger.info("Index built: %d files, %d elements", files, len(corpus))
        return self._elements

    def embed_query(self, text: str) -> np.ndarray:
        """Embed free text with the provider used for the corpus."""
        return self._embed(text, f"query {text!r}", self._dimension)

    def search(self, query: str, k: int) -> List[SearchResult]:
        """Return the ``k`` elements closest to ``query``."""
        return rank(self._elements, self.embed_query(query), k)

    def _embed(self, text: str, subject: str, expected: Optional[int]) -> np.ndarray:
        retrying = Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=self._retry_wait, max=MAX_RETRY_WAIT),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            raw = retrying(self._provider.embed_text, text)
        except EmbeddingFailure:
            raise
        except Exception as exc:
            raise EmbeddingFailure(subject, f"{type(exc).__name__}: {exc}") from exc
        return _as_vector(raw, subject, expected)


def _as_vector(raw: Sequence[float] | np.ndarray, subject: str, expected: Optional[int]) -> np.ndarray:
    try:
        vector = np.asarray(raw, dtype=np.float32)
    except (TypeError, ValueError) as exc:
        raise EmbeddingFailure(subject, f"provider returned a non-numeric vector: {exc}") from exc

    if vector.ndim != 1 or vector.size == 0:
        raise EmbeddingFailure(subject, f"expected a non-empty 1-D vector, got shape {vector.shape}")
    if not np.all(np.isfinite(vector)):
        raise EmbeddingFailure(subject, "vector contains non-finite values")
    if expected is not None and vector.shape[0] != expected:
        raise EmbeddingFailure(subject, f"expected {expected} dimensions, got {vector.shape[0]}")
    return vector


def embed_snippet(code: str, provider: EmbeddingProvider) -> np.ndarray:
    """Embed a standalone code snippet outside of any corpus."""
    return EmbeddingIndex(provider).embed_query(code)
