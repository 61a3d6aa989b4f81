"""Directory indexing: traversal, parsing, extraction and embedding."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List

from ..ast.extractor import extract_elements
from ..ast.models import CodeElement
from ..ast.parser import ParsedFile, parse_file
from ..config import LocalConfig
from ..embeddings.engine import EmbeddingProvider, get_engine
from ..embeddings.index import EmbeddingIndex
from ..errors import IoFailure, ParseFailure

logger = logging.getLogger(__name__)


def iter_source_files(root: Path, config: LocalConfig | None = None) -> List[Path]:
    """List source files under ``root`` in sorted order.

    Files inside any directory named in ``config.exclude_dirs`` are skipped.
    """
    config = config or LocalConfig()
    root = Path(root).resolve()
    if not root.exists():
        raise IoFailure(root, "path does not exist")
    if root.is_file():
        return [root] if root.suffix == config.file_extension else []

    excluded = set(config.exclude_dirs)
    files = []
    try:
        for file_path in root.rglob(f"*{config.file_extension}"):
            relative = file_path.relative_to(root)
            if excluded.intersection(relative.parts[:-1]):
                continue
            if file_path.is_file():
                files.append(file_path)
    except OSError as exc:
        raise IoFailure(root, str(exc)) from exc
    return sorted(files)


def parse_paths(paths: Iterable[Path], config: LocalConfig | None = None) -> Iterator[ParsedFile]:
    """Parse each path, skipping unparsable files only when configured to."""
    config = config or LocalConfig()
    for path in paths:
        try:
            yield parse_file(path)
        except ParseFailure as exc:
            if not config.skip_unparsable:
                raise
            logger.warning("Skipping %s", exc)


def collect_elements(root: Path, config: LocalConfig | None = None) -> List[CodeElement]:
    """Extract every element under ``root`` without embedding anything."""
    elements: List[CodeElement] = []
    for parsed in parse_paths(iter_source_files(root, config), config):
        elements.extend(extract_elements(parsed))
    return elements


def index_directory(
    root: Path,
    provider: EmbeddingProvider | None = None,
    config: LocalConfig | None = None,
) -> EmbeddingIndex:
    """Build a searchable index for the source tree at ``root``.

    Parameters
    ----------
    root:
        Directory (or single file) to index
    provider:
        Embedding provider; defaults to the shared sentence-transformers
        engine for ``config.model_name``
    config:
        Run configuration

    Returns
    -------
    EmbeddingIndex holding the embedded corpus
    """
    config = config or LocalConfig()
    if provider is None:
        provider = get_engine(config.model_name)

    paths = iter_source_files(root, config)
    logger.info("Found %d source files under %s", len(paths), root)

    index = EmbeddingIndex(
        provider,
        retry_attempts=config.embed_retries,
        retry_wait=config.embed_retry_wait,
    )
    index.build(parse_paths(paths, config))
    return index
