"""Error types raised while indexing and searching a source tree."""

from __future__ import annotations

from pathlib import Path


class RustLensError(Exception):
    """Base exception for rustlens failures."""


class ParseFailure(RustLensError):
    """Source text could not be turned into a syntax tree."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = str(path)
        super().__init__(f"Failed to parse {self.path}: {message}")


class EmbeddingFailure(RustLensError):
    """The embedding provider could not produce a usable vector."""

    def __init__(self, subject: str, message: str) -> None:
        self.subject = subject
        super().__init__(f"Embedding failed for {subject}: {message}")


class IoFailure(RustLensError):
    """A file read or directory traversal failed."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = str(path)
        super().__init__(f"I/O error on {self.path}: {message}")
