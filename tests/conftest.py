"""Shared fixtures: deterministic embedding providers and sample sources."""

from __future__ import annotations

from typing import List

import pytest

VOCABULARY = ["add", "integer", "sum", "point", "coordinate", "area", "shape", "parse", "config"]


class KeywordProvider:
    """Embeds text as keyword counts over a fixed vocabulary."""

    def __init__(self, vocabulary: List[str] | None = None) -> None:
        self.vocabulary = vocabulary or VOCABULARY
        self.calls: List[str] = []

    def embed_text(self, text: str) -> List[float]:
        self.calls.append(text)
        lowered = text.lower()
        return [float(lowered.count(word)) for word in self.vocabulary]


class FailingProvider:
    """Always raises, like an unreachable model server."""

    def __init__(self) -> None:
        self.calls = 0

    def embed_text(self, text: str) -> List[float]:
        self.calls += 1
        raise ConnectionError("model server unreachable")


class FlakyProvider(KeywordProvider):
    """Fails a fixed number of times before answering."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures

    def embed_text(self, text: str) -> List[float]:
        if self.failures > 0:
            self.failures -= 1
            raise TimeoutError("model warming up")
        return super().embed_text(text)


MATH_SOURCE = """
mod math {
    /// Adds two integers.
    #[inline]
    pub fn add(a: i32, b: i32) -> i32 {
        a + b
    }
}

/// A point in the plane.
#[derive(Debug, Clone)]
pub struct Point {
    x: f64,
    y: f64,
}
"""


@pytest.fixture
def keyword_provider() -> KeywordProvider:
    return KeywordProvider()


@pytest.fixture
def rust_tree(tmp_path):
    """A small crate with a build directory that must be ignored."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "lib.rs").write_text(MATH_SOURCE, encoding="utf-8")
    (src / "shapes.rs").write_text(
        """
pub struct Shape;

impl Shape {
    /// Area of the shape.
    pub fn area(&self) -> f64 {
        0.0
    }
}
""",
        encoding="utf-8",
    )
    target = tmp_path / "target" / "debug"
    target.mkdir(parents=True)
    (target / "generated.rs").write_text("fn generated() {}\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("# crate\n", encoding="utf-8")
    return tmp_path
