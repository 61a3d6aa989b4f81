"""Rust source parsing on top of tree-sitter.

The parser only turns source text into a syntax tree; walking the tree and
building :class:`~rustlens.ast.models.CodeElement` records happens in
:mod:`rustlens.ast.extractor`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser, Tree

from ..errors import IoFailure, ParseFailure

RUST_LANGUAGE = Language(tree_sitter_rust.language())


@dataclass(slots=True)
class ParsedFile:
    """A syntax tree together with the source it was parsed from."""

    path: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start: int, end: int) -> str:
        return self.source[start:end].decode("utf-8", errors="replace")


def _first_error(node: Node) -> Optional[Node]:
    """Return the first ``ERROR`` or missing node in document order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def parse_source(source: bytes | str, path: str | Path = "<memory>") -> ParsedFile:
    """Parse Rust source text.

    Parameters
    ----------
    source:
        File contents; ``str`` input is encoded as UTF-8.
    path:
        Path recorded on the result and used in error messages.

    Returns
    -------
    ParsedFile for the source

    Raises
    ------
    ParseFailure
        When tree-sitter had to recover from a syntax error anywhere in the
        file.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")

    parser = Parser(RUST_LANGUAGE)
    tree = parser.parse(source)
    root = tree.root_node
    if root.has_error:
        error = _first_error(root) or root
        line, column = error.start_point
        what = f"missing {error.type}" if error.is_missing else "syntax error"
        raise ParseFailure(path, f"{what} at line {line + 1}, column {column + 1}")

    return ParsedFile(path=str(path), source=source, tree=tree)


def parse_file(path: Path) -> ParsedFile:
    """Read and parse a single source file."""
    try:
        source = Path(path).read_bytes()
    except OSError as exc:
        raise IoFailure(path, str(exc)) from exc
    return parse_source(source, path)
