"""Rust parsing and context-tracking element extraction."""

from .extractor import ContextExtractor, extract_elements
from .models import CodeElement, ElementKind
from .parser import ParsedFile, parse_file, parse_source

__all__ = [
    "CodeElement",
    "ContextExtractor",
    "ElementKind",
    "ParsedFile",
    "extract_elements",
    "parse_file",
    "parse_source",
]
