"""Directory-level indexing helpers."""

from .pipeline import collect_elements, index_directory, iter_source_files, parse_paths

__all__ = ["collect_elements", "index_directory", "iter_source_files", "parse_paths"]
