"""rustlens package.

Semantic search over the functions, methods and structs of a local Rust
source tree, running entirely in-process.
"""

__all__ = [
    "config",
    "errors",
    "ast",
    "embeddings",
    "indexer",
    "cli",
]
