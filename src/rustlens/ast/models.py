"""Code element records produced by the extractor and consumed by the index."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np


class ElementKind(str, Enum):
    """Structural kind of an extracted declaration."""

    FUNCTION = "function"
    STRUCT = "struct"
    METHOD = "method"


@dataclass(slots=True)
class CodeElement:
    """One function, method or struct declaration plus its context.

    ``parameters`` and ``return_type`` only carry meaning for functions and
    methods: a struct always has ``parameters=None``, while a function without
    arguments has ``parameters=[]``.
    """

    name: str
    kind: ElementKind
    content: str
    source_path: str
    language: str = "rust"
    docs: str = ""
    attributes: List[str] = field(default_factory=list)
    parameters: Optional[List[Tuple[str, str]]] = None
    return_type: Optional[str] = None
    context_path: List[str] = field(default_factory=list)
    embedding: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("CodeElement name must not be empty")
        self.kind = ElementKind(self.kind)
        if self.kind is ElementKind.STRUCT:
            if self.parameters is not None or self.return_type is not None:
                raise ValueError(f"struct {self.name} cannot carry parameters or a return type")
        elif self.parameters is None:
            raise ValueError(f"{self.kind.value} {self.name} requires a parameter list")

    def attach_embedding(self, vector: Sequence[float] | np.ndarray) -> None:
        """Assign the embedding once; later assignments are rejected."""
        if self.embedding is not None:
            raise ValueError(f"embedding already assigned for {self.describe()}")
        frozen = np.array(vector, dtype=np.float32)
        frozen.flags.writeable = False
        self.embedding = frozen

    def describe(self) -> str:
        """Return a one-line summary such as ``method area [impl Shape] (src/lib.rs)``."""
        context = f" [{' -> '.join(self.context_path)}]" if self.context_path else ""
        return f"{self.kind.value} {self.name}{context} ({self.source_path})"
