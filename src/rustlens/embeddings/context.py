"""Render a code element into the text that gets embedded."""

from __future__ import annotations

from ..ast.models import CodeElement


def render_context(element: CodeElement) -> str:
    """Build the labelled "rich context" string for ``element``.

    Name, kind, nesting and docs all land in the embedded text, so ranking
    reacts to more than the code body.
    """
    parameters = ", ".join(f"{name}: {type_text}" for name, type_text in element.parameters or [])
    attributes = "\n".join(element.attributes)
    return "\n".join(
        [
            f"Name: {element.name}",
            f"Type: {element.kind.value}",
            f"Context: {' -> '.join(element.context_path)}",
            f"Docs: {element.docs}",
            f"Parameters: {parameters}",
            f"Return Type: {element.return_type or ''}",
            f"Attributes: {attributes}",
            f"Content: {element.content}",
        ]
    )
