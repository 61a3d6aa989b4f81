"""Context-tracking extraction of functions, methods and structs.

The walk keeps a stack of enclosing scopes (``mod``, ``impl`` and ``trait``
bodies). The stack is created per file and handed down the recursion, so
extracting several files never shares state.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from tree_sitter import Node

from .models import CodeElement, ElementKind
from .parser import ParsedFile

LANGUAGE = "rust"

# Scopes that push a label onto the context stack.
SCOPE_ITEMS = ("mod_item", "impl_item", "trait_item")
# Functions declared directly in these bodies are methods.
METHOD_OWNERS = ("impl_item", "trait_item")

COMMENT_TYPES = ("line_comment", "block_comment")
_DOC_ATTRIBUTE = re.compile(
    r'^#\s*\[\s*doc\s*=\s*r?(?P<hashes>#*)"(?P<text>.*)"(?P=hashes)\s*\]$', re.DOTALL
)


def _squash(text: str) -> str:
    """Collapse whitespace runs so reconstructions ignore source formatting."""
    return " ".join(text.split())


def is_outer_doc_comment(text: str) -> bool:
    """Return True for ``///`` and ``/** */`` comments, which document the next item."""
    if text.startswith("///"):
        return not text.startswith("////")
    if text.startswith("/**"):
        return not text.startswith("/***") and text != "/**/"
    return False


def doc_text(annotation: str) -> Optional[str]:
    """Extract the documentation carried by one annotation, if any."""
    annotation = annotation.strip()
    if annotation.startswith("///"):
        return annotation[3:].strip()
    if annotation.startswith("/**"):
        body = annotation[3:-2] if annotation.endswith("*/") else annotation[3:]
        lines = [line.strip().lstrip("*").strip() for line in body.splitlines()]
        return "\n".join(line for line in lines if line)
    match = _DOC_ATTRIBUTE.match(annotation)
    if match:
        return match.group("text").strip()
    return None


class ContextExtractor:
    """Build :class:`CodeElement` records for one parsed file."""

    def __init__(self, parsed: ParsedFile):
        self.parsed = parsed

    def extract(self) -> List[CodeElement]:
        """Return every element of the file in pre-order declaration order."""
        elements: List[CodeElement] = []
        context: List[str] = []
        self._visit(self.parsed.root, context, elements, owner=None)
        return elements

    def _visit(
        self,
        node: Node,
        context: List[str],
        elements: List[CodeElement],
        owner: Optional[str],
    ) -> None:
        for child in node.named_children:
            node_type = child.type

            if node_type == "function_item":
                kind = ElementKind.METHOD if owner in METHOD_OWNERS else ElementKind.FUNCTION
                elements.append(self._function(child, kind, context))
                self._visit(child, context, elements, owner=None)

            elif node_type == "struct_item":
                elements.append(self._struct(child, context))

            elif node_type in SCOPE_ITEMS:
                context.append(self._scope_label(child))
                try:
                    body = child.child_by_field_name("body")
                    if body is not None:
                        self._visit(body, context, elements, owner=node_type)
                finally:
                    context.pop()

            else:
                self._visit(child, context, elements, owner=None)

    def _scope_label(self, node: Node) -> str:
        if node.type == "impl_item":
            target = node.child_by_field_name("type")
            keyword = "impl"
        else:
            target = node.child_by_field_name("name")
            keyword = "mod" if node.type == "mod_item" else "trait"
        name = _squash(self.parsed.text(target)) if target is not None else "?"
        return f"{keyword} {name}"

    def _annotations(self, node: Node) -> List[str]:
        """Collect attributes and doc comments directly preceding ``node``."""
        collected: List[str] = []
        sibling = node.prev_named_sibling
        while sibling is not None:
            text = self.parsed.text(sibling).strip()
            if sibling.type == "attribute_item":
                collected.append(text)
            elif sibling.type in COMMENT_TYPES:
                if is_outer_doc_comment(text):
                    collected.append(text)
            else:
                break
            sibling = sibling.prev_named_sibling
        collected.reverse()
        return collected

    def _parameters(self, node: Node) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return params
        for param in params_node.named_children:
            if param.type != "parameter":
                continue
            pattern = param.child_by_field_name("pattern")
            type_node = param.child_by_field_name("type")
            if pattern is None or type_node is None:
                continue
            # ``self: Box<Self>`` is a typed receiver, not an argument.
            if pattern.type == "self" or self.parsed.text(pattern) == "self":
                continue
            # Slice from the parameter start so ``mut`` stays on the binding.
            binding = self.parsed.slice(param.start_byte, pattern.end_byte)
            params.append((_squash(binding), _squash(self.parsed.text(type_node))))
        return params

    def _function(self, node: Node, kind: ElementKind, context: List[str]) -> CodeElement:
        name = self.parsed.text(node.child_by_field_name("name"))
        params = self._parameters(node)

        return_node = node.child_by_field_name("return_type")
        return_type = _squash(self.parsed.text(return_node)) if return_node is not None else None

        body_node = node.child_by_field_name("body")
        body = self.parsed.text(body_node) if body_node is not None else ""
        if body.startswith("{") and body.endswith("}"):
            body = body[1:-1]

        signature = ", ".join(f"{binding} {type_text}" for binding, type_text in params)
        content = f"fn {name}({signature}) {return_type or ''} {{ {_squash(body)} }}"

        annotations = self._annotations(node)
        return CodeElement(
            name=name,
            kind=kind,
            content=content,
            source_path=self.parsed.path,
            language=LANGUAGE,
            docs=self._docs(annotations),
            attributes=annotations,
            parameters=params,
            return_type=return_type,
            context_path=list(context),
        )

    def _struct(self, node: Node, context: List[str]) -> CodeElement:
        name = self.parsed.text(node.child_by_field_name("name"))
        annotations = self._annotations(node)
        return CodeElement(
            name=name,
            kind=ElementKind.STRUCT,
            content=f"struct {name} {{...}}",
            source_path=self.parsed.path,
            language=LANGUAGE,
            docs=self._docs(annotations),
            attributes=annotations,
            parameters=None,
            return_type=None,
            context_path=list(context),
        )

    @staticmethod
    def _docs(annotations: List[str]) -> str:
        docs = (doc_text(annotation) for annotation in annotations)
        return "\n".join(doc for doc in docs if doc is not None)


def extract_elements(parsed: ParsedFile) -> List[CodeElement]:
    """Extract all code elements from a parsed file."""
    return ContextExtractor(parsed).extract()
