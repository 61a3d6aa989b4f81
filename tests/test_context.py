from __future__ import annotations

from rustlens.ast.models import CodeElement, ElementKind
from rustlens.embeddings.context import render_context


def test_render_function_context() -> None:
    element = CodeElement(
        name="add",
        kind=ElementKind.FUNCTION,
        content="fn add(a i32, b i32) i32 { a + b }",
        source_path="src/lib.rs",
        docs="Adds two integers.",
        attributes=["/// Adds two integers.", "#[inline]"],
        parameters=[("a", "i32"), ("b", "i32")],
        return_type="i32",
        context_path=["mod math", "impl Calc"],
    )

    assert render_context(element) == (
        "Name: add\n"
        "Type: function\n"
        "Context: mod math -> impl Calc\n"
        "Docs: Adds two integers.\n"
        "Parameters: a: i32, b: i32\n"
        "Return Type: i32\n"
        "Attributes: /// Adds two integers.\n#[inline]\n"
        "Content: fn add(a i32, b i32) i32 { a + b }"
    )


def test_render_struct_context_has_empty_fields() -> None:
    element = CodeElement(
        name="Point",
        kind=ElementKind.STRUCT,
        content="struct Point {...}",
        source_path="src/lib.rs",
    )

    assert render_context(element) == (
        "Name: Point\n"
        "Type: struct\n"
        "Context: \n"
        "Docs: \n"
        "Parameters: \n"
        "Return Type: \n"
        "Attributes: \n"
        "Content: struct Point {...}"
    )


def test_render_is_deterministic() -> None:
    element = CodeElement(
        name="run",
        kind="method",
        content="fn run()  {  }",
        source_path="src/main.rs",
        parameters=[],
    )
    assert render_context(element) == render_context(element)
