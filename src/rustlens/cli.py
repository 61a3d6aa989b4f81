"""Semantic search over the functions, methods and structs of a Rust source tree."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from .config import LocalConfig, load_config
from .errors import RustLensError
from .indexer.pipeline import collect_elements, index_directory


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or more, got {number}")
    return number


def _resolve_config(args: argparse.Namespace) -> LocalConfig:
    config = load_config(args.root, args.config)
    if getattr(args, "model", None):
        config.model_name = args.model
    return config


def _read_query(args: argparse.Namespace) -> str:
    if args.query:
        return " ".join(args.query)
    return input("Please enter some text: ").strip()


def _search(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    query = _read_query(args)
    if not query:
        print("Error: empty query", file=sys.stderr)
        return 1

    top_k = args.top_k if args.top_k is not None else config.top_k
    print(f"Indexing {args.root.resolve()} ...")
    index = index_directory(args.root, config=config)
    print(f"Indexed {len(index)} code elements")

    results = index.search(query, top_k)
    if not results:
        print("No matching code elements found.")
        return 0

    for element, score in results:
        print("=" * 20)
        print(f"Score: {score:.4f}")
        print(f"  Name   : {element.name}")
        print(f"  Kind   : {element.kind.value}")
        if element.context_path:
            print(f"  Context: {' -> '.join(element.context_path)}")
        print(f"  Path   : {element.source_path}")
        print(f"  Content: {element.content}")
    return 0


def _list(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    elements = collect_elements(args.root, config)
    for element in elements:
        print(element.describe())
    print(f"\n{len(elements)} code elements")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rustlens", description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML config file (defaults to <root>/.rustlens.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output, including every embedded context string",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Index a source tree and run a query")
    search_parser.add_argument("query", nargs="*", help="Free-text query (prompted for when omitted)")
    search_parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Source tree to index (defaults to the current directory)",
    )
    search_parser.add_argument("-k", "--top-k", type=_non_negative_int, help="Number of results to show")
    search_parser.add_argument("--model", help="sentence-transformers model name")
    search_parser.set_defaults(func=_search)

    list_parser = subparsers.add_parser("list", help="List extracted code elements without embedding")
    list_parser.add_argument(
        "--root",
        type=Path,
        default=Path.cwd(),
        help="Source tree to scan (defaults to the current directory)",
    )
    list_parser.set_defaults(func=_list)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except RustLensError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
