#!/usr/bin/env python3
"""
etylookup - show where a word comes from.

Loads a relation file (Etymological Wordnet style, plain or .gz) into an
EtymologyGraph and prints the ancestry tree of one word.

Usage:
    etylookup GRAPH LANGUAGE WORD [--json] [--max-depth N]

Example:
    etylookup data/etymwn.tsv eng dog
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import orjson
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from etymograph.cli import configure_logging
from etymograph.graph import EtymologyGraph, Node
from etymograph.models import Word

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the etymology tree of a word")
    parser.add_argument("graph", type=Path, help="Relation file (.tsv or .tsv.gz)")
    parser.add_argument("language", help="Language code of the word (as used in the graph file)")
    parser.add_argument("word", help="Word to look up")
    parser.add_argument("--json", action="store_true", help="Print the tree as JSON")
    parser.add_argument("--max-depth", type=int, default=None, help="Stop expanding below this depth")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped graph lines")
    return parser.parse_args(argv)


def _label(node: Node, relation: Optional[str] = None) -> str:
    label = f"[bold]{escape(node.word.word)}[/bold] [grey50]({escape(node.word.language)})[/grey50]"
    if relation:
        label = f"[cyan]{relation}[/cyan] {label}"
    if node.cyclic:
        label += " [red](cycle)[/red]"
    if node.truncated:
        label += " [yellow]…[/yellow]"
    return label


def _add_children(tree: Tree, node: Node) -> None:
    stack = [(tree, node)]
    while stack:
        branch, parent = stack.pop()
        for child in parent.derived_from:
            stack.append((branch.add(_label(child, "derived from")), child))
        for child in parent.etymology:
            stack.append((branch.add(_label(child, "etymology")), child))


def build_tree(node: Node) -> Tree:
    """Render a lookup result as a Rich tree."""
    tree = Tree(_label(node))
    _add_children(tree, node)
    return tree


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    if not args.graph.exists():
        logger.error(f"Graph file not found: {args.graph}")
        return 1

    graph = EtymologyGraph.from_file(args.graph)
    node = graph.lookup(Word(language=args.language, word=args.word), max_depth=args.max_depth)

    if args.json:
        try:
            data = orjson.dumps(node.to_dict(), option=orjson.OPT_INDENT_2)
        except orjson.JSONEncodeError as e:
            logger.error(f"Cannot encode tree for {node.word} as JSON ({e}); retry with a smaller --max-depth")
            return 1
        sys.stdout.write(data.decode("utf-8") + "\n")
        return 0

    console = Console()
    if node.is_terminal():
        console.print(f"No etymology recorded for {node.word}")
    else:
        console.print(build_tree(node))
    return 0


if __name__ == "__main__":
    sys.exit(main())
