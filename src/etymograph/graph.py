"""
Etymology graph.

Holds two directed edge maps keyed by Word:

    etymology      general etymological relations (rel:etymology)
    derived_from   strict descent relations (rel:is_derived_from)

The graph is built once from a relation file and then only read. Lookups
rebuild the ancestry tree of a word by following both maps transitively.
Relation data from Wiktionary is noisy and can contain cycles, so each
lookup tracks the words on the current path and stops at a repeat.
"""

import gzip
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Union

from etymograph.models import Word
from etymograph.records import DERIVED_FROM_LABEL, ETYMOLOGY_LABEL, RelationRecord, parse_relation

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """A word and the resolved trees of everything it comes from."""

    word: Word
    derived_from: list["Node"] = field(default_factory=list)
    etymology: list["Node"] = field(default_factory=list)
    cyclic: bool = False  # word already appears higher up on this path
    truncated: bool = False  # depth limit reached with edges left unexpanded

    def is_terminal(self) -> bool:
        return not self.derived_from and not self.etymology

    def to_dict(self) -> dict[str, Any]:
        result = self._fields()
        stack = [(self, result)]
        while stack:
            node, out = stack.pop()
            for key, children in (("derived_from", node.derived_from), ("etymology", node.etymology)):
                if not children:
                    continue
                out[key] = []
                for child in children:
                    child_out = child._fields()
                    out[key].append(child_out)
                    stack.append((child, child_out))
        return result

    def _fields(self) -> dict[str, Any]:
        # Cyclic and truncated nodes are always leaves
        result: dict[str, Any] = {
            "language": self.word.language,
            "word": self.word.word,
        }
        if self.cyclic:
            result["cyclic"] = True
        if self.truncated:
            result["truncated"] = True
        return result


class EtymologyGraph:
    def __init__(self):
        self._etymology: dict[Word, list[Word]] = defaultdict(list)
        self._derived_from: dict[Word, list[Word]] = defaultdict(list)
        self.duplicate_sources = 0
        self.skipped_lines = 0

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "EtymologyGraph":
        graph = cls()
        for line_num, line in enumerate(lines, 1):
            if not line.strip():
                continue
            record = parse_relation(line)
            if record is None:
                logger.debug(f"Line {line_num}: malformed relation, skipping: {line!r}")
                graph.skipped_lines += 1
                continue
            graph.add(record)
        return graph

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "EtymologyGraph":
        """Load a relation file (plain text or .gz)."""
        path = Path(path)
        opener = gzip.open if path.suffix == ".gz" else open
        with opener(path, "rt", encoding="utf-8") as f:
            graph = cls.from_lines(f)
        logger.info(
            f"Loaded {len(graph):,} source words from {path.name} "
            f"({graph.duplicate_sources:,} duplicate derivation sources)"
        )
        return graph

    def add(self, record: RelationRecord) -> None:
        """
        Add one relation. Labels other than etymology and is_derived_from
        are ignored.
        """
        if record.label == ETYMOLOGY_LABEL:
            self._etymology[record.source].append(record.target)
        elif record.label == DERIVED_FROM_LABEL:
            # A word should be derived from one source; more is recorded but flagged
            if self._derived_from.get(record.source):
                logger.warning(f"Duplicate is_derived_from source: {record.source}")
                self.duplicate_sources += 1
            self._derived_from[record.source].append(record.target)

    # =========================================================================
    # Queries
    # =========================================================================

    def etymology_edges(self, word: Word) -> list[Word]:
        return list(self._etymology.get(word, ()))

    def derived_from_edges(self, word: Word) -> list[Word]:
        return list(self._derived_from.get(word, ()))

    def lookup(self, word: Word, max_depth: Optional[int] = None) -> Node:
        """
        Resolve the ancestry tree of ``word``.

        A word with no outgoing edges resolves to a terminal node. A word
        already on the path from the root becomes a leaf with ``cyclic``
        set. With ``max_depth``, nodes at that depth are not expanded.

        The tree is built depth-first with an explicit stack, so chain
        length is not bounded by the interpreter's recursion limit.
        """
        path: set[Word] = set()
        root, pending = self._open(word, 0, max_depth, path)
        if pending is None:
            return root

        path.add(word)
        stack = [(root, pending)]
        while stack:
            node, pending = stack[-1]
            step = next(pending, None)
            if step is None:
                stack.pop()
                path.discard(node.word)
                continue

            siblings, target = step
            child, child_pending = self._open(target, len(stack), max_depth, path)
            siblings.append(child)
            if child_pending is not None:
                path.add(target)
                stack.append((child, child_pending))

        return root

    def _open(
        self, word: Word, depth: int, max_depth: Optional[int], path: set[Word]
    ) -> tuple[Node, Optional[Iterator[tuple[list[Node], Word]]]]:
        """Create the node for ``word`` and the edges still to expand below it (None for a leaf)."""
        if word in path:
            return Node(word=word, cyclic=True), None

        derived_from = self._derived_from.get(word, ())
        etymology = self._etymology.get(word, ())

        if max_depth is not None and depth >= max_depth:
            return Node(word=word, truncated=bool(derived_from or etymology)), None

        node = Node(word=word)
        pending = [(node.derived_from, w) for w in derived_from]
        pending += [(node.etymology, w) for w in etymology]
        return node, iter(pending)

    def __contains__(self, word: object) -> bool:
        return word in self._etymology or word in self._derived_from

    def __len__(self) -> int:
        return len(self._etymology.keys() | self._derived_from.keys())
