"""
Relation line formats.

Two tab-separated formats are in play and they are deliberately distinct:

Emitted by the scanner, one line per reference:

    en:hound<TAB>rel:inherited<TAB>enm:hound

Read by the graph (Etymological Wordnet style):

    eng: hound<TAB>rel:etymology<TAB>enm: hund
"""

from dataclasses import dataclass
from typing import Optional

from etymograph.models import Reference, Word

ETYMOLOGY_LABEL = "rel:etymology"
DERIVED_FROM_LABEL = "rel:is_derived_from"

WORD_SEPARATOR = ": "


@dataclass(frozen=True)
class RelationRecord:
    source: Word
    label: str
    target: Word


def format_relation(language: str, title: str, reference: Reference) -> str:
    """Format one emitted relation line (without trailing newline)."""
    target = reference.target
    return f"{language}:{title}\trel:{reference.kind.value}\t{target.language}:{target.word}"


def _parse_word(field: str) -> Optional[Word]:
    parts = field.split(WORD_SEPARATOR)
    if len(parts) < 2:
        return None
    return Word(language=parts[0], word=parts[1])


def parse_relation(line: str) -> Optional[RelationRecord]:
    """Parse one graph input line, or return None if it is malformed."""
    fields = line.rstrip("\r\n").split("\t")
    if len(fields) < 3:
        return None

    source = _parse_word(fields[0])
    target = _parse_word(fields[2])
    if source is None or target is None:
        return None

    return RelationRecord(source=source, label=fields[1], target=target)
