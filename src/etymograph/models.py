"""Value types shared by the extraction pipeline and the graph."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Word:
    """A (language code, word form) pair. Equality is exact and case-sensitive."""

    language: str
    word: str

    def __str__(self) -> str:
        return f"{self.language}:{self.word}"


class RelationKind(Enum):
    """How a reference target relates to the entry it was parsed from."""

    COMPONENT = "component"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    INHERITED = "inherited"
    BORROWED = "borrowed"
    DERIVED = "derived"


@dataclass(frozen=True)
class Reference:
    """One relation parsed out of a template."""

    kind: RelationKind
    target: Word
