"""
etymograph - word-origin relations from Wiktionary etymology sections.

Modules:
    dump: Streaming page reader for MediaWiki XML dumps
    sections: Splits entry text into per-language etymology sections
    locator: Finds the useful span of an etymology section
    templates: Parses etymology templates into references
    extract: Per-page pipeline tying the above together
    records: Relation line formats (emitted and ingested)
    graph: Etymology graph and ancestry lookup
"""

from etymograph.graph import EtymologyGraph, Node
from etymograph.models import Reference, RelationKind, Word

__all__ = ["EtymologyGraph", "Node", "Reference", "RelationKind", "Word"]
