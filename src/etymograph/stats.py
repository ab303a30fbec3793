"""Statistics collection for the etymology scanner.

Counts what the scanner saw and produced so a run over a full dump can be
checked for obvious problems: languages missing from the language table,
template names that are common but not parsed, and the mix of relation
kinds written.
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import orjson

from etymograph.extract import PageRelations
from etymograph.templates import TEMPLATE_FAMILIES


@dataclass
class ScanStats:
    """Accumulator for scanner statistics."""

    total_pages: int = 0
    pages_with_etymology: int = 0
    relations_written: int = 0

    # Relation kinds written ("inherited", "component", ...)
    relation_counts: Counter = field(default_factory=Counter)

    # Relations written per entry language code
    language_counts: Counter = field(default_factory=Counter)

    # Template names found in located spans, split by whether they are parsed
    template_counts: Counter = field(default_factory=Counter)
    unparsed_template_counts: Counter = field(default_factory=Counter)

    # Section header names with no code in the language table
    unknown_language_counts: Counter = field(default_factory=Counter)

    def record_page(self, page: PageRelations) -> None:
        self.total_pages += 1
        if page.references:
            self.pages_with_etymology += 1

        for language, refs in page.references.items():
            self.relations_written += len(refs)
            self.language_counts[language] += len(refs)
            for ref in refs:
                self.relation_counts[ref.kind.value] += 1

        for name in page.template_names:
            self.template_counts[name] += 1
            if name not in TEMPLATE_FAMILIES:
                self.unparsed_template_counts[name] += 1

        for name in page.unknown_languages:
            self.unknown_language_counts[name] += 1

    def record_skipped_page(self) -> None:
        self.total_pages += 1

    def to_dict(self) -> dict:
        """Convert stats to a dictionary for JSON serialization."""
        return {
            "summary": {
                "total_pages": self.total_pages,
                "pages_with_etymology": self.pages_with_etymology,
                "relations_written": self.relations_written,
            },
            "relation_kinds": dict(self.relation_counts.most_common()),
            "languages": {
                "total_unique": len(self.language_counts),
                "top_50": dict(self.language_counts.most_common(50)),
            },
            "templates": {
                "total_unique": len(self.template_counts),
                "top_100": dict(self.template_counts.most_common(100)),
            },
            "unparsed_templates": {
                "total_unique": len(self.unparsed_template_counts),
                "top_50": dict(self.unparsed_template_counts.most_common(50)),
            },
            "unknown_languages": {
                "total_unique": len(self.unknown_language_counts),
                "top_50": dict(self.unknown_language_counts.most_common(50)),
            },
        }

    def write_to_file(self, path: Union[str, Path]) -> None:
        """Write stats to a JSON file."""
        with open(path, "wb") as f:
            f.write(orjson.dumps(self.to_dict(), option=orjson.OPT_INDENT_2))
