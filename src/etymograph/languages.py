"""
Language name to code table.

Wiktionary section headers use canonical language names ("Old English"),
while templates and emitted relations use language codes ("ang"). The
table is loaded from a YAML file of the form:

    languages:
      English: en
      Old English: ang

A default table ships in ``etymograph/data/languages.yaml``.
"""

from pathlib import Path
from typing import Optional

import yaml

DEFAULT_LANGUAGES_PATH = Path(__file__).parent / "data" / "languages.yaml"


class LanguageTableError(ValueError):
    """Raised when a language table file is missing or invalid."""


class LanguageTable:
    """Exact, case-sensitive lookup from canonical language name to code."""

    def __init__(self, names: dict[str, str]):
        self._codes = dict(names)

    def code_from_name(self, name: str) -> Optional[str]:
        return self._codes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        return f"LanguageTable({len(self._codes)} languages)"


def load_languages(path: Optional[Path] = None) -> LanguageTable:
    """Load a language table from YAML, defaulting to the bundled table."""
    path = Path(path) if path is not None else DEFAULT_LANGUAGES_PATH

    if not path.exists():
        raise LanguageTableError(f"Language table not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LanguageTableError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("languages"), dict):
        raise LanguageTableError(
            f"{path} must contain a top-level 'languages' mapping of name -> code"
        )

    names = data["languages"]
    for name, code in names.items():
        if not isinstance(name, str) or not isinstance(code, str):
            raise LanguageTableError(
                f"{path}: language entries must map strings to strings, got {name!r}: {code!r}"
            )

    return LanguageTable(names)
