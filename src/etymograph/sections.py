"""
Split entry wikitext into per-language etymology text.

Wiktionary entries are organised as:

    ==English==
    ===Etymology===
    From {{inh|en|enm|hound}}...

    ===Noun===
    ...
    ==French==
    ...

A level-2 header sets the current language. The literal
``===Etymology===`` header opens an etymology section, which runs until
the next header of any level. Numbered headers (``===Etymology 1===``)
are not treated as etymology sections.
"""

import logging
from dataclasses import dataclass, field

from etymograph.languages import LanguageTable

logger = logging.getLogger(__name__)

ETYMOLOGY_HEADER = "===Etymology==="

# Lines shorter than this many UTF-8 bytes are skipped
MIN_LINE_LENGTH = 4


@dataclass
class SplitResult:
    """Etymology text keyed by language code, in first-seen order."""

    sections: dict[str, str] = field(default_factory=dict)
    unknown_languages: list[str] = field(default_factory=list)


def is_language_header(line: str) -> bool:
    return len(line) > 2 and line[0] == "=" and line[1] == "=" and line[2] != "="


def split_etymology_sections(text: str, languages: LanguageTable) -> SplitResult:
    """
    Accumulate the etymology lines of each language section in ``text``.

    Lines under a language whose name is not in ``languages`` are skipped;
    each such name is reported once in ``unknown_languages``.
    """
    result = SplitResult()
    current_language = ""
    in_etymology = False

    for line in text.split("\n"):
        if len(line.encode("utf-8")) < MIN_LINE_LENGTH:
            continue

        if is_language_header(line):
            current_language = line[2:-2]
            continue

        if line == ETYMOLOGY_HEADER:
            in_etymology = True
            continue

        if line[0] == "=":
            in_etymology = False
            continue

        if not in_etymology:
            continue

        code = languages.code_from_name(current_language)
        if code is None:
            logger.debug(f"No code for language {current_language!r}")
            if current_language not in result.unknown_languages:
                result.unknown_languages.append(current_language)
            continue

        result.sections[code] = result.sections.get(code, "") + line + "\n"

    return result
