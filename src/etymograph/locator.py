"""
Locate the useful part of an etymology section.

Etymology sections usually open with the templates that matter
("From {{inh|en|enm|hound}}, from ...") and trail off into prose,
cognate lists and further templates that describe other words. The
heuristic here keeps the first clause that contains a template:

    - A prelude sentence or line with no template is skipped.
    - The span ends at the first comma, period or newline found outside
      braces once a template has been seen.

Parenthesized asides inside that span are removed before templates are
extracted and parsed.
"""

import logging
import re

from etymograph.models import Reference
from etymograph.templates import parse_template

logger = logging.getLogger(__name__)

WITHIN_PARENS = re.compile(r"\([^)]*\)")
ROOT_TEMPLATE = re.compile(r"\{\{root[^}]*\}\}")
MULTIPLE_IMAGES_TEMPLATE = re.compile(r"\{\{multiple[^}]*\}\}", re.DOTALL)
TEMPLATE = re.compile(r"\{\{[^}]*\}\}")

SPAN_BREAKS = ",.\n"


def strip_boilerplate(section: str) -> str:
    """Remove {{root}} and {{multiple images}} templates; they carry no relations."""
    section = ROOT_TEMPLATE.sub("", section)
    return MULTIPLE_IMAGES_TEMPLATE.sub("", section)


def find_useful_span(section: str) -> tuple[int, int] | None:
    """
    Return inclusive (start, end) indices of the useful span, or None if the
    section contains no template at all.
    """
    depth = 0
    start = 0
    end = len(section) - 1
    seen_template = False

    for i, ch in enumerate(section):
        if ch == "{":
            depth += 1
            seen_template = True
        elif ch == "}":
            depth -= 1
        elif ch in SPAN_BREAKS:
            if depth == 0:
                if seen_template:
                    end = i - 1
                    break
                # Prelude without a template; the useful text starts after it
                start = i + 1

    if not seen_template:
        return None
    return start, end


def locate_templates(section: str) -> list[str]:
    """Return the template spans inside the useful part of a section."""
    section = strip_boilerplate(section)
    span = find_useful_span(section)
    if span is None:
        return []

    start, end = span
    if end > len(section):
        logger.debug(f"Span end {end} past section length {len(section)}, skipping section")
        return []

    useful = WITHIN_PARENS.sub("", section[start : end + 1])
    return TEMPLATE.findall(useful)


def parse_etymology_section(section: str) -> list[Reference]:
    """Parse every template in the useful span of one language's etymology text."""
    refs: list[Reference] = []
    for template in locate_templates(section):
        refs.extend(parse_template(template))
    return refs
