"""
Per-page extraction pipeline.

    page text -> split_etymology_sections() -> per-language etymology text
              -> locate_templates() -> parse_template() -> unique()
              -> relation lines

Pages are independent of one another, so process_page() can be mapped
over a dump in worker processes.
"""

from dataclasses import dataclass, field
from typing import Optional

from etymograph.dump import clean_title, extract_page
from etymograph.languages import LanguageTable
from etymograph.locator import locate_templates
from etymograph.models import Reference
from etymograph.records import format_relation
from etymograph.sections import split_etymology_sections
from etymograph.templates import parse_template, template_name, unique


@dataclass
class PageRelations:
    """Everything extracted from one page."""

    title: str
    references: dict[str, list[Reference]] = field(default_factory=dict)  # by language code
    unknown_languages: list[str] = field(default_factory=list)
    template_names: list[str] = field(default_factory=list)  # templates in located spans

    @property
    def lines(self) -> list[str]:
        return [
            format_relation(language, self.title, ref)
            for language, refs in self.references.items()
            for ref in refs
        ]


def extract_relations(title: str, text: str, languages: LanguageTable) -> PageRelations:
    """Extract the deduplicated references of every language section on a page."""
    split = split_etymology_sections(text, languages)
    result = PageRelations(title=title, unknown_languages=split.unknown_languages)

    for language, section in split.sections.items():
        refs: list[Reference] = []
        for template in locate_templates(section):
            result.template_names.append(template_name(template))
            refs.extend(parse_template(template))
        result.references[language] = unique(refs)

    return result


def process_page(page_xml: str, languages: LanguageTable) -> Optional[PageRelations]:
    """Decode one <page> element and extract its relations."""
    page = extract_page(page_xml)
    if page is None:
        return None
    return extract_relations(clean_title(page.title), page.text, languages)
