"""Pytest configuration and shared fixtures."""
import bz2
import tempfile
from pathlib import Path
from xml.sax.saxutils import escape

import pytest

from etymograph.languages import LanguageTable


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def languages():
    """Small language table covering the sample pages."""
    return LanguageTable({
        "English": "en",
        "Middle English": "enm",
        "Old English": "ang",
        "French": "fr",
        "Latin": "la",
        "Proto-Germanic": "gem-pro",
    })


HOUND_TEXT = """==English==
{{wikipedia}}

===Etymology===
From {{inh|en|enm|hound}}, from {{inh|en|ang|hund}}, from {{inh|en|gem-pro|*hundaz}}.

===Noun===
{{en-noun}}

# A dog.

==French==

===Etymology===
{{bor|fr|en|hound}}.

===Noun===
# A hunting dog.
"""

UNHAPPY_TEXT = """==English==

===Etymology===
{{prefix|en|un|happy}}

===Adjective===
# Not happy.
"""

HUNDAZ_TEXT = """==Proto-Germanic==

===Etymology===
From {{inh|gem-pro|ine-pro|*ḱwṓ}} + {{m|gem-pro|*-daz}}.
"""


def make_page(title: str, text: str, ns: int = 0, redirect: str = "") -> str:
    redirect_xml = f"    <redirect title=\"{escape(redirect)}\" />\n" if redirect else ""
    return (
        "  <page>\n"
        f"    <title>{escape(title)}</title>\n"
        f"    <ns>{ns}</ns>\n"
        f"{redirect_xml}"
        "    <revision>\n"
        f'      <text bytes="{len(text)}" xml:space="preserve">{escape(text)}</text>\n'
        "    </revision>\n"
        "  </page>\n"
    )


def make_dump(pages: list[tuple[str, str]]) -> str:
    body = "".join(
        make_page(title, text, redirect="hound" if text.startswith("#REDIRECT") else "")
        for title, text in pages
    )
    return f'<mediawiki xml:lang="en">\n  <siteinfo><sitename>Wiktionary</sitename></siteinfo>\n{body}</mediawiki>\n'


@pytest.fixture
def sample_pages():
    return [
        ("hound", HOUND_TEXT),
        ("unhappy", UNHAPPY_TEXT),
        ("Reconstruction:Proto-Germanic/hundaz", HUNDAZ_TEXT),
        ("dog", "#REDIRECT [[hound]]"),
    ]


@pytest.fixture
def sample_dump(temp_dir, sample_pages):
    """Write the sample pages as a plain XML dump and return its path."""
    path = temp_dir / "sample.xml"
    path.write_text(make_dump(sample_pages), encoding="utf-8")
    return path


@pytest.fixture
def sample_dump_bz2(temp_dir, sample_pages):
    """Write the sample pages as a bz2-compressed dump and return its path."""
    path = temp_dir / "sample.xml.bz2"
    path.write_bytes(bz2.compress(make_dump(sample_pages).encode("utf-8")))
    return path
