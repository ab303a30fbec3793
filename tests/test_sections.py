"""Tests for splitting entry text into per-language etymology sections."""
import logging

from etymograph.sections import is_language_header, split_etymology_sections


class TestLanguageHeader:
    def test_level_two(self):
        assert is_language_header("==English==")

    def test_level_three_is_not_language(self):
        assert not is_language_header("===Etymology===")

    def test_plain_text(self):
        assert not is_language_header("From Latin.")

    def test_two_characters(self):
        assert not is_language_header("==")


class TestSplitEtymologySections:
    def test_single_language(self, languages):
        text = "==English==\n===Etymology===\nFrom {{inh|en|enm|hound}}.\n===Noun===\n# A dog.\n"
        result = split_etymology_sections(text, languages)
        assert result.sections == {"en": "From {{inh|en|enm|hound}}.\n"}
        assert result.unknown_languages == []

    def test_multiple_languages_in_order(self, languages):
        text = (
            "==French==\n===Etymology===\n{{bor|fr|en|hound}}.\n"
            "==English==\n===Etymology===\nFrom {{inh|en|enm|hound}}.\n"
        )
        result = split_etymology_sections(text, languages)
        assert list(result.sections) == ["fr", "en"]
        assert result.sections["fr"] == "{{bor|fr|en|hound}}.\n"

    def test_multiline_section_keeps_newlines(self, languages):
        text = "==English==\n===Etymology===\nFirst line here.\nSecond line here.\n====Usage notes====\nNot etymology.\n"
        result = split_etymology_sections(text, languages)
        assert result.sections == {"en": "First line here.\nSecond line here.\n"}

    def test_short_lines_skipped(self, languages):
        text = "==English==\n===Etymology===\n\nx.y\nFrom {{inh|en|enm|hound}}.\n"
        result = split_etymology_sections(text, languages)
        assert result.sections == {"en": "From {{inh|en|enm|hound}}.\n"}

    def test_line_length_counts_utf8_bytes(self, languages):
        # "=é=" is 4 bytes, so it is a header and closes the section
        text = "==English==\n===Etymology===\nKept.\n=é=\nDropped {{m|en|x}}.\n"
        assert split_etymology_sections(text, languages).sections == {"en": "Kept.\n"}

    def test_short_non_ascii_line_kept(self, languages):
        text = "==English==\n===Etymology===\néé\né=\n"
        assert split_etymology_sections(text, languages).sections == {"en": "éé\n"}

    def test_numbered_etymology_not_opened(self, languages):
        text = "==English==\n===Etymology 1===\nFrom {{inh|en|enm|bank}}.\n"
        result = split_etymology_sections(text, languages)
        assert result.sections == {}

    def test_any_header_closes(self, languages):
        text = "==English==\n===Etymology===\nKept line.\n=Other=\nDropped line.\n"
        result = split_etymology_sections(text, languages)
        assert result.sections == {"en": "Kept line.\n"}

    def test_text_outside_etymology_ignored(self, languages):
        text = "==English==\n===Noun===\n{{en-noun}}\n# A dog.\n"
        assert split_etymology_sections(text, languages).sections == {}

    def test_language_change_keeps_section_open(self, languages):
        # A language header does not close an open etymology section
        text = "==English==\n===Etymology===\nEnglish line.\n==Latin==\nLatin line.\n"
        result = split_etymology_sections(text, languages)
        assert result.sections == {"en": "English line.\n", "la": "Latin line.\n"}

    def test_repeated_sections_accumulate(self, languages):
        text = (
            "==English==\n===Etymology===\nFirst part.\n===Noun===\n# x\n"
            "===Etymology===\nSecond part.\n"
        )
        result = split_etymology_sections(text, languages)
        assert result.sections == {"en": "First part.\nSecond part.\n"}

    def test_unknown_language_skipped(self, languages, caplog):
        text = "==Klingon==\n===Etymology===\nFrom {{inh|tlh|x|y}}.\nMore text.\n"
        with caplog.at_level(logging.DEBUG, logger="etymograph.sections"):
            result = split_etymology_sections(text, languages)
        assert result.sections == {}
        assert result.unknown_languages == ["Klingon"]
        assert any("Klingon" in r.getMessage() for r in caplog.records)

    def test_fresh_result_per_call(self, languages):
        text = "==English==\n===Etymology===\nFrom {{inh|en|enm|hound}}.\n"
        first = split_etymology_sections(text, languages)
        second = split_etymology_sections(text, languages)
        assert first.sections == second.sections
        assert first.sections is not second.sections
