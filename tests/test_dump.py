"""Tests for the streaming dump reader."""
import bz2
import io

import pytest

from etymograph.dump import BZ2StreamReader, Page, clean_title, extract_page, open_dump, scan_pages


class TestScanPages:
    def test_yields_each_page(self, sample_dump):
        with open_dump(sample_dump) as f:
            pages = list(scan_pages(f))
        assert len(pages) == 4
        assert all(p.startswith("<page>") and p.endswith("</page>") for p in pages)

    def test_small_chunks_split_multibyte_characters(self):
        xml = "<mediawiki><page><title>ḱwṓ</title><text>ḱwṓ</text></page></mediawiki>".encode("utf-8")
        pages = list(scan_pages(io.BytesIO(xml), chunk_size=3))
        assert pages == ["<page><title>ḱwṓ</title><text>ḱwṓ</text></page>"]

    def test_no_pages(self):
        assert list(scan_pages(io.BytesIO(b"<mediawiki></mediawiki>"))) == []


class TestBZ2StreamReader:
    def test_reads_compressed_dump(self, sample_dump, sample_dump_bz2):
        with BZ2StreamReader(sample_dump_bz2, chunk_size=64) as reader:
            data = reader.read()
        assert data == sample_dump.read_bytes()
        assert reader.total_decompressed == len(data)

    def test_sized_reads(self, sample_dump, sample_dump_bz2):
        expected = sample_dump.read_bytes()
        chunks = []
        with BZ2StreamReader(sample_dump_bz2, chunk_size=32) as reader:
            while chunk := reader.read(100):
                chunks.append(chunk)
        assert b"".join(chunks) == expected

    def test_multi_stream(self, temp_dir):
        path = temp_dir / "multi.xml.bz2"
        path.write_bytes(bz2.compress(b"<page>a</page>") + bz2.compress(b"<page>b</page>"))
        with BZ2StreamReader(path, chunk_size=16) as reader:
            assert list(scan_pages(reader)) == ["<page>a</page>", "<page>b</page>"]

    def test_truncated_stream_raises(self, temp_dir):
        path = temp_dir / "truncated.xml.bz2"
        path.write_bytes(bz2.compress(b"<page>a</page>" * 100)[:-10])
        with BZ2StreamReader(path) as reader:
            with pytest.raises(EOFError):
                reader.read()

    def test_open_dump_picks_reader(self, sample_dump, sample_dump_bz2):
        with open_dump(sample_dump_bz2) as f:
            assert isinstance(f, BZ2StreamReader)
        with open_dump(sample_dump) as f:
            assert not isinstance(f, BZ2StreamReader)


class TestExtractPage:
    def test_title_and_text(self):
        page = extract_page("<page><title>dog</title><ns>0</ns><text bytes=\"3\">abc</text></page>")
        assert page == Page(title="dog", text="abc")

    def test_entities_unescaped(self):
        xml = "<page><title>A &amp; B</title><text>{{m|en|&lt;x&gt;}} &quot;q&quot;</text></page>"
        page = extract_page(xml)
        assert page.title == "A & B"
        assert page.text == '{{m|en|<x>}} "q"'

    def test_redirect_skipped(self):
        xml = '<page><title>dogs</title><redirect title="dog" /><text>#REDIRECT [[dog]]</text></page>'
        assert extract_page(xml) is None

    def test_missing_text(self):
        assert extract_page("<page><title>dog</title><text bytes=\"0\" /></page>") is None

    def test_missing_title(self):
        assert extract_page("<page><text>abc</text></page>") is None


class TestCleanTitle:
    def test_reconstruction_prefix_removed(self):
        assert clean_title("Reconstruction:Proto-Germanic/hundaz") == "hundaz"

    def test_plain_title_unchanged(self):
        assert clean_title("hound") == "hound"

    def test_other_namespaces_unchanged(self):
        assert clean_title("Appendix:Glossary") == "Appendix:Glossary"
