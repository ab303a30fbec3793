"""
Streaming reader for MediaWiki XML dumps.

Pages are found by scanning for ``<page>`` boundaries rather than by
parsing the XML, which keeps memory flat on multi-gigabyte dumps:

    dump (.xml / .xml.bz2) -> scan_pages() -> extract_page() -> Page(title, text)
"""

import bz2
import codecs
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union
from xml.sax.saxutils import unescape


# =============================================================================
# BZ2 streaming
# =============================================================================


class BZ2StreamReader:
    """Streaming BZ2 decompressor that tracks how much has been read."""

    def __init__(self, filepath: Path, chunk_size: int = 256 * 1024):
        self.filepath = filepath
        self.chunk_size = chunk_size
        self.file = open(filepath, "rb")
        self.decompressor = bz2.BZ2Decompressor()
        self.buffer = b""
        self.total_compressed = 0
        self.total_decompressed = 0
        self.start_time = time.time()

    def read(self, size: int = -1) -> bytes:
        """Read decompressed data."""
        if size == -1:
            while self._decompress_chunk():
                pass
            result = self.buffer
            self.buffer = b""
            return result

        while len(self.buffer) < size and self._decompress_chunk():
            pass

        result = self.buffer[:size]
        self.buffer = self.buffer[size:]
        return result

    def _decompress_chunk(self) -> bool:
        """Decompress one chunk. Returns False once the input is exhausted."""
        if self.decompressor.eof:
            # Multi-stream dumps: start a new decompressor on leftover data
            leftover = self.decompressor.unused_data
            if not leftover:
                leftover = self.file.read(self.chunk_size)
                if not leftover:
                    return False
                self.total_compressed += len(leftover)
            self.decompressor = bz2.BZ2Decompressor()
            decompressed = self.decompressor.decompress(leftover)
            self.buffer += decompressed
            self.total_decompressed += len(decompressed)
            return True

        compressed = self.file.read(self.chunk_size)
        if not compressed:
            raise EOFError(f"Compressed stream ended before the end-of-stream marker: {self.filepath}")

        self.total_compressed += len(compressed)
        decompressed = self.decompressor.decompress(compressed)
        self.buffer += decompressed
        self.total_decompressed += len(decompressed)
        return True

    def close(self):
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def open_dump(path: Union[str, Path]) -> Union[BZ2StreamReader, BinaryIO]:
    """Open a dump for binary reading, decompressing .bz2 files on the fly."""
    path = Path(path)
    if path.suffix == ".bz2":
        return BZ2StreamReader(path)
    return open(path, "rb")


# =============================================================================
# XML streaming
# =============================================================================

TITLE_PATTERN = re.compile(r"<title>([^<]+)</title>")
TEXT_PATTERN = re.compile(r"<text[^>]*>(.*?)</text>", re.DOTALL)
REDIRECT_PATTERN = re.compile(r'<redirect\s+title="[^"]*"')

# Reconstructed forms live at "Reconstruction:Proto-Germanic/hundaz"
RECONSTRUCTION_PREFIX = re.compile(r"Reconstruction:[^:]*/")

XML_ENTITIES = {"&quot;": '"', "&apos;": "'"}


@dataclass(frozen=True)
class Page:
    title: str
    text: str


def scan_pages(file_obj, chunk_size: int = 1024 * 1024) -> Iterator[str]:
    """
    Scan for <page> boundaries and yield complete page XML.

    Uses an incremental UTF-8 decoder so multi-byte sequences split across
    chunk boundaries are decoded correctly.
    """
    buffer = ""
    page_start_marker = "<page>"
    page_end_marker = "</page>"

    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    while True:
        chunk = file_obj.read(chunk_size)
        if not chunk:
            buffer += decoder.decode(b"", final=True)
            break

        buffer += decoder.decode(chunk)

        while True:
            start = buffer.find(page_start_marker)
            if start == -1:
                buffer = buffer[-len(page_start_marker) :]
                break

            end = buffer.find(page_end_marker, start)
            if end == -1:
                buffer = buffer[start:]
                break

            end += len(page_end_marker)
            yield buffer[start:end]
            buffer = buffer[end:]


def clean_title(title: str) -> str:
    """Strip the Reconstruction namespace and language path from a title."""
    return RECONSTRUCTION_PREFIX.sub("", title)


def extract_page(page_xml: str) -> Optional[Page]:
    """
    Extract the unescaped title and wikitext from one page.

    Returns None for pages with nothing to extract (no title, no text,
    or a redirect).
    """
    title_match = TITLE_PATTERN.search(page_xml)
    if not title_match:
        return None

    if REDIRECT_PATTERN.search(page_xml):
        return None

    text_match = TEXT_PATTERN.search(page_xml)
    if not text_match:
        return None

    return Page(
        title=unescape(title_match.group(1), XML_ENTITIES),
        text=unescape(text_match.group(1), XML_ENTITIES),
    )
