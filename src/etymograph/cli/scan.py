#!/usr/bin/env python3
"""
etyscan - extract etymology relations from a Wiktionary dump.

Reads every page of a MediaWiki XML dump, finds the etymology section of
each language entry, parses its templates and writes one tab-separated
relation line per reference:

    en:hound<TAB>rel:inherited<TAB>enm:hound

Usage:
    etyscan INPUT OUTPUT [options]

Example:
    etyscan data/raw/enwiktionary-latest-pages-articles.xml.bz2 \\
            data/intermediate/etymology.tsv \\
            --workers 8 --stats data/intermediate/etymology-stats.json
"""

import argparse
import contextlib
import logging
import sys
import time
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from itertools import islice
from pathlib import Path
from typing import Iterable, Iterator, Optional

from etymograph.cli import configure_logging
from etymograph.dump import open_dump, scan_pages
from etymograph.extract import PageRelations, process_page
from etymograph.languages import LanguageTable, LanguageTableError, load_languages
from etymograph.progress_display import ProgressDisplay
from etymograph.stats import ScanStats

logger = logging.getLogger(__name__)

# Pages handed to the worker pool at a time, per worker
BATCH_PER_WORKER = 256


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Extract etymology relations from a Wiktionary XML dump",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "input",
        type=Path,
        help="Input Wiktionary XML dump (.xml or .xml.bz2)",
    )

    parser.add_argument(
        "output",
        help="Output relation file (- for stdout)",
    )

    parser.add_argument(
        "--languages",
        type=Path,
        default=None,
        help=(
            "YAML language name -> code table (default: bundled table of about "
            "100 major and proto-languages; sections in other languages are "
            "skipped, so pass a fuller table for complete coverage)"
        ),
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes for page extraction (default: 1, in-process)",
    )

    parser.add_argument(
        "--limit",
        type=non_negative_int,
        default=None,
        help="Stop after the first N pages (for testing)",
    )

    parser.add_argument(
        "--stats",
        type=Path,
        default=None,
        help="Output path for statistics JSON file (optional)",
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not show the live progress panel",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-line diagnostics (unknown languages, skipped sections)",
    )

    return parser.parse_args(argv)


def batched(items: Iterable[str], size: int) -> Iterator[list[str]]:
    iterator = iter(items)
    while batch := list(islice(iterator, size)):
        yield batch


def extract_all(
    pages: Iterable[str], languages: LanguageTable, workers: int
) -> Iterator[Optional[PageRelations]]:
    """
    Run process_page over every page, yielding results in input order.

    With more than one worker, pages are sent to a process pool in batches
    so the dump is never fully buffered.
    """
    if workers <= 1:
        for page_xml in pages:
            yield process_page(page_xml, languages)
        return

    worker = partial(process_page, languages=languages)
    with ProcessPoolExecutor(max_workers=workers) as pool:
        for batch in batched(pages, workers * BATCH_PER_WORKER):
            yield from pool.map(worker, batch, chunksize=32)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    if not args.input.exists():
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        languages = load_languages(args.languages)
    except LanguageTableError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Input:     {args.input}")
    logger.info(f"Output:    {args.output}")
    logger.info(f"Languages: {len(languages):,} names")
    logger.info(f"Workers:   {args.workers}")
    if args.limit is not None:
        logger.info(f"Limit:     {args.limit:,} pages")

    stats = ScanStats()
    start_time = time.time()

    if args.output == "-":
        out_ctx = contextlib.nullcontext(sys.stdout)
    else:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        out_ctx = open(output, "w", encoding="utf-8")

    try:
        with open_dump(args.input) as f, out_ctx as out, \
                ProgressDisplay("Scanning dump", enabled=False if args.quiet else None) as progress:
            pages = scan_pages(f)
            if args.limit is not None:
                pages = islice(pages, args.limit)

            for result in extract_all(pages, languages, args.workers):
                if result is None:
                    stats.record_skipped_page()
                else:
                    stats.record_page(result)
                    for line in result.lines:
                        out.write(line + "\n")

                progress.update(
                    pages=stats.total_pages,
                    with_etymology=stats.pages_with_etymology,
                    relations=stats.relations_written,
                )
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")

    elapsed = time.time() - start_time
    logger.info("=" * 60)
    logger.info("Summary:")
    logger.info(f"  Pages processed:       {stats.total_pages:,}")
    logger.info(f"  Pages with etymology:  {stats.pages_with_etymology:,}")
    logger.info(f"  Relations written:     {stats.relations_written:,}")
    logger.info(f"  Time:                  {int(elapsed / 60)}m {int(elapsed % 60)}s")
    logger.info("=" * 60)

    if stats.unknown_language_counts:
        logger.info(
            f"Languages without a code: {len(stats.unknown_language_counts):,} "
            f"(top: {', '.join(name for name, _ in stats.unknown_language_counts.most_common(5))})"
        )

    if args.stats:
        args.stats.parent.mkdir(parents=True, exist_ok=True)
        stats.write_to_file(args.stats)
        logger.info(f"Statistics written to: {args.stats}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
