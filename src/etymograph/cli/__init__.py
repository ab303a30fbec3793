"""
Command-line interface entry points for etymograph.

Entry points:
- etyscan: Extract relation lines from a Wiktionary dump
- etylookup: Show the ancestry tree of a word from a relation file
"""

import logging


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
