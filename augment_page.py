#!/usr/bin/env python3
"""
Augment a Saved Page

Runs one image finder pass over a saved Lionwheel page and writes the
augmented HTML (product images and links injected into the task tables).

Usage:
    python3 augment_page.py --input task.html --output task.augmented.html
    python3 augment_page.py --input task.html --catalog-file catalog.csv
    python3 augment_page.py --input task.html --catalog-url https://example.com/catalog.csv --verbose
"""

import argparse
import asyncio
import logging
import sys

from bs4 import BeautifulSoup

from image_finder.catalog import CatalogClient, FileCatalogClient
from image_finder.common import load_settings, setup_logging
from image_finder.session import ImageFinder

logger = logging.getLogger("image_finder.cli")


def main():
    parser = argparse.ArgumentParser(
        description="Inject catalog images and product links into a saved page"
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Saved page HTML"
    )
    parser.add_argument(
        "--output",
        help="Output HTML path (default: stdout)"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog-url",
        help="Catalog CSV URL (default: from config/settings.yaml)"
    )
    source.add_argument(
        "--catalog-file",
        help="Read the catalog CSV from a local file"
    )
    parser.add_argument(
        "--no-hide-columns",
        action="store_true",
        help="Keep all table columns visible"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors"
    )
    parser.add_argument(
        "--log-file",
        help="Also append log lines to this file"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        with open(args.input, 'r', encoding='utf-8') as f:
            html = f.read()
    except OSError as e:
        logger.error("Cannot read %s: %s", args.input, e)
        sys.exit(1)

    if args.catalog_file:
        client = FileCatalogClient(args.catalog_file)
    elif args.catalog_url:
        timeout = load_settings()['catalog'].get('timeout', 30)
        client = CatalogClient(args.catalog_url, timeout=timeout)
    else:
        client = None

    soup = BeautifulSoup(html, "lxml")
    finder = ImageFinder.from_config(soup, client=client, hide_columns=not args.no_hide_columns)

    try:
        augmented = asyncio.run(finder.run_once())
    finally:
        finder.store.client.close()

    logger.info("Augmented %d rows (catalog: %s, %d entries)",
                augmented, finder.store.state.value,
                len(finder.store.catalog) if finder.store.catalog else 0)

    output = str(soup)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        logger.info("Augmented page saved to: %s", args.output)
    else:
        sys.stdout.write(output)

    sys.exit(0)


if __name__ == "__main__":
    main()
