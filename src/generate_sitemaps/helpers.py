"""Helper functions for generate_sitemaps CLI."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Optional

from common.cli_helpers import parse_positive_int
from common.config import CATEGORY_ORDER, SitemapConfig

logger = logging.getLogger(__name__)


def parse_categories(value: Optional[str]) -> list[str]:
    '''Parse the --categories argument into a list of categories.'''

    # If no value is provided or if "all" is specified, return all categories
    if not value or value.strip().lower() == "all":
        return list(CATEGORY_ORDER)

    parsed = [c.strip() for c in value.split(",") if c.strip() and c.strip().lower() != "all"]

    for category in parsed:
        if category not in CATEGORY_ORDER:
            logger.warning("Invalid category: %s", category)

    categories = [c for c in CATEGORY_ORDER if c in parsed]

    if not categories:
        raise ValueError(
            f"No valid categories provided. Valid categories: {', '.join(CATEGORY_ORDER)}"
        )

    return categories


def apply_overrides(config: SitemapConfig, args: argparse.Namespace) -> SitemapConfig:
    """Return a copy of ``config`` with any command-line values applied."""
    overrides = {}
    if args.page_size is not None:
        overrides["page_size"] = args.page_size
    if args.max_urls_per_sitemap is not None:
        overrides["max_urls_per_sitemap"] = args.max_urls_per_sitemap
    if args.categories is not None:
        overrides["categories"] = parse_categories(args.categories)
    if args.split_by_category is not None:
        overrides["split_by_category"] = args.split_by_category
    return replace(config, **overrides)


def parse_generate_sitemaps_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    '''Parse CLI arguments for generate_sitemaps.'''

    parser = argparse.ArgumentParser(
        description="Generate storefront sitemaps from BigCommerce and publish them over WebDAV.",
    )

    # Config options
    parser.add_argument(
        "--config",
        default=None,
        help="Config name under configs/ or path to a YAML file (default: $SITEMAP_CONFIG or prod)",
    )

    # Fetch options
    parser.add_argument(
        "--page-size",
        type=lambda v: parse_positive_int(v, "page-size"),
        default=None,
        help="Records per API page (default: from config, 250)",
    )
    parser.add_argument(
        "--categories",
        default=None,
        help="Comma-separated list of categories (default: all).",
    )

    # Sitemap options
    parser.add_argument(
        "--max-urls-per-sitemap",
        type=lambda v: parse_positive_int(v, "max-urls-per-sitemap"),
        default=None,
        help="URLs per sitemap file (default: from config, 50000)",
    )
    parser.add_argument(
        "--split-by-category",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write separate sitemap files per category (default: from config)",
    )

    # Output options
    parser.add_argument(
        "--load-local",
        action="store_true",
        help="Write sitemaps to a local directory instead of WebDAV",
    )
    parser.add_argument(
        "--output-dir",
        default="output",
        help="Directory for --load-local (default: output)",
    )

    return parser.parse_args(argv)
