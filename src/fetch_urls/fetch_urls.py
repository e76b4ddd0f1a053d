"""Core URL enumeration logic."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from common.bigcommerce import BigCommerceClient
from fetch_urls.models import SitemapEntry
from fetch_urls.sources import PaginatedSource, get_source

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 250


def iter_urls(
    client: BigCommerceClient,
    category: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    start_page: int = 1,
    total: Optional[int] = None,
) -> Iterator[SitemapEntry]:
    """Lazily yield the publishable entries of one category, page by page.

    Args:
        client: Authenticated BigCommerce client
        category: One of the supported category names
        page_size: Records requested per page
        start_page: Page to start from (1 for a full walk)
        total: Item total if already known; skips the count request

    Raises:
        ValueError: If the category is unsupported (before any request is made)
        BigCommerceError: If any request fails
    """
    source = get_source(category)
    return _iter_source_urls(client, source, category, page_size, start_page, total)


def _iter_source_urls(
    client: BigCommerceClient,
    source: PaginatedSource,
    category: str,
    page_size: int,
    start_page: int,
    total: Optional[int],
) -> Iterator[SitemapEntry]:
    for page, records in source.iter_pages(client, page_size, start_page=start_page, total=total):
        logger.info("Fetched page %d of %s urls (%d records)", page, category, len(records))
        for record in records:
            if source.is_publishable(record):
                yield source.to_entry(record)


def fetch_urls(
    client: BigCommerceClient,
    category: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    start_page: int = 1,
    total: Optional[int] = None,
) -> list[SitemapEntry]:
    """Fetch every publishable entry of one category."""
    entries = list(iter_urls(client, category, page_size, start_page=start_page, total=total))
    logger.info("Fetched %d %s urls", len(entries), category)
    return entries
