"""Split entries into sitemap documents of bounded size."""

from __future__ import annotations

import logging
from typing import Sequence

from build_sitemaps.models import SitemapDocument
from build_sitemaps.sitemap_xml import render_urlset
from common.config import MAX_URLS_PER_SITEMAP
from fetch_urls.models import SitemapEntry

logger = logging.getLogger(__name__)

DEFAULT_FILENAME_PREFIX = "pages"


def build_sitemap_filename(prefix: str, start: int, end: int) -> str:
    """Name a chunk by its zero-based start offset and exclusive end offset.

    >>> build_sitemap_filename("pages", 0, 50000)
    'pages-1-50000-sitemap.xml'
    """
    return f"{prefix}-{start + 1}-{end}-sitemap.xml"


def partition(
    entries: Sequence[SitemapEntry],
    max_per_file: int = MAX_URLS_PER_SITEMAP,
    filename_prefix: str = DEFAULT_FILENAME_PREFIX,
) -> list[SitemapDocument]:
    """Chunk entries in order into sitemap documents of at most ``max_per_file`` entries.

    Filenames carry each chunk's global offsets, so the same input always
    produces the same filenames. Empty input produces no documents.
    """
    if not 1 <= max_per_file <= MAX_URLS_PER_SITEMAP:
        raise ValueError(
            f"max_per_file must be between 1 and {MAX_URLS_PER_SITEMAP}, got {max_per_file}"
        )

    documents = []
    for start in range(0, len(entries), max_per_file):
        chunk = list(entries[start:start + max_per_file])
        end = start + len(chunk)
        documents.append(
            SitemapDocument(
                filename=build_sitemap_filename(filename_prefix, start, end),
                entries=chunk,
                body=render_urlset(chunk),
            )
        )

    logger.info(
        "Built %d sitemap document(s) from %d urls with prefix %s",
        len(documents),
        len(entries),
        filename_prefix,
    )
    return documents
