"""Run the full sitemap job: fetch, normalize, partition, publish."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from build_sitemaps.build_sitemaps import partition
from build_sitemaps.models import SitemapDocument
from build_sitemaps.normalize import normalize_urls
from common.bigcommerce import BigCommerceClient
from common.config import CATEGORY_ORDER, ConfigurationError, SitemapConfig
from fetch_urls.fetch_urls import fetch_urls
from fetch_urls.models import SitemapEntry
from publish_sitemaps.publish_sitemaps import ensure_target, publish_documents, publish_index

logger = logging.getLogger(__name__)


@dataclass
class SitemapRunResult:
    """Summary of a successful run."""
    total_urls: int
    sitemap_urls: list[str]
    index_url: str


def resolve_storefront_url(client: BigCommerceClient) -> str:
    """Look up the storefront's secure base URL.

    Raises:
        ConfigurationError: If the store record has no usable URL.
    """
    storefront_url = (client.get_store() or {}).get("secure_url")
    if not storefront_url:
        raise ConfigurationError("No storefront URL available, exiting")
    logger.info("Storefront URL is %s", storefront_url)
    return storefront_url


def collect_urls(
    client: BigCommerceClient,
    categories: list[str],
    page_size: int,
) -> dict[str, list[SitemapEntry]]:
    """Fetch categories one after another, in the fixed category order."""
    ordered = [c for c in CATEGORY_ORDER if c in categories]
    return {category: fetch_urls(client, category, page_size) for category in ordered}


def build_documents(
    urls_by_category: dict[str, list[SitemapEntry]],
    config: SitemapConfig,
) -> list[SitemapDocument]:
    """Partition the entries into documents, either as one group or one group per category.

    Per-category groups are prefixed with the category name; ``filename_prefix``
    only applies to the single group.
    """
    if not config.split_by_category:
        all_urls = [entry for entries in urls_by_category.values() for entry in entries]
        return partition(all_urls, config.max_urls_per_sitemap, config.filename_prefix)

    documents = []
    for category, entries in urls_by_category.items():
        prefix = category.replace("_", "-")
        documents.extend(partition(entries, config.max_urls_per_sitemap, prefix))
    return documents


def generate_sitemaps(
    client: BigCommerceClient,
    store: Any,
    config: SitemapConfig,
    public_base_url: Optional[str] = None,
) -> SitemapRunResult:
    """Generate and publish every sitemap plus the index.

    Any failure propagates; documents uploaded before the failure stay in place.

    Args:
        client: BigCommerce API client
        store: File store (WebDAVClient or LocalFileStore)
        config: Job settings
        public_base_url: Base for published links; defaults to the storefront URL

    Returns:
        SitemapRunResult with the URL total and published links
    """
    ensure_target(store, config.webdav_path)

    storefront_url = resolve_storefront_url(client)

    urls_by_category = collect_urls(client, config.categories, config.page_size)
    normalized = {
        category: normalize_urls(entries, storefront_url)
        for category, entries in urls_by_category.items()
    }
    total_urls = sum(len(entries) for entries in normalized.values())

    logger.info("Generating and uploading sitemaps from %d URLs", total_urls)
    documents = build_documents(normalized, config)

    public_base = public_base_url or storefront_url
    sitemap_urls = publish_documents(store, documents, config.webdav_path, public_base)
    index_url = publish_index(
        store,
        sitemap_urls,
        config.webdav_path,
        public_base,
        config.index_filename,
    )

    return SitemapRunResult(
        total_urls=total_urls,
        sitemap_urls=sitemap_urls,
        index_url=index_url,
    )
