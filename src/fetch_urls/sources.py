"""Paginated content sources, one per sitemap category.

BigCommerce exposes two paging styles: the v3 catalog endpoints embed
pagination metadata in every response, while the v2 pages and blog post
endpoints need a separate count request up front. Each style is a
``PaginatedSource`` subclass; ``SOURCES`` maps category names to configured
instances.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from common.bigcommerce import BigCommerceClient, BigCommerceError
from fetch_urls.models import SitemapEntry
from fetch_urls.priority import get_priority

logger = logging.getLogger(__name__)

Page = tuple[int, list[dict[str, Any]]]


class PaginatedSource:
    """A listing endpoint plus the rules for turning its records into entries."""

    api_version = "v3"

    def __init__(
        self,
        category: str,
        path: str,
        params: Optional[dict[str, str]] = None,
        required_flag: Optional[str] = None,
        with_priority: bool = False,
    ) -> None:
        self.category = category
        self.path = path
        self.params = params or {}
        self.required_flag = required_flag
        self.with_priority = with_priority

    def iter_pages(
        self,
        client: BigCommerceClient,
        page_size: int,
        start_page: int = 1,
        total: Optional[int] = None,
    ) -> Iterator[Page]:
        """Yield ``(page_number, records)`` until the listing is exhausted."""
        raise NotImplementedError

    def page_params(self, page: int, page_size: int) -> dict[str, Any]:
        return {"limit": page_size, "page": page, **self.params}

    def get_location(self, record: dict[str, Any]) -> Optional[str]:
        return record.get("url")

    def is_publishable(self, record: dict[str, Any]) -> bool:
        if not self.get_location(record):
            return False
        if self.required_flag and not record.get(self.required_flag):
            return False
        return True

    def to_entry(self, record: dict[str, Any]) -> SitemapEntry:
        priority = get_priority(record) if self.with_priority else None
        return SitemapEntry(location=self.get_location(record), priority=priority)

    def _get(
        self,
        client: BigCommerceClient,
        path: str,
        page: Optional[int] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        try:
            return client.get(path, params=params, version=self.api_version)
        except BigCommerceError as e:
            if page is None:
                logger.error("Error retrieving %s count: %s", self.category, e)
            else:
                logger.error("Error retrieving %s page %d: %s", self.category, page, e)
            raise


class CatalogSource(PaginatedSource):
    """v3 catalog listing; stops on the pagination metadata in each response."""

    api_version = "v3"

    def get_location(self, record: dict[str, Any]) -> Optional[str]:
        custom_url = record.get("custom_url") or {}
        return custom_url.get("url")

    def iter_pages(
        self,
        client: BigCommerceClient,
        page_size: int,
        start_page: int = 1,
        total: Optional[int] = None,
    ) -> Iterator[Page]:
        if total == 0:
            return

        page = start_page
        fetched = (start_page - 1) * page_size

        while True:
            payload = self._get(client, self.path, page, self.page_params(page, page_size)) or {}
            records = payload.get("data") or []
            pagination = (payload.get("meta") or {}).get("pagination") or {}

            yield page, records
            fetched += len(records)

            if not records:
                return

            reported_total = pagination.get("total", total)
            current_page = pagination.get("current_page", page)
            total_pages = pagination.get("total_pages")

            if reported_total is None:
                # No metadata to go on: a short page is the last one
                if len(records) < page_size:
                    return
            elif reported_total <= current_page or fetched >= reported_total:
                return

            if total_pages is not None and current_page >= total_pages:
                return

            page += 1


class CountedSource(PaginatedSource):
    """v2 listing; probes a count endpoint and stops once ``page * limit`` covers it."""

    api_version = "v2"

    def __init__(self, category: str, path: str, count_path: str, **kwargs) -> None:
        super().__init__(category, path, **kwargs)
        self.count_path = count_path

    def fetch_total(self, client: BigCommerceClient) -> int:
        payload = self._get(client, self.count_path) or {}
        return int(payload.get("count") or 0)

    def iter_pages(
        self,
        client: BigCommerceClient,
        page_size: int,
        start_page: int = 1,
        total: Optional[int] = None,
    ) -> Iterator[Page]:
        if total is None:
            total = self.fetch_total(client)
            logger.info("%s reports %d %s", self.count_path, total, self.category)

        if not total:
            return

        page = start_page
        while True:
            records = self._get(client, self.path, page, self.page_params(page, page_size)) or []

            yield page, records

            if not records or page * page_size >= total:
                return
            page += 1


SOURCES: dict[str, PaginatedSource] = {
    "categories": CatalogSource(
        "categories",
        "/catalog/categories",
        params={"include_fields": "custom_url"},
    ),
    "products": CatalogSource(
        "products",
        "/catalog/products",
        params={"include_fields": "custom_url", "is_visible": "true", "include": "custom_fields"},
        with_priority=True,
    ),
    "brands": CatalogSource(
        "brands",
        "/catalog/brands",
        params={"include_fields": "custom_url"},
    ),
    "pages": CountedSource(
        "pages",
        "/pages",
        "/pages/count",
        required_flag="is_visible",
    ),
    "blog_posts": CountedSource(
        "blog_posts",
        "/blog/posts",
        "/blog/posts/count",
        required_flag="is_published",
    ),
}


def get_source(category: str) -> PaginatedSource:
    """Return the source for a category name.

    Raises:
        ValueError: If the category is not one of the supported ones.
    """
    try:
        return SOURCES[category]
    except KeyError:
        raise ValueError(
            f"Unsupported category: {category}. Valid categories: {', '.join(SOURCES)}"
        ) from None
