"""Tests for generate_sitemaps.generate_sitemaps module."""

from __future__ import annotations

from typing import Any

import pytest

from build_sitemaps.sitemap_xml import parse_sitemap_index, parse_urlset
from common.bigcommerce import BigCommerceError
from common.config import ConfigurationError, SitemapConfig
from common.webdav import WebDAVError
from generate_sitemaps.generate_sitemaps import generate_sitemaps, resolve_storefront_url

STOREFRONT = "https://shop.example.com"

CATALOG_COUNTS = {"categories": 10, "products": 5, "brands": 3}


def _catalog(category: str, count: int) -> dict:
    return {
        "data": [{"id": i, "custom_url": {"url": f"/{category}-{i}/"}} for i in range(count)],
        "meta": {"pagination": {"total": count, "current_page": 1, "total_pages": 1}},
    }


class FakeBigCommerce:
    def __init__(self, store: dict | None = None, fail_on: str | None = None) -> None:
        self.store = {"secure_url": STOREFRONT} if store is None else store
        self.fail_on = fail_on
        self.paths: list[str] = []

    def get_store(self) -> dict:
        return self.store

    def get(self, path: str, params: dict | None = None, version: str = "v3") -> Any:
        self.paths.append(path)
        if path == self.fail_on:
            raise BigCommerceError(f"GET {path} failed")
        for category, count in CATALOG_COUNTS.items():
            if path == f"/catalog/{category}":
                return _catalog(category, count)
        if path == "/pages/count":
            return {"count": 2}
        if path == "/pages":
            return [{"url": f"/page-{i}/", "is_visible": True} for i in range(2)]
        if path == "/blog/posts/count":
            return {"count": 1}
        if path == "/blog/posts":
            return [{"url": "/blog/post-0/", "is_published": True}]
        raise AssertionError(f"unexpected path {path}")


class FakeStore:
    def __init__(self, existing: set[str] | None = None, fail_on_put: bool = False) -> None:
        self.directories = set(existing or ())
        self.files: dict[str, str] = {}
        self.fail_on_put = fail_on_put

    def exists(self, path: str) -> bool:
        return path in self.directories

    def create_directory(self, path: str) -> None:
        self.directories.add(path)

    def put_file_contents(self, path: str, data: str) -> None:
        if self.fail_on_put:
            raise WebDAVError(f"PUT {path} returned HTTP 507")
        self.files[path] = data


class TestGenerateSitemaps:
    def test_end_to_end_single_document(self) -> None:
        store = FakeStore()

        result = generate_sitemaps(FakeBigCommerce(), store, SitemapConfig())

        assert result.total_urls == 21
        assert result.sitemap_urls == [f"{STOREFRONT}/content/sitemaps/pages-1-21-sitemap.xml"]
        assert result.index_url == f"{STOREFRONT}/content/sitemaps/sitemap-index.xml"
        assert "/content/sitemaps" in store.directories

        entries = parse_urlset(store.files["/content/sitemaps/pages-1-21-sitemap.xml"])
        locations = [e.location for e in entries]
        assert len(locations) == 21
        assert locations[0] == f"{STOREFRONT}/categories-0/"
        assert locations[10] == f"{STOREFRONT}/products-0/"
        assert locations[15] == f"{STOREFRONT}/brands-0/"
        assert locations[18:] == [
            f"{STOREFRONT}/page-0/",
            f"{STOREFRONT}/page-1/",
            f"{STOREFRONT}/blog/post-0/",
        ]

        index = parse_sitemap_index(store.files["/content/sitemaps/sitemap-index.xml"])
        assert index == result.sitemap_urls

    def test_splits_at_max_urls(self) -> None:
        store = FakeStore()

        result = generate_sitemaps(FakeBigCommerce(), store, SitemapConfig(max_urls_per_sitemap=10))

        assert [url.rsplit("/", 1)[-1] for url in result.sitemap_urls] == [
            "pages-1-10-sitemap.xml",
            "pages-11-20-sitemap.xml",
            "pages-21-21-sitemap.xml",
        ]

    def test_split_by_category(self) -> None:
        store = FakeStore()

        result = generate_sitemaps(FakeBigCommerce(), store, SitemapConfig(split_by_category=True))

        assert [url.rsplit("/", 1)[-1] for url in result.sitemap_urls] == [
            "categories-1-10-sitemap.xml",
            "products-1-5-sitemap.xml",
            "brands-1-3-sitemap.xml",
            "pages-1-2-sitemap.xml",
            "blog-posts-1-1-sitemap.xml",
        ]

    def test_split_by_category_ignores_filename_prefix(self) -> None:
        store = FakeStore()
        config = SitemapConfig(split_by_category=True, filename_prefix="custom")

        result = generate_sitemaps(FakeBigCommerce(), store, config)

        names = [url.rsplit("/", 1)[-1] for url in result.sitemap_urls]
        assert names[0] == "categories-1-10-sitemap.xml"
        assert not any(name.startswith("custom") for name in names)

    def test_public_base_override(self) -> None:
        store = FakeStore()

        result = generate_sitemaps(
            FakeBigCommerce(), store, SitemapConfig(), public_base_url="https://www.example.com"
        )

        assert result.index_url == "https://www.example.com/content/sitemaps/sitemap-index.xml"
        # Sitemap entries still point at the storefront
        entries = parse_urlset(store.files["/content/sitemaps/pages-1-21-sitemap.xml"])
        assert entries[0].location.startswith(STOREFRONT)

    def test_subset_of_categories_keeps_fixed_order(self) -> None:
        client = FakeBigCommerce()

        result = generate_sitemaps(client, FakeStore(), SitemapConfig(categories=["brands", "categories"]))

        assert result.total_urls == 13
        assert client.paths == ["/catalog/categories", "/catalog/brands"]

    def test_existing_directory_not_recreated(self) -> None:
        store = FakeStore(existing={"/content/sitemaps"})

        generate_sitemaps(FakeBigCommerce(), store, SitemapConfig())

        assert store.directories == {"/content/sitemaps"}

    def test_missing_storefront_url_aborts_before_fetching(self) -> None:
        client = FakeBigCommerce(store={})
        store = FakeStore()

        with pytest.raises(ConfigurationError):
            generate_sitemaps(client, store, SitemapConfig())

        assert client.paths == []
        assert store.files == {}

    def test_api_failure_aborts_before_publishing(self) -> None:
        client = FakeBigCommerce(fail_on="/catalog/brands")
        store = FakeStore()

        with pytest.raises(BigCommerceError):
            generate_sitemaps(client, store, SitemapConfig())

        assert store.files == {}

    def test_upload_failure_propagates(self) -> None:
        with pytest.raises(WebDAVError):
            generate_sitemaps(FakeBigCommerce(), FakeStore(fail_on_put=True), SitemapConfig())


class TestResolveStorefrontUrl:
    def test_returns_secure_url(self) -> None:
        assert resolve_storefront_url(FakeBigCommerce()) == STOREFRONT

    def test_empty_url_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_storefront_url(FakeBigCommerce(store={"secure_url": ""}))
