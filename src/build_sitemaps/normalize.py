"""Resolve relative storefront paths against the storefront base URL."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from fetch_urls.models import SitemapEntry


def absolute_url(base_url: str, location: str) -> str:
    """Join a base URL and a storefront path with exactly one slash between them."""
    if not location.startswith("/"):
        location = "/" + location
    return base_url.rstrip("/") + location


def normalize_urls(entries: Iterable[SitemapEntry], base_url: str) -> list[SitemapEntry]:
    """Return new entries with absolute locations, in input order."""
    if not base_url:
        raise ValueError("base_url must be non-empty")
    return [replace(entry, location=absolute_url(base_url, entry.location)) for entry in entries]
