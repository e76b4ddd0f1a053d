"""Data models for build_sitemaps pipeline stage."""

from dataclasses import dataclass

from fetch_urls.models import SitemapEntry


@dataclass
class SitemapDocument:
    """One sitemap file: its name, the entries it lists and its XML body."""
    filename: str
    entries: list[SitemapEntry]
    body: str
