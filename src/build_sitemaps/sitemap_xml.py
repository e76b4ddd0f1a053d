"""Sitemap protocol XML serialization and parsing.

Output is compact (no whitespace between elements) with a double-quoted XML
declaration, e.g.::

    <?xml version="1.0" encoding="UTF-8"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"><url><loc>https://shop.example.com/widget</loc><priority>0.8</priority></url></urlset>
"""

from __future__ import annotations

from typing import Iterable

from lxml import etree

from fetch_urls.models import SitemapEntry

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _tag(name: str) -> str:
    return f"{{{SITEMAP_NS}}}{name}"


def _root(name: str) -> etree._Element:
    root = etree.Element(_tag(name), nsmap={None: SITEMAP_NS})
    # Empty text keeps an explicit closing tag when there are no children
    root.text = ""
    return root


def _to_string(root: etree._Element) -> str:
    return XML_DECLARATION + etree.tostring(root, encoding="unicode")


def format_priority(priority: float) -> str:
    """Format a priority with at most one fractional digit (1.0 -> '1', 0.5 -> '0.5')."""
    return f"{round(priority, 1):g}"


def render_urlset(entries: Iterable[SitemapEntry]) -> str:
    """Serialize entries as a ``<urlset>`` document, in order."""
    urlset = _root("urlset")
    for entry in entries:
        url = etree.SubElement(urlset, _tag("url"))
        etree.SubElement(url, _tag("loc")).text = entry.location
        if entry.priority is not None:
            etree.SubElement(url, _tag("priority")).text = format_priority(entry.priority)
    return _to_string(urlset)


def render_sitemap_index(sitemap_urls: Iterable[str]) -> str:
    """Serialize sitemap URLs as a ``<sitemapindex>`` document, in order."""
    index = _root("sitemapindex")
    for sitemap_url in sitemap_urls:
        sitemap = etree.SubElement(index, _tag("sitemap"))
        etree.SubElement(sitemap, _tag("loc")).text = sitemap_url
    return _to_string(index)


def _parse(body: str, root_name: str) -> etree._Element:
    root = etree.fromstring(body.encode("utf-8"))
    if root.tag != _tag(root_name):
        raise ValueError(f"Expected <{root_name}> document, got {root.tag}")
    return root


def parse_urlset(body: str) -> list[SitemapEntry]:
    """Parse a ``<urlset>`` document back into entries."""
    entries = []
    for url in _parse(body, "urlset").iterfind(_tag("url")):
        priority = url.findtext(_tag("priority"))
        entries.append(
            SitemapEntry(
                location=url.findtext(_tag("loc")),
                priority=float(priority) if priority is not None else None,
            )
        )
    return entries


def parse_sitemap_index(body: str) -> list[str]:
    """Parse a ``<sitemapindex>`` document into its sitemap URLs."""
    index = _parse(body, "sitemapindex")
    return [sitemap.findtext(_tag("loc")) for sitemap in index.iterfind(_tag("sitemap"))]
