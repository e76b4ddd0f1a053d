"""Upload sitemap documents and the sitemap index to the file store."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from build_sitemaps.models import SitemapDocument
from build_sitemaps.sitemap_xml import render_sitemap_index

logger = logging.getLogger(__name__)

DEFAULT_INDEX_FILENAME = "sitemap-index.xml"


def remote_path(directory: str, filename: str) -> str:
    return f"{directory.rstrip('/')}/{filename}"


def public_url(public_base: str, path: str) -> str:
    """Public link for a file, e.g. ``https://shop.example.com`` + ``/content/sitemaps/x.xml``."""
    return public_base.rstrip("/") + path


def ensure_target(store: Any, directory: str) -> None:
    """Create the target directory unless it already exists."""
    if store.exists(directory):
        logger.info("Target directory %s exists", directory)
        return
    store.create_directory(directory)


def upload(store: Any, path: str, body: str) -> None:
    """Write a document, overwriting whatever is at the path."""
    store.put_file_contents(path, body)
    logger.info("Uploaded %s (%d bytes)", path, len(body.encode("utf-8")))


def build_index(sitemap_urls: Iterable[str]) -> str:
    return render_sitemap_index(sitemap_urls)


def publish_documents(
    store: Any,
    documents: Iterable[SitemapDocument],
    directory: str,
    public_base: str,
) -> list[str]:
    """Upload each document in order and return their public URLs."""
    sitemap_urls = []
    for document in documents:
        path = remote_path(directory, document.filename)
        upload(store, path, document.body)
        sitemap_urls.append(public_url(public_base, path))
    return sitemap_urls


def publish_index(
    store: Any,
    sitemap_urls: list[str],
    directory: str,
    public_base: str,
    index_filename: str = DEFAULT_INDEX_FILENAME,
) -> str:
    """Upload the sitemap index referencing ``sitemap_urls`` and return its public URL."""
    path = remote_path(directory, index_filename)
    upload(store, path, build_index(sitemap_urls))
    return public_url(public_base, path)
