"""Data models for fetch_urls pipeline stage."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SitemapEntry:
    """One addressable storefront resource.

    ``location`` is a storefront-relative path when fetched and an absolute URL
    after normalization. ``priority`` is only set when the record carried a
    valid priority hint.
    """
    location: str
    priority: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.location:
            raise ValueError("SitemapEntry location must be non-empty")
        if self.priority is not None and not 0.0 <= self.priority <= 1.0:
            raise ValueError(f"SitemapEntry priority out of range: {self.priority}")
