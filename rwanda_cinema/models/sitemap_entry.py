"""Sitemap data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SitemapEntry:
    """One video file found in a category folder."""

    category: str
    slug: str

    def __post_init__(self):
        if not self.category:
            raise ValueError("category cannot be empty")
        if not self.slug:
            raise ValueError("slug cannot be empty")


@dataclass(frozen=True)
class SitemapUrl:
    """A ``<url>`` element of a urlset."""

    loc: str
    lastmod: str
    changefreq: str
    priority: str
