"""XML sitemap generation for the category video pages."""

import logging
import math
import xml.etree.ElementTree as ET
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Sequence

from ..models.sitemap_entry import SitemapEntry, SitemapUrl

SITEMAP_NAMESPACE = 'http://www.sitemaps.org/schemas/sitemap/0.9'
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
XML_CONTENT_TYPE = 'application/xml; charset=utf-8'
SITEMAP_CACHE_CONTROL = 'public, max-age=10800'

DEFAULT_MAX_URLS = 1000

# (path, priority, changefreq)
STATIC_PAGES = (
    ('/', '1.0', 'daily'),
    ('/about', '0.7', 'monthly'),
    ('/privacy', '0.3', 'yearly'),
    ('/terms', '0.3', 'yearly'),
    ('/contact', '0.5', 'monthly'),
)

CATEGORY_PRIORITY = '0.8'
CATEGORY_CHANGEFREQ = 'weekly'
VIDEO_PRIORITY = '0.6'
VIDEO_CHANGEFREQ = 'monthly'


def distinct_categories(entries: Iterable[SitemapEntry]) -> List[str]:
    """Categories in first-seen order."""
    seen = []
    for entry in entries:
        if entry.category and entry.category not in seen:
            seen.append(entry.category)
    return seen


class SitemapBuilder:
    """
    Builds the site's sitemaps.

    A site small enough for one file gets a single urlset; larger sites get a
    sitemap index pointing at the static, categories and numbered video
    chunk sitemaps.
    """

    def __init__(
        self,
        base_url: str,
        max_urls_per_sitemap: int = DEFAULT_MAX_URLS,
        today: Optional[date] = None
    ):
        if max_urls_per_sitemap < 1:
            raise ValueError("max_urls_per_sitemap must be at least 1")

        self.base_url = base_url.rstrip('/')
        self.max_urls_per_sitemap = max_urls_per_sitemap
        self.today = today or datetime.now(timezone.utc).date()
        self.logger = logging.getLogger(__name__)

    @property
    def lastmod(self) -> str:
        return self.today.isoformat()

    def static_urls(self) -> List[SitemapUrl]:
        return [
            SitemapUrl(f"{self.base_url}{path}", self.lastmod, changefreq, priority)
            for path, priority, changefreq in STATIC_PAGES
        ]

    def category_urls(self, entries: Sequence[SitemapEntry]) -> List[SitemapUrl]:
        return [
            SitemapUrl(
                f"{self.base_url}/?category={category}",
                self.lastmod,
                CATEGORY_CHANGEFREQ,
                CATEGORY_PRIORITY
            )
            for category in distinct_categories(entries)
        ]

    def video_urls(self, entries: Sequence[SitemapEntry]) -> List[SitemapUrl]:
        return [
            SitemapUrl(
                f"{self.base_url}/{entry.category}/{entry.slug}",
                self.lastmod,
                VIDEO_CHANGEFREQ,
                VIDEO_PRIORITY
            )
            for entry in entries
        ]

    def chunk_count(self, entries: Sequence[SitemapEntry]) -> int:
        """Number of numbered video sitemaps an index would reference."""
        return math.ceil(len(entries) / self.max_urls_per_sitemap)

    def total_url_count(self, entries: Sequence[SitemapEntry]) -> int:
        """Homepage, static pages, categories and videos of a flat sitemap."""
        return len(STATIC_PAGES) + len(distinct_categories(entries)) + len(entries)

    def build_main(self, entries: Sequence[SitemapEntry]) -> str:
        """
        Build ``/sitemap.xml``.

        Returns:
            A single urlset when every URL fits under the cap, otherwise a
            sitemap index
        """
        total = self.total_url_count(entries)
        self.logger.info(f"Total URLs: {total}, Video slugs: {len(entries)}")

        if total <= self.max_urls_per_sitemap:
            urls = self.static_urls() + self.category_urls(entries) + self.video_urls(entries)
            return self._render_urlset(urls)

        locations = [
            f"{self.base_url}/sitemap-static.xml",
            f"{self.base_url}/sitemap-categories.xml",
        ]
        locations.extend(
            f"{self.base_url}/sitemap-{number}.xml"
            for number in range(1, self.chunk_count(entries) + 1)
        )
        return self._render_index(locations)

    def chunk_entries(self, entries: Sequence[SitemapEntry], number: int) -> List[SitemapEntry]:
        """Entries of video chunk ``number`` (1-based)."""
        if number < 1:
            return []
        start = (number - 1) * self.max_urls_per_sitemap
        return list(entries[start:start + self.max_urls_per_sitemap])

    def build_chunk(self, entries: Sequence[SitemapEntry], number: int) -> Optional[str]:
        """
        Build ``/sitemap-{number}.xml``.

        Returns:
            urlset of the chunk's videos, or None when the chunk is empty
        """
        chunk = self.chunk_entries(entries, number)
        if not chunk:
            return None
        return self._render_urlset(self.video_urls(chunk))

    def build_categories(self, entries: Sequence[SitemapEntry]) -> str:
        """Build ``/sitemap-categories.xml``: homepage plus category pages."""
        homepage = self.static_urls()[0]
        return self._render_urlset([homepage] + self.category_urls(entries))

    def build_static(self) -> str:
        """Build ``/sitemap-static.xml``."""
        return self._render_urlset(self.static_urls())

    def _render_urlset(self, urls: Iterable[SitemapUrl]) -> str:
        root = ET.Element('urlset', xmlns=SITEMAP_NAMESPACE)
        for url in urls:
            element = ET.SubElement(root, 'url')
            ET.SubElement(element, 'loc').text = url.loc
            ET.SubElement(element, 'lastmod').text = url.lastmod
            ET.SubElement(element, 'changefreq').text = url.changefreq
            ET.SubElement(element, 'priority').text = url.priority
        return self._serialize(root)

    def _render_index(self, locations: Iterable[str]) -> str:
        root = ET.Element('sitemapindex', xmlns=SITEMAP_NAMESPACE)
        for location in locations:
            element = ET.SubElement(root, 'sitemap')
            ET.SubElement(element, 'loc').text = location
            ET.SubElement(element, 'lastmod').text = self.lastmod
        return self._serialize(root)

    @staticmethod
    def _serialize(root: ET.Element) -> str:
        ET.indent(root, space='    ')
        return XML_DECLARATION + ET.tostring(root, encoding='unicode')
