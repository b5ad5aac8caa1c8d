"""Sitemap generation."""

from .sitemap_builder import (
    SitemapBuilder, distinct_categories, STATIC_PAGES, SITEMAP_NAMESPACE,
    XML_CONTENT_TYPE, SITEMAP_CACHE_CONTROL
)

__all__ = [
    'SitemapBuilder',
    'distinct_categories',
    'STATIC_PAGES',
    'SITEMAP_NAMESPACE',
    'XML_CONTENT_TYPE',
    'SITEMAP_CACHE_CONTROL',
]
