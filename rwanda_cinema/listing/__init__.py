"""Listing and query service."""

from .listing_service import (
    ListingService, search_videos, filter_by_translator_slug, filter_by_content_type,
    group_latest_by_type, summarize_translators, count_by_type, build_breadcrumbs,
    build_canonical_url, type_display_name
)

__all__ = [
    'ListingService',
    'search_videos',
    'filter_by_translator_slug',
    'filter_by_content_type',
    'group_latest_by_type',
    'summarize_translators',
    'count_by_type',
    'build_breadcrumbs',
    'build_canonical_url',
    'type_display_name',
]
