"""HTML page rendering."""

from .page_renderer import (
    PageRenderer, RenderedResponse, page_schema, video_card_schema,
    PAGE_CACHE_CONTROL, ERROR_CACHE_CONTROL, HTML_CONTENT_TYPE
)

__all__ = [
    'PageRenderer',
    'RenderedResponse',
    'page_schema',
    'video_card_schema',
    'PAGE_CACHE_CONTROL',
    'ERROR_CACHE_CONTROL',
    'HTML_CONTENT_TYPE',
]
