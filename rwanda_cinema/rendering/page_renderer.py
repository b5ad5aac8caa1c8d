"""HTML rendering of the Agasobanuye pages with Jinja2."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models.listing import HomepageListing
from ..models.video_record import VideoRecord
from ..parsing.text_utils import truncate
from ..utils.error_handler import RenderError

TEMPLATES_DIR = Path(__file__).parent / 'templates'

HTML_CONTENT_TYPE = 'text/html; charset=UTF-8'
PAGE_CACHE_CONTROL = 'public, max-age=7200, s-maxage=14400'
ERROR_CACHE_CONTROL = 'public, max-age=300'

DEFAULT_POSTER_PATH = '/images/default-poster.jpg'
SITE_NAME = 'Rwanda Cinema'
STRUCTURED_DATA_ITEMS = 10
CARD_TITLE_LENGTH = 60
TRANSLATOR_FILTER_LIMIT = 8


@dataclass
class RenderedResponse:
    """Body, status and headers of a rendered page."""

    body: str
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


def _schema_type(video: VideoRecord) -> str:
    return 'Movie' if video.is_movie else 'TVSeries'


def poster_url(video: VideoRecord, base_url: str) -> str:
    return video.poster or base_url + DEFAULT_POSTER_PATH


def video_card_schema(video: VideoRecord, base_url: str) -> Dict[str, Any]:
    """schema.org object embedded in each video card."""
    poster = poster_url(video, base_url)
    return {
        '@context': 'https://schema.org',
        '@type': _schema_type(video),
        'name': video.title,
        'description': video.description or video.title,
        'image': poster,
        'thumbnailUrl': poster,
        'uploadDate': video.upload_date,
        'datePublished': video.upload_date,
        'duration': video.iso_duration or 'PT0M',
        'contentUrl': base_url + video.watch_path,
        'genre': list(video.genre) or ['Translated Content'],
        'inLanguage': 'rw',
        'subtitleLanguage': 'en',
        'translator': {'@type': 'Person', 'name': video.translator},
        'publisher': {'@type': 'Organization', 'name': SITE_NAME},
    }


def page_schema(listing: HomepageListing, now: Optional[datetime] = None) -> Dict[str, Any]:
    """schema.org WebPage / SearchResultsPage for the whole listing."""
    now = now or datetime.now(timezone.utc)
    base_url = listing.base_url

    return {
        '@context': 'https://schema.org',
        '@type': 'SearchResultsPage' if listing.is_filtered else 'WebPage',
        'name': listing.page_title,
        'description': listing.page_description,
        'url': listing.canonical_url,
        'breadcrumb': {
            '@type': 'BreadcrumbList',
            'itemListElement': [
                {'@type': 'ListItem', 'position': index, 'name': crumb.name, 'item': crumb.url}
                for index, crumb in enumerate(listing.breadcrumbs, start=1)
            ],
        },
        'publisher': {
            '@type': 'Organization',
            'name': SITE_NAME,
            'logo': {
                '@type': 'ImageObject',
                'url': base_url + '/logo.png',
                'width': 100,
                'height': 100,
            },
        },
        'inLanguage': 'rw',
        'dateModified': now.isoformat(),
        'mainEntity': {
            '@type': 'ItemList',
            'numberOfItems': len(listing.videos),
            'itemListElement': [
                {
                    '@type': 'ListItem',
                    'position': index,
                    'item': {
                        '@type': _schema_type(video),
                        'name': video.title,
                        'description': video.description or video.title,
                        'image': poster_url(video, base_url),
                        'datePublished': video.upload_date,
                        'duration': video.iso_duration or 'PT0M',
                        'translator': {'@type': 'Person', 'name': video.translator},
                    },
                }
                for index, video in enumerate(listing.videos[:STRUCTURED_DATA_ITEMS], start=1)
            ],
        },
    }


class PageRenderer:
    """Renders listings and the error page from the package templates."""

    def __init__(self, templates_dir: Optional[Path] = None):
        self.logger = logging.getLogger(__name__)
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=select_autoescape(['html', 'xml'])
        )
        self.env.filters['truncate_text'] = truncate
        self.env.globals.update(
            site_name=SITE_NAME,
            card_title_length=CARD_TITLE_LENGTH,
            translator_filter_limit=TRANSLATOR_FILTER_LIMIT,
            poster_url=poster_url,
            video_card_schema=video_card_schema,
        )

    def render_homepage(self, listing: HomepageListing, now: Optional[datetime] = None) -> str:
        """
        Render the homepage or a filtered results page.

        Raises:
            RenderError: If the template cannot be rendered
        """
        now = now or datetime.now(timezone.utc)
        try:
            template = self.env.get_template('homepage.html')
            return template.render(
                listing=listing,
                schema=page_schema(listing, now),
                year=now.year,
            )
        except Exception as e:
            raise RenderError(f"Failed to render homepage: {e}") from e

    def render_error(self, base_url: str) -> str:
        """Render the generic error page."""
        return self.env.get_template('error.html').render(base_url=base_url)

    def homepage_response(self, listing: HomepageListing, now: Optional[datetime] = None) -> RenderedResponse:
        """Rendered homepage with the long-lived cache policy."""
        return RenderedResponse(
            body=self.render_homepage(listing, now),
            status=200,
            headers={
                'Content-Type': HTML_CONTENT_TYPE,
                'Cache-Control': PAGE_CACHE_CONTROL,
                'X-Content-Type-Options': 'nosniff',
            }
        )

    def error_response(self, base_url: str) -> RenderedResponse:
        """Error page with a short cache lifetime."""
        return RenderedResponse(
            body=self.render_error(base_url),
            status=500,
            headers={
                'Content-Type': HTML_CONTENT_TYPE,
                'Cache-Control': ERROR_CACHE_CONTROL,
            }
        )
