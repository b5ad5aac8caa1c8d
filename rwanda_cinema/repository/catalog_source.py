"""Per-request wiring of HTTP session, GitHub client and catalog loader."""

import logging
from datetime import datetime
from typing import List, Optional

from ..models.config import Config
from ..models.sitemap_entry import SitemapEntry
from ..models.video_record import VideoRecord
from ..utils.error_handler import ErrorHandler
from ..utils.http_client import HttpClient
from .github_client import GitHubContentsClient
from .video_loader import VideoCatalogLoader


class CatalogSource:
    """
    Entry point used by the web routes and the CLI.

    Each call opens its own HTTP session and closes it before returning;
    nothing is cached between calls.
    """

    def __init__(self, config: Config, error_handler: Optional[ErrorHandler] = None):
        self.config = config
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logging.getLogger(__name__)

    def _http_client(self, user_agent: str) -> HttpClient:
        return HttpClient(
            timeout=self.config.http_timeout,
            max_retries=self.config.http_max_retries,
            user_agent=user_agent
        )

    def _loader(self, http_client: HttpClient, user_agent: str) -> VideoCatalogLoader:
        client = GitHubContentsClient(
            http_client,
            token=self.config.github_token,
            user_agent=user_agent,
            api_base_url=self.config.github_api_url,
            error_handler=self.error_handler
        )
        return VideoCatalogLoader(client, self.config, error_handler=self.error_handler)

    async def load_videos(self, now: Optional[datetime] = None) -> List[VideoRecord]:
        """Every translated video of the main repository, newest first."""
        user_agent = self.config.github_user_agent
        async with self._http_client(user_agent) as http_client:
            loader = self._loader(http_client, user_agent)
            return await loader.load_translated_videos(now=now)

    async def load_sitemap_entries(self) -> List[SitemapEntry]:
        """``{category, slug}`` pairs of the sitemap repository."""
        user_agent = self.config.sitemap_user_agent
        async with self._http_client(user_agent) as http_client:
            loader = self._loader(http_client, user_agent)
            return await loader.load_category_slugs()
