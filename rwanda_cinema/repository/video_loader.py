"""Catalog loader that fans out over content files and category folders."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..models.config import Config
from ..models.repository_file import RawFile
from ..models.sitemap_entry import SitemapEntry
from ..models.video_record import VideoRecord
from ..normalizer.video_normalizer import VideoNormalizer, parse_filename
from ..parsing.front_matter import parse_front_matter
from ..parsing.text_utils import parse_date
from ..utils.error_handler import ErrorHandler, RepositoryError
from .github_client import GitHubContentsClient


def sort_newest_first(records: List[VideoRecord]) -> List[VideoRecord]:
    """
    Order records by upload date, newest first.

    Records whose date cannot be parsed go last; ties keep their order.
    """
    def sort_key(record: VideoRecord) -> float:
        parsed = parse_date(record.upload_date)
        return -parsed.timestamp() if parsed is not None else float('inf')

    return sorted(records, key=sort_key)


class VideoCatalogLoader:
    """
    Loads everything a single request needs from GitHub.

    Per-file downloads and per-category listings run concurrently, bounded by
    one semaphore shared by the whole load.
    """

    def __init__(
        self,
        client: GitHubContentsClient,
        config: Config,
        normalizer: Optional[VideoNormalizer] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize the loader.

        Args:
            client: GitHub contents client with an open HTTP session
            config: Service configuration (repositories, paths, limits)
            normalizer: Front-matter normalizer (created if None)
            error_handler: Records skipped files and failed directories
        """
        self.client = client
        self.config = config
        self.error_handler = error_handler
        self.normalizer = normalizer or VideoNormalizer(error_handler)
        self.logger = logging.getLogger(__name__)

        self._semaphore = asyncio.Semaphore(config.max_concurrent_fetches)

        self.stats = {
            'files_listed': 0,
            'files_parsed': 0,
            'files_skipped': 0,
            'categories_loaded': 0,
            'categories_failed': 0,
        }

    async def load_translated_videos(self, now: Optional[datetime] = None) -> List[VideoRecord]:
        """
        Load and normalize every translated video.

        Args:
            now: Reference time for default dates and relative labels

        Returns:
            Video records, newest first
        """
        now = now or datetime.now(timezone.utc)

        files = await self.client.list_markdown_files(
            self.config.github_repository,
            self.config.translated_path
        )
        self.stats['files_listed'] += len(files)

        results = await asyncio.gather(*(self._load_video(raw_file, now) for raw_file in files))
        records = [record for record in results if record is not None]

        self.logger.info(f"Loaded {len(records)} videos from {len(files)} files")
        return sort_newest_first(records)

    async def _load_video(self, raw_file: RawFile, now: datetime) -> Optional[VideoRecord]:
        if parse_filename(raw_file.name) is None:
            self.logger.debug(f"Skipping {raw_file.name}: filename doesn't match pattern")
            self.stats['files_skipped'] += 1
            return None

        async with self._semaphore:
            self.logger.debug(f"Processing file: {raw_file.name}")
            text = await self.client.fetch_file_text(raw_file)

        if text is None:
            self.stats['files_skipped'] += 1
            return None

        front_matter = parse_front_matter(text, self.error_handler)
        record = self.normalizer.normalize(raw_file, front_matter, now=now)
        if record is None:
            self.stats['files_skipped'] += 1
            return None

        self.stats['files_parsed'] += 1
        self.logger.debug(f"Successfully parsed: {record.title}")
        return record

    async def load_category_slugs(self) -> List[SitemapEntry]:
        """
        Collect ``{category, slug}`` pairs from every sitemap category folder.

        Returns:
            Entries grouped by category in configured order; within a category
            the remote listing order is kept
        """
        categories = self.config.sitemap_categories
        results = await asyncio.gather(
            *(self._load_category(category) for category in categories),
            return_exceptions=True
        )

        entries: List[SitemapEntry] = []
        for category, result in zip(categories, results):
            if isinstance(result, Exception):
                self.stats['categories_failed'] += 1
                error = RepositoryError(f"Failed to load {category} slugs: {result}")
                if self.error_handler:
                    self.error_handler.handle_error(error, {'category': category})
                else:
                    self.logger.warning(str(error))
                continue

            self.stats['categories_loaded'] += 1
            entries.extend(result)

        self.logger.info(f"Total video slugs: {len(entries)} across {len(categories)} categories")
        return entries

    async def _load_category(self, category: str) -> List[SitemapEntry]:
        async with self._semaphore:
            files = await self.client.list_markdown_files(
                self.config.sitemap_repository,
                self.config.category_path(category)
            )
        return [SitemapEntry(category=category, slug=raw_file.stem) for raw_file in files]
