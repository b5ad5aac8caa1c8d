"""Videos command implementation."""

import argparse
import json
from typing import Any, Dict

from .base_command import BaseCommand
from ...config.config_manager import ConfigManager
from ...listing.listing_service import (
    search_videos, filter_by_translator_slug, filter_by_content_type
)
from ...repository.catalog_source import CatalogSource


class VideosCommand(BaseCommand):
    """Command to load and list translated videos."""

    @property
    def name(self) -> str:
        return 'videos'

    @property
    def description(self) -> str:
        return 'List translated videos from the content repository'

    def add_parser(self, subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
        """Add videos command parser."""
        parser = self._create_parser(
            subparsers,
            epilog="""
Examples:
  rwanda-cinema videos                         # All videos, newest first
  rwanda-cinema videos --search spider         # Free text search
  rwanda-cinema videos --type MOVIE --limit 5
  rwanda-cinema videos --translator rocky --format json
            """
        )

        parser.add_argument('--search', '-s', default='', help='Search text')
        parser.add_argument('--translator', '-t', default='', help='Translator slug')
        parser.add_argument('--type', dest='content_type', default='', help='Content type (MOVIE, TV-SERIES)')
        parser.add_argument('--limit', '-n', type=int, help='Show at most this many videos')
        parser.add_argument(
            '--format',
            choices=['list', 'json'],
            default='list',
            help='Output format (default: list)'
        )

        return parser

    async def execute(self, args: argparse.Namespace, config_manager: ConfigManager) -> Dict[str, Any]:
        """Execute the videos command."""
        source = CatalogSource(config_manager.get_config())
        records = await source.load_videos()

        videos = search_videos(records, args.search)
        if args.translator:
            videos = filter_by_translator_slug(videos, args.translator)
        if args.content_type:
            videos = filter_by_content_type(videos, args.content_type)
        if args.limit is not None:
            videos = videos[:max(args.limit, 0)]

        if args.format == 'json':
            print(json.dumps([video.to_dict() for video in videos], indent=2, ensure_ascii=False, default=str))
        else:
            for video in videos:
                details = [video.content_type, video.translator]
                if video.formatted_duration:
                    details.append(video.formatted_duration)
                if video.short_date:
                    details.append(video.short_date)
                print(f"{video.title} [{', '.join(details)}]  /{video.slug}")

        return self._format_result(
            success=True,
            message=f"Listed {len(videos)} of {len(records)} videos",
            total=len(records),
            shown=len(videos)
        )
