"""Sitemap command implementation."""

import argparse
from pathlib import Path
from typing import Any, Dict

from .base_command import BaseCommand
from ...config.config_manager import ConfigManager
from ...repository.catalog_source import CatalogSource
from ...sitemap.sitemap_builder import SitemapBuilder


class SitemapCommand(BaseCommand):
    """Command to generate sitemap XML."""

    @property
    def name(self) -> str:
        return 'sitemap'

    @property
    def description(self) -> str:
        return 'Generate sitemap XML'

    def add_parser(self, subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
        """Add sitemap command parser."""
        parser = self._create_parser(
            subparsers,
            epilog="""
Examples:
  rwanda-cinema sitemap --base-url https://rwandacinema.com
  rwanda-cinema sitemap --kind chunk --number 2 --output sitemap-2.xml
  rwanda-cinema sitemap --kind static
            """
        )

        parser.add_argument(
            '--kind',
            choices=['main', 'static', 'categories', 'chunk'],
            default='main',
            help='Which sitemap to build (default: main)'
        )
        parser.add_argument('--number', type=int, default=1, help='Chunk number for --kind chunk')
        parser.add_argument('--base-url', help='Site origin (default: server.public_base_url)')
        parser.add_argument('--output', '-o', type=Path, help='Write XML to this file instead of stdout')

        return parser

    async def execute(self, args: argparse.Namespace, config_manager: ConfigManager) -> Dict[str, Any]:
        """Execute the sitemap command."""
        config = config_manager.get_config()
        base_url = args.base_url or config.public_base_url
        if not base_url:
            return self._format_result(
                success=False,
                message='No base URL: pass --base-url or set server.public_base_url'
            )

        builder = SitemapBuilder(base_url, max_urls_per_sitemap=config.max_urls_per_sitemap)

        if args.kind == 'static':
            xml = builder.build_static()
            entry_count = 0
        else:
            entries = await CatalogSource(config).load_sitemap_entries()
            entry_count = len(entries)
            if args.kind == 'categories':
                xml = builder.build_categories(entries)
            elif args.kind == 'chunk':
                xml = builder.build_chunk(entries, args.number)
            else:
                xml = builder.build_main(entries)

        if xml is None:
            return self._format_result(success=False, message=f"Sitemap chunk {args.number} not found")

        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(xml, encoding='utf-8')
        else:
            print(xml)

        return self._format_result(
            success=True,
            message=f"Generated {args.kind} sitemap from {entry_count} video entries",
            output=str(args.output) if args.output else None
        )
