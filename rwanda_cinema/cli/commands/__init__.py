"""CLI command implementations."""

from .base_command import BaseCommand
from .serve_command import ServeCommand
from .videos_command import VideosCommand
from .sitemap_command import SitemapCommand

__all__ = [
    'BaseCommand',
    'ServeCommand',
    'VideosCommand',
    'SitemapCommand',
]
