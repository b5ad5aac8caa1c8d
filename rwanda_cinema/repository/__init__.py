"""Remote content repository access."""

from .github_client import GitHubContentsClient
from .video_loader import VideoCatalogLoader, sort_newest_first
from .catalog_source import CatalogSource

__all__ = [
    'GitHubContentsClient',
    'VideoCatalogLoader',
    'CatalogSource',
    'sort_newest_first',
]
