"""Data models for the Rwanda Cinema content service."""

from .config import Config
from .video_record import VideoRecord
from .repository_file import RawFile
from .sitemap_entry import SitemapEntry, SitemapUrl
from .listing import Breadcrumb, HomepageListing, TranslatorSummary

__all__ = [
    'Config',
    'VideoRecord',
    'RawFile',
    'SitemapEntry',
    'SitemapUrl',
    'Breadcrumb',
    'HomepageListing',
    'TranslatorSummary',
]
