"""Configuration data model."""

import re
from dataclasses import dataclass, field
from typing import List, Optional

REPOSITORY_PATTERN = re.compile(r'^[\w.-]+/[\w.-]+$')

DEFAULT_CATEGORIES = ['comedy', 'drama', 'music', 'action', 'documentary']


@dataclass
class Config:
    """Configuration settings for the Rwanda Cinema content service."""

    # Translated videos repository (homepage/search)
    github_repository: str
    github_token: Optional[str] = None
    github_api_url: str = "https://api.github.com"
    github_user_agent: str = "Rwanda-Cinema"
    translated_path: str = "content/translated"

    # Sitemap repository
    sitemap_repository: str = "burnac321/Inyarwanda-Films"
    sitemap_user_agent: str = "Inyarwanda-Films"
    sitemap_content_root: str = "content/movies"
    sitemap_categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    max_urls_per_sitemap: int = 1000

    # Network configuration
    http_timeout: int = 30
    http_max_retries: int = 2
    max_concurrent_fetches: int = 5

    # Listing configuration
    latest_per_type: int = 8
    content_types: List[str] = field(default_factory=lambda: ['MOVIE', 'TV-SERIES'])

    # Server configuration
    server_host: str = "0.0.0.0"
    server_port: int = 8788
    public_base_url: Optional[str] = None

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = False
    log_to_file: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.github_repository:
            raise ValueError("github_repository cannot be empty")
        if not REPOSITORY_PATTERN.match(self.github_repository):
            raise ValueError("github_repository must look like 'owner/name'")
        if not REPOSITORY_PATTERN.match(self.sitemap_repository or ''):
            raise ValueError("sitemap_repository must look like 'owner/name'")
        if self.max_concurrent_fetches < 1:
            raise ValueError("max_concurrent_fetches must be at least 1")
        if self.http_timeout < 1:
            raise ValueError("http_timeout must be at least 1 second")
        if self.http_max_retries < 0:
            raise ValueError("http_max_retries cannot be negative")
        if self.max_urls_per_sitemap < 1:
            raise ValueError("max_urls_per_sitemap must be at least 1")
        if self.latest_per_type < 1:
            raise ValueError("latest_per_type must be at least 1")
        if not self.sitemap_categories:
            raise ValueError("sitemap_categories cannot be empty")
        if self.log_level not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
            raise ValueError("log_level must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")

        # Content types compare upper-case everywhere
        self.content_types = [content_type.upper() for content_type in self.content_types]
        self.translated_path = self.translated_path.strip('/')
        self.sitemap_content_root = self.sitemap_content_root.strip('/')
        self.github_api_url = self.github_api_url.rstrip('/')
        if self.public_base_url:
            self.public_base_url = self.public_base_url.rstrip('/')

    def category_path(self, category: str) -> str:
        """Repository path of one sitemap category folder."""
        return f"{self.sitemap_content_root}/{category}"
