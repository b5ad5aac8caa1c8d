"""Video record data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# Attribute name -> front-matter / JSON key
FIELD_KEYS: Dict[str, str] = {
    "filename": "filename",
    "slug": "slug",
    "title": "title",
    "content_type": "contentType",
    "translator": "translator",
    "translator_slug": "translatorSlug",
    "download_url": "downloadUrl",
    "html_url": "htmlUrl",
    "video_url": "videoUrl",
    "poster": "poster",
    "quality": "quality",
    "description": "description",
    "release_year": "releaseYear",
    "genre": "genre",
    "views": "views",
    "likes": "likes",
    "upload_date": "uploadDate",
    "formatted_date": "formattedDate",
    "short_date": "shortDate",
    "duration": "duration",
    "iso_duration": "isoDuration",
    "formatted_duration": "formattedDuration",
}

ATTRIBUTES_BY_KEY: Dict[str, str] = {key: attr for attr, key in FIELD_KEYS.items()}


@dataclass(frozen=True)
class VideoRecord:
    """A translated movie or series episode listed on the site."""

    filename: str
    slug: str
    title: str
    content_type: str
    translator: str
    translator_slug: str
    download_url: Optional[str] = None
    html_url: Optional[str] = None
    video_url: str = ""
    poster: str = ""
    quality: str = "HD"
    description: str = ""
    release_year: Optional[int] = None
    genre: Tuple[str, ...] = ()
    views: int = 0
    likes: int = 0
    upload_date: str = ""
    formatted_date: Optional[str] = None
    short_date: Optional[str] = None
    duration: str = ""
    iso_duration: Optional[str] = None
    formatted_duration: Optional[str] = None
    # Front-matter keys without a typed field, kept verbatim
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the record after initialization."""
        if not self.filename:
            raise ValueError("filename cannot be empty")
        if self.views < 0:
            raise ValueError("views cannot be negative")
        if self.likes < 0:
            raise ValueError("likes cannot be negative")

    @property
    def is_movie(self) -> bool:
        return self.content_type == "MOVIE"

    @property
    def type_label(self) -> str:
        """Human label used on cards and in structured data."""
        return "Movie" if self.is_movie else "TV Series"

    @property
    def watch_path(self) -> str:
        """Site path of the watch page, e.g. ``/watch/movie/<slug>``."""
        type_slug = "movie" if self.is_movie else "tv-series"
        return f"/watch/{type_slug}/{self.slug}"

    def get(self, key: str, default: Any = None) -> Any:
        """Look a value up by its front-matter key, typed fields first."""
        attribute = ATTRIBUTES_BY_KEY.get(key)
        if attribute is not None:
            value = getattr(self, attribute)
            return default if value is None else value
        return self.extra.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary used for JSON output."""
        data: Dict[str, Any] = dict(self.extra)
        for attribute, key in FIELD_KEYS.items():
            value = getattr(self, attribute)
            data[key] = list(value) if isinstance(value, tuple) else value
        return data

    def __str__(self) -> str:
        return f"VideoRecord(slug='{self.slug}', type='{self.content_type}', translator='{self.translator}')"
