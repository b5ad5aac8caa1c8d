"""Listing data models consumed by the page renderer."""

from dataclasses import dataclass, field
from typing import Dict, List

from .video_record import VideoRecord


@dataclass(frozen=True)
class TranslatorSummary:
    """A translator and the number of videos they translated."""

    name: str
    slug: str
    count: int


@dataclass(frozen=True)
class Breadcrumb:
    name: str
    url: str
    current: bool = False


@dataclass
class HomepageListing:
    """Everything needed to render the homepage or a search results page."""

    base_url: str
    canonical_url: str
    search: str = ""
    translator: str = ""
    content_type: str = ""
    videos: List[VideoRecord] = field(default_factory=list)
    all_videos: List[VideoRecord] = field(default_factory=list)
    translators: List[TranslatorSummary] = field(default_factory=list)
    latest_by_type: Dict[str, List[VideoRecord]] = field(default_factory=dict)
    type_counts: Dict[str, int] = field(default_factory=dict)
    breadcrumbs: List[Breadcrumb] = field(default_factory=list)

    @property
    def is_filtered(self) -> bool:
        """True when any of search, translator or type is set."""
        return bool(self.search or self.translator or self.content_type)

    @property
    def total_videos(self) -> int:
        return len(self.all_videos)

    @property
    def type_label(self) -> str:
        if not self.content_type:
            return ""
        return "Movies" if self.content_type == "MOVIE" else "TV Shows"

    @property
    def page_title(self) -> str:
        if not self.is_filtered:
            return "Agasobanuye | Movies & TV Shows Translated to Kinyarwanda"
        parts = []
        if self.search:
            parts.append(f'Search: "{self.search}"')
        if self.translator:
            parts.append(f"by {self.translator}")
        if self.content_type:
            parts.append(self.type_label)
        return " ".join(parts) + " - Agasobanuye"

    @property
    def page_description(self) -> str:
        if not self.is_filtered:
            return (
                f"Watch {self.total_videos} movies and TV shows translated to Kinyarwanda. "
                "High quality translations with English subtitles."
            )
        text = f'Search results for "{self.search}"' if self.search else "Browse"
        if self.translator:
            text += f" translated by {self.translator}"
        if self.content_type:
            text += " movies" if self.content_type == "MOVIE" else " TV shows"
        return text + " - Watch content translated to Kinyarwanda"

    @property
    def results_heading(self) -> str:
        parts = []
        if self.search:
            parts.append(f'Search: "{self.search}"')
        if self.translator:
            parts.append(f"Translator: {self.translator}")
        if self.content_type:
            parts.append(self.type_label)
        return " ".join(parts)

    @property
    def keywords(self) -> str:
        """Comma separated keywords for the meta tag."""
        keywords = ["Kinyarwanda movies", "translated films", "Rwanda cinema", "watch online", "subtitles"]
        keywords.extend(value for value in (self.search, self.translator) if value)
        keywords.append("movies" if self.content_type == "MOVIE" else "TV shows")
        return ", ".join(keywords)

    @property
    def share_image(self) -> str:
        """Poster of the newest video, or the site's default Open Graph image."""
        if self.all_videos and self.all_videos[0].poster:
            return self.all_videos[0].poster
        return f"{self.base_url}/og-image.jpg"
