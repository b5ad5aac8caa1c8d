"""Search, filters and aggregates over the in-memory video list."""

import logging
from typing import Dict, Iterable, List, Optional, Sequence
from urllib.parse import quote

from ..models.listing import Breadcrumb, HomepageListing, TranslatorSummary
from ..models.video_record import VideoRecord
from ..parsing.text_utils import generate_slug
from ..repository.video_loader import sort_newest_first

DEFAULT_CONTENT_TYPES = ('MOVIE', 'TV-SERIES')
DEFAULT_LATEST_LIMIT = 8

LISTING_PATH = '/agasobanuye/'


def _contains(value, term: str) -> bool:
    return isinstance(value, str) and term in value.lower()


def _any_contains(values, term: str) -> bool:
    if not isinstance(values, (list, tuple)):
        return False
    return any(_contains(value, term) for value in values)


def search_videos(records: List[VideoRecord], query: Optional[str]) -> List[VideoRecord]:
    """
    Case-insensitive substring search.

    Matches title, description, translator, ``originalTitle``, genres and
    ``metaKeywords``. An empty query returns ``records`` unchanged.
    """
    if not query:
        return records

    term = query.lower()
    return [
        record for record in records
        if _contains(record.title, term)
        or _contains(record.description, term)
        or _contains(record.translator, term)
        or _contains(record.get('originalTitle'), term)
        or _any_contains(record.genre, term)
        or _any_contains(record.get('metaKeywords'), term)
    ]


def filter_by_translator_slug(records: List[VideoRecord], translator_slug: str) -> List[VideoRecord]:
    """Records whose translator slug equals ``translator_slug`` (case-insensitive)."""
    wanted = translator_slug.lower()
    return [record for record in records if record.translator_slug == wanted]


def filter_by_content_type(records: List[VideoRecord], content_type: str) -> List[VideoRecord]:
    """Records of one content type (case-insensitive)."""
    wanted = content_type.upper()
    return [record for record in records if record.content_type == wanted]


def group_latest_by_type(
    records: List[VideoRecord],
    limit: int = DEFAULT_LATEST_LIMIT,
    content_types: Sequence[str] = DEFAULT_CONTENT_TYPES
) -> Dict[str, List[VideoRecord]]:
    """
    Newest ``limit`` records of each declared content type.

    Records of other types are left out; every declared type has a key even
    when it has no records.
    """
    grouped: Dict[str, List[VideoRecord]] = {content_type: [] for content_type in content_types}

    for record in records:
        if record.content_type in grouped:
            grouped[record.content_type].append(record)

    return {
        content_type: sort_newest_first(videos)[:limit]
        for content_type, videos in grouped.items()
    }


def summarize_translators(records: Iterable[VideoRecord]) -> List[TranslatorSummary]:
    """Distinct translators with their video count, most prolific first."""
    counts: Dict[str, int] = {}
    for record in records:
        counts[record.translator] = counts.get(record.translator, 0) + 1

    summaries = [
        TranslatorSummary(name=name, slug=generate_slug(name), count=count)
        for name, count in counts.items()
    ]
    return sorted(summaries, key=lambda summary: -summary.count)


def count_by_type(records: Iterable[VideoRecord], content_type: str) -> int:
    wanted = content_type.upper()
    return sum(1 for record in records if record.content_type == wanted)


def type_display_name(content_type: str) -> str:
    """``Movies`` for MOVIE, ``TV Shows`` for anything else."""
    return 'Movies' if content_type == 'MOVIE' else 'TV Shows'


def build_breadcrumbs(
    search: str,
    translator: str,
    content_type: str,
    base_url: str
) -> List[Breadcrumb]:
    """Home / Agasobanuye / type / translator / search; the last item is current."""
    listing_url = base_url + LISTING_PATH
    items = [
        {'name': 'Home', 'url': base_url + '/'},
        {'name': 'Agasobanuye', 'url': listing_url},
    ]

    if content_type:
        items.append({
            'name': type_display_name(content_type),
            'url': f"{listing_url}?type={content_type}",
        })

    if translator:
        items.append({
            'name': f"Translator: {translator}",
            'url': f"{listing_url}?translator={translator}",
        })

    if search:
        items.append({
            'name': f'Search: "{search}"',
            'url': f"{listing_url}?search={quote(search, safe='')}",
        })

    last = len(items) - 1
    return [Breadcrumb(item['name'], item['url'], current=index == last) for index, item in enumerate(items)]


def build_canonical_url(base_url: str, search: str, translator: str, content_type: str) -> str:
    """Canonical listing URL with the active filters in a fixed order."""
    params = []
    if content_type:
        params.append(f"type={quote(content_type, safe='')}")
    if translator:
        params.append(f"translator={quote(translator, safe='')}")
    if search:
        params.append(f"search={quote(search, safe='')}")

    if not params:
        return base_url + LISTING_PATH
    return f"{base_url}{LISTING_PATH}?{'&'.join(params)}"


class ListingService:
    """Builds the data behind the Agasobanuye homepage and search pages."""

    def __init__(
        self,
        latest_limit: int = DEFAULT_LATEST_LIMIT,
        content_types: Sequence[str] = DEFAULT_CONTENT_TYPES
    ):
        self.latest_limit = latest_limit
        self.content_types = tuple(content_type.upper() for content_type in content_types)
        self.logger = logging.getLogger(__name__)

    def build_homepage(
        self,
        records: List[VideoRecord],
        base_url: str,
        search: str = '',
        translator: str = '',
        content_type: str = ''
    ) -> HomepageListing:
        """
        Apply the query filters and compute the page aggregates.

        Args:
            records: Every loaded video, newest first
            base_url: Site origin, e.g. ``https://rwandacinema.com``
            search: Free text search query
            translator: Translator slug filter
            content_type: Content type filter (``MOVIE`` or ``TV-SERIES``)

        Returns:
            HomepageListing for the renderer
        """
        search = (search or '').strip()
        translator = (translator or '').strip().lower()
        content_type = (content_type or '').strip().upper()

        filtered = search_videos(records, search)
        if translator:
            filtered = filter_by_translator_slug(filtered, translator)
        if content_type:
            filtered = filter_by_content_type(filtered, content_type)

        self.logger.debug(
            f"Listing: {len(filtered)} of {len(records)} videos "
            f"(search='{search}', translator='{translator}', type='{content_type}')"
        )

        return HomepageListing(
            base_url=base_url,
            canonical_url=build_canonical_url(base_url, search, translator, content_type),
            search=search,
            translator=translator,
            content_type=content_type,
            videos=filtered,
            all_videos=records,
            translators=summarize_translators(records),
            latest_by_type=group_latest_by_type(records, self.latest_limit, self.content_types),
            type_counts={
                content_type_name: count_by_type(records, content_type_name)
                for content_type_name in self.content_types
            },
            breadcrumbs=build_breadcrumbs(search, translator, content_type, base_url),
        )
