"""Field normalizer that maps front-matter onto VideoRecord."""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from ..models.repository_file import RawFile
from ..models.video_record import VideoRecord, ATTRIBUTES_BY_KEY
from ..parsing.durations import NOT_SPECIFIED, duration_to_iso, format_duration_for_display
from ..parsing.text_utils import generate_slug, parse_date, format_long_date, format_short_date
from ..utils.error_handler import ErrorHandler, NormalizationError

# [Title][ContentType][Translator].md
FILENAME_PATTERN = re.compile(r'^\[([^\]]+)\]\[([^\]]+)\]\[([^\]]+)\]\.md$')

DEFAULT_QUALITY = 'HD'


def parse_filename(name: str) -> Optional[Tuple[str, str, str]]:
    """
    Split a content file name into its bracketed parts.

    Args:
        name: File name such as ``[Spider-Man][MOVIE][Rocky].md``

    Returns:
        ``(title, content_type, translator)`` as written, or None when the
        name does not follow the three-bracket pattern
    """
    match = FILENAME_PATTERN.match(name or '')
    if not match:
        return None
    return match.group(1), match.group(2), match.group(3)


def _first_value(front_matter: Dict[str, Any], keys: Iterable[str]) -> Any:
    """First truthy value among ``keys``."""
    for key in keys:
        value = front_matter.get(key)
        if value:
            return value
    return None


def _first_text(front_matter: Dict[str, Any], keys: Iterable[str], default: str = '') -> str:
    value = _first_value(front_matter, keys)
    if value is None:
        return default
    return str(value).strip() or default


def _non_negative(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


def _release_year(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _genres(value: Any) -> Tuple[str, ...]:
    if isinstance(value, list):
        return tuple(str(item).strip() for item in value if str(item).strip())
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(',') if part.strip())
    return ()


class VideoNormalizer:
    """
    Builds one VideoRecord per content file.

    Every field is resolved front-matter first, then from the bracketed file
    name, then from a fixed default. Front-matter keys without a typed field
    are carried over verbatim in ``VideoRecord.extra``.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None):
        self.error_handler = error_handler
        self.logger = logging.getLogger(__name__)

    def normalize(
        self,
        raw_file: RawFile,
        front_matter: Dict[str, Any],
        now: Optional[datetime] = None
    ) -> Optional[VideoRecord]:
        """
        Normalize one content file.

        Args:
            raw_file: Remote file the front-matter came from
            front_matter: Parsed front-matter (may be empty)
            now: Reference time for default upload dates and relative labels

        Returns:
            VideoRecord, or None when the file name does not match the
            naming pattern or the record cannot be built
        """
        parts = parse_filename(raw_file.name)
        if parts is None:
            self.logger.debug(f"Filename doesn't match pattern: {raw_file.name}")
            return None

        try:
            return self._build_record(raw_file, parts, front_matter or {}, now)
        except Exception as e:
            error = NormalizationError(f"Failed to normalize {raw_file.name}: {e}")
            if self.error_handler:
                self.error_handler.handle_error(error, {'filename': raw_file.name})
            else:
                self.logger.warning(str(error))
            return None

    def _build_record(
        self,
        raw_file: RawFile,
        parts: Tuple[str, str, str],
        front_matter: Dict[str, Any],
        now: Optional[datetime]
    ) -> VideoRecord:
        now = now or datetime.now(timezone.utc)
        bracket_title, bracket_type, bracket_translator = parts

        title = _first_text(front_matter, ['title'], bracket_title.replace('-', ' ').strip())
        slug = generate_slug(_first_text(front_matter, ['slug'])) or generate_slug(bracket_title)
        content_type = _first_text(front_matter, ['contentType'], bracket_type.strip()).upper()
        translator = _first_text(front_matter, ['translator'], bracket_translator.strip())

        duration = _first_text(front_matter, ['duration', 'runtime'])
        upload_date = _first_text(
            front_matter,
            ['dateAdded', 'uploadDate'],
            now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
        )

        iso_duration = _first_text(front_matter, ['isoDuration']) or None
        if duration and not iso_duration:
            iso_duration = duration_to_iso(duration)

        formatted_date = short_date = None
        parsed_date = parse_date(upload_date)
        if parsed_date is not None:
            formatted_date = format_long_date(parsed_date)
            short_date = format_short_date(parsed_date, now=now)

        formatted_duration = None
        if duration and duration != NOT_SPECIFIED:
            formatted_duration = format_duration_for_display(duration)

        extra = {key: value for key, value in front_matter.items() if key not in ATTRIBUTES_BY_KEY}

        return VideoRecord(
            filename=raw_file.name,
            slug=slug,
            title=title,
            content_type=content_type,
            translator=translator,
            translator_slug=generate_slug(translator),
            download_url=raw_file.download_url,
            html_url=raw_file.html_url,
            video_url=_first_text(front_matter, ['videoUrl']),
            poster=_first_text(front_matter, ['poster', 'posterUrl', 'thumbnailUrl']),
            quality=_first_text(front_matter, ['quality', 'videoQuality'], DEFAULT_QUALITY),
            description=_first_text(front_matter, ['description', 'shortDescription']),
            release_year=_release_year(front_matter.get('releaseYear')),
            genre=_genres(front_matter.get('genre')),
            views=_non_negative(front_matter.get('views')),
            likes=_non_negative(front_matter.get('likes')),
            upload_date=upload_date,
            formatted_date=formatted_date,
            short_date=short_date,
            duration=duration,
            iso_duration=iso_duration,
            formatted_duration=formatted_duration,
            extra=extra,
        )
