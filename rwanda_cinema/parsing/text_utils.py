"""Slug, date and text helpers shared by the normalizer and the renderer."""

import re
from datetime import datetime, timezone
from typing import Optional

_SLUG_DISALLOWED = re.compile(r'[^\w\s-]', re.ASCII)
_SLUG_SEPARATORS = re.compile(r'[\s_-]+', re.ASCII)

# Accepted besides ISO-8601
_FALLBACK_DATE_FORMATS = (
    '%Y/%m/%d',
    '%B %d, %Y',
    '%b %d, %Y',
    '%d %B %Y',
)

SECONDS_PER_DAY = 24 * 60 * 60


def generate_slug(text: Optional[str]) -> str:
    """
    Turn a title or translator name into a URL-safe slug.

    ``"Spider-Man: No Way Home"`` becomes ``"spider-man-no-way-home"``. The
    result only contains ``[a-z0-9-]`` and never starts or ends with ``-``.
    """
    if not text:
        return ''

    slug = text.lower().strip()
    slug = _SLUG_DISALLOWED.sub('', slug)
    slug = _SLUG_SEPARATORS.sub('-', slug)
    return slug.strip('-')


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(value) -> Optional[datetime]:
    """
    Parse an upload date from front-matter.

    Args:
        value: ISO-8601 date or datetime string (``Z`` suffix allowed), a
            ``datetime``, or one of a few human formats

    Returns:
        Timezone-aware UTC datetime, or None if the value is not a date
    """
    if isinstance(value, datetime):
        return _as_utc(value)

    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    iso_text = text[:-1] + '+00:00' if text.endswith(('Z', 'z')) else text

    try:
        return _as_utc(datetime.fromisoformat(iso_text))
    except ValueError:
        pass

    for date_format in _FALLBACK_DATE_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, date_format))
        except ValueError:
            continue

    return None


def format_long_date(value: datetime) -> str:
    """``January 15, 2024`` style date."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_short_date(value: datetime, now: Optional[datetime] = None) -> str:
    """
    Relative date label for the corner of a video card.

    Buckets use whole elapsed days with fixed 7/30/365-day units:
    ``Today``, ``Yesterday``, ``3d ago``, ``2w ago``, ``4mo ago``, ``1y ago``.
    """
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    elapsed = abs((now - _as_utc(value)).total_seconds())
    days = int(elapsed // SECONDS_PER_DAY)

    if days == 0:
        return 'Today'
    if days == 1:
        return 'Yesterday'
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"
    if days < 365:
        return f"{days // 30}mo ago"
    return f"{days // 365}y ago"


def truncate(text: Optional[str], max_length: int) -> str:
    """Cut ``text`` to ``max_length`` characters, marking the cut with ``...``."""
    if not text:
        return ''
    if len(text) <= max_length:
        return text
    return text[:max_length] + '...'
