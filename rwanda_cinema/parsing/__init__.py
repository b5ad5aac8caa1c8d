"""Front-matter, duration, date and slug parsing."""

from .front_matter import parse_front_matter, classify_line, LineKind, NUMERIC_KEYS
from .durations import (
    DurationParts, parse_duration, duration_to_iso, format_duration_for_display
)
from .text_utils import (
    generate_slug, parse_date, format_long_date, format_short_date, truncate
)

__all__ = [
    'parse_front_matter',
    'classify_line',
    'LineKind',
    'NUMERIC_KEYS',
    'DurationParts',
    'parse_duration',
    'duration_to_iso',
    'format_duration_for_display',
    'generate_slug',
    'parse_date',
    'format_long_date',
    'format_short_date',
    'truncate',
]
