"""Runtime strings as written by content editors.

Both formatters read the same grammar through ``parse_duration`` but keep
their own output shapes, so ``"45:00"`` is ``PT45M0S`` for structured data
and ``45m`` on a video card.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

NOT_SPECIFIED = 'Not specified'
ZERO_ISO_DURATION = 'PT0M'


class DurationForm(Enum):
    """Which grammar rule matched."""
    HOURS_MINUTES_SECONDS = "h:mm:ss"
    MINUTES_SECONDS = "mm:ss"
    MINUTES = "minutes"
    HOURS = "hours"
    HOURS_AND_MINUTES = "NhMMm"


# Evaluated in order, first match wins
_GRAMMAR = (
    (DurationForm.HOURS_MINUTES_SECONDS, re.compile(r'^(\d+):(\d+):(\d+)$')),
    (DurationForm.MINUTES_SECONDS, re.compile(r'^(\d+):(\d+)$')),
    (DurationForm.MINUTES, re.compile(r'(\d+)\s*(?:min|minutes?)', re.IGNORECASE)),
    (DurationForm.HOURS, re.compile(r'(\d+)\s*(?:hr|hours?)', re.IGNORECASE)),
    (DurationForm.HOURS_AND_MINUTES, re.compile(r'(\d+)h\s*(\d+)m', re.IGNORECASE)),
)


@dataclass(frozen=True)
class DurationParts:
    """Components of a parsed runtime."""

    form: DurationForm
    hours: int = 0
    minutes: int = 0
    seconds: int = 0


def parse_duration(text: Optional[str]) -> Optional[DurationParts]:
    """
    Parse a runtime string.

    Args:
        text: Runtime such as ``"1:30:00"``, ``"90 minutes"`` or ``"1h30m"``

    Returns:
        DurationParts, or None for empty, ``"Not specified"`` or unmatched input
    """
    if not text or text == NOT_SPECIFIED:
        return None

    for form, pattern in _GRAMMAR:
        match = pattern.search(text)
        if not match:
            continue

        numbers = [int(group) for group in match.groups()]
        if form is DurationForm.HOURS_MINUTES_SECONDS:
            return DurationParts(form, hours=numbers[0], minutes=numbers[1], seconds=numbers[2])
        if form is DurationForm.MINUTES_SECONDS:
            return DurationParts(form, minutes=numbers[0], seconds=numbers[1])
        if form is DurationForm.MINUTES:
            return DurationParts(form, minutes=numbers[0])
        if form is DurationForm.HOURS:
            return DurationParts(form, hours=numbers[0])
        return DurationParts(form, hours=numbers[0], minutes=numbers[1])

    return None


def duration_to_iso(text: Optional[str]) -> str:
    """ISO-8601 duration for schema.org markup; ``PT0M`` when unknown."""
    parts = parse_duration(text)
    if parts is None:
        return ZERO_ISO_DURATION

    if parts.form is DurationForm.HOURS_MINUTES_SECONDS:
        return f"PT{parts.hours}H{parts.minutes}M{parts.seconds}S"
    if parts.form is DurationForm.MINUTES_SECONDS:
        return f"PT{parts.minutes}M{parts.seconds}S"
    if parts.form is DurationForm.MINUTES:
        return f"PT{parts.minutes}M"
    if parts.form is DurationForm.HOURS:
        return f"PT{parts.hours}H"
    return f"PT{parts.hours}H{parts.minutes}M"


def format_duration_for_display(text: Optional[str]) -> str:
    """
    Short runtime label for video cards, e.g. ``"1h 30m"``.

    Empty or ``"Not specified"`` input gives ``""``; input outside the
    grammar is returned unchanged.
    """
    if not text or text == NOT_SPECIFIED:
        return ''

    parts = parse_duration(text)
    if parts is None:
        return text

    if parts.form in (DurationForm.HOURS_MINUTES_SECONDS, DurationForm.HOURS_AND_MINUTES):
        return f"{parts.hours}h {parts.minutes}m"
    if parts.form in (DurationForm.MINUTES_SECONDS, DurationForm.MINUTES):
        return f"{parts.minutes}m"
    return f"{parts.hours}h"
