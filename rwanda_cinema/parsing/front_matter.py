"""
Front-matter parser for the translated video markdown files.

Only the small YAML subset the content editors actually write is supported:
``key: value`` scalars, dash lists, ``[a, b]`` inline lists, ``|`` block
scalars, booleans and a fixed set of integer fields. The parser never raises;
a block it cannot make sense of yields an empty mapping.
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..utils.error_handler import FrontMatterError

logger = logging.getLogger(__name__)

FrontMatterValue = Union[str, int, bool, List[str]]

FRONT_MATTER_PATTERN = re.compile(r'---\n(.*?)\n---', re.DOTALL)
FIELD_PATTERN = re.compile(r'^(\w+):\s*(.*)$', re.ASCII)
QUOTED_PATTERN = re.compile(r'^(["\'])(.*)\1$', re.DOTALL)
LEADING_INTEGER_PATTERN = re.compile(r'^\s*([+-]?\d+)')

# Keys whose values are always read as integers
NUMERIC_KEYS = frozenset({
    'releaseYear',
    'views',
    'likes',
    'imdbRating',
    'imdbVotes',
    'rottenTomatoesScore',
    'metacriticScore',
    'ageRestriction',
    'seasonNumber',
    'totalSeasons',
    'episodeNumber',
    'episodeCount',
})

BLOCK_SCALAR_MARKER = '|'


class LineKind(Enum):
    """Classification of a single front-matter line."""
    BLANK = "blank"
    FIELD = "field"
    LIST_ITEM = "list_item"
    INDENTED = "indented"
    OTHER = "other"


@dataclass(frozen=True)
class ClassifiedLine:
    """A front-matter line together with what it looks like."""

    kind: LineKind
    raw: str
    key: Optional[str] = None
    value: str = ""

    @property
    def is_indented(self) -> bool:
        return self.raw.startswith((' ', '\t'))


def strip_quotes(value: str) -> str:
    """Remove one layer of matching single or double quotes."""
    match = QUOTED_PATTERN.match(value)
    if match:
        return match.group(2)
    return value


def classify_line(line: str) -> ClassifiedLine:
    """
    Classify one line of a front-matter body.

    Args:
        line: Raw line without its trailing newline

    Returns:
        ClassifiedLine; for fields ``key`` and the unquoted ``value`` are set,
        for list items ``value`` holds the unquoted item text
    """
    stripped = line.strip()
    if not stripped:
        return ClassifiedLine(LineKind.BLANK, line)

    match = FIELD_PATTERN.match(line)
    if match:
        key, value = match.groups()
        value = strip_quotes(value.strip()).strip()
        return ClassifiedLine(LineKind.FIELD, line, key=key, value=value)

    if stripped.startswith('-'):
        item = strip_quotes(stripped[1:].strip())
        return ClassifiedLine(LineKind.LIST_ITEM, line, value=item)

    if line.startswith((' ', '\t')):
        return ClassifiedLine(LineKind.INDENTED, line, value=stripped)

    return ClassifiedLine(LineKind.OTHER, line)


def parse_inline_list(value: str) -> List[str]:
    """Parse ``[a, b]`` as a JSON array, falling back to comma splitting."""
    try:
        items = json.loads(value)
    except ValueError:
        items = None

    if isinstance(items, list):
        return [item if isinstance(item, str) else json.dumps(item) for item in items]

    parts = (strip_quotes(part.strip()) for part in value[1:-1].split(','))
    return [part for part in parts if part]


def parse_integer(value: str) -> int:
    """Leading integer of ``value``, or 0 when there is none."""
    match = LEADING_INTEGER_PATTERN.match(value)
    return int(match.group(1)) if match else 0


def _parse_body(body: str) -> Dict[str, FrontMatterValue]:
    lines = [classify_line(line) for line in body.split('\n')]
    data: Dict[str, FrontMatterValue] = {}

    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1

        if line.kind is not LineKind.FIELD:
            continue

        key, value = line.key, line.value
        parsed: Any = value

        if value == '':
            if index < len(lines) and lines[index].kind is LineKind.LIST_ITEM:
                items = []
                while index < len(lines) and lines[index].kind is LineKind.LIST_ITEM:
                    items.append(lines[index].value)
                    index += 1
                parsed = items
        elif value.startswith('[') and value.endswith(']'):
            parsed = parse_inline_list(value)
        elif key in NUMERIC_KEYS:
            parsed = parse_integer(value)
        elif value in ('true', 'false'):
            parsed = value == 'true'
        elif value == BLOCK_SCALAR_MARKER:
            parts = []
            while index < len(lines) and lines[index].is_indented:
                parts.append(lines[index].raw.strip())
                index += 1
            parsed = ' '.join(part for part in parts if part)

        data[key] = parsed

    return data


def parse_front_matter(text: Optional[str], error_handler=None) -> Dict[str, FrontMatterValue]:
    """
    Parse the front-matter block at the start of a markdown document.

    Args:
        text: Full file contents
        error_handler: Records blocks that could not be parsed (optional)

    Returns:
        Ordered mapping of front-matter keys to values; empty when the text
        has no leading ``---`` block or the block cannot be parsed
    """
    if not text:
        return {}

    normalized = text.replace('\r\n', '\n')
    match = FRONT_MATTER_PATTERN.match(normalized)
    if not match:
        return {}

    try:
        return _parse_body(match.group(1))
    except Exception as e:
        error = FrontMatterError(f"Error parsing front-matter: {e}")
        if error_handler:
            error_handler.handle_error(error)
        else:
            logger.warning(str(error))
        return {}
