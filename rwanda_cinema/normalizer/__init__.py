"""Turns parsed front-matter into video records."""

from .video_normalizer import VideoNormalizer, parse_filename, FILENAME_PATTERN

__all__ = [
    'VideoNormalizer',
    'parse_filename',
    'FILENAME_PATTERN',
]
