"""Pytest configuration and shared fixtures."""

import logging

import pytest

from rwanda_cinema.utils.error_handler import ErrorHandler
from tests.fixtures.mock_data import MockDataGenerator, FIXED_NOW


# Configure logging for tests
logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture
def fixed_now():
    """Reference instant used for relative dates."""
    return FIXED_NOW


@pytest.fixture
def mock_config():
    """Service configuration pointing at test repositories."""
    return MockDataGenerator.create_mock_config()


@pytest.fixture
def error_handler():
    """Error handler that records without logging."""
    return ErrorHandler(error_reporting_enabled=False)


@pytest.fixture
def mock_videos():
    """A mixed batch of movie and series records."""
    return MockDataGenerator.video_batch(6)


@pytest.fixture
def sample_markdown():
    """A realistic translated movie file."""
    return """---
title: "Spider-Man: No Way Home"
slug: spider-man-no-way-home
contentType: MOVIE
translator: Rocky Kimomo
originalTitle: Spider-Man No Way Home
releaseYear: 2021
duration: "2:28:00"
uploadDate: 2024-06-10T08:00:00Z
posterUrl: https://images.example.com/spiderman.jpg
videoUrl: https://videos.example.com/spiderman.mp4
views: 1520
likes: 87
imdbRating: 8.2
featured: true
genre:
  - Action
  - "Adventure"
metaKeywords: [spiderman, marvel, "agasobanuye"]
description: |
  Peter Parker asks Doctor Strange
  for help.
---

Full synopsis goes here.
"""
