"""Tests for search, filters and homepage aggregates."""

import pytest

from rwanda_cinema.listing.listing_service import (
    ListingService, search_videos, filter_by_translator_slug, filter_by_content_type,
    group_latest_by_type, summarize_translators, build_breadcrumbs, build_canonical_url,
    count_by_type, type_display_name
)
from tests.fixtures.mock_data import MockDataGenerator

BASE_URL = 'https://rwandacinema.com'


@pytest.fixture
def catalog():
    return [
        MockDataGenerator.video_record(
            'Spider-Man', translator='Rocky Kimomo', upload_date='2024-06-10',
            description='A friendly neighbourhood hero', genre=('Action',),
            extra={'originalTitle': 'Homem-Aranha', 'metaKeywords': ['marvel', 'peter parker']}
        ),
        MockDataGenerator.video_record(
            'Prison Break', content_type='TV-SERIES', translator='Junior Giti',
            upload_date='2024-06-12', genre=('Drama', 'Crime')
        ),
        MockDataGenerator.video_record(
            'Inception', translator='Rocky Kimomo', upload_date='2024-05-01',
            description='Dreams within dreams'
        ),
    ]


class TestSearch:
    """Test cases for search_videos."""

    def test_title_match_is_case_insensitive(self, catalog):
        assert [v.title for v in search_videos(catalog, 'spider')] == ['Spider-Man']
        assert [v.title for v in search_videos(catalog, 'SPIDER')] == ['Spider-Man']

    def test_no_match(self, catalog):
        assert search_videos(catalog, 'batman') == []

    def test_empty_query_returns_everything(self, catalog):
        assert search_videos(catalog, '') == catalog
        assert search_videos(catalog, None) == catalog

    @pytest.mark.parametrize('query, expected', [
        ('dreams', ['Inception']),
        ('junior', ['Prison Break']),
        ('crime', ['Prison Break']),
        ('aranha', ['Spider-Man']),
        ('parker', ['Spider-Man']),
        ('rocky', ['Spider-Man', 'Inception']),
    ])
    def test_searched_fields(self, catalog, query, expected):
        assert [v.title for v in search_videos(catalog, query)] == expected


class TestFilters:
    """Test cases for translator and type filters."""

    def test_translator_slug(self, catalog):
        assert [v.title for v in filter_by_translator_slug(catalog, 'Rocky-Kimomo')] == ['Spider-Man', 'Inception']

    def test_content_type(self, catalog):
        assert [v.title for v in filter_by_content_type(catalog, 'tv-series')] == ['Prison Break']

    def test_count_by_type(self, catalog):
        assert count_by_type(catalog, 'MOVIE') == 2
        assert count_by_type(catalog, 'TV-SERIES') == 1

    def test_type_display_name(self):
        assert type_display_name('MOVIE') == 'Movies'
        assert type_display_name('TV-SERIES') == 'TV Shows'


class TestAggregates:
    """Test cases for grouped and summarized views."""

    def test_group_latest_by_type(self, catalog):
        grouped = group_latest_by_type(catalog, limit=1)

        assert [v.title for v in grouped['MOVIE']] == ['Spider-Man']
        assert [v.title for v in grouped['TV-SERIES']] == ['Prison Break']

    def test_group_latest_respects_limit(self):
        grouped = group_latest_by_type(MockDataGenerator.video_batch(30), limit=8)

        assert len(grouped['MOVIE']) == 8
        assert len(grouped['TV-SERIES']) == 8

    def test_group_has_every_declared_type(self):
        assert group_latest_by_type([], content_types=('MOVIE', 'TV-SERIES', 'DOCUMENTARY')) == {
            'MOVIE': [], 'TV-SERIES': [], 'DOCUMENTARY': [],
        }

    def test_summarize_translators(self, catalog):
        summaries = summarize_translators(catalog)

        assert [(s.name, s.slug, s.count) for s in summaries] == [
            ('Rocky Kimomo', 'rocky-kimomo', 2),
            ('Junior Giti', 'junior-giti', 1),
        ]


class TestBreadcrumbsAndCanonical:
    """Test cases for navigation helpers."""

    def test_unfiltered_breadcrumbs(self):
        crumbs = build_breadcrumbs('', '', '', BASE_URL)

        assert [c.name for c in crumbs] == ['Home', 'Agasobanuye']
        assert crumbs[-1].current
        assert not crumbs[0].current

    def test_full_breadcrumbs(self):
        crumbs = build_breadcrumbs('spider man', 'rocky-kimomo', 'MOVIE', BASE_URL)

        assert [c.name for c in crumbs] == [
            'Home', 'Agasobanuye', 'Movies', 'Translator: rocky-kimomo', 'Search: "spider man"'
        ]
        assert crumbs[2].url == f"{BASE_URL}/agasobanuye/?type=MOVIE"
        assert crumbs[-1].url == f"{BASE_URL}/agasobanuye/?search=spider%20man"
        assert [c.current for c in crumbs] == [False, False, False, False, True]

    def test_canonical_url(self):
        assert build_canonical_url(BASE_URL, '', '', '') == f"{BASE_URL}/agasobanuye/"
        assert build_canonical_url(BASE_URL, 'a&b', 'rocky', 'MOVIE') == (
            f"{BASE_URL}/agasobanuye/?type=MOVIE&translator=rocky&search=a%26b"
        )


class TestListingService:
    """Test cases for ListingService.build_homepage."""

    @pytest.fixture
    def service(self):
        return ListingService(latest_limit=8)

    def test_unfiltered_homepage(self, service, catalog):
        listing = service.build_homepage(catalog, BASE_URL)

        assert not listing.is_filtered
        assert listing.videos == catalog
        assert listing.total_videos == 3
        assert listing.type_counts == {'MOVIE': 2, 'TV-SERIES': 1}
        assert listing.page_title == 'Agasobanuye | Movies & TV Shows Translated to Kinyarwanda'
        assert listing.page_description.startswith('Watch 3 movies and TV shows translated to Kinyarwanda.')
        assert listing.canonical_url == f"{BASE_URL}/agasobanuye/"

    def test_filters_combine(self, service, catalog):
        listing = service.build_homepage(
            catalog, BASE_URL, search=' In ', translator='ROCKY-KIMOMO', content_type='movie'
        )

        assert [v.title for v in listing.videos] == ['Inception']
        assert listing.search == 'In'
        assert listing.translator == 'rocky-kimomo'
        assert listing.content_type == 'MOVIE'
        assert listing.total_videos == 3

    def test_filtered_texts(self, service, catalog):
        listing = service.build_homepage(catalog, BASE_URL, search='spider', translator='rocky-kimomo', content_type='MOVIE')

        assert listing.page_title == 'Search: "spider" by rocky-kimomo Movies - Agasobanuye'
        assert listing.page_description == (
            'Search results for "spider" translated by rocky-kimomo movies - Watch content translated to Kinyarwanda'
        )
        assert listing.results_heading == 'Search: "spider" Translator: rocky-kimomo Movies'

    def test_type_only_texts(self, service, catalog):
        listing = service.build_homepage(catalog, BASE_URL, content_type='TV-SERIES')

        assert listing.page_title == 'TV Shows - Agasobanuye'
        assert listing.page_description == 'Browse TV shows - Watch content translated to Kinyarwanda'

    def test_share_image(self, service, catalog):
        assert service.build_homepage(catalog, BASE_URL).share_image == f"{BASE_URL}/og-image.jpg"

        with_poster = [MockDataGenerator.video_record('Avatar', poster='https://img.example.com/a.jpg')]
        assert service.build_homepage(with_poster, BASE_URL).share_image == 'https://img.example.com/a.jpg'

    def test_empty_catalog(self, service):
        listing = service.build_homepage([], BASE_URL, search='anything')

        assert listing.videos == []
        assert listing.translators == []
        assert listing.latest_by_type == {'MOVIE': [], 'TV-SERIES': []}
