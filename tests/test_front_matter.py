"""Tests for the front-matter parser."""

import pytest

from rwanda_cinema.parsing.front_matter import (
    parse_front_matter, classify_line, LineKind, parse_inline_list, parse_integer, strip_quotes
)


class TestClassifyLine:
    """Test cases for line classification."""

    def test_blank_line(self):
        assert classify_line('   ').kind is LineKind.BLANK

    def test_field_line_strips_quotes(self):
        line = classify_line('title: "The Matrix"')

        assert line.kind is LineKind.FIELD
        assert line.key == 'title'
        assert line.value == 'The Matrix'

    def test_field_with_colon_in_value(self):
        line = classify_line('title: Spider-Man: Far From Home')

        assert line.key == 'title'
        assert line.value == 'Spider-Man: Far From Home'

    def test_list_item(self):
        line = classify_line("  - 'Drama'")

        assert line.kind is LineKind.LIST_ITEM
        assert line.value == 'Drama'

    def test_indented_text(self):
        line = classify_line('  continues here')

        assert line.kind is LineKind.INDENTED
        assert line.is_indented

    def test_key_with_hyphen_is_not_a_field(self):
        assert classify_line('video-url: x').kind is LineKind.OTHER


class TestHelpers:
    """Test cases for value helpers."""

    def test_strip_quotes_requires_matching_pair(self):
        assert strip_quotes('"abc"') == 'abc'
        assert strip_quotes("'abc'") == 'abc'
        assert strip_quotes('"abc\'') == '"abc\''

    def test_strip_quotes_removes_one_layer(self):
        assert strip_quotes('""abc""') == '"abc"'

    def test_parse_inline_list_json(self):
        assert parse_inline_list('["Action", "Drama"]') == ['Action', 'Drama']

    def test_parse_inline_list_non_string_items(self):
        assert parse_inline_list('[1, true]') == ['1', 'true']

    def test_parse_inline_list_fallback(self):
        assert parse_inline_list("[Action, 'Sci-Fi', , Drama]") == ['Action', 'Sci-Fi', 'Drama']

    def test_parse_integer(self):
        assert parse_integer('2019') == 2019
        assert parse_integer('8.5') == 8
        assert parse_integer('2019abc') == 2019
        assert parse_integer('unknown') == 0


class TestParseFrontMatter:
    """Test cases for parse_front_matter."""

    def test_no_front_matter(self):
        assert parse_front_matter('# Just a heading\n\nText') == {}

    def test_empty_input(self):
        assert parse_front_matter('') == {}
        assert parse_front_matter(None) == {}

    def test_block_must_start_the_text(self):
        text = "intro\n---\ntitle: Late\n---\n"
        assert parse_front_matter(text) == {}

    def test_unclosed_block(self):
        assert parse_front_matter('---\ntitle: Open\n') == {}

    def test_simple_fields(self):
        text = "---\ntitle: The Matrix\ntranslator: 'Rocky'\n---\nbody"

        assert parse_front_matter(text) == {'title': 'The Matrix', 'translator': 'Rocky'}

    def test_crlf_line_endings(self):
        text = "---\r\ntitle: Windows\r\nviews: 10\r\n---\r\n"

        assert parse_front_matter(text) == {'title': 'Windows', 'views': 10}

    def test_dash_list(self):
        text = "---\ngenre:\n  - Action\n  - \"Drama\"\ntitle: X\n---"

        data = parse_front_matter(text)

        assert data['genre'] == ['Action', 'Drama']
        assert data['title'] == 'X'

    def test_empty_value_without_list_stays_empty(self):
        data = parse_front_matter("---\nposter:\ntitle: X\n---")

        assert data['poster'] == ''
        assert data['title'] == 'X'

    def test_duplicate_blank_fields_are_parsed_by_position(self):
        text = "---\ngenre:\n  - Action\ntags:\n  - one\n  - two\n---"

        data = parse_front_matter(text)

        assert data['genre'] == ['Action']
        assert data['tags'] == ['one', 'two']

    def test_identical_field_lines_each_get_their_own_list(self):
        text = "---\ngenre:\n  - Action\ngenre:\n  - Drama\n---"

        # The later field wins, and it carries its own items
        assert parse_front_matter(text)['genre'] == ['Drama']

    def test_inline_list(self):
        data = parse_front_matter('---\nmetaKeywords: [marvel, "hero"]\n---')

        assert data['metaKeywords'] == ['marvel', 'hero']

    @pytest.mark.parametrize('key', ['releaseYear', 'views', 'likes', 'seasonNumber', 'episodeCount'])
    def test_numeric_keys(self, key):
        assert parse_front_matter(f'---\n{key}: 42\n---') == {key: 42}

    def test_numeric_key_with_garbage_defaults_to_zero(self):
        assert parse_front_matter('---\nviews: many\n---') == {'views': 0}

    def test_numeric_looking_value_of_other_key_stays_string(self):
        assert parse_front_matter('---\nduration: 90\n---') == {'duration': '90'}

    def test_booleans(self):
        data = parse_front_matter('---\nfeatured: true\nhidden: false\nnote: "true story"\n---')

        assert data['featured'] is True
        assert data['hidden'] is False
        assert data['note'] == 'true story'

    def test_block_scalar(self):
        text = "---\ndescription: |\n  First line\n\tsecond line\ntitle: After\n---"

        data = parse_front_matter(text)

        assert data['description'] == 'First line second line'
        assert data['title'] == 'After'

    def test_block_scalar_stops_at_first_unindented_line(self):
        text = "---\ndescription: |\n  Only this\nplain text\n  not this\n---"

        assert parse_front_matter(text)['description'] == 'Only this'

    def test_keeps_key_order(self, sample_markdown):
        keys = list(parse_front_matter(sample_markdown))

        assert keys[:4] == ['title', 'slug', 'contentType', 'translator']

    def test_full_document(self, sample_markdown):
        data = parse_front_matter(sample_markdown)

        assert data['title'] == 'Spider-Man: No Way Home'
        assert data['releaseYear'] == 2021
        assert data['imdbRating'] == 8
        assert data['featured'] is True
        assert data['genre'] == ['Action', 'Adventure']
        assert data['metaKeywords'] == ['spiderman', 'marvel', 'agasobanuye']
        assert data['description'] == 'Peter Parker asks Doctor Strange for help.'
        assert data['uploadDate'] == '2024-06-10T08:00:00Z'

    def test_parsing_is_idempotent(self, sample_markdown):
        assert parse_front_matter(sample_markdown) == parse_front_matter(sample_markdown)

    def test_unexpected_error_yields_empty_mapping(self):
        from unittest.mock import patch

        with patch('rwanda_cinema.parsing.front_matter.parse_integer', side_effect=RuntimeError("boom")):
            assert parse_front_matter('---\ntitle: X\nviews: 3\n---') == {}

    def test_unexpected_error_is_recorded(self, error_handler):
        from unittest.mock import patch

        with patch('rwanda_cinema.parsing.front_matter.parse_integer', side_effect=RuntimeError("boom")):
            parse_front_matter('---\nviews: 3\n---', error_handler)

        assert error_handler.get_statistics()['error_counts_by_type'] == {'FrontMatterError': 1}
