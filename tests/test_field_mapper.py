#!/usr/bin/env python3
"""
Test suite for cineverse/field_mapper.py — header canonicalization and coercion
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cineverse.field_mapper import (
    MappedField, as_number, canonical_field_name, clean_value, is_numeric_field,
    map_field, parse_list, parse_number,
)


class TestCanonicalFieldName:
    """Known headers map through the table, unknown ones are slugged"""

    @pytest.mark.parametrize('header,expected', [
        ('Industry', 'category'),
        ('category', 'category'),
        ('Genre', 'genres'),
        ('Genres', 'genres'),
        ('Movie_URL', 'source_urls'),
        ('IMDb_Rating', 'imdb_rating'),
        ('Worldwide_Gross_USD', 'worldwide_gross_usd'),
    ])
    def test_known_headers(self, header, expected):
        assert canonical_field_name(header) == expected

    def test_unknown_header_fallback(self):
        assert canonical_field_name('Box Office  Rank') == 'box_office_rank'

    def test_unknown_mixed_case(self):
        assert canonical_field_name('Opening Weekend') == 'opening_weekend'


class TestIsNumericField:

    @pytest.mark.parametrize('name', ['id', 'rank', 'year', 'imdb_rating',
                                      'budget_usd', 'profit_inr', 'opening_gross'])
    def test_numeric(self, name):
        assert is_numeric_field(name)

    @pytest.mark.parametrize('name', ['title', 'runtime', 'release_date', 'genres'])
    def test_not_numeric(self, name):
        assert not is_numeric_field(name)


class TestParseNumber:
    """Loose number parsing"""

    def test_currency_and_separators(self):
        assert parse_number('$1,234.50') == 1234.5

    def test_integral_value_is_int(self):
        result = parse_number('1,000,000')
        assert result == 1000000
        assert isinstance(result, int)

    def test_integral_float_text_is_int(self):
        assert isinstance(parse_number('2020.0'), int)

    def test_negative(self):
        assert parse_number('-500') == -500

    def test_leading_number_only(self):
        assert parse_number('12.5.3') == 12.5

    def test_slash_removed_before_parse(self):
        assert parse_number('8.1/10') == 8.11

    def test_rupee_symbol(self):
        assert parse_number('₹ 2,500 Cr') == 2500

    @pytest.mark.parametrize('value', ['abc', '', '-', '.', '--'])
    def test_nothing_numeric(self, value):
        assert parse_number(value) is None


class TestHelpers:

    def test_parse_list_splits_and_trims(self):
        assert parse_list('Action, Drama') == ['Action', 'Drama']

    def test_parse_list_single(self):
        assert parse_list(' Drama ') == ['Drama']

    def test_parse_list_drops_empty_pieces(self):
        assert parse_list(',') == []

    def test_clean_value_strips_one_quote_pair(self):
        assert clean_value('  "Title"  ') == 'Title'

    def test_clean_value_only_one_layer(self):
        assert clean_value('""x""') == '"x"'

    @pytest.mark.parametrize('value,expected', [
        (5, 5),
        (2.5, 2.5),
        ('1000', 0),
        (None, 0),
        (True, 0),
        ([1], 0),
    ])
    def test_as_number(self, value, expected):
        assert as_number(value) == expected


class TestMapField:
    """Rule order: missing, numeric, array, date, boolean, string"""

    def test_money_header(self):
        assert map_field('Worldwide_Gross_USD', '$1,234.50') == MappedField('worldwide_gross_usd', 1234.5)

    def test_missing_marker_omitted(self):
        assert map_field('Director', 'N/A').omitted
        assert map_field('Director', 'NA').omitted

    def test_missing_marker_case_sensitive(self):
        assert map_field('Director', 'na') == MappedField('director', 'na')

    def test_blank_omitted(self):
        assert map_field('Title', '   ').omitted

    def test_none_omitted(self):
        assert map_field('Title', None).omitted

    def test_unparseable_number_omitted(self):
        result = map_field('Year', 'abc')
        assert result.omitted
        assert result.name == 'year'

    def test_genres_list(self):
        assert map_field('Genre', 'Action, Drama').value == ['Action', 'Drama']

    def test_source_url_list(self):
        assert map_field('Movie_URL', 'https://example.com/a').value == ['https://example.com/a']

    def test_release_date_untouched(self):
        assert map_field('Release_Date', '2020-01-31').value == '2020-01-31'

    def test_release_date_not_boolean(self):
        assert map_field('Release_Date', 'true').value == 'true'

    def test_boolean_false_not_omitted(self):
        result = map_field('Awards', 'False')
        assert not result.omitted
        assert result.value is False

    def test_boolean_true(self):
        assert map_field('Sequel', 'TRUE') == MappedField('sequel', True)

    def test_zero_not_omitted(self):
        result = map_field('Rank', '0')
        assert not result.omitted
        assert result.value == 0

    def test_surrounding_quotes_and_whitespace(self):
        assert map_field('Title', ' "Sample Film" ').value == 'Sample Film'

    def test_unknown_header_plain_string(self):
        assert map_field('Box Office Rank', 'first') == MappedField('box_office_rank', 'first')

    def test_unknown_header_numeric_by_name(self):
        assert map_field('Opening Gross', '$5,000') == MappedField('opening_gross', 5000)
