#!/usr/bin/env python3
"""
Test suite for cineverse/validation.py — admin form validation
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cineverse.validation import MovieValidator, parse_form_values


class TestParseFormValues:
    """Form strings go through the same coercion as CSV cells"""

    def test_coerces_like_csv(self):
        movie = parse_form_values({
            'title': ' Dangal ',
            'year': '2016',
            'genres': 'Drama, Sport',
            'worldwide_gross_inr': '₹2,000 crore',
        })
        assert movie == {
            'title': 'Dangal',
            'year': 2016,
            'genres': ['Drama', 'Sport'],
            'worldwide_gross_inr': 2000,
        }

    def test_blank_fields_dropped(self):
        assert parse_form_values({'title': 'X', 'director': '', 'year': '  '}) == {'title': 'X'}

    def test_none_dropped(self):
        assert parse_form_values({'title': 'X', 'cast': None}) == {'title': 'X'}


class TestMovieValidator:

    @pytest.fixture
    def validator(self):
        return MovieValidator()

    def test_valid_movie(self, validator):
        result = validator.validate({
            'title': 'Avatar', 'year': 2009, 'category': 'Hollywood',
            'imdb_rating': 7.9, 'worldwide_gross_usd': 2_900_000_000,
        })
        assert result == {'valid': True, 'errors': [], 'warnings': []}

    @pytest.mark.parametrize('title', [None, '', '   ', 42])
    def test_title_required(self, validator, title):
        result = validator.validate({'title': title})
        assert not result['valid']
        assert 'Title is required' in result['errors']

    @pytest.mark.parametrize('year', [1800, 2500, 2020.5, True, '2020'])
    def test_bad_year(self, validator, year):
        assert not validator.validate({'title': 'X', 'year': year})['valid']

    def test_year_bounds_inclusive(self, validator):
        assert validator.validate({'title': 'X', 'year': 1888, 'worldwide_gross_usd': 1})['valid']
        assert validator.validate({'title': 'X', 'year': 2100, 'worldwide_gross_usd': 1})['valid']

    @pytest.mark.parametrize('rating', [-1, 10.5, 'good'])
    def test_bad_rating(self, validator, rating):
        assert not validator.validate({'title': 'X', 'imdb_rating': rating})['valid']

    def test_negative_budget_rejected(self, validator):
        result = validator.validate({'title': 'X', 'budget_usd': -5})
        assert 'budget_usd cannot be negative' in result['errors']

    def test_negative_profit_allowed(self, validator):
        result = validator.validate({'title': 'Flop', 'profit_inr': -1_000_000})
        assert result['valid']

    def test_non_numeric_money(self, validator):
        result = validator.validate({'title': 'X', 'worldwide_gross_inr': 'lots'})
        assert 'worldwide_gross_inr must be a number' in result['errors']

    def test_warnings_do_not_invalidate(self, validator):
        result = validator.validate({'title': 'X', 'category': 'Mollywood'})
        assert result['valid']
        assert len(result['warnings']) == 2

    def test_custom_categories(self):
        validator = MovieValidator(known_categories=['Mollywood'])
        result = validator.validate({'title': 'X', 'category': 'Mollywood', 'worldwide_gross_inr': 1})
        assert result['warnings'] == []
