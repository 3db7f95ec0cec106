#!/usr/bin/env python3
"""
Shared constants for the CineVerse movie database

Single source of truth for the CSV header table, coercion field sets,
industry labels and currency conversion.
DO NOT duplicate these tables in other modules - import from here instead.
"""

from types import MappingProxyType

# =============================================================================
# CSV HEADER → CANONICAL FIELD NAME
# =============================================================================

# Known external column names (both casings seen in exports) mapped to the
# application's canonical field names. Unknown headers fall back to
# lower-case + whitespace→underscore (see cineverse/field_mapper.py).
HEADER_MAP = MappingProxyType({
    'ID': 'id',
    'id': 'id',
    'Rank': 'rank',
    'rank': 'rank',
    'Title': 'title',
    'title': 'title',
    'Year': 'year',
    'year': 'year',
    'Industry': 'category',
    'industry': 'category',
    'Category': 'category',
    'category': 'category',
    'Genre': 'genres',
    'genre': 'genres',
    'Genres': 'genres',
    'IMDb_Rating': 'imdb_rating',
    'imdb_rating': 'imdb_rating',
    'Director': 'director',
    'director': 'director',
    'Cast': 'cast',
    'cast': 'cast',
    'Worldwide_Gross_USD': 'worldwide_gross_usd',
    'worldwide_gross_usd': 'worldwide_gross_usd',
    'Worldwide_Gross_INR': 'worldwide_gross_inr',
    'worldwide_gross_inr': 'worldwide_gross_inr',
    'Language': 'language',
    'language': 'language',
    'Poster_URL': 'poster_url',
    'poster_url': 'poster_url',
    'Trailer_URL': 'trailer_url',
    'trailer_url': 'trailer_url',
    'Description': 'description',
    'description': 'description',
    'Movie_URL': 'source_urls',  # Single page URL, stored in the list field
    'movie_url': 'source_urls',
    'Source_URL': 'source_urls',
    'source_url': 'source_urls',
    'Country': 'country',
    'country': 'country',
    'Runtime': 'runtime',
    'runtime': 'runtime',
    'Certificate': 'certificate',
    'certificate': 'certificate',
    'Budget_INR': 'budget_inr',
    'budget_inr': 'budget_inr',
    'Budget_USD': 'budget_usd',
    'budget_usd': 'budget_usd',
    'Profit_INR': 'profit_inr',
    'profit_inr': 'profit_inr',
    'Awards': 'awards',
    'awards': 'awards',
    'Release_Date': 'release_date',
    'release_date': 'release_date',
    'Domestic_Gross_USD': 'domestic_gross_usd',
    'domestic_gross_usd': 'domestic_gross_usd',
    'Domestic_Gross_INR': 'domestic_gross_inr',
    'domestic_gross_inr': 'domestic_gross_inr',
})

# =============================================================================
# VALUE COERCION
# =============================================================================

# Raw cell values that mean "no data" (exact match, case-sensitive)
MISSING_MARKERS = frozenset({'N/A', 'NA'})

# Canonical names that are always numeric
NUMERIC_FIELDS = frozenset({'id', 'rank', 'year', 'imdb_rating'})

# Any canonical name containing one of these substrings is numeric
# (worldwide_gross_usd, budget_inr, profit_inr, domestic_gross_usd, ...)
NUMERIC_MARKERS = ('gross', 'budget', 'profit')

# Canonical names stored as lists of strings
ARRAY_FIELDS = frozenset({'genres', 'source_urls'})

# Passed through untouched (no boolean sniffing)
DATE_FIELDS = frozenset({'release_date'})

# Fields a record cannot exist without
REQUIRED_FIELDS = ('id', 'title')

# Money fields shown/validated in the admin panel
MONEY_FIELDS = (
    'worldwide_gross_usd',
    'worldwide_gross_inr',
    'domestic_gross_usd',
    'domestic_gross_inr',
    'budget_usd',
    'budget_inr',
    'profit_inr',
)

# =============================================================================
# INDUSTRIES & CURRENCY
# =============================================================================

# Industries reported by the statistics endpoints. The category field itself
# is open-ended; movies outside this list are stored but not broken out.
INDUSTRIES = ('Hollywood', 'Bollywood', 'Tollywood')

# Fixed conversion used wherever an INR figure is derived from USD
USD_TO_INR = 83

# One crore = 10 million rupees (director earnings chart unit)
INR_CRORE = 10_000_000

CURRENCIES = ('INR', 'USD')
