#!/usr/bin/env python3
"""
Presentation helpers for the dashboard

Pure functions over lists of movie dicts: currency formatting, listing
filters, comparison tables and chart data. Kept free of Streamlit so they
can be tested directly.
"""

from collections import Counter, defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

import pandas as pd

from cineverse.constants import INR_CRORE, USD_TO_INR
from cineverse.field_mapper import as_number

CURRENCY_SYMBOLS = {'INR': '₹', 'USD': '$'}

SORT_OPTIONS = ('gross', 'year', 'title', 'rating')

# Columns shown in listing tables, in order
LISTING_COLUMNS = ['id', 'title', 'year', 'category', 'director', 'genres',
                   'imdb_rating', 'worldwide_gross_usd', 'worldwide_gross_inr', 'language']


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------

def _group_indian(digits: str) -> str:
    """'12345678' → '1,23,45,678' (last three, then pairs)"""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ','.join(pairs) + ',' + tail


def format_currency(amount, currency: str = 'INR') -> str:
    """
    Whole-unit currency string

    Examples:
        >>> format_currency(12345678, 'INR')
        '₹1,23,45,678'

        >>> format_currency(1234.5, 'USD')
        '$1,235'
    """
    whole = int(Decimal(str(as_number(amount))).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    sign = '-' if whole < 0 else ''
    if currency == 'USD':
        grouped = f"{abs(whole):,}"
    else:
        grouped = _group_indian(str(abs(whole)))
    return f"{sign}{CURRENCY_SYMBOLS.get(currency, '')}{grouped}"


def gross_amount(movie: Dict, currency: str = 'INR') -> float:
    """Worldwide gross in the requested currency (legacy worldwideGross as fallback)"""
    if currency == 'USD':
        return as_number(movie.get('worldwide_gross_usd')) or as_number(movie.get('worldwideGross'))
    return as_number(movie.get('worldwide_gross_inr')) or as_number(movie.get('worldwideGross'))


def budget_amount(movie: Dict, currency: str = 'INR') -> float:
    """Budget in the requested currency; INR is derived from USD when missing"""
    usd = as_number(movie.get('budget_usd'))
    if currency == 'USD':
        return usd
    return as_number(movie.get('budget_inr')) or usd * USD_TO_INR


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

def genres_string(movie: Dict) -> str:
    genres = movie.get('genres')
    if isinstance(genres, list):
        return ', '.join(str(g) for g in genres)
    return genres or movie.get('genre') or 'N/A'


def filter_movies(movies: List[Dict], search: str = '', category: str = '') -> List[Dict]:
    """Case-insensitive search over title, director, cast and genres, plus exact category"""
    results = list(movies)
    term = (search or '').strip().lower()
    if term:
        def matches(movie: Dict) -> bool:
            haystacks = [
                str(movie.get('title') or ''),
                str(movie.get('director') or ''),
                str(movie.get('cast') or ''),
                genres_string(movie),
            ]
            return any(term in h.lower() for h in haystacks)
        results = [m for m in results if matches(m)]

    if category:
        results = [m for m in results if m.get('category') == category]
    return results


def sort_movies(movies: List[Dict], sort_by: str, currency: str = 'INR') -> List[Dict]:
    """Sort for display; unknown sort keys keep the stored order"""
    if sort_by == 'gross':
        return sorted(movies, key=lambda m: gross_amount(m, currency), reverse=True)
    if sort_by == 'year':
        return sorted(movies, key=lambda m: as_number(m.get('year')), reverse=True)
    if sort_by == 'title':
        return sorted(movies, key=lambda m: str(m.get('title') or '').lower())
    if sort_by == 'rating':
        return sorted(movies, key=lambda m: as_number(m.get('imdb_rating')), reverse=True)
    return list(movies)


def paginate(items: List, page: int, per_page: int = 12) -> Tuple[List, int]:
    """
    Slice one page out of items

    Returns:
        (page items, total page count); page is clamped into range
    """
    total_pages = max(1, -(-len(items) // per_page))
    page = min(max(1, page), total_pages)
    start = (page - 1) * per_page
    return items[start:start + per_page], total_pages


def categories(movies: List[Dict]) -> List[str]:
    return sorted({m['category'] for m in movies if isinstance(m.get('category'), str)})


def movies_frame(movies: List[Dict]) -> pd.DataFrame:
    """Listing table; genres flattened to a string, absent columns created empty"""
    rows = []
    for movie in movies:
        row = {col: movie.get(col) for col in LISTING_COLUMNS}
        row['genres'] = genres_string(movie) if movie.get('genres') else ''
        rows.append(row)
    return pd.DataFrame(rows, columns=LISTING_COLUMNS)


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

def _truncate(text: Optional[str], limit: int) -> str:
    if not text:
        return 'N/A'
    return text if len(text) <= limit else text[:limit] + '...'


def comparison_rows(movies: List[Dict], currency: str = 'INR') -> pd.DataFrame:
    """Property-by-movie table (one column per movie)"""
    def budget(m):
        value = budget_amount(m, currency)
        return format_currency(value, currency) if value > 0 else 'N/A'

    def rating(m):
        r = as_number(m.get('imdb_rating'))
        return f"{'⭐' * int(r)} {r}/10" if r else 'N/A'

    properties = [
        ('Year', lambda m: m.get('year') or 'N/A'),
        ('Category', lambda m: m.get('category') or 'N/A'),
        ('Director', lambda m: m.get('director') or 'N/A'),
        ('Cast', lambda m: _truncate(m.get('cast'), 100)),
        ('Runtime', lambda m: m.get('runtime') or 'N/A'),
        ('IMDb Rating', rating),
        ('Genres', genres_string),
        ('Worldwide Gross', lambda m: format_currency(gross_amount(m, currency), currency)),
        ('Budget', budget),
        ('Language', lambda m: m.get('language') or 'N/A'),
        ('Release Date', lambda m: m.get('release_date') or m.get('year') or 'N/A'),
        ('Description', lambda m: _truncate(m.get('description'), 150)),
    ]

    data = {}
    for index, movie in enumerate(movies):
        column = str(movie.get('title') or f"Movie {index + 1}")
        # Same title twice (remake comparisons) still needs distinct columns
        if column in data:
            column = f"{column} ({movie.get('year', index + 1)})"
        data[column] = [str(getter(movie)) for _, getter in properties]
    return pd.DataFrame(data, index=[label for label, _ in properties])


def comparison_summary(movies: List[Dict], currency: str = 'INR') -> Dict:
    """Box-office and rating winners plus the year span of the selection"""
    if not movies:
        return {}

    top_gross = max(movies, key=lambda m: gross_amount(m, currency))
    top_rated = max(movies, key=lambda m: as_number(m.get('imdb_rating')))
    years = [int(m['year']) for m in movies if as_number(m.get('year'))]

    return {
        'box_office_winner': top_gross.get('title'),
        'box_office_amount': format_currency(gross_amount(top_gross, currency), currency),
        'highest_rated': top_rated.get('title'),
        'highest_rating': as_number(top_rated.get('imdb_rating')),
        'year_range': (min(years), max(years)) if len(movies) > 1 and years else None,
    }


# ---------------------------------------------------------------------------
# Analytics chart data
# ---------------------------------------------------------------------------

def genre_counts(movies: List[Dict], limit: int = 8) -> List[Tuple[str, int]]:
    """Most common genres; movies without genres count as 'Unknown'"""
    counts: Counter = Counter()
    for movie in movies:
        genres = movie.get('genres')
        if isinstance(genres, list):
            names = genres
        elif genres:
            names = [genres]
        else:
            names = ['Unknown']
        counts.update(g for g in names if g)
    return counts.most_common(limit)


def director_earnings(movies: List[Dict], limit: int = 5) -> List[Tuple[str, float]]:
    """Top directors by summed worldwide gross, in INR crores"""
    totals: Dict[str, float] = defaultdict(float)
    for movie in movies:
        director = movie.get('director')
        if not director:
            continue
        totals[director] += gross_amount(movie, 'INR') / INR_CRORE
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]


def yearly_revenue(movies: List[Dict], currency: str = 'INR') -> pd.DataFrame:
    """
    Revenue per release year with year-on-year growth

    INR revenue is in crores, USD in whole dollars. growth_pct is 0 for the
    first year and whenever the previous year had no revenue.
    """
    totals: Dict[int, float] = defaultdict(float)
    for movie in movies:
        year = as_number(movie.get('year'))
        if not year:
            continue
        amount = gross_amount(movie, currency)
        totals[int(year)] += amount / INR_CRORE if currency == 'INR' else amount

    df = pd.DataFrame(sorted(totals.items()), columns=['year', 'revenue'])
    previous = df['revenue'].shift(1)
    growth = (df['revenue'] - previous) / previous * 100
    df['growth_pct'] = growth.where(previous > 0, 0.0).fillna(0.0)
    return df
