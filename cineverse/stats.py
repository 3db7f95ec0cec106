#!/usr/bin/env python3
"""
Summary statistics over the movie collection

Missing numeric fields count as 0 in every sum and average, so averages are
over ALL movies, not just the rated ones.
"""

from typing import Dict, List

from cineverse.constants import INDUSTRIES, USD_TO_INR
from cineverse.field_mapper import as_number


def _budget_inr(movie: Dict) -> float:
    """INR budget, derived from the USD budget when only that is known"""
    return as_number(movie.get('budget_inr')) or as_number(movie.get('budget_usd')) * USD_TO_INR


def _avg_rating(movies: List[Dict]) -> str:
    if not movies:
        return '0.00'
    total = sum(as_number(m.get('imdb_rating')) for m in movies)
    return f"{total / len(movies):.2f}"


def summary_stats(movies: List[Dict]) -> Dict:
    """Collection-wide totals, industry counts and year range"""
    years = [m['year'] for m in movies if as_number(m.get('year'))]

    return {
        'totalMovies': len(movies),
        'totalRevenueUSD': sum(as_number(m.get('worldwide_gross_usd')) for m in movies),
        'totalRevenueINR': sum(as_number(m.get('worldwide_gross_inr')) for m in movies),
        'avgRating': _avg_rating(movies),
        'totalBudgetUSD': sum(as_number(m.get('budget_usd')) for m in movies),
        'totalBudgetINR': sum(_budget_inr(m) for m in movies),
        'industries': {
            industry: sum(1 for m in movies if m.get('category') == industry)
            for industry in INDUSTRIES
        },
        'yearRange': {
            'min': min(years) if years else None,
            'max': max(years) if years else None,
        },
    }


def industry_stats(movies: List[Dict]) -> List[Dict]:
    """One row per known industry: count, revenue and average rating"""
    rows = []
    for industry in INDUSTRIES:
        industry_movies = [m for m in movies if m.get('category') == industry]
        rows.append({
            'industry': industry,
            'count': len(industry_movies),
            'revenueUSD': sum(as_number(m.get('worldwide_gross_usd')) for m in industry_movies),
            'revenueINR': sum(as_number(m.get('worldwide_gross_inr')) for m in industry_movies),
            'avgRating': _avg_rating(industry_movies),
        })
    return rows
