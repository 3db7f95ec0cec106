#!/usr/bin/env python3
"""
cineverse/field_mapper.py — CSV header canonicalization and value coercion

Maps one (header, raw value) pair to a canonical field name and a typed
value. Coercion is driven by the CANONICAL name, never the raw header, so
'Budget_USD', 'budget_usd' and an unknown 'Budget USD' all coerce the same.

Rules are applied in strict order:
  1. empty / whitespace / 'N/A' / 'NA'           → omitted
  2. numeric fields (id, rank, year, imdb_rating,
     anything containing gross/budget/profit)    → int or float, else omitted
  3. genres / source_urls                        → list of strings
  4. release_date                                → string, untouched
  5. 'true' / 'false' (any case)                 → bool
  6. everything else                             → trimmed string
"""

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from cineverse.constants import (
    HEADER_MAP, MISSING_MARKERS, NUMERIC_FIELDS, NUMERIC_MARKERS,
    ARRAY_FIELDS, DATE_FIELDS,
)

# Everything that can't be part of a number: currency symbols, thousands
# separators, units ("$1,234.50 M" → "1234.50")
_NON_NUMERIC_RE = re.compile(r'[^0-9.\-]')

# Leading float literal of the cleaned string ("12.5.3" → "12.5", "1-2" → "1")
_LEADING_NUMBER_RE = re.compile(r'-?(?:\d+(?:\.\d*)?|\.\d+)')

_WHITESPACE_RE = re.compile(r'\s+')


@dataclass(frozen=True)
class MappedField:
    """Output of mapping one CSV cell."""
    name: str
    value: Any = None
    omitted: bool = False


def canonical_field_name(header: str) -> str:
    """
    Resolve a CSV header to its canonical field name

    Known headers come from HEADER_MAP; anything else is lower-cased with
    whitespace runs collapsed to underscores.

    Examples:
        >>> canonical_field_name('Worldwide_Gross_USD')
        'worldwide_gross_usd'

        >>> canonical_field_name('Box Office  Rank')
        'box_office_rank'
    """
    mapped = HEADER_MAP.get(header)
    if mapped:
        return mapped
    return _WHITESPACE_RE.sub('_', header.lower())


def is_numeric_field(name: str) -> bool:
    """True if the canonical field name holds a number"""
    return name in NUMERIC_FIELDS or any(marker in name for marker in NUMERIC_MARKERS)


def parse_number(value: str) -> Optional[Union[int, float]]:
    """
    Parse a loosely formatted number

    Strips every character that isn't a digit, '-' or '.', then reads the
    leading number. Integral values come back as int so they serialize
    without a trailing '.0'.

    Returns:
        int or float, or None if nothing numeric is left

    Examples:
        >>> parse_number('$1,234.50')
        1234.5

        >>> parse_number('1,000,000')
        1000000

        >>> parse_number('abc') is None
        True
    """
    cleaned = _NON_NUMERIC_RE.sub('', value)
    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        return None

    number = float(match.group(0))
    if number.is_integer():
        return int(number)
    return number


def as_number(value) -> Union[int, float]:
    """Stored value as a number; anything that isn't an int or float counts as 0"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def parse_list(value: str) -> List[str]:
    """Split a comma-separated cell into trimmed, non-empty pieces"""
    if ',' in value:
        return [piece.strip() for piece in value.split(',') if piece.strip()]
    return [value.strip()]


def clean_value(value: str) -> str:
    """Trim whitespace and one pair of surrounding double quotes"""
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def map_field(header: str, value: Optional[str]) -> MappedField:
    """
    Map a raw CSV cell to its canonical field

    Args:
        header: Raw header string (already trimmed)
        value: Raw cell value

    Returns:
        MappedField; check .omitted before using .value, since False and 0
        are legitimate values
    """
    name = canonical_field_name(header)

    if value is None:
        return MappedField(name, omitted=True)

    value = clean_value(value)
    if not value.strip() or value in MISSING_MARKERS:
        return MappedField(name, omitted=True)

    if is_numeric_field(name):
        number = parse_number(value)
        if number is None:
            return MappedField(name, omitted=True)
        return MappedField(name, number)

    if name in ARRAY_FIELDS:
        return MappedField(name, parse_list(value))

    if name in DATE_FIELDS:
        return MappedField(name, value)

    lowered = value.strip().lower()
    if lowered == 'true':
        return MappedField(name, True)
    if lowered == 'false':
        return MappedField(name, False)

    return MappedField(name, value.strip())
