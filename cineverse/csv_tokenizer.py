#!/usr/bin/env python3
"""
cineverse/csv_tokenizer.py — Single-line CSV tokenizer

Splits one line of CSV text into its field values. Double quotes toggle a
"quoted" state in which the separator is treated as literal text; the quote
characters themselves are never emitted.

This is NOT RFC 4180: a doubled quote ("") inside a quoted
field toggles the state twice instead of producing one literal quote.
Exports in the wild that rely on "" escaping will lose those quote marks.
"""

from typing import List

QUOTE = '"'


def tokenize_line(line: str, separator: str = ',') -> List[str]:
    """
    Tokenize a single CSV line.

    Args:
        line: One line of CSV text (no line terminator required)
        separator: Field separator character

    Returns:
        Ordered list of raw field values (untrimmed)

    Examples:
        >>> tokenize_line('A,"B,C",D')
        ['A', 'B,C', 'D']

        >>> tokenize_line('a,,b')
        ['a', '', 'b']
    """
    values: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == separator and not in_quotes:
            values.append(''.join(current))
            current = []
        else:
            current.append(char)

    # Last field is always emitted, even when empty (trailing separator)
    values.append(''.join(current))
    return values
