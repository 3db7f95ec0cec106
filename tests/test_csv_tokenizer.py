#!/usr/bin/env python3
"""
Test suite for cineverse/csv_tokenizer.py — quote-aware line splitting
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cineverse.csv_tokenizer import tokenize_line


class TestBasicSplitting:
    """Unquoted fields split on the separator"""

    def test_simple_line(self):
        assert tokenize_line('1,Sample Film,2020') == ['1', 'Sample Film', '2020']

    def test_empty_fields_kept(self):
        assert tokenize_line('a,,b') == ['a', '', 'b']

    def test_trailing_separator_emits_empty_field(self):
        assert tokenize_line('a,b,') == ['a', 'b', '']

    def test_empty_line_is_one_empty_field(self):
        assert tokenize_line('') == ['']

    def test_whitespace_not_trimmed(self):
        assert tokenize_line(' a , b ') == [' a ', ' b ']

    def test_custom_separator(self):
        assert tokenize_line('a;b,c;d', separator=';') == ['a', 'b,c', 'd']


class TestQuotedFields:
    """Quotes protect separators and are dropped from output"""

    def test_comma_inside_quotes(self):
        assert tokenize_line('A,"B,C",D') == ['A', 'B,C', 'D']

    def test_quotes_removed(self):
        assert tokenize_line('"Hollywood","Action, Drama"') == ['Hollywood', 'Action, Drama']

    def test_quote_mid_field_toggles(self):
        assert tokenize_line('ab"c,d"e,f') == ['abc,de', 'f']

    def test_doubled_quote_is_not_an_escape(self):
        """"" toggles twice: no literal quote is produced"""
        assert tokenize_line('"He said ""hi""",x') == ['He said hi', 'x']

    def test_unterminated_quote_swallows_rest_of_line(self):
        assert tokenize_line('a,"b,c') == ['a', 'b,c']

    @pytest.mark.parametrize('line,count', [
        ('1,"Title, The",2020,"Action, Drama"', 4),
        ('"",""', 2),
        (',,,', 4),
    ])
    def test_field_counts(self, line, count):
        assert len(tokenize_line(line)) == count
