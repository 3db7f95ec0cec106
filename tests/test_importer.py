#!/usr/bin/env python3
"""
Test suite for cineverse/importer.py — CSV → JSON import pipeline
"""

import json
import pytest
import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from cineverse.importer import (
    CSVImportError, build_record, import_csv, import_csv_to_json,
    parse_csv, parse_csv_text, parse_header, validate_movie,
)

SAMPLE_CSV = (
    'ID,Title,Year,Industry,Worldwide_Gross_USD\n'
    '7,Sample Film,2020,Hollywood,"1,000,000"\n'
)


@pytest.fixture
def csv_file(tmp_path):
    def _write(text, name='movies.csv', encoding='utf-8'):
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return path
    return _write


class TestParseHeader:

    def test_trims_and_removes_quotes(self):
        assert parse_header(' "ID" , Title ,"Year"') == ['ID', 'Title', 'Year']

    def test_plain_split_ignores_quoting(self):
        assert parse_header('"A,B",C') == ['A', 'B', 'C']


class TestBuildRecord:

    def test_omitted_fields_absent(self):
        movie = build_record(['ID', 'Title', 'Director'], ['1', 'Film', 'N/A'])
        assert movie == {'id': 1, 'title': 'Film'}

    def test_later_duplicate_field_wins(self):
        movie = build_record(['Industry', 'Category'], ['Hollywood', 'Bollywood'])
        assert movie == {'category': 'Bollywood'}


class TestValidateMovie:

    def test_requires_id_and_title(self):
        assert validate_movie({'id': 1, 'title': 'X'})
        assert not validate_movie({'id': 1})
        assert not validate_movie({'title': 'X'})

    def test_zero_id_is_present(self):
        assert validate_movie({'id': 0, 'title': 'X'})


class TestParseCsvText:
    """Row filtering and renumbering"""

    def test_end_to_end_record(self):
        result = parse_csv_text(SAMPLE_CSV)
        assert result.movies == [{
            'id': 1,
            'title': 'Sample Film',
            'year': 2020,
            'category': 'Hollywood',
            'worldwide_gross_usd': 1000000,
        }]
        assert result.stats['imported'] == 1

    def test_column_mismatch_dropped(self):
        text = 'ID,Title,Year\n1,Good,2020\n2,Too,Many,Values\n3,Short\n'
        result = parse_csv_text(text)
        assert [m['title'] for m in result.movies] == ['Good']
        assert result.stats['skipped_column_mismatch'] == 2

    def test_mismatch_logged(self, caplog):
        parse_csv_text('ID,Title\n1,A,extra\n')
        assert 'Skipping row 2: column count mismatch' in caplog.text

    def test_missing_title_dropped(self):
        text = 'ID,Title\n1,\n2,N/A\n3,Kept\n'
        result = parse_csv_text(text)
        assert [m['title'] for m in result.movies] == ['Kept']
        assert result.stats['skipped_missing_required'] == 2

    def test_missing_id_dropped(self):
        result = parse_csv_text('ID,Title\nabc,No Id\n')
        assert result.movies == []

    def test_ids_renumbered_in_file_order(self):
        text = 'ID,Title\n50,First\n10,Second\n,Dropped\n99,Third\n'
        result = parse_csv_text(text)
        assert [(m['id'], m['title']) for m in result.movies] == [
            (1, 'First'), (2, 'Second'), (3, 'Third')
        ]

    def test_blank_lines_ignored(self):
        text = '\nID,Title\n\n1,A\n   \n2,B\n\n'
        result = parse_csv_text(text)
        assert len(result.movies) == 2
        assert result.stats['rows_total'] == 2

    def test_crlf_line_endings(self):
        result = parse_csv_text('ID,Title\r\n1,Windows Film\r\n')
        assert result.movies == [{'id': 1, 'title': 'Windows Film'}]

    def test_quoted_genres(self):
        text = 'ID,Title,Genre\n1,Film,"Action, Drama"\n'
        assert parse_csv_text(text).movies[0]['genres'] == ['Action', 'Drama']

    def test_header_only(self):
        result = parse_csv_text('ID,Title\n')
        assert result.movies == []
        assert result.stats['rows_total'] == 0

    @pytest.mark.parametrize('text', ['', '\n\n', '   \n'])
    def test_empty_raises(self, text):
        with pytest.raises(CSVImportError, match='empty'):
            parse_csv_text(text)


class TestParseCsv:

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CSVImportError):
            parse_csv(tmp_path / 'nope.csv')

    def test_bom_stripped_from_header(self, csv_file):
        path = csv_file(SAMPLE_CSV, encoding='utf-8-sig')
        assert parse_csv(path).movies[0]['id'] == 1

    def test_non_utf8_raises(self, tmp_path):
        path = tmp_path / 'latin1.csv'
        path.write_bytes('ID,Title\n1,Am\xe9lie\n'.encode('latin-1'))
        with pytest.raises(CSVImportError):
            parse_csv(path)


class TestImportCsv:
    """File-level import: replacement semantics and safety"""

    def test_writes_pretty_json(self, csv_file, tmp_path):
        out = tmp_path / 'data' / 'movies.json'
        movies = import_csv_to_json(csv_file(SAMPLE_CSV), out)

        assert out.exists()
        assert json.loads(out.read_text(encoding='utf-8')) == movies
        assert out.read_text(encoding='utf-8') == json.dumps(movies, indent=2, ensure_ascii=False)

    def test_whole_numbers_serialize_without_decimal(self, csv_file, tmp_path):
        out = tmp_path / 'movies.json'
        import_csv(csv_file(SAMPLE_CSV), out)
        text = out.read_text(encoding='utf-8')
        assert '"year": 2020,' in text
        assert '1000000.0' not in text

    def test_unicode_kept(self, csv_file, tmp_path):
        out = tmp_path / 'movies.json'
        import_csv(csv_file('ID,Title\n1,Amélie\n'), out)
        assert 'Amélie' in out.read_text(encoding='utf-8')

    def test_reimport_is_byte_identical(self, csv_file, tmp_path):
        src = csv_file(SAMPLE_CSV)
        out = tmp_path / 'movies.json'
        import_csv(src, out)
        first = out.read_bytes()
        import_csv(src, out)
        assert out.read_bytes() == first

    def test_replaces_existing_store(self, csv_file, tmp_path):
        out = tmp_path / 'movies.json'
        out.write_text(json.dumps([{'id': 1, 'title': 'Old'}, {'id': 2, 'title': 'Older'}]))
        import_csv(csv_file(SAMPLE_CSV), out)
        assert [m['title'] for m in json.loads(out.read_text())] == ['Sample Film']

    def test_creates_parent_directory(self, csv_file, tmp_path):
        out = tmp_path / 'a' / 'b' / 'movies.json'
        import_csv(csv_file(SAMPLE_CSV), out)
        assert out.exists()

    def test_empty_csv_writes_nothing(self, csv_file, tmp_path):
        out = tmp_path / 'movies.json'
        with pytest.raises(CSVImportError):
            import_csv(csv_file(''), out)
        assert not out.exists()

    def test_missing_csv_leaves_store_untouched(self, tmp_path):
        out = tmp_path / 'movies.json'
        out.write_text('[{"id": 1, "title": "Keep"}]')
        with pytest.raises(CSVImportError):
            import_csv(tmp_path / 'missing.csv', out)
        assert out.read_text() == '[{"id": 1, "title": "Keep"}]'

    def test_write_failure_wrapped(self, csv_file, tmp_path):
        with patch('cineverse.importer.write_json_atomic', side_effect=OSError('disk full')):
            with pytest.raises(CSVImportError, match='disk full'):
                import_csv(csv_file(SAMPLE_CSV), tmp_path / 'movies.json')

    def test_result_stats(self, csv_file, tmp_path):
        text = 'ID,Title\n1,A\n2,B,extra\n3,\n'
        result = import_csv(csv_file(text), tmp_path / 'movies.json')
        assert result.stats['rows_total'] == 3
        assert result.stats['imported'] == 1
        assert result.stats['skipped_column_mismatch'] == 1
        assert result.stats['skipped_missing_required'] == 1
