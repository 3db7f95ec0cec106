#!/usr/bin/env python3
"""
Test suite for import_csv.py — command-line import
"""

import json
import pytest
import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

import import_csv

SAMPLE_CSV = 'ID,Title,Year\n1,First,2001\n2,Second,2002\n3,Broken\n'


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / 'movies.csv'
    path.write_text(SAMPLE_CSV, encoding='utf-8')
    return path


def run_cli(*args):
    with patch.object(sys, 'argv', ['import_csv.py', *map(str, args)]):
        return import_csv.main()


class TestImportCli:

    def test_import_to_output(self, csv_path, tmp_path, capsys):
        out = tmp_path / 'out' / 'movies.json'
        assert run_cli(csv_path, '--output', out) == 0

        movies = json.loads(out.read_text(encoding='utf-8'))
        assert [m['title'] for m in movies] == ['First', 'Second']
        summary = capsys.readouterr().out
        assert 'IMPORT COMPLETE' in summary
        assert 'column mismatch:     1' in summary

    def test_dry_run_writes_nothing(self, csv_path, tmp_path, capsys):
        out = tmp_path / 'movies.json'
        assert run_cli(csv_path, '--output', out, '--dry-run') == 0
        assert not out.exists()
        assert 'DRY RUN' in capsys.readouterr().out

    def test_default_output_from_config(self, csv_path, tmp_path):
        cfg = tmp_path / 'config.yaml'
        cfg.write_text('data_dir: store\n')
        assert run_cli(csv_path, '--config', cfg) == 0
        assert (tmp_path / 'store' / 'movies.json').exists()

    def test_missing_csv(self, tmp_path):
        assert run_cli(tmp_path / 'missing.csv', '--output', tmp_path / 'm.json') == 1

    def test_empty_csv_fails(self, tmp_path):
        empty = tmp_path / 'empty.csv'
        empty.write_text('')
        out = tmp_path / 'movies.json'
        assert run_cli(empty, '--output', out) == 1
        assert not out.exists()
