#!/usr/bin/env python3
"""
cineverse/importer.py — CSV → JSON movie collection import

Pipeline:
  read CSV  →  split lines  →  tokenize  →  map fields  →  keep rows with
  id + title  →  renumber ids 1..N  →  write JSON (replaces the whole store)

Safety:
  - Import REPLACES the collection. There is no merge with existing movies.
  - Ids in the CSV are only used to decide whether a row is complete; final
    ids are the 1-based output position.
  - Malformed rows are skipped with a warning, never fatal.
  - Unreadable or empty source file raises CSVImportError and nothing is
    written. The write itself is atomic (temp file + os.replace).
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from cineverse.constants import REQUIRED_FIELDS
from cineverse.csv_tokenizer import tokenize_line
from cineverse.field_mapper import map_field
from cineverse.store import write_json_atomic

logger = logging.getLogger(__name__)


class CSVImportError(Exception):
    """Import aborted; the destination store was not modified"""


@dataclass
class ImportResult:
    """Parsed movies plus per-row bookkeeping"""
    movies: List[Dict]
    stats: Counter = field(default_factory=Counter)


def parse_header(line: str) -> List[str]:
    """Header cells: plain comma split, trimmed, all double quotes removed"""
    return [h.strip().replace('"', '') for h in line.split(',')]


def validate_movie(movie: Dict) -> bool:
    """True if every required field is present and not None"""
    return all(movie.get(name) is not None for name in REQUIRED_FIELDS)


def build_record(headers: List[str], values: List[str]) -> Dict:
    """Map each (header, value) pair and keep the fields that weren't omitted"""
    movie: Dict = {}
    for header, value in zip(headers, values):
        mapped = map_field(header, value or '')
        if not mapped.omitted:
            movie[mapped.name] = mapped.value
    return movie


def renumber(movies: List[Dict]) -> List[Dict]:
    """Overwrite ids with the 1-based output position"""
    for position, movie in enumerate(movies, start=1):
        movie['id'] = position
    return movies


def parse_csv_text(text: str) -> ImportResult:
    """
    Parse CSV text into normalized movie records

    Args:
        text: Full CSV content, header row first

    Returns:
        ImportResult with renumbered movies and row statistics

    Raises:
        CSVImportError: if the text has no non-blank lines
    """
    lines = [line for line in text.split('\n') if line.strip()]
    if not lines:
        raise CSVImportError('CSV file is empty')

    headers = parse_header(lines[0])
    stats: Counter = Counter()
    movies: List[Dict] = []

    for row_number, line in enumerate(lines[1:], start=2):
        stats['rows_total'] += 1
        values = tokenize_line(line)

        if len(values) != len(headers):
            logger.warning(
                f"Skipping row {row_number}: column count mismatch "
                f"({len(values)} values, {len(headers)} headers)"
            )
            stats['skipped_column_mismatch'] += 1
            continue

        movie = build_record(headers, values)
        if not validate_movie(movie):
            logger.debug(f"Skipping row {row_number}: missing id or title")
            stats['skipped_missing_required'] += 1
            continue

        movies.append(movie)

    renumber(movies)
    stats['imported'] = len(movies)
    return ImportResult(movies=movies, stats=stats)


def parse_csv(csv_path: Path) -> ImportResult:
    """
    Read and parse a CSV file

    Raises:
        CSVImportError: file missing, unreadable, not UTF-8, or empty
    """
    csv_path = Path(csv_path)
    try:
        # utf-8-sig: spreadsheet exports often start with a BOM
        text = csv_path.read_text(encoding='utf-8-sig')
    except (OSError, UnicodeDecodeError) as e:
        raise CSVImportError(f"Could not read CSV file {csv_path}: {e}") from e

    return parse_csv_text(text)


def import_csv(csv_path: Path, json_path: Path) -> ImportResult:
    """
    Import a CSV file, replacing the JSON movie store

    Args:
        csv_path: Source CSV file
        json_path: Destination JSON file (parent directories are created)

    Returns:
        ImportResult with the movies as written

    Raises:
        CSVImportError: nothing was written
    """
    logger.info(f"Importing CSV from: {csv_path}")
    result = parse_csv(csv_path)

    try:
        write_json_atomic(Path(json_path), result.movies)
    except OSError as e:
        raise CSVImportError(f"Could not write {json_path}: {e}") from e

    stats = result.stats
    logger.info(
        f"Imported {len(result.movies)} movies to {json_path} "
        f"({stats['skipped_column_mismatch']} malformed, "
        f"{stats['skipped_missing_required']} incomplete rows skipped)"
    )
    return result


def import_csv_to_json(csv_path: Path, json_path: Path) -> List[Dict]:
    """import_csv(), returning just the movie list"""
    return import_csv(csv_path, json_path).movies
