#!/usr/bin/env python3
"""
import_csv.py — Replace the movie store with the contents of a CSV export

Pipeline position:
  CSV export  →  import_csv.py  →  data/movies.json  →  server.py / dashboard.py

Safety:
  - The import REPLACES data/movies.json. Existing movies (including ones
    added through the admin panel) are discarded.
  - Ids are renumbered 1..N in file order; CSV ids are ignored.
  - Nothing is written if the CSV can't be read. Use --dry-run to preview.

Usage:
  python import_csv.py movies.csv                   # import into configured store
  python import_csv.py movies.csv --dry-run         # parse + report only
  python import_csv.py movies.csv --output PATH     # custom JSON destination
"""

import sys
import logging
import argparse
from collections import Counter
from pathlib import Path
from typing import Optional

from cineverse.config import load_config
from cineverse.importer import CSVImportError, import_csv, parse_csv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def print_summary(stats: Counter, dry_run: bool, output_path: Optional[Path]) -> None:
    """Print a human-readable summary of the import."""
    print()
    print("=" * 60)
    if dry_run:
        print("DRY RUN — movie store was not modified")
    else:
        print("IMPORT COMPLETE")
    print("=" * 60)

    print(f"\nData rows:             {stats['rows_total']}")
    print(f"  imported:            {stats['imported']}")
    print(f"  column mismatch:     {stats['skipped_column_mismatch']}")
    print(f"  missing id/title:    {stats['skipped_missing_required']}")

    if not dry_run:
        print(f"\nMovies written to:     {output_path}")
    elif stats['imported'] > 0:
        print("\nRun again without --dry-run to replace the movie store.")
    print()


def main() -> int:
    parser = argparse.ArgumentParser(
        description='Import a movies CSV into the JSON movie store (replaces existing data)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        'csv_path',
        type=Path,
        help='CSV file to import (header row required)',
    )
    parser.add_argument(
        '--output',
        type=Path,
        default=None,
        help='Destination JSON file (default: movies file from config)',
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=Path('config.yaml'),
        help='Configuration file (default: config.yaml)',
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        default=False,
        dest='dry_run',
        help='Parse and report without writing',
    )

    args = parser.parse_args()

    # Hard gate: source file must exist
    if not args.csv_path.is_file():
        logger.error(f"CSV file not found: {args.csv_path}")
        return 1

    output_path = args.output
    if output_path is None:
        output_path = load_config(args.config)['movies_path']

    try:
        if args.dry_run:
            result = parse_csv(args.csv_path)
        else:
            result = import_csv(args.csv_path, output_path)
    except CSVImportError as e:
        logger.error(f"Import failed: {e}")
        return 1

    print_summary(result.stats, args.dry_run, output_path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
