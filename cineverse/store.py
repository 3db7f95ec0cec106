#!/usr/bin/env python3
"""
cineverse/store.py — JSON flat-file persistence

Every collection (movies, contact messages) is one pretty-printed JSON array
on disk. Each operation reads the whole array, changes it in memory and
writes the whole array back. There is no locking: single-operator use only.

Writes go through a temp file in the destination directory followed by
os.replace(), so a failed write never leaves a truncated store behind.
"""

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from cineverse.field_mapper import as_number

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-31T12:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


def dump_json(data) -> str:
    """Serialize the way every store file is written (2-space indent, UTF-8 kept)"""
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json_atomic(path: Path, data) -> None:
    """
    Write data as JSON to path, replacing any previous content atomically

    Creates the parent directory if needed. Raises OSError on failure; the
    previous file (if any) is left untouched in that case.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = dump_json(data)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class JsonStore:
    """One JSON array file"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> List[Dict]:
        """Load the array; a missing or unreadable file is an empty collection"""
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {self.path}: {e}. Treating as empty.")
            return []

        if not isinstance(data, list):
            logger.warning(f"{self.path} does not contain a JSON array. Treating as empty.")
            return []
        return data

    def write(self, items: List[Dict]) -> None:
        write_json_atomic(self.path, items)
        logger.debug(f"Saved {len(items)} records to {self.path}")


def next_id(items: List[Dict]) -> int:
    """max(existing id) + 1, or 1 for an empty collection"""
    ids = [item['id'] for item in items if isinstance(item.get('id'), (int, float))]
    return int(max(ids)) + 1 if ids else 1


class MovieRepository:
    """CRUD over the movies collection"""

    def __init__(self, store: JsonStore):
        self.store = store

    def list_all(self) -> List[Dict]:
        return self.store.read()

    def top10(self) -> List[Dict]:
        """Ten highest worldwide grosses (USD), movies without a gross excluded"""
        movies = [m for m in self.store.read() if m and _gross_usd(m)]
        movies.sort(key=_gross_usd, reverse=True)
        return movies[:10]

    def by_category(self, category: str) -> List[Dict]:
        wanted = category.lower()
        return [
            m for m in self.store.read()
            if isinstance(m.get('category'), str) and m['category'].lower() == wanted
        ]

    def get(self, movie_id: int) -> Optional[Dict]:
        for movie in self.store.read():
            if movie.get('id') == movie_id:
                return movie
        return None

    def create(self, data: Dict) -> Dict:
        movies = self.store.read()
        movie = dict(data)
        movie['id'] = next_id(movies)
        movie['createdAt'] = utc_timestamp()
        movies.append(movie)
        self.store.write(movies)
        logger.info(f"Created movie {movie['id']}: {movie.get('title')}")
        return movie

    def update(self, movie_id: int, data: Dict) -> Optional[Dict]:
        movies = self.store.read()
        for index, movie in enumerate(movies):
            if movie.get('id') == movie_id:
                updated = {**movie, **data, 'id': movie_id, 'updatedAt': utc_timestamp()}
                movies[index] = updated
                self.store.write(movies)
                logger.info(f"Updated movie {movie_id}")
                return updated
        return None

    def delete(self, movie_id: int) -> bool:
        movies = self.store.read()
        remaining = [m for m in movies if m.get('id') != movie_id]
        if len(remaining) == len(movies):
            return False
        self.store.write(remaining)
        logger.info(f"Deleted movie {movie_id}")
        return True


def _gross_usd(movie: Dict) -> float:
    # worldwideGross: field name used by records created before CSV import existed
    return as_number(movie.get('worldwide_gross_usd')) or as_number(movie.get('worldwideGross'))


class ContactRepository:
    """Append-only contact messages"""

    def __init__(self, store: JsonStore):
        self.store = store

    def list_all(self) -> List[Dict]:
        return self.store.read()

    def create(self, name: str, email: str, message: str) -> Dict:
        contacts = self.store.read()
        contact = {
            'id': next_id(contacts),
            'name': name,
            'email': email,
            'message': message,
            'createdAt': utc_timestamp(),
        }
        contacts.append(contact)
        self.store.write(contacts)
        logger.info(f"Saved contact message {contact['id']} from {email}")
        return contact
