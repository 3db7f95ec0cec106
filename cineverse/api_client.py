#!/usr/bin/env python3
"""
HTTP client for the CineVerse REST API

Used by the dashboard. Read helpers degrade gracefully (log + empty result)
so a page can still render when the backend is down; write helpers raise
ApiError so the caller can show the failure.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Union
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A write request failed; message is the server's error text when available"""


class CineVerseClient:
    """Thin wrapper around the /api endpoints"""

    def __init__(self, base_url: str, timeout: int = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get(self, path: str, default):
        """GET returning parsed JSON, or default on any failure"""
        url = self._url(path)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"GET {url} failed: {e}")
            return default

    def _send(self, method: str, path: str, **kwargs) -> Dict:
        """Write request; raises ApiError with the server's message on failure"""
        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(f"Could not reach the API: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if not response.ok:
            message = ''
            if isinstance(payload, dict):
                message = payload.get('error') or payload.get('message') or ''
            message = message or f"{method} {path} failed with status {response.status_code}"
            logger.error(f"{method} {url}: {message}")
            raise ApiError(message)
        return payload

    # --- reads ------------------------------------------------------------

    def fetch_movies(self) -> List[Dict]:
        return self._get('movies', [])

    def fetch_movie(self, movie_id: int) -> Optional[Dict]:
        return self._get(f"movies/{movie_id}", None)

    def fetch_movies_by_category(self, category: str) -> List[Dict]:
        return self._get(f"movies/categories/{quote(category, safe='')}", [])

    def fetch_top10(self) -> List[Dict]:
        return self._get('movies/top10', [])

    def fetch_contacts(self) -> List[Dict]:
        return self._get('contact', [])

    def fetch_stats(self) -> Optional[Dict]:
        return self._get('stats', None)

    def fetch_industry_stats(self) -> List[Dict]:
        return self._get('stats/industries', [])

    # --- writes -----------------------------------------------------------

    def add_movie(self, movie: Dict) -> Dict:
        return self._send('POST', 'movies', json=movie)

    def update_movie(self, movie_id: int, movie: Dict) -> Dict:
        return self._send('PUT', f"movies/{movie_id}", json=movie)

    def delete_movie(self, movie_id: int) -> Dict:
        return self._send('DELETE', f"movies/{movie_id}")

    def submit_contact(self, name: str, email: str, message: str) -> Dict:
        return self._send('POST', 'contact', json={'name': name, 'email': email, 'message': message})

    def admin_login(self, username: str, password: str) -> Dict:
        """Returns the login payload (with token); raises ApiError on bad credentials"""
        return self._send('POST', 'auth/login', json={'username': username, 'password': password})

    def import_csv_file(self, filename: str, content: Union[bytes, BinaryIO]) -> Dict:
        files = {'csvfile': (filename, content, 'text/csv')}
        return self._send('POST', 'import/csv', files=files)

    def import_csv_path(self, csv_path: Union[str, Path]) -> Dict:
        return self._send('POST', 'import/path', json={'csvPath': str(csv_path)})
