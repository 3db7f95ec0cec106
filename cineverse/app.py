#!/usr/bin/env python3
"""
cineverse/app.py — REST API over the JSON movie store

Routes:
  /api/movies          list / top10 / by category / CRUD
  /api/contact         save + list contact messages
  /api/auth/login      admin login stub
  /api/stats           summary + per-industry statistics
  /api/import          CSV import (upload or server-local path)

Every request re-reads the JSON files; nothing is cached in the process.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.utils import secure_filename

from cineverse.auth import authenticate
from cineverse.config import load_config
from cineverse.importer import CSVImportError, import_csv_to_json
from cineverse.notify import send_contact_notification
from cineverse.stats import industry_stats, summary_stats
from cineverse.store import ContactRepository, JsonStore, MovieRepository

logger = logging.getLogger(__name__)


def is_csv_upload(filename: str, mimetype: Optional[str]) -> bool:
    return mimetype == 'text/csv' or filename.lower().endswith('.csv')


def create_app(config: Optional[dict] = None) -> Flask:
    """
    Build the Flask application

    Args:
        config: Output of load_config(); defaults to config.yaml + environment
    """
    if config is None:
        config = load_config()

    app = Flask(__name__)
    app.config['CINEVERSE'] = config
    CORS(app)

    movies = MovieRepository(JsonStore(config['movies_path']))
    contacts = ContactRepository(JsonStore(config['contacts_path']))
    movies_path = Path(config['movies_path'])
    uploads_dir = Path(config['uploads_dir'])
    credentials = {
        'username': config['admin_username'],
        'password': config['admin_password'],
    }

    def import_response(csv_path: Path):
        imported = import_csv_to_json(csv_path, movies_path)
        return jsonify({
            'success': True,
            'message': f"Successfully imported {len(imported)} movies",
            'count': len(imported),
        })

    # ------------------------------------------------------------------
    # Movies
    # ------------------------------------------------------------------

    @app.get('/api/movies')
    def list_movies():
        return jsonify(movies.list_all())

    # /top10 and /category/* are registered before /<int:id>; the int
    # converter keeps them apart anyway
    @app.get('/api/movies/top10')
    def top10():
        return jsonify(movies.top10())

    @app.get('/api/movies/category/<category>')
    @app.get('/api/movies/categories/<category>')
    def movies_by_category(category):
        return jsonify(movies.by_category(category))

    @app.get('/api/movies/<int:movie_id>')
    def get_movie(movie_id):
        movie = movies.get(movie_id)
        if movie is None:
            return jsonify({'error': 'Movie not found'}), 404
        return jsonify(movie)

    @app.post('/api/movies')
    def create_movie():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400
        return jsonify(movies.create(data)), 201

    @app.put('/api/movies/<int:movie_id>')
    def update_movie(movie_id):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400
        movie = movies.update(movie_id, data)
        if movie is None:
            return jsonify({'error': 'Movie not found'}), 404
        return jsonify(movie)

    @app.delete('/api/movies/<int:movie_id>')
    def delete_movie(movie_id):
        if not movies.delete(movie_id):
            return jsonify({'error': 'Movie not found'}), 404
        return jsonify({'message': 'Movie deleted successfully'})

    # ------------------------------------------------------------------
    # Contact
    # ------------------------------------------------------------------

    @app.post('/api/contact')
    def create_contact():
        data = request.get_json(silent=True) or {}
        name = data.get('name')
        email = data.get('email')
        message = data.get('message')
        if not name or not email or not message:
            return jsonify({'error': 'Name, email, and message are required'}), 400

        contact = contacts.create(name, email, message)
        send_contact_notification(contact, config['smtp'])
        return jsonify({
            'message': 'Contact message saved successfully',
            'contact': contact,
        }), 201

    @app.get('/api/contact')
    def list_contacts():
        return jsonify(contacts.list_all())

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    @app.post('/api/auth/login')
    def login():
        data = request.get_json(silent=True) or {}
        result = authenticate(data.get('username'), data.get('password'), credentials)
        if result is None:
            return jsonify({'success': False, 'message': 'Invalid credentials'}), 401
        return jsonify(result)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    @app.get('/api/stats')
    def stats():
        return jsonify(summary_stats(movies.list_all()))

    @app.get('/api/stats/industries')
    def stats_by_industry():
        return jsonify(industry_stats(movies.list_all()))

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    @app.post('/api/import/csv')
    def import_upload():
        upload = request.files.get('csvfile')
        if upload is None or not upload.filename:
            return jsonify({'error': 'No CSV file uploaded'}), 400
        if not is_csv_upload(upload.filename, upload.mimetype):
            return jsonify({'error': 'Only CSV files are allowed'}), 400

        uploads_dir.mkdir(parents=True, exist_ok=True)
        saved = uploads_dir / f"{uuid.uuid4().hex}-{secure_filename(upload.filename) or 'upload.csv'}"
        upload.save(saved)
        try:
            return import_response(saved)
        except CSVImportError as e:
            logger.error(f"Error importing CSV: {e}")
            return jsonify({'error': str(e) or 'Failed to import CSV'}), 500
        finally:
            saved.unlink(missing_ok=True)

    @app.post('/api/import/path')
    def import_path():
        data = request.get_json(silent=True) or {}
        csv_path = data.get('csvPath')
        if not isinstance(csv_path, str) or not csv_path or not Path(csv_path).is_file():
            return jsonify({'error': 'Invalid CSV file path'}), 400
        try:
            return import_response(Path(csv_path))
        except CSVImportError as e:
            logger.error(f"Error importing CSV: {e}")
            return jsonify({'error': str(e) or 'Failed to import CSV'}), 500

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------

    @app.get('/api/health')
    def health():
        return jsonify({'status': 'ok'})

    @app.errorhandler(Exception)
    def handle_error(e):
        if isinstance(e, HTTPException):
            return jsonify({'error': e.description}), e.code
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({'error': 'Internal server error'}), 500

    return app
