#!/usr/bin/env python3
"""
Configuration loading

config.yaml is merged over DEFAULTS; environment variables (optionally from
a .env file) override both. SMTP secrets belong in the environment, not in
config.yaml.

Relative paths (data_dir, uploads_dir) resolve against the directory that
holds the config file, so the server and the CLI agree on where
movies.json lives regardless of the working directory.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('config.yaml')

DEFAULTS = {
    'data_dir': 'data',
    'movies_file': 'movies.json',
    'contacts_file': 'contacts.json',
    'uploads_dir': 'uploads',
    'host': '127.0.0.1',
    'port': 3000,
    'admin_username': 'admin',
    'admin_password': 'admin123',
    'api_base_url': 'http://localhost:3000/api',
    'smtp': {
        'host': None,
        'port': 587,
        'user': None,
        'password': None,
        'admin_email': None,
    },
}

# environment variable → (section or None, key)
ENV_OVERRIDES = {
    'PORT': (None, 'port'),
    'CINEVERSE_API_URL': (None, 'api_base_url'),
    'SMTP_HOST': ('smtp', 'host'),
    'SMTP_PORT': ('smtp', 'port'),
    'SMTP_USER': ('smtp', 'user'),
    'SMTP_PASS': ('smtp', 'password'),
    'ADMIN_EMAIL': ('smtp', 'admin_email'),
}


def _merge(base: Dict, override: Dict) -> Dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _apply_env(config: Dict) -> None:
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        target = config[section] if section else config
        target[key] = value

    config['port'] = int(config['port'])
    if config['smtp'].get('port'):
        config['smtp']['port'] = int(config['smtp']['port'])


def load_config(config_path: Optional[Path] = None, use_env: bool = True) -> dict:
    """
    Load configuration from YAML file

    Args:
        config_path: YAML file; a missing file means "defaults only"
        use_env: Apply .env / environment overrides

    Returns:
        Config dict with resolved Path entries: data_dir, movies_path,
        contacts_path, uploads_dir
    """
    config = copy.deepcopy(DEFAULTS)
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if config_path.exists():
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")
        _merge(config, loaded)
        base_dir = config_path.resolve().parent
    else:
        logger.debug(f"Config file not found: {config_path} — using defaults")
        base_dir = Path.cwd()

    if use_env:
        load_dotenv()
        _apply_env(config)

    data_dir = Path(config['data_dir'])
    if not data_dir.is_absolute():
        data_dir = base_dir / data_dir
    uploads_dir = Path(config['uploads_dir'])
    if not uploads_dir.is_absolute():
        uploads_dir = base_dir / uploads_dir

    config['data_dir'] = data_dir
    config['uploads_dir'] = uploads_dir
    config['movies_path'] = data_dir / config['movies_file']
    config['contacts_path'] = data_dir / config['contacts_file']
    return config
