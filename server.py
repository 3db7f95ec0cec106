#!/usr/bin/env python3
"""
server.py - Run the CineVerse REST API

Serves /api/* over the JSON files in data/. Development server only:
single operator, no concurrent-write protection.

Examples:
  python server.py                       # config.yaml, port from config/PORT
  python server.py --port 8080 --debug
"""

import sys
import logging
import argparse
from pathlib import Path

from cineverse.app import create_app
from cineverse.config import load_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description='Run the CineVerse REST API')
    parser.add_argument('--config', type=Path, default=Path('config.yaml'),
                        help='Configuration file (default: config.yaml)')
    parser.add_argument('--host', default=None,
                        help='Bind address (default: from config)')
    parser.add_argument('--port', type=int, default=None,
                        help='Port (default: from config / PORT)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable Flask debug mode with auto-reload')

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load config {args.config}: {e}")
        return 1

    host = args.host or config['host']
    port = args.port or config['port']

    # Ensure data + upload directories exist
    config['data_dir'].mkdir(parents=True, exist_ok=True)
    config['uploads_dir'].mkdir(parents=True, exist_ok=True)

    logger.info(f"CineVerse API running on http://{host}:{port}/api")
    logger.info(f"Movie store: {config['movies_path']}")

    app = create_app(config)
    app.run(host=host, port=port, debug=args.debug)
    return 0


if __name__ == '__main__':
    sys.exit(main())
