#!/usr/bin/env python3
"""
Admin login stub

Plain-text comparison against configured credentials and a timestamp token.
This is a demo gate for the admin panel, not real authentication: tokens
are never verified server-side.
"""

import hmac
import logging
import time
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = 'admin'
DEFAULT_PASSWORD = 'admin123'


def issue_token() -> str:
    return f"admin-token-{int(time.time() * 1000)}"


def authenticate(username: Optional[str], password: Optional[str],
                 credentials: Dict[str, str]) -> Optional[Dict]:
    """
    Check a login attempt

    Args:
        username, password: Submitted values (may be None)
        credentials: {'username': ..., 'password': ...} from config

    Returns:
        Success payload with token, or None if the credentials don't match
    """
    expected_user = credentials.get('username', DEFAULT_USERNAME)
    expected_pass = credentials.get('password', DEFAULT_PASSWORD)

    if not isinstance(username, str) or not isinstance(password, str):
        return None

    user_ok = hmac.compare_digest(username.encode(), expected_user.encode())
    pass_ok = hmac.compare_digest(password.encode(), expected_pass.encode())
    if not (user_ok and pass_ok):
        logger.warning(f"Failed admin login for '{username}'")
        return None

    logger.info(f"Admin login: {username}")
    return {
        'success': True,
        'message': 'Login successful',
        'token': issue_token(),
    }
