"""
Admin session helpers.
"""

import hashlib
import hmac
from functools import wraps

from flask import request, session, jsonify


def hash_password(password):
    return hashlib.sha256(password.encode()).hexdigest()


def check_admin_password(password):
    """Constant-time check against the ADMIN_PASSWORD setting.

    Returns None when no admin password is configured at all.
    """
    # settings imports admin_required from this module
    from ..settings.database import get_setting

    expected = get_setting('ADMIN_PASSWORD')
    if not expected:
        return None
    return hmac.compare_digest(hash_password(str(password or '')), hash_password(str(expected)))


def is_admin():
    return 'admin_id' in session


def bearer_token():
    header = request.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        token = header[len('Bearer '):].strip()
        return token or None
    return None


def get_write_credentials():
    """
    Who may write, and with which backend token.

    Returns (authorized, token). The header token wins over the session's
    backend token. A password-mode admin is authorized without a token, in
    which case the backend client falls back to the service role key.
    """
    token = bearer_token()
    if token:
        return True, token

    token = session.get('access_token')
    if token:
        return True, token

    if is_admin():
        return True, None

    return False, None


def admin_required(f):
    """Decorator to require admin mode on JSON endpoints"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin():
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function
