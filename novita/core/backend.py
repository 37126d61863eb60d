"""
Backend Client
==============

Thin wrapper over the Supabase SDK for the calls the catalog needs:
product table reads and writes, an exact row count and password sign-in.
SDK errors are translated into BackendError so routes can map them to
HTTP status codes.

Credential choice follows the route contract:
    user bearer token  -> anon key + Authorization: Bearer <token>
    service role key   -> service key (admin writes, bypasses row policies)
    otherwise          -> anon key (public, read-only)
"""

import logging

import httpx
from postgrest.exceptions import APIError
from supabase import create_client
from supabase.client import ClientOptions
from supabase_auth.errors import AuthError

from .config import get_config_value

logger = logging.getLogger(__name__)

PERMISSION_DENIED_CODE = '42501'
NO_ROWS_CODE = 'PGRST116'


class BackendError(Exception):
    """Error reported by the backend (or raised while talking to it)."""

    def __init__(self, message, code=None, details=None, hint=None, status=None):
        super().__init__(message)
        self.message = message or ''
        self.code = code
        self.details = details
        self.hint = hint
        self.status = status

    @property
    def is_permission_denied(self):
        return self.code == PERMISSION_DENIED_CODE or 'permission denied' in self.message.lower()

    @property
    def is_not_found(self):
        return self.code == NO_ROWS_CODE

    def to_dict(self):
        return {
            'code': self.code,
            'message': self.message,
            'details': self.details,
            'hint': self.hint,
        }

    @classmethod
    def from_api_error(cls, error):
        """PostgREST error (code/message/details/hint from the response body)"""
        return cls(
            message=str(error.message or error),
            code=str(error.code) if error.code is not None else None,
            details=error.details,
            hint=error.hint,
        )

    @classmethod
    def from_auth_error(cls, error):
        return cls(
            message=str(getattr(error, 'message', None) or error),
            code=getattr(error, 'code', None),
            status=getattr(error, 'status', None),
        )


class BackendUnavailable(BackendError):
    """The backend could not be reached (DNS, connection, timeout)."""


def run_query(query):
    """Execute an SDK query builder, translating its errors"""
    try:
        return query.execute()
    except APIError as e:
        raise BackendError.from_api_error(e)
    except httpx.HTTPError as e:
        raise BackendUnavailable(f'Backend request failed: {e}')


class BackendClient:
    """SDK client bound to one credential set"""

    def __init__(self, sdk, role='anon'):
        self.sdk = sdk
        self.role = role

    def table(self, name):
        return self.sdk.table(name)

    def fetch_all(self, table, order_by='created_at'):
        """Every row, newest first"""
        return run_query(self.table(table).select('*').order(order_by, desc=True)).data or []

    def fetch_one(self, table, row_id):
        """Exactly one row; no rows raises BackendError with the PGRST116 code"""
        return run_query(self.table(table).select('*').eq('id', row_id).single()).data

    def insert(self, table, row):
        rows = run_query(self.table(table).insert(row)).data
        if not rows:
            raise BackendError('Insert returned no rows', code=NO_ROWS_CODE)
        return rows[0]

    def update(self, table, row_id, values):
        """Updated rows (empty when nothing matched)"""
        return run_query(self.table(table).update(values).eq('id', row_id)).data or []

    def delete(self, table, row_id):
        return run_query(self.table(table).delete().eq('id', row_id)).data or []

    def count(self, table):
        """Exact row count without fetching rows"""
        return run_query(self.table(table).select('*', count='exact', head=True)).count

    def sign_in_with_password(self, email, password):
        """Password grant; returns {'access_token', 'user': {'id', 'email'}}"""
        try:
            response = self.sdk.auth.sign_in_with_password({'email': email, 'password': password})
        except AuthError as e:
            raise BackendError.from_auth_error(e)
        except httpx.HTTPError as e:
            raise BackendUnavailable(f'Backend request failed: {e}')

        session = response.session
        if session is None or not session.access_token:
            raise BackendError('Sign-in response did not include an access token')

        user = response.user
        return {
            'access_token': session.access_token,
            'user': {
                'id': getattr(user, 'id', None),
                'email': getattr(user, 'email', None),
            },
        }

    def ping(self, table=None):
        """Connection test: exact count of the products table"""
        return self.count(table or get_config_value('PRODUCTS_TABLE', 'produtos'))


def is_backend_configured():
    return bool(get_config_value('SUPABASE_URL') and get_config_value('SUPABASE_ANON_KEY'))


def create_backend_client(auth_token=None, use_service_role=True):
    """
    Build a client with the right credentials, or None when the backend
    is not configured (callers fall back to sample data).
    """
    url = get_config_value('SUPABASE_URL')
    anon_key = get_config_value('SUPABASE_ANON_KEY')
    service_key = get_config_value('SUPABASE_SERVICE_ROLE_KEY')
    timeout = float(get_config_value('BACKEND_TIMEOUT', 10))

    if not url or not anon_key:
        logger.error("Backend environment variables are not configured")
        return None

    # Server-side clients: one per request, no stored session
    options = {
        'postgrest_client_timeout': timeout,
        'auto_refresh_token': False,
        'persist_session': False,
    }

    if auth_token:
        logger.info("Using the user's access token for this operation")
        options['headers'] = {'Authorization': f'Bearer {auth_token}'}
        return BackendClient(create_client(url, anon_key, options=ClientOptions(**options)), role='user')

    if service_key and use_service_role:
        logger.info("Using the service role key for administrative operations")
        return BackendClient(create_client(url, service_key, options=ClientOptions(**options)), role='service')

    logger.info("Using the public client (read-only)")
    return BackendClient(create_client(url, anon_key, options=ClientOptions(**options)), role='anon')
