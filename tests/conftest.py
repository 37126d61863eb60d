"""
Shared fixtures for the Novita test-suite.

Install test dependencies with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from flask import Flask

from novita import Novita
from novita.modules.products import fallback_products

BACKEND_URL = "https://catalog.example.supabase.co"
ANON_KEY = "anon-key"
SERVICE_KEY = "service-key"
ADMIN_PASSWORD = "letmein"
WHATSAPP_NUMBER = "5518981100463"


def make_app(db_dir, **overrides):
    """Flask app with every Novita module registered and databases in db_dir."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = db_dir
    app.config["SETTINGS_DB"] = os.path.join(db_dir, "settings.db")
    app.config["LOGS_DB"] = os.path.join(db_dir, "app_logs.db")
    # No backend unless a test asks for one
    app.config["SUPABASE_URL"] = None
    app.config["SUPABASE_ANON_KEY"] = None
    app.config["SUPABASE_SERVICE_ROLE_KEY"] = None
    app.config["ADMIN_PASSWORD"] = ADMIN_PASSWORD
    app.config["WHATSAPP_NUMBER"] = WHATSAPP_NUMBER
    app.config.update(overrides)
    Novita(app)
    return app


class FakeQuery:
    """Stand-in for the SDK query builder.

    Builder calls are recorded and chain; execute() returns the canned
    result (or raises the canned error) of the owning FakeSupabase.
    """

    BUILDER_METHODS = ('select', 'eq', 'order', 'limit', 'single', 'insert', 'update', 'delete')

    def __init__(self, backend, table):
        self.backend = backend
        self.table = table
        self.calls = []

    def __getattr__(self, name):
        if name not in self.BUILDER_METHODS:
            raise AttributeError(name)

        def builder(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return builder

    def call(self, name):
        """(args, kwargs) of the first builder call with this name, or None"""
        for method, args, kwargs in self.calls:
            if method == name:
                return args, kwargs
        return None

    def execute(self):
        if self.backend.error is not None:
            raise self.backend.error
        return SimpleNamespace(data=self.backend.data, count=self.backend.count)


class FakeSupabase:
    """Stand-in for a supabase Client; set data/count/error per test."""

    def __init__(self):
        self.data = []
        self.count = None
        self.error = None
        self.queries = []
        self.auth = MagicMock()
        self.factory = None

    def table(self, name):
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    @property
    def last_query(self):
        return self.queries[-1]

    @property
    def last_key(self):
        """API key the most recent client was created with"""
        return self.factory.call_args.args[1]

    @property
    def last_options(self):
        return self.factory.call_args.kwargs['options']


@pytest.fixture(autouse=True)
def reset_fallback():
    """The sample catalogue is process-wide; start every test from the seed."""
    fallback_products.reset()
    yield
    fallback_products.reset()


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="novita-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """App running on the in-memory sample catalogue."""
    return make_app(tmp_db_dir)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Client already in password admin mode."""
    with client.session_transaction() as sess:
        sess["admin_id"] = "admin"
        sess["admin_mode"] = "password"
    return client


@pytest.fixture
def fake_supabase():
    """Replaces supabase.create_client; every client built shares this fake."""
    sdk = FakeSupabase()
    with patch("novita.core.backend.create_client", return_value=sdk) as factory:
        sdk.factory = factory
        yield sdk


@pytest.fixture
def backend_app(tmp_db_dir, fake_supabase):
    """App with backend credentials configured, talking to the fake client."""
    return make_app(
        tmp_db_dir,
        SUPABASE_URL=BACKEND_URL,
        SUPABASE_ANON_KEY=ANON_KEY,
        SUPABASE_SERVICE_ROLE_KEY=SERVICE_KEY,
    )


@pytest.fixture
def backend_client(backend_app):
    return backend_app.test_client()
