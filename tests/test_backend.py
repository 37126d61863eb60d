"""
Tests for the backend client wrapper over the Supabase SDK.
Run with: pytest tests/test_backend.py -v
"""

from types import SimpleNamespace

import httpx
import pytest
from postgrest.exceptions import APIError
from supabase_auth.errors import AuthApiError

from novita.core.backend import (
    BackendClient, BackendError, BackendUnavailable, create_backend_client,
    is_backend_configured
)

from conftest import ANON_KEY, BACKEND_URL, SERVICE_KEY, FakeSupabase


@pytest.fixture
def sdk():
    return FakeSupabase()


@pytest.fixture
def backend(sdk):
    return BackendClient(sdk)


# ---------------------------------------------------------------------------
# Credential choice
# ---------------------------------------------------------------------------

def test_unconfigured_backend_gives_no_client(app, fake_supabase):
    with app.app_context():
        assert is_backend_configured() is False
        assert create_backend_client() is None
        assert create_backend_client("token") is None
    assert fake_supabase.factory.call_count == 0


def test_user_token_wins(backend_app, fake_supabase):
    with backend_app.app_context():
        client = create_backend_client("user-token")

    assert client.role == "user"
    assert fake_supabase.factory.call_args.args == (BACKEND_URL, ANON_KEY)
    assert fake_supabase.last_options.headers["Authorization"] == "Bearer user-token"


def test_service_role_without_token(backend_app, fake_supabase):
    with backend_app.app_context():
        client = create_backend_client()

    assert client.role == "service"
    assert fake_supabase.last_key == SERVICE_KEY
    assert "Authorization" not in fake_supabase.last_options.headers


def test_anon_when_service_role_not_wanted(backend_app, fake_supabase):
    with backend_app.app_context():
        client = create_backend_client(use_service_role=False)

    assert client.role == "anon"
    assert fake_supabase.last_key == ANON_KEY


def test_anon_when_no_service_key(backend_app, fake_supabase):
    backend_app.config["SUPABASE_SERVICE_ROLE_KEY"] = ""
    with backend_app.app_context():
        assert is_backend_configured() is True
        assert create_backend_client().role == "anon"


def test_clients_do_not_keep_sessions(backend_app, fake_supabase):
    backend_app.config["BACKEND_TIMEOUT"] = 3
    with backend_app.app_context():
        create_backend_client()

    options = fake_supabase.last_options
    assert options.persist_session is False
    assert options.auto_refresh_token is False
    assert options.postgrest_client_timeout == 3.0


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_error_from_api_error():
    error = BackendError.from_api_error(APIError({
        "code": "42501",
        "message": "permission denied for table produtos",
        "details": None,
        "hint": "Grant insert",
    }))
    assert error.code == "42501"
    assert error.hint == "Grant insert"
    assert error.is_permission_denied
    assert not error.is_not_found
    assert error.to_dict()["message"] == "permission denied for table produtos"


def test_permission_denied_by_message_only():
    assert BackendError("Permission denied for relation produtos").is_permission_denied


def test_api_error_is_translated(sdk, backend):
    sdk.error = APIError({"code": "23502", "message": 'null value in column "nome"', "details": None, "hint": None})
    with pytest.raises(BackendError) as excinfo:
        backend.fetch_all("produtos")
    assert excinfo.value.code == "23502"
    assert not isinstance(excinfo.value, BackendUnavailable)


def test_network_failure_is_unavailable(sdk, backend):
    sdk.error = httpx.ConnectTimeout("timed out")
    with pytest.raises(BackendUnavailable):
        backend.fetch_all("produtos")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def test_fetch_all_orders_newest_first(sdk, backend):
    sdk.data = [{"id": 1}]
    assert backend.fetch_all("produtos") == [{"id": 1}]

    query = sdk.last_query
    assert query.table == "produtos"
    assert query.call("select") == (("*",), {})
    assert query.call("order") == (("created_at",), {"desc": True})


def test_fetch_all_handles_null_data(sdk, backend):
    sdk.data = None
    assert backend.fetch_all("produtos") == []


def test_fetch_one_uses_single(sdk, backend):
    sdk.data = {"id": 1}
    assert backend.fetch_one("produtos", 1) == {"id": 1}
    assert sdk.last_query.call("eq") == (("id", 1), {})
    assert sdk.last_query.call("single") is not None


def test_fetch_one_with_no_rows_is_not_found(sdk, backend):
    sdk.error = APIError({
        "code": "PGRST116",
        "message": "JSON object requested, multiple (or no) rows returned",
        "details": "The result contains 0 rows",
        "hint": None,
    })
    with pytest.raises(BackendError) as excinfo:
        backend.fetch_one("produtos", 1)
    assert excinfo.value.is_not_found


def test_insert_returns_first_row(sdk, backend):
    sdk.data = [{"id": 7, "nome": "A"}]
    assert backend.insert("produtos", {"nome": "A"}) == {"id": 7, "nome": "A"}
    assert sdk.last_query.call("insert") == (({"nome": "A"},), {})


def test_insert_without_rows_raises(sdk, backend):
    sdk.data = []
    with pytest.raises(BackendError):
        backend.insert("produtos", {"nome": "A"})


def test_update_and_delete_filter_by_id(sdk, backend):
    sdk.data = []
    assert backend.update("produtos", "42", {"preco": 1.0}) == []
    assert sdk.last_query.call("update") == (({"preco": 1.0},), {})
    assert sdk.last_query.call("eq") == (("id", "42"), {})

    backend.delete("produtos", "42")
    assert sdk.last_query.call("delete") is not None
    assert sdk.last_query.call("eq") == (("id", "42"), {})


def test_count_is_exact_and_headless(sdk, backend):
    sdk.count = 6
    assert backend.count("produtos") == 6
    assert sdk.last_query.call("select") == (("*",), {"count": "exact", "head": True})


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

def test_sign_in_with_password(sdk, backend):
    sdk.auth.sign_in_with_password.return_value = SimpleNamespace(
        session=SimpleNamespace(access_token="jwt"),
        user=SimpleNamespace(id="u1", email="admin@novita.com"),
    )

    session = backend.sign_in_with_password("admin@novita.com", "pw")

    assert session == {"access_token": "jwt", "user": {"id": "u1", "email": "admin@novita.com"}}
    sdk.auth.sign_in_with_password.assert_called_once_with({"email": "admin@novita.com", "password": "pw"})


def test_sign_in_rejected(sdk, backend):
    sdk.auth.sign_in_with_password.side_effect = AuthApiError("Invalid login credentials", 400, "invalid_credentials")
    with pytest.raises(BackendError) as excinfo:
        backend.sign_in_with_password("admin@novita.com", "bad")
    assert excinfo.value.message == "Invalid login credentials"
    assert excinfo.value.status == 400


def test_sign_in_without_session_fails(sdk, backend):
    sdk.auth.sign_in_with_password.return_value = SimpleNamespace(session=None, user=None)
    with pytest.raises(BackendError):
        backend.sign_in_with_password("admin@novita.com", "pw")
