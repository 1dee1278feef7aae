"""
Tests for login, logout, session checks and error triage.
"""

import pytest

from auth import AuthManager, INVALID_CREDENTIALS_MESSAGE, LOGIN_FAILED_MESSAGE
from client import ApiError, AuthenticationError, ForbiddenError
from settings import AUTH_LOGIN_PATH, AUTH_ME_PATH, AUTH_REFRESH_PATH
from helpers import network_error

NEW_PAIR = {"accessToken": "new-access", "refreshToken": "new-refresh"}
IDENTITY = {"id": "u1", "email": "admin@shop.test", "roles": ["ADMIN"]}


@pytest.fixture
def auth(client):
    return AuthManager(client)


@pytest.mark.anyio
async def test_login_stores_token_pair(auth, backend, store):
    store.clear_tokens()
    backend.on("POST", AUTH_LOGIN_PATH, (200, NEW_PAIR))

    pair = await auth.login("admin@shop.test", "hunter22")

    assert pair.access_token == "new-access"
    assert store.get_access_token() == "new-access"
    assert store.get_refresh_token() == "new-refresh"
    assert backend.body(backend.requests[0]) == {"email": "admin@shop.test", "password": "hunter22"}


@pytest.mark.anyio
async def test_rejected_login_is_not_refreshed(auth, backend, store):
    store.clear_tokens()
    backend.on("POST", AUTH_LOGIN_PATH, (401, {"message": "Bad credentials"}))

    with pytest.raises(AuthenticationError) as excinfo:
        await auth.login("admin@shop.test", "wrong")

    assert excinfo.value.message == INVALID_CREDENTIALS_MESSAGE
    assert backend.calls("POST", AUTH_REFRESH_PATH) == []
    assert not store.has_tokens()


@pytest.mark.anyio
async def test_login_network_error(auth, backend):
    backend.on("POST", AUTH_LOGIN_PATH, network_error)

    with pytest.raises(AuthenticationError) as excinfo:
        await auth.login("admin@shop.test", "hunter22")

    assert excinfo.value.message == LOGIN_FAILED_MESSAGE


@pytest.mark.anyio
async def test_login_without_tokens_in_response(auth, backend):
    backend.on("POST", AUTH_LOGIN_PATH, (200, {"accessToken": "only-access"}))

    with pytest.raises(AuthenticationError) as excinfo:
        await auth.login("admin@shop.test", "hunter22")

    assert excinfo.value.message == LOGIN_FAILED_MESSAGE


def test_logout_clears_tokens(auth, store):
    result = auth.logout()

    assert result == {"success": True, "redirect_to": "/login"}
    assert store.get_access_token() is None
    assert store.get_refresh_token() is None


@pytest.mark.anyio
async def test_check_without_token_redirects(auth, backend, store):
    store.clear_tokens()

    result = await auth.check()

    assert not result.authenticated
    assert result.redirect_to == "/login"
    assert backend.requests == []


@pytest.mark.anyio
async def test_check_with_valid_session(auth, backend):
    backend.on("GET", AUTH_ME_PATH, (200, IDENTITY))

    result = await auth.check()

    assert result.authenticated
    assert result.redirect_to is None


@pytest.mark.anyio
async def test_check_refreshes_on_forbidden_identity(auth, backend, store):
    backend.on("GET", AUTH_ME_PATH, (403, {"error": "Forbidden"}), (200, IDENTITY))
    backend.on("POST", AUTH_REFRESH_PATH, (200, NEW_PAIR))

    result = await auth.check()

    assert result.authenticated
    probes = backend.calls("GET", AUTH_ME_PATH)
    assert len(probes) == 2
    assert probes[1].headers["Authorization"] == "Bearer new-access"
    assert store.get_refresh_token() == "new-refresh"


@pytest.mark.anyio
async def test_check_clears_tokens_when_refresh_fails(auth, backend, store, expired_sessions):
    backend.on("GET", AUTH_ME_PATH, (401, None))
    backend.on("POST", AUTH_REFRESH_PATH, (401, {"message": "refresh token revoked"}))

    result = await auth.check()

    assert not result.authenticated
    assert result.redirect_to == "/login"
    assert not store.has_tokens()
    assert expired_sessions == [True]


@pytest.mark.anyio
async def test_check_network_error_logs_out(auth, backend, store):
    backend.on("GET", AUTH_ME_PATH, network_error)

    result = await auth.check()

    assert not result.authenticated
    assert not store.has_tokens()


@pytest.mark.anyio
async def test_get_identity(auth, backend):
    backend.on("GET", AUTH_ME_PATH, (200, IDENTITY))

    assert await auth.get_identity() == IDENTITY


@pytest.mark.anyio
async def test_get_identity_network_error_keeps_tokens(auth, backend, store):
    backend.on("GET", AUTH_ME_PATH, network_error)

    assert await auth.get_identity() is None
    assert store.get_access_token() == "old-access"


def test_on_error_logs_out_only_on_401(auth, store):
    assert auth.on_error(ForbiddenError("Forbidden", status_code=403)) == {}
    assert store.get_access_token() == "old-access"

    assert auth.on_error(ApiError("Unauthorized", status_code=401)) == {"logout": True, "redirect_to": "/login"}
    assert store.get_access_token() is None
    assert store.get_refresh_token() == "old-refresh"


@pytest.mark.anyio
async def test_check_refreshes_at_most_once_per_probe(auth, backend, store):
    backend.on("GET", AUTH_ME_PATH, (401, None), (403, {"error": "Forbidden"}))
    backend.on("POST", AUTH_REFRESH_PATH, (200, NEW_PAIR))

    result = await auth.check()

    assert not result.authenticated
    assert len(backend.calls("POST", AUTH_REFRESH_PATH)) == 1
    assert len(backend.calls("GET", AUTH_ME_PATH)) == 2
    assert not store.has_tokens()
