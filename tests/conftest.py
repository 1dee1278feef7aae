import pytest

from client import AdminApiClient
from utils.storage import MemoryCredentialStore
from helpers import FakeBackend

BASE_URL = "http://api.test"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def store():
    return MemoryCredentialStore(access_token="old-access", refresh_token="old-refresh")


@pytest.fixture
def expired_sessions():
    return []


@pytest.fixture
def client(backend, store, expired_sessions):
    return AdminApiClient(
        base_url=BASE_URL,
        store=store,
        transport=backend.transport(),
        on_session_expired=lambda: expired_sessions.append(True),
    )
