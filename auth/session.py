"""Session probing against the identity endpoint"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from client.errors import SessionExpiredError, decode_payload
from client.pipeline import AdminApiClient
from client.request import RequestDescriptor
from client.token_refresh import refresh_tokens
from settings import AUTH_ME_PATH, LOGIN_REDIRECT

logger = logging.getLogger(__name__)


@dataclass
class AuthCheck:
    """Outcome of a session check

    Attributes:
        authenticated: Whether the stored session is usable
        redirect_to: Where an unauthenticated caller should go
    """
    authenticated: bool
    redirect_to: Optional[str] = None


async def _probe_identity(client: AdminApiClient) -> httpx.Response:
    """GET the identity endpoint

    A 401 is handled by the pipeline. A 403 from this endpoint also means
    a stale session, so it gets one explicit refresh and re-probe, unless
    the pipeline already refreshed during this probe.

    Raises:
        SessionExpiredError: The session could not be recovered
        httpx.RequestError: No response
    """
    descriptor = RequestDescriptor(method="GET", path=AUTH_ME_PATH)
    access_token = client.store.get_access_token()
    response = await client.send(descriptor)
    if response.status_code != 403:
        return response

    # A changed access token means the pipeline refreshed on a 401
    if client.store.get_access_token() != access_token:
        return response

    refresh_token = client.store.get_refresh_token()
    if not refresh_token:
        return response

    pair = await refresh_tokens(client.http, refresh_token)
    if pair is None:
        return response

    client.store.set_tokens(pair.access_token, pair.refresh_token)
    return await client.send(descriptor)


async def fetch_identity(client: AdminApiClient) -> Optional[Dict[str, Any]]:
    """Return the logged-in identity, or None

    Credentials are cleared when the backend rejects the session. A
    network failure returns None and leaves credentials alone.
    """
    if not client.store.get_access_token():
        return None

    try:
        response = await _probe_identity(client)
    except SessionExpiredError:
        return None
    except httpx.RequestError as e:
        logger.warning(f"Identity probe failed: {e}")
        return None

    if response.is_success:
        return decode_payload(response)

    if response.status_code in (401, 403):
        client.store.clear_tokens()
    return None


async def check_session(client: AdminApiClient) -> AuthCheck:
    """Decide whether the stored session is authenticated"""
    if not client.store.get_access_token():
        return AuthCheck(authenticated=False, redirect_to=LOGIN_REDIRECT)

    try:
        response = await _probe_identity(client)
        if response.is_success:
            return AuthCheck(authenticated=True)
    except SessionExpiredError:
        pass
    except httpx.RequestError as e:
        logger.warning(f"Session check failed without a response: {e}")

    client.store.clear_tokens()
    return AuthCheck(authenticated=False, redirect_to=LOGIN_REDIRECT)
