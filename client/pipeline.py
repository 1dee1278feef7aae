"""Authenticated request pipeline with refresh-on-401 retry"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

import httpx

from settings import API_URL
from utils.storage import CredentialStore, FileCredentialStore
from .errors import (
    SessionExpiredError,
    decode_payload,
    error_from_transport,
    raise_for_response,
)
from .request import RequestDescriptor
from .token_refresh import refresh_tokens

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired, please log in again"


class PipelineState(Enum):
    """Progress of one send() call

    A call only moves forward: NORMAL -> REFRESHING -> RETRIED. A 401
    observed in RETRIED is returned to the caller untouched.
    """
    NORMAL = "normal"
    REFRESHING = "refreshing"
    RETRIED = "retried"


class AdminApiClient:
    """HTTP client for the admin backend

    Attaches the stored bearer token to every request and transparently
    recovers from access-token expiry with a single refresh-and-retry.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        store: Optional[CredentialStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_session_expired: Optional[Callable[[], None]] = None,
    ):
        """Initialize the client

        Args:
            base_url: Backend base URL (default: API_URL setting)
            store: Credential store (default: file-backed store)
            transport: Optional httpx transport, used by tests
            on_session_expired: Called after credentials are cleared because
                the session could not be recovered
        """
        self.base_url = (base_url or API_URL).rstrip("/")
        self.store = store if store is not None else FileCredentialStore()
        self.on_session_expired = on_session_expired
        self.http = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    def _authorize(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        """Attach the current access token, if any

        A missing token is not an error; the request goes out
        unauthenticated and the server decides.
        """
        access_token = self.store.get_access_token()
        if access_token:
            return descriptor.with_authorization(access_token)
        return descriptor

    async def _dispatch(self, descriptor: RequestDescriptor) -> httpx.Response:
        logger.debug(f"{descriptor.method} {descriptor.path}")
        return await self.http.request(
            descriptor.method,
            descriptor.path,
            headers=dict(descriptor.headers),
            params=descriptor.params,
            json=descriptor.body,
            data=descriptor.data,
            files=descriptor.files,
        )

    def _expire_session(self, response: httpx.Response) -> SessionExpiredError:
        self.store.clear_tokens()
        if self.on_session_expired is not None:
            self.on_session_expired()
        return SessionExpiredError(
            SESSION_EXPIRED_MESSAGE,
            status_code=response.status_code,
            payload=decode_payload(response),
            response=response,
        )

    async def _refresh_session(self, response: httpx.Response) -> str:
        """Run one refresh cycle and return the new access token

        Raises:
            SessionExpiredError: No refresh token, or the refresh failed
        """
        refresh_token = self.store.get_refresh_token()
        if not refresh_token:
            logger.warning("Access token rejected and no refresh token available")
            raise self._expire_session(response)

        pair = await refresh_tokens(self.http, refresh_token)
        if pair is None:
            raise self._expire_session(response)

        self.store.set_tokens(pair.access_token, pair.refresh_token)
        return pair.access_token

    async def send(self, descriptor: RequestDescriptor) -> httpx.Response:
        """Dispatch a request, recovering once from an expired access token

        Args:
            descriptor: The request to send

        Returns:
            The final response, whatever its status

        Raises:
            SessionExpiredError: A 401 could not be recovered
            httpx.RequestError: The request itself got no response
        """
        state = PipelineState.NORMAL
        outbound = self._authorize(descriptor)

        while True:
            response = await self._dispatch(outbound)

            if (
                state is PipelineState.RETRIED
                or response.status_code != 401
                or descriptor.is_auth_endpoint
            ):
                return response

            state = PipelineState.REFRESHING
            logger.info(f"401 on {descriptor.method} {descriptor.path}, refreshing session")
            access_token = await self._refresh_session(response)

            state = PipelineState.RETRIED
            outbound = descriptor.with_authorization(access_token)
            logger.debug(f"Retrying {descriptor.method} {descriptor.path} with refreshed token")

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        body: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Send a request and raise a typed ApiError for any non-2xx response"""
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            headers=headers or {},
            params=params,
            body=body,
            data=data,
            files=files,
        )
        try:
            response = await self.send(descriptor)
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed without a response: {e}")
            raise error_from_transport(e) from e

        raise_for_response(response)
        return response

    async def request_json(self, method: str, path: str, **kwargs) -> Any:
        """Like request(), returning the decoded JSON body (None if empty)"""
        response = await self.request(method, path, **kwargs)
        return decode_payload(response)

    async def get(self, path: str, params: Any = None) -> Any:
        return await self.request_json("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request_json("POST", path, body=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request_json("PUT", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self.request_json("DELETE", path)
