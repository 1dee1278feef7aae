"""Error taxonomy and human-readable message extraction"""

from typing import Any, Optional

import httpx

DEFAULT_ERROR_MESSAGE = "An error occurred"


class ApiError(Exception):
    """Error raised for any failed backend call

    Attributes:
        message: Human-readable message suitable for a notification
        status_code: HTTP status, or None when no response was received
        payload: Decoded response body, if any
        response: The httpx response, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
        response: Optional[httpx.Response] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload
        self.response = response

    def __str__(self) -> str:
        return self.message


class AuthenticationError(ApiError):
    """Invalid credentials at login, never retried"""


class SessionExpiredError(ApiError):
    """The session could not be recovered and credentials were cleared"""


class ForbiddenError(ApiError):
    """403 - a permission problem, never a reason to log out"""


class TransportError(ApiError):
    """No response was received from the backend"""


def extract_error_message(
    payload: Any = None,
    transport_text: Optional[str] = None,
    fallback: str = DEFAULT_ERROR_MESSAGE,
) -> str:
    """Pick the most useful message for display

    Precedence: server ``message`` field, server ``error`` field,
    transport-level error text, then the fallback.

    Args:
        payload: Decoded response body (any JSON value or None)
        transport_text: Text describing the transport failure
        fallback: Message used when nothing else is available

    Returns:
        The extracted message
    """
    if isinstance(payload, dict):
        for field in ("message", "error"):
            value = payload.get(field)
            if value:
                return value if isinstance(value, str) else str(value)

    if transport_text:
        return transport_text

    return fallback


def decode_payload(response: httpx.Response) -> Any:
    """Best-effort JSON decoding of a response body"""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def error_from_response(response: httpx.Response, fallback: str = DEFAULT_ERROR_MESSAGE) -> ApiError:
    """Build the typed error for a non-2xx response"""
    payload = decode_payload(response)
    text = response.text.strip() if payload is None else ""
    message = extract_error_message(
        payload,
        transport_text=text or f"Request failed with status code {response.status_code}",
        fallback=fallback,
    )

    error_cls = ForbiddenError if response.status_code == 403 else ApiError
    return error_cls(message, status_code=response.status_code, payload=payload, response=response)


def raise_for_response(response: httpx.Response, fallback: str = DEFAULT_ERROR_MESSAGE) -> None:
    """Raise the typed error for a non-2xx response, do nothing otherwise"""
    if response.is_success:
        return
    raise error_from_response(response, fallback=fallback)


def error_from_transport(exc: Exception, fallback: str = DEFAULT_ERROR_MESSAGE) -> TransportError:
    """Build the typed error for a request that never got a response"""
    return TransportError(extract_error_message(transport_text=str(exc), fallback=fallback))
