"""Authenticated HTTP client for the storefront admin backend"""

from .errors import (
    ApiError,
    AuthenticationError,
    ForbiddenError,
    SessionExpiredError,
    TransportError,
    extract_error_message,
)
from .pipeline import AdminApiClient, PipelineState
from .request import RequestDescriptor
from .token_refresh import TokenPair, refresh_tokens

__all__ = [
    "AdminApiClient",
    "PipelineState",
    "RequestDescriptor",
    "TokenPair",
    "refresh_tokens",
    "ApiError",
    "AuthenticationError",
    "ForbiddenError",
    "SessionExpiredError",
    "TransportError",
    "extract_error_message",
]
