"""Refresh-token exchange"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from settings import AUTH_REFRESH_PATH
from .errors import decode_payload

logger = logging.getLogger(__name__)


@dataclass
class TokenPair:
    """Access/refresh pair returned by login and refresh

    Attributes:
        access_token: Bearer token attached to every request
        refresh_token: Single-use token exchanged for a new pair
    """
    access_token: str
    refresh_token: str

    @classmethod
    def from_payload(cls, payload) -> Optional["TokenPair"]:
        if not isinstance(payload, dict):
            return None
        access_token = payload.get("accessToken")
        refresh_token = payload.get("refreshToken")
        if not access_token or not refresh_token:
            return None
        return cls(access_token=access_token, refresh_token=refresh_token)


async def refresh_tokens(http: httpx.AsyncClient, refresh_token: str) -> Optional[TokenPair]:
    """Exchange a refresh token for a new pair

    A network error is treated the same as an explicit rejection.

    Args:
        http: Transport bound to the API base URL
        refresh_token: Current refresh token

    Returns:
        The new token pair, or None if the refresh failed
    """
    logger.info("Attempting to refresh access token...")
    try:
        response = await http.post(
            AUTH_REFRESH_PATH,
            json={"refreshToken": refresh_token},
            headers={"Content-Type": "application/json"},
        )
    except httpx.RequestError as e:
        logger.error(f"Token refresh request failed: {e}")
        return None

    if not response.is_success:
        logger.error(f"Token refresh failed with status {response.status_code}: {response.text}")
        return None

    pair = TokenPair.from_payload(decode_payload(response))
    if pair is None:
        logger.error("Token refresh response missing required tokens")
        return None

    logger.info("Successfully refreshed access token")
    return pair
