"""Email/password login"""

import logging

import httpx

from client.errors import AuthenticationError, decode_payload
from client.token_refresh import TokenPair
from settings import AUTH_LOGIN_PATH
from utils.storage import CredentialStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
LOGIN_FAILED_MESSAGE = "An error occurred during login"


async def login(http: httpx.AsyncClient, store: CredentialStore, email: str, password: str) -> TokenPair:
    """Log in and store the returned token pair

    Args:
        http: Transport bound to the API base URL
        store: Credential store to write the pair into
        email: Account email
        password: Account password

    Returns:
        The stored token pair

    Raises:
        AuthenticationError: Credentials rejected or the login call failed
    """
    try:
        response = await http.post(
            AUTH_LOGIN_PATH,
            json={"email": email, "password": password},
            headers={"Content-Type": "application/json"},
        )
    except httpx.RequestError as e:
        logger.error(f"Login request failed: {e}")
        raise AuthenticationError(LOGIN_FAILED_MESSAGE) from e

    if not response.is_success:
        logger.warning(f"Login rejected with status {response.status_code}")
        raise AuthenticationError(
            INVALID_CREDENTIALS_MESSAGE,
            status_code=response.status_code,
            payload=decode_payload(response),
            response=response,
        )

    pair = TokenPair.from_payload(decode_payload(response))
    if pair is None:
        logger.error("Login response missing required tokens")
        raise AuthenticationError(LOGIN_FAILED_MESSAGE, status_code=response.status_code, response=response)

    store.set_tokens(pair.access_token, pair.refresh_token)
    logger.info(f"Logged in as {email}")
    return pair
