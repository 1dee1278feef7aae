"""Authentication package for the storefront admin backend"""

from typing import Any, Dict, Optional

from client.errors import ApiError
from client.pipeline import AdminApiClient
from settings import LOGIN_REDIRECT
from .login import login, INVALID_CREDENTIALS_MESSAGE, LOGIN_FAILED_MESSAGE
from .session import AuthCheck, check_session, fetch_identity


class AuthManager:
    """Login, logout and session checks

    This class orchestrates the session lifecycle on top of an
    AdminApiClient and its credential store:
    - Login with email/password
    - Logout
    - Session check and identity lookup
    - Error triage for failed calls
    """

    def __init__(self, client: AdminApiClient):
        self.client = client

    @property
    def store(self):
        return self.client.store

    async def login(self, email: str, password: str):
        """Log in and persist the token pair

        Raises:
            AuthenticationError: Invalid credentials or login failure
        """
        return await login(self.client.http, self.store, email, password)

    def logout(self) -> Dict[str, Any]:
        """Forget both tokens

        Returns:
            Dict with success flag and redirect target
        """
        self.store.clear_tokens()
        return {"success": True, "redirect_to": LOGIN_REDIRECT}

    async def check(self) -> AuthCheck:
        return await check_session(self.client)

    async def get_identity(self) -> Optional[Dict[str, Any]]:
        return await fetch_identity(self.client)

    def on_error(self, error: ApiError) -> Dict[str, Any]:
        """Decide how the UI should react to a failed call

        Only a 401 logs out. A 403 is a permission problem and keeps the
        session.
        """
        if getattr(error, "status_code", None) == 401:
            self.store.clear_access_token()
            return {"logout": True, "redirect_to": LOGIN_REDIRECT}
        return {}


__all__ = [
    "AuthManager",
    "AuthCheck",
    "login",
    "check_session",
    "fetch_identity",
    "INVALID_CREDENTIALS_MESSAGE",
    "LOGIN_FAILED_MESSAGE",
]
