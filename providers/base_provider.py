"""
Base provider for REST resource adapters.
Binds an authenticated client to a resource root.
"""
from typing import Optional

from client.pipeline import AdminApiClient


class BaseProvider:
    """Base class for providers that translate UI actions into REST calls"""

    def __init__(self, client: AdminApiClient, api_url: str):
        """
        Initialize provider with a client and resource root

        Args:
            client: Authenticated API client
            api_url: Path prefix of the resources, e.g. /admin
        """
        self.client = client
        self.api_url = api_url.rstrip("/")

    def url(self, *parts: Optional[object]) -> str:
        """Join the root and path segments into a request path"""
        segments = [str(part).strip("/") for part in parts if part is not None and str(part) != ""]
        return "/".join([self.api_url, *segments])
