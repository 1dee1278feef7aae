"""Request descriptor dispatched by the authenticated pipeline"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

# Requests to these paths never enter the refresh cycle
AUTH_PATH_MARKERS = ("/auth/login", "/auth/refresh")


@dataclass(frozen=True)
class RequestDescriptor:
    """One outbound request

    Attributes:
        method: HTTP method
        path: Path relative to the API base URL
        headers: Extra request headers
        params: Query parameters (mapping or list of pairs for repeated keys)
        body: JSON body
        data: Form fields for multipart requests
        files: Multipart files
    """
    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Any = None
    body: Any = None
    data: Optional[Dict[str, Any]] = None
    files: Optional[Dict[str, Any]] = None

    def with_authorization(self, access_token: str) -> "RequestDescriptor":
        """Clone the descriptor with a bearer Authorization header"""
        headers = dict(self.headers)
        headers["Authorization"] = f"Bearer {access_token}"
        return replace(self, headers=headers)

    @property
    def is_auth_endpoint(self) -> bool:
        return any(marker in self.path for marker in AUTH_PATH_MARKERS)
