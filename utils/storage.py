import json
import logging
import os
import platform
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Dict, Any

from settings import TOKEN_FILE, ACCESS_TOKEN_TTL_DAYS, REFRESH_TOKEN_TTL_DAYS

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class CredentialStore(ABC):
    """Process-wide holder of the access/refresh token pair

    Any component may read the pair. Only login, logout and the refresh
    path of the request pipeline write it. Last write wins.
    """

    @abstractmethod
    def get_access_token(self) -> Optional[str]:
        pass

    @abstractmethod
    def get_refresh_token(self) -> Optional[str]:
        pass

    @abstractmethod
    def set_tokens(self, access_token: str, refresh_token: str):
        """Replace both tokens in one write"""
        pass

    @abstractmethod
    def clear_access_token(self):
        pass

    @abstractmethod
    def clear_tokens(self):
        pass

    def has_tokens(self) -> bool:
        return bool(self.get_access_token() or self.get_refresh_token())


class MemoryCredentialStore(CredentialStore):
    """In-memory credential store, used by tests and short-lived scripts"""

    def __init__(self, access_token: Optional[str] = None, refresh_token: Optional[str] = None):
        self.access_token = access_token
        self.refresh_token = refresh_token

    def get_access_token(self) -> Optional[str]:
        return self.access_token

    def get_refresh_token(self) -> Optional[str]:
        return self.refresh_token

    def set_tokens(self, access_token: str, refresh_token: str):
        self.access_token, self.refresh_token = access_token, refresh_token

    def clear_access_token(self):
        self.access_token = None

    def clear_tokens(self):
        self.access_token = None
        self.refresh_token = None


class FileCredentialStore(CredentialStore):
    """Credential store persisted to a JSON file with secure permissions

    Each token carries its own expiry. An expired token reads as absent,
    the same way an expired cookie disappears from the browser jar.
    """

    def __init__(
        self,
        token_file: Optional[str] = None,
        access_ttl_days: int = ACCESS_TOKEN_TTL_DAYS,
        refresh_ttl_days: int = REFRESH_TOKEN_TTL_DAYS,
    ):
        self.token_path = Path(token_file if token_file else TOKEN_FILE)
        self.access_ttl = access_ttl_days * SECONDS_PER_DAY
        self.refresh_ttl = refresh_ttl_days * SECONDS_PER_DAY
        self._ensure_secure_directory()

    def _ensure_secure_directory(self):
        """Create parent directory with secure permissions"""
        parent_dir = self.token_path.parent
        if not parent_dir.exists():
            parent_dir.mkdir(parents=True, exist_ok=True)
            if platform.system() != "Windows":
                os.chmod(parent_dir, 0o700)

    def _write(self, data: Dict[str, Any]):
        self.token_path.write_text(json.dumps(data, indent=2))
        if platform.system() != "Windows":
            os.chmod(self.token_path, 0o600)

    def load_tokens(self) -> Optional[Dict[str, Any]]:
        """Load the raw token record from disk"""
        if not self.token_path.exists():
            return None

        try:
            return json.loads(self.token_path.read_text())
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to read credentials from {self.token_path}: {e}")
            return None

    def _get_unexpired(self, name: str) -> Optional[str]:
        data = self.load_tokens()
        if not data:
            return None

        entry = data.get(name)
        if not entry or not entry.get("value"):
            return None

        if int(time.time()) >= entry.get("expires_at", 0):
            return None

        return entry["value"]

    def get_access_token(self) -> Optional[str]:
        return self._get_unexpired("auth_token")

    def get_refresh_token(self) -> Optional[str]:
        return self._get_unexpired("refresh_token")

    def set_tokens(self, access_token: str, refresh_token: str):
        now = int(time.time())
        self._write({
            "auth_token": {"value": access_token, "expires_at": now + self.access_ttl},
            "refresh_token": {"value": refresh_token, "expires_at": now + self.refresh_ttl},
        })
        logger.debug(f"Saved credentials to {self.token_path}")

    def clear_access_token(self):
        data = self.load_tokens()
        if not data:
            return
        data.pop("auth_token", None)
        self._write(data)

    def clear_tokens(self):
        """Remove stored tokens"""
        if self.token_path.exists():
            self.token_path.unlink()
            logger.info("Cleared stored credentials")

    def get_status(self) -> Dict[str, Any]:
        """Get credential status without exposing secrets"""
        data = self.load_tokens() or {}
        now = int(time.time())
        status: Dict[str, Any] = {"token_file": str(self.token_path)}

        for name in ("auth_token", "refresh_token"):
            entry = data.get(name)
            if not entry:
                status[name] = {"present": False, "expires_at": None, "time_until_expiry": None}
                continue

            expires_at = entry.get("expires_at", 0)
            remaining = expires_at - now
            if remaining <= 0:
                time_str = "expired"
            else:
                days = remaining // SECONDS_PER_DAY
                hours = (remaining % SECONDS_PER_DAY) // 3600
                minutes = (remaining % 3600) // 60
                if days > 0:
                    time_str = f"{days}d {hours}h"
                elif hours > 0:
                    time_str = f"{hours}h {minutes}m"
                else:
                    time_str = f"{minutes}m"

            from datetime import datetime
            status[name] = {
                "present": remaining > 0,
                "expires_at": datetime.fromtimestamp(expires_at).isoformat(),
                "time_until_expiry": time_str,
            }

        return status

    @property
    def token_file(self) -> Path:
        """Get the token file path"""
        return self.token_path
