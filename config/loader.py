"""Configuration loader for the storefront admin client

Values come from the process environment, then a ``.env`` file, then the
default given by the caller. Environment strings are validated with
pydantic into the type each setting needs; an invalid value is logged
and replaced by the default.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Type

from dotenv import load_dotenv
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Typed access to environment-backed settings"""

    def __init__(self, env_path: Optional[str] = None):
        """
        Args:
            env_path: Path to a .env file (default: ./.env). Variables already
                set in the environment take precedence over the file.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        if self.env_path.exists():
            load_dotenv(dotenv_path=self.env_path, override=False)
            logger.debug(f"Loaded environment variables from {self.env_path}")

    def _raw(self, name: str) -> Optional[str]:
        value = os.getenv(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def _read(self, name: str, default: Any, value_type: Type) -> Any:
        raw = self._raw(name)
        if raw is None:
            return default
        try:
            return TypeAdapter(value_type).validate_python(raw)
        except ValidationError:
            logger.warning(f"Invalid {value_type.__name__} for {name}={raw!r}, using default: {default}")
            return default

    def get_str(self, name: str, default: str) -> str:
        return self._read(name, default, str)

    def get_bool(self, name: str, default: bool) -> bool:
        """Accepts true/false, 1/0, yes/no, on/off"""
        return self._read(name, default, bool)

    def get_int(self, name: str, default: int, minimum: Optional[int] = None) -> int:
        value = self._read(name, default, int)
        if minimum is not None and value < minimum:
            logger.warning(f"{name}={value} is below {minimum}, using default: {default}")
            return default
        return value

    def get_float(self, name: str, default: float, minimum: Optional[float] = None) -> float:
        value = self._read(name, default, float)
        if minimum is not None and value < minimum:
            logger.warning(f"{name}={value} is below {minimum}, using default: {default}")
            return default
        return value

    def get_path(self, name: str, default: str) -> str:
        """File system path with ``~`` expanded"""
        return str(Path(self.get_str(name, default)).expanduser())

    def get_url(self, name: str, default: str) -> str:
        """http(s) base URL without a trailing slash"""
        raw = self._raw(name)
        if raw is not None:
            try:
                TypeAdapter(AnyHttpUrl).validate_python(raw)
                return raw.rstrip("/")
            except ValidationError:
                logger.warning(f"Invalid URL for {name}={raw!r}, using default: {default}")
        return default.rstrip("/")

    def get(self, name: str, default: Any) -> Any:
        """Read a setting typed after its default"""
        # bool before int: bool is an int subclass
        if isinstance(default, bool):
            return self.get_bool(name, default)
        if isinstance(default, int):
            return self.get_int(name, default)
        if isinstance(default, float):
            return self.get_float(name, default)
        return self.get_str(name, default)


_config_loader = None


def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader
