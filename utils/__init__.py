"""Shared utilities package for the storefront admin client"""

from .storage import CredentialStore, FileCredentialStore, MemoryCredentialStore
from .logging_setup import configure_logging

__all__ = [
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
    "configure_logging",
]
