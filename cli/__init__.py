"""CLI package for the storefront admin client

This package provides a command-line interface over the admin
backend: session management, resource listings, aggregator jobs and
the live activity feed.
"""

from cli.cli_app import AdminCLI
from cli.main import main

__all__ = [
    "AdminCLI",
    "main",
]
