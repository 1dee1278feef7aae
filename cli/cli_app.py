"""Main CLI application class for the storefront admin client"""

import asyncio
from typing import Dict, List, Optional

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from activity import ActivityFeed, ActivityItem
from aggregator import AggregatorConsole, SyncStatus
from auth import AuthManager
from catalog import ProductOption, generate_variants
from client import AdminApiClient, ApiError
from providers import DataProvider
from utils.storage import FileCredentialStore
from cli.status_display import (
    format_sync_status,
    show_advertisers,
    show_credential_status,
    show_records,
    show_variants,
)


def parse_option_spec(spec: str) -> ProductOption:
    """Parse 'Size=S,M,L' into a ProductOption"""
    title, sep, values = spec.partition("=")
    if not sep or not title.strip():
        raise ValueError(f"Invalid option '{spec}', expected Title=value1,value2")
    return ProductOption(
        title=title.strip(),
        values=[value.strip() for value in values.split(",") if value.strip()],
    )


class AdminCLI:
    """Command-line interface for the storefront admin backend"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        debug: bool = False,
        console: Optional[Console] = None,
        store: Optional[FileCredentialStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.debug = debug
        self.console = console or Console()
        self.store = store if store is not None else FileCredentialStore()
        self.client = AdminApiClient(
            base_url=base_url,
            store=self.store,
            transport=transport,
            on_session_expired=self._session_expired,
        )
        self.auth = AuthManager(self.client)
        self.aggregator = AggregatorConsole(self.client)
        self.aggregator.tracker.add_listener(self._on_job_status)
        self.data = DataProvider(self.client)

        # Create event loop
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

    def _session_expired(self):
        self.console.print("[red]Session expired.[/red] Run [cyan]login[/cyan] again.")

    def close(self):
        self.loop.run_until_complete(self.client.aclose())
        self.loop.close()

    def display_header(self):
        self.console.print(Panel.fit(
            "[bold cyan]Storefront Admin[/bold cyan]\n"
            f"[dim]{self.client.base_url}[/dim]",
            border_style="cyan"
        ))

    def login(self, email: Optional[str] = None, password: Optional[str] = None) -> bool:
        email = email or Prompt.ask("Email")
        password = password or Prompt.ask("Password", password=True)
        self.loop.run_until_complete(self.auth.login(email, password))
        self.console.print("[bold green]✓ Logged in[/bold green]")
        return True

    def logout(self):
        self.auth.logout()
        self.console.print("[green]✓ Logged out[/green]")

    def status(self):
        self.display_header()
        show_credential_status(self.store, self.console)
        check = self.loop.run_until_complete(self.auth.check())
        if check.authenticated:
            self.console.print("[green]✓ Session valid[/green]")
        else:
            self.console.print(f"[red]✗ Not authenticated[/red] (go to {check.redirect_to})")

    def whoami(self):
        identity = self.loop.run_until_complete(self.auth.get_identity())
        if identity is None:
            self.console.print("[red]✗ Not authenticated[/red]")
            return False
        show_records("identity", [identity], 1, self.console)
        return True

    def list_resource(self, resource: str, page: int = 1, page_size: int = 10,
                      filters: Optional[Dict[str, str]] = None, sorters: Optional[List[tuple]] = None):
        result = self.loop.run_until_complete(
            self.data.get_list(resource, page=page, page_size=page_size, filters=filters, sorters=sorters)
        )
        show_records(resource, result.data, result.total, self.console)

    def list_advertisers(self, query: Optional[str] = None, page: int = 0):
        advertisers = self.loop.run_until_complete(self.aggregator.list_advertisers(query, page))
        show_advertisers(advertisers, self.console)

    def _report(self, status: SyncStatus):
        self.console.print(format_sync_status(status))

    def _on_job_status(self, key, status: SyncStatus):
        if status.loading:
            self._report(status)

    def sync(self, target: str, advertiser_id: Optional[str] = None) -> SyncStatus:
        if target == "advertisers":
            job = self.aggregator.sync_advertisers()
        elif target == "offers":
            job = self.aggregator.sync_offers()
        elif target == "products":
            if not advertiser_id:
                raise ValueError("An advertiser id is required for a product sync")
            job = self.aggregator.sync_advertiser_products(advertiser_id)
        else:
            raise ValueError(f"Unknown sync target: {target}")
        status = self.loop.run_until_complete(job)
        self._report(status)
        return status

    def cleanup(self) -> SyncStatus:
        status = self.loop.run_until_complete(self.aggregator.cleanup_dummy_data())
        self._report(status)
        return status

    def reindex(self) -> SyncStatus:
        status = self.loop.run_until_complete(self.aggregator.reindex_search())
        self._report(status)
        return status

    def preview_variants(self, option_specs: List[str]):
        options = [parse_option_spec(spec) for spec in option_specs]
        show_variants(generate_variants(options), self.console)

    def feed(self):
        """Print activity lines until interrupted"""
        def print_activity(item: ActivityItem):
            self.console.print(f"[cyan]{item.time:>12}[/cyan]  {item.action}")

        activity = ActivityFeed(base_url=self.client.base_url, on_activity=print_activity)
        self.console.print(f"[dim]Listening on {activity.url} ({activity.topic}), Ctrl+C to stop[/dim]")
        try:
            self.loop.run_until_complete(activity.run())
        except KeyboardInterrupt:
            self.loop.run_until_complete(activity.stop())

    def report_error(self, error: ApiError):
        self.console.print(f"[red]✗ {error.message}[/red]")
        reaction = self.auth.on_error(error)
        if reaction.get("logout"):
            self.console.print(f"[yellow]Logged out, please log in again ({reaction['redirect_to']})[/yellow]")
