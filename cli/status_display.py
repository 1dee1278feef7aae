"""Table rendering for CLI output"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from rich.table import Table
from rich.text import Text

from aggregator.models import PaginatedAdvertiserResponse, SyncStatus
from catalog.models import ProductVariant
from utils.storage import FileCredentialStore


def _titled_table(console, title: str) -> Table:
    """Print the title on its own line above an untitled table"""
    console.print(Text(title, style="italic"))
    return Table()


def show_credential_status(store: FileCredentialStore, console):
    """
    Display stored credential status

    Args:
        store: FileCredentialStore instance
        console: Rich console for output
    """
    status = store.get_status()

    table = Table(title="Credential Status")
    table.add_column("Token", style="cyan")
    table.add_column("Present")
    table.add_column("Expires At")
    table.add_column("Time Until Expiry")

    for name in ("auth_token", "refresh_token"):
        entry = status[name]
        table.add_row(
            name,
            "[green]Yes[/green]" if entry["present"] else "[red]No[/red]",
            entry["expires_at"] or "-",
            entry["time_until_expiry"] or "-",
        )

    console.print(table)
    console.print(f"[dim]Token file: {status['token_file']}[/dim]")


def show_records(title: str, records: Sequence[Dict[str, Any]], total: int, console, columns: Optional[List[str]] = None):
    """Display a page of generic records"""
    if not records:
        console.print(f"[yellow]No {title} found[/yellow]")
        return

    columns = columns or [key for key, value in records[0].items() if not isinstance(value, (dict, list))][:6]
    table = _titled_table(console, f"{title} ({len(records)} of {total})")
    for column in columns:
        table.add_column(column, style="cyan" if column == "id" else None)
    for record in records:
        table.add_row(*[str(record.get(column, "")) for column in columns])
    console.print(table)


def show_advertisers(page: PaginatedAdvertiserResponse, console):
    table = _titled_table(console, f"Advertisers (page {page.number + 1} of {max(page.total_pages, 1)}, {page.total_elements} total)")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Program")
    table.add_column("Last sync")
    for advertiser in page.content:
        table.add_row(
            advertiser.id,
            advertiser.name,
            str(advertiser.program_id or "-"),
            advertiser.last_synced_at or "Never synced",
        )
    console.print(table)


def show_variants(variants: Iterable[ProductVariant], console):
    variants = list(variants)
    if not variants:
        console.print("[yellow]No variants: every option needs at least one value[/yellow]")
        return

    table = _titled_table(console, f"Generated Variants ({len(variants)})")
    table.add_column("#", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Options")
    table.add_column("Price")
    for index, variant in enumerate(variants, start=1):
        price = variant.prices[0]
        options = ", ".join(f"{key}={value}" for key, value in variant.options.items())
        table.add_row(str(index), variant.title, options, f"{price.amount:.2f} {price.currency_code}")
    console.print(table)


def format_sync_status(status: SyncStatus) -> str:
    if status.loading:
        return f"[yellow]{status.message}[/yellow]"
    return f"[green]{status.message}[/green]"
