"""
Tests for CLI parsing and table rendering.
"""

import pytest
from rich.console import Console

from aggregator import SyncStatus
from aggregator.console import OFFER_SYNC_PATH
from catalog import generate_variants
from cli.cli_app import AdminCLI, parse_option_spec
from cli.main import build_parser
from cli.status_display import format_sync_status, show_records, show_variants
from utils.storage import FileCredentialStore
from helpers import FakeBackend


def test_parse_option_spec():
    option = parse_option_spec(" Size = S, M ,,L ")

    assert option.title == "Size"
    assert option.values == ["S", "M", "L"]


@pytest.mark.parametrize("spec", ["Size", "=S,M"])
def test_parse_option_spec_rejects_malformed(spec):
    with pytest.raises(ValueError):
        parse_option_spec(spec)


def test_build_parser_sync_products():
    args = build_parser().parse_args(["--debug", "sync", "products", "adv-1"])

    assert args.debug is True
    assert args.command == "sync"
    assert args.target == "products"
    assert args.advertiser_id == "adv-1"


def test_build_parser_repeated_options():
    args = build_parser().parse_args(
        ["list", "products", "--sort", "title:asc", "--sort", "id:desc", "--filter", "status=DRAFT"]
    )

    assert args.sort == ["title:asc", "id:desc"]
    assert args.filter == ["status=DRAFT"]
    assert args.page == 1


def test_build_parser_rejects_unknown_sync_target():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["sync", "brands"])


def test_show_variants_renders_table():
    console = Console(record=True, width=120)
    variants = generate_variants([parse_option_spec("Size=S,M"), parse_option_spec("Color=Red")])

    show_variants(variants, console)

    output = console.export_text()
    assert "Generated Variants (2)" in output
    assert "S / Red" in output
    assert "Size=M, Color=Red" in output
    assert "0.00 USD" in output


def test_show_variants_explains_empty_result():
    console = Console(record=True, width=120)

    show_variants([], console)

    assert "every option needs at least one value" in console.export_text()


def test_show_records_skips_nested_columns():
    console = Console(record=True, width=120)

    show_records("products", [{"id": "p1", "title": "Tee", "variants": [{"id": "v1"}]}], 5, console)

    output = console.export_text()
    assert "products (1 of 5)" in output
    assert "Tee" in output
    assert "variants" not in output


def test_format_sync_status():
    assert format_sync_status(SyncStatus(loading=True, message="Syncing products...")) == (
        "[yellow]Syncing products...[/yellow]"
    )
    assert format_sync_status(SyncStatus(loading=False, message="done")) == "[green]done[/green]"


def test_narrow_listing_keeps_title_on_one_line():
    console = Console(record=True, width=120)

    show_records("collections", [{"id": "c"}], 12345, console)

    assert "collections (1 of 12345)" in console.export_text()


def test_repeated_syncs_report_each_pending_message_once(tmp_path):
    backend = FakeBackend()
    backend.on("POST", OFFER_SYNC_PATH, (200, {"totalOffers": 1, "merchantsUpdated": 0}))
    store = FileCredentialStore(str(tmp_path / "credentials.json"))
    store.set_tokens("access", "refresh")
    console = Console(record=True, width=120)
    cli = AdminCLI(base_url="http://api.test", console=console, store=store, transport=backend.transport())

    try:
        cli.sync("offers")
        cli.sync("offers")
    finally:
        cli.close()

    output = console.export_text()
    assert output.count("Enqueued offer metadata sync...") == 2
    assert output.count("Synced 1 offers (merchants updated: 0)") == 2
