"""
Tests for the aggregator console sync jobs.
"""

import pytest

from aggregator import AggregatorConsole, SyncStatus
from aggregator.console import (
    ADVERTISERS_PATH,
    DUMMY_SEED_PATH,
    OFFER_SYNC_PATH,
    advertiser_list_path,
)
from settings import SEARCH_REINDEX_PATH


@pytest.fixture
def console(client):
    return AggregatorConsole(client)


@pytest.mark.anyio
async def test_advertiser_sync_message(console, backend):
    backend.on("POST", f"{ADVERTISERS_PATH}/sync", (200, {"totalAdvertisers": 12, "created": 3, "updated": 9}))
    seen = []
    console.tracker.add_listener(lambda key, status: seen.append(status))

    status = await console.sync_advertisers()

    assert seen[0] == SyncStatus(loading=True, message="Enqueued advertiser sync...")
    assert status == SyncStatus(loading=False, message="Synced 12 advertisers (created 3, updated 9)")
    assert console.advertiser_sync_status() == status


@pytest.mark.anyio
async def test_offer_sync_message(console, backend):
    backend.on("POST", OFFER_SYNC_PATH, (200, {"totalOffers": 40, "merchantsUpdated": 5}))

    status = await console.sync_offers()

    assert status.message == "Synced 40 offers (merchants updated: 5)"


@pytest.mark.anyio
async def test_sync_failure_shows_server_message(console, backend):
    backend.on("POST", OFFER_SYNC_PATH, (500, {"message": "Rakuten token missing"}))

    status = await console.sync_offers()

    assert status == SyncStatus(loading=False, message="Rakuten token missing")


@pytest.mark.anyio
async def test_sync_failure_without_message_uses_fallback(console, backend):
    backend.on("POST", f"{ADVERTISERS_PATH}/sync", (502, None))

    status = await console.sync_advertisers()

    assert status.message == "Request failed with status code 502"


@pytest.mark.anyio
async def test_product_sync_is_tracked_per_advertiser(console, backend):
    backend.on(
        "POST",
        f"{ADVERTISERS_PATH}/a1/sync-products",
        (200, {"createdProducts": 4, "updatedProducts": 0, "deactivatedOffers": 1}),
    )

    status = await console.sync_advertiser_products("a1")

    assert status.message == "Products: 4 new, 0 updated, 1 deactivated"
    assert console.product_sync_status("a1") == status
    assert console.product_sync_status("a2") is None


@pytest.mark.anyio
async def test_cleanup_reloads_advertisers(console, backend):
    backend.on(
        "DELETE",
        DUMMY_SEED_PATH,
        (200, {"deletedMerchants": 2, "deletedProducts": 30, "deletedOffers": 31, "deletedBrands": 1}),
    )
    backend.on(
        "GET",
        ADVERTISERS_PATH,
        (200, {"content": [{"id": "m1", "name": "Acme"}], "totalElements": 1, "totalPages": 1, "number": 0}),
    )

    status = await console.cleanup_dummy_data()

    assert status.message == "Deleted 2 merchants, 30 products, 31 offers."
    assert len(backend.calls("GET", ADVERTISERS_PATH)) == 1
    assert console.advertisers.content[0].name == "Acme"


@pytest.mark.anyio
async def test_cleanup_succeeds_when_reload_fails(console, backend):
    backend.on("DELETE", DUMMY_SEED_PATH, (200, {"deletedMerchants": 0, "deletedProducts": 0, "deletedOffers": 0}))
    backend.on("GET", ADVERTISERS_PATH, (500, {"message": "boom"}))

    status = await console.cleanup_dummy_data()

    assert status.message == "Deleted 0 merchants, 0 products, 0 offers."
    assert console.cleanup_status() == status


@pytest.mark.anyio
async def test_reindex_search(console, backend):
    backend.on("POST", SEARCH_REINDEX_PATH, (200, {"indexed": 120, "searchEnabled": True}))

    status = await console.reindex_search()

    assert status == SyncStatus(loading=False, message="Indexed 120 documents. Search enabled: true.")


@pytest.mark.anyio
async def test_reindex_without_body_reports_defaults(console, backend):
    backend.on("POST", SEARCH_REINDEX_PATH, (202, None))

    status = await console.reindex_search()

    assert status.message == "Indexed 0 documents. Search enabled: false."


ADVERTISER_PAGE = {
    "content": [{"id": "a1", "name": "Acme", "lastSyncedAt": "2026-10-18T12:00:00Z"}],
    "totalElements": 1,
    "totalPages": 1,
    "number": 0,
}


@pytest.mark.anyio
async def test_successful_syncs_reload_advertisers(console, backend):
    backend.on("POST", f"{ADVERTISERS_PATH}/sync", (200, {"totalAdvertisers": 1, "created": 0, "updated": 1}))
    backend.on("POST", f"{ADVERTISERS_PATH}/a1/sync-products", (200, {"createdProducts": 1}))
    backend.on("GET", ADVERTISERS_PATH, (200, ADVERTISER_PAGE))

    await console.sync_advertiser_products("a1")
    await console.sync_advertisers()

    assert len(backend.calls("GET", ADVERTISERS_PATH)) == 2
    assert console.advertisers.content[0].last_synced_at == "2026-10-18T12:00:00Z"


@pytest.mark.anyio
async def test_failed_sync_does_not_reload_advertisers(console, backend):
    backend.on("POST", f"{ADVERTISERS_PATH}/a1/sync-products", (500, {"message": "Rakuten down"}))

    status = await console.sync_advertiser_products("a1")

    assert status.message == "Rakuten down"
    assert backend.calls("GET", ADVERTISERS_PATH) == []


@pytest.mark.anyio
async def test_sync_succeeds_when_reload_fails(console, backend):
    backend.on("POST", f"{ADVERTISERS_PATH}/sync", (200, {"totalAdvertisers": 2, "created": 2, "updated": 0}))
    backend.on("GET", ADVERTISERS_PATH, (503, {"message": "busy"}))

    status = await console.sync_advertisers()

    assert status == SyncStatus(loading=False, message="Synced 2 advertisers (created 2, updated 0)")


@pytest.mark.anyio
async def test_null_counters_read_as_zero(console, backend):
    backend.on("POST", f"{ADVERTISERS_PATH}/sync", (200, {"totalAdvertisers": 3, "created": None}))

    status = await console.sync_advertisers()

    assert status == SyncStatus(loading=False, message="Synced 3 advertisers (created 0, updated 0)")


def test_advertiser_list_path_switches_to_search():
    assert advertiser_list_path(None, 0, 20) == f"{ADVERTISERS_PATH}?page=0&size=20"
    assert advertiser_list_path("acme & co", 1, 20) == (
        f"{ADVERTISERS_PATH}/search?query=acme%20%26%20co&page=1&size=20"
    )


@pytest.mark.anyio
async def test_list_advertisers_uses_search_endpoint(console, backend):
    backend.on("GET", f"{ADVERTISERS_PATH}/search", (200, {"content": [], "totalElements": 0}))

    result = await console.list_advertisers(query="acme")

    request = backend.calls("GET", f"{ADVERTISERS_PATH}/search")[0]
    assert request.url.params["query"] == "acme"
    assert request.url.params["size"] == "20"
    assert result.total_elements == 0


@pytest.mark.anyio
async def test_get_merchant(console, backend):
    backend.on(
        "GET",
        "/admin/merchants/m1",
        (200, {"id": "m1", "name": "Acme", "network": "rakuten", "active": True, "logoUrl": "https://cdn/x.png"}),
    )

    merchant = await console.get_merchant("m1")

    assert merchant.network == "rakuten"
    assert merchant.logo_url == "https://cdn/x.png"
    assert merchant.active is True
