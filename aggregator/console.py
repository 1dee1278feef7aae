"""Aggregator console: affiliate catalog sync jobs on the backend"""

import logging
from typing import Hashable, Optional
from urllib.parse import quote

from client.errors import ApiError
from client.pipeline import AdminApiClient
from settings import ADVERTISER_PAGE_SIZE, SEARCH_REINDEX_PATH
from .jobs import JobSpec, JobStatusTracker
from .models import (
    AdvertiserSyncResult,
    AffiliateMerchant,
    DummyCleanupResult,
    OfferSyncResult,
    PaginatedAdvertiserResponse,
    ProductSyncResult,
    ReindexResult,
    SyncStatus,
)

logger = logging.getLogger(__name__)

RAKUTEN_ROOT = "/admin/aggregator/rakuten"
ADVERTISERS_PATH = f"{RAKUTEN_ROOT}/advertisers"
ADVERTISER_SEARCH_PATH = f"{RAKUTEN_ROOT}/advertisers/search"
OFFER_SYNC_PATH = f"{RAKUTEN_ROOT}/offers/sync"
DUMMY_SEED_PATH = "/admin/dev/seed/dummyjson"
MERCHANTS_PATH = "/admin/merchants"


def _describe_advertiser_sync(payload) -> str:
    result = AdvertiserSyncResult.model_validate(payload)
    return f"Synced {result.total_advertisers} advertisers (created {result.created}, updated {result.updated})"


def _describe_offer_sync(payload) -> str:
    result = OfferSyncResult.model_validate(payload)
    return f"Synced {result.total_offers} offers (merchants updated: {result.merchants_updated})"


def _describe_product_sync(payload) -> str:
    result = ProductSyncResult.model_validate(payload)
    return (
        f"Products: {result.created_products} new, {result.updated_products} updated, "
        f"{result.deactivated_offers} deactivated"
    )


def _describe_cleanup(payload) -> str:
    result = DummyCleanupResult.model_validate(payload)
    return (
        f"Deleted {result.deleted_merchants} merchants, {result.deleted_products} products, "
        f"{result.deleted_offers} offers."
    )


def _describe_reindex(payload) -> str:
    result = ReindexResult.model_validate(payload)
    search_enabled = "true" if result.search_enabled else "false"
    return f"Indexed {result.indexed or 0} documents. Search enabled: {search_enabled}."


ADVERTISER_SYNC = JobSpec(
    name="advertiser-sync",
    pending_message="Enqueued advertiser sync...",
    failure_message="Advertiser sync failed",
    describe=_describe_advertiser_sync,
)

OFFER_SYNC = JobSpec(
    name="offer-sync",
    pending_message="Enqueued offer metadata sync...",
    failure_message="Offer sync failed",
    describe=_describe_offer_sync,
)

PRODUCT_SYNC = JobSpec(
    name="product-sync",
    pending_message="Syncing products...",
    failure_message="Product sync failed",
    describe=_describe_product_sync,
)

DUMMY_CLEANUP = JobSpec(
    name="dummy-cleanup",
    pending_message="Deleting dummy JSON data…",
    failure_message="Cleanup failed",
    describe=_describe_cleanup,
)

SEARCH_REINDEX = JobSpec(
    name="search-reindex",
    pending_message="Reindexing search...",
    failure_message="Search reindex failed",
    describe=_describe_reindex,
)


def product_sync_key(advertiser_id: str) -> Hashable:
    """Record key of a per-advertiser product sync"""
    return (PRODUCT_SYNC.name, advertiser_id)


def advertiser_list_path(query: Optional[str], page: int, page_size: int) -> str:
    """Listing path, switching to the search endpoint when a query is given"""
    if query:
        return f"{ADVERTISER_SEARCH_PATH}?query={quote(query, safe='')}&page={page}&size={page_size}"
    return f"{ADVERTISERS_PATH}?page={page}&size={page_size}"


class AggregatorConsole:
    """Triggers catalog sync jobs and keeps their status records"""

    def __init__(self, client: AdminApiClient, tracker: Optional[JobStatusTracker] = None):
        self.client = client
        self.tracker = tracker or JobStatusTracker()
        self.advertisers: Optional[PaginatedAdvertiserResponse] = None

    async def list_advertisers(
        self,
        query: Optional[str] = None,
        page: int = 0,
        page_size: int = ADVERTISER_PAGE_SIZE,
    ) -> PaginatedAdvertiserResponse:
        payload = await self.client.get(advertiser_list_path(query, page, page_size))
        self.advertisers = PaginatedAdvertiserResponse.model_validate(payload or {})
        return self.advertisers

    async def get_merchant(self, merchant_id: str) -> AffiliateMerchant:
        payload = await self.client.get(f"{MERCHANTS_PATH}/{merchant_id}")
        return AffiliateMerchant.model_validate(payload)

    async def _reload_advertisers(self, reason: str) -> None:
        """Reload the first advertiser page; a failed reload is only logged"""
        try:
            await self.list_advertisers()
        except ApiError as e:
            logger.warning(f"Failed to reload advertisers after {reason}: {e.message}")

    async def sync_advertisers(self) -> SyncStatus:
        """Sync advertisers, then reload the advertiser list"""
        async def sync():
            result = await self.client.post(f"{ADVERTISERS_PATH}/sync")
            await self._reload_advertisers("advertiser sync")
            return result

        return await self.tracker.run(ADVERTISER_SYNC, sync)

    async def sync_offers(self) -> SyncStatus:
        return await self.tracker.run(OFFER_SYNC, lambda: self.client.post(OFFER_SYNC_PATH))

    async def sync_advertiser_products(self, advertiser_id: str) -> SyncStatus:
        """Sync one advertiser's products, then reload the advertiser list"""
        async def sync():
            result = await self.client.post(f"{ADVERTISERS_PATH}/{advertiser_id}/sync-products")
            await self._reload_advertisers(f"product sync of {advertiser_id}")
            return result

        return await self.tracker.run(PRODUCT_SYNC, sync, key=product_sync_key(advertiser_id))

    async def cleanup_dummy_data(self) -> SyncStatus:
        """Delete seeded dummy catalog data, then reload the advertiser list"""
        async def cleanup():
            result = await self.client.delete(DUMMY_SEED_PATH)
            await self._reload_advertisers("cleanup")
            return result

        return await self.tracker.run(DUMMY_CLEANUP, cleanup)

    async def reindex_search(self) -> SyncStatus:
        return await self.tracker.run(SEARCH_REINDEX, lambda: self.client.post(SEARCH_REINDEX_PATH, {}))

    def advertiser_sync_status(self) -> Optional[SyncStatus]:
        return self.tracker.status(ADVERTISER_SYNC.name)

    def offer_sync_status(self) -> Optional[SyncStatus]:
        return self.tracker.status(OFFER_SYNC.name)

    def product_sync_status(self, advertiser_id: str) -> Optional[SyncStatus]:
        return self.tracker.status(product_sync_key(advertiser_id))

    def cleanup_status(self) -> Optional[SyncStatus]:
        return self.tracker.status(DUMMY_CLEANUP.name)
