"""Affiliate aggregator console and job status tracking"""

from .console import (
    ADVERTISER_SYNC,
    DUMMY_CLEANUP,
    OFFER_SYNC,
    PRODUCT_SYNC,
    SEARCH_REINDEX,
    AggregatorConsole,
    product_sync_key,
)
from .jobs import JobSpec, JobStatusTracker
from .models import (
    AdvertiserSummary,
    AffiliateMerchant,
    PaginatedAdvertiserResponse,
    SyncStatus,
)

__all__ = [
    "AggregatorConsole",
    "JobSpec",
    "JobStatusTracker",
    "SyncStatus",
    "AdvertiserSummary",
    "AffiliateMerchant",
    "PaginatedAdvertiserResponse",
    "ADVERTISER_SYNC",
    "OFFER_SYNC",
    "PRODUCT_SYNC",
    "DUMMY_CLEANUP",
    "SEARCH_REINDEX",
    "product_sync_key",
]
