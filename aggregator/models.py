"""Pydantic models for the affiliate aggregator endpoints"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CamelModel(BaseModel):
    """Base model reading camelCase wire fields into snake_case attributes"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SyncStatus(BaseModel):
    """Status of one long-running backend job"""
    loading: bool = False
    message: Optional[str] = None


class AdvertiserSummary(CamelModel):
    id: str
    name: str
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    program_id: Optional[int] = Field(default=None, alias="programId")
    last_synced_at: Optional[str] = Field(default=None, alias="lastSyncedAt")


class AffiliateMerchant(AdvertiserSummary):
    network: Optional[str] = None
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    active: bool = False
    policies_json: Optional[str] = Field(default=None, alias="policiesJson")
    features_json: Optional[str] = Field(default=None, alias="featuresJson")
    metadata_json: Optional[str] = Field(default=None, alias="metadataJson")


class PaginatedAdvertiserResponse(CamelModel):
    content: List[AdvertiserSummary] = Field(default_factory=list)
    total_elements: int = Field(default=0, alias="totalElements")
    total_pages: int = Field(default=0, alias="totalPages")
    number: int = 0


class SyncCounts(CamelModel):
    """Counters of a finished job; a missing or null counter reads as 0"""

    @field_validator("*", mode="before")
    @classmethod
    def null_as_zero(cls, value):
        return 0 if value is None else value


class AdvertiserSyncResult(SyncCounts):
    total_advertisers: int = Field(default=0, alias="totalAdvertisers")
    created: int = 0
    updated: int = 0


class OfferSyncResult(SyncCounts):
    total_offers: int = Field(default=0, alias="totalOffers")
    merchants_updated: int = Field(default=0, alias="merchantsUpdated")


class ProductSyncResult(SyncCounts):
    total_items: int = Field(default=0, alias="totalItems")
    total_pages: int = Field(default=0, alias="totalPages")
    created_products: int = Field(default=0, alias="createdProducts")
    updated_products: int = Field(default=0, alias="updatedProducts")
    created_offers: int = Field(default=0, alias="createdOffers")
    updated_offers: int = Field(default=0, alias="updatedOffers")
    deactivated_offers: int = Field(default=0, alias="deactivatedOffers")


class DummyCleanupResult(SyncCounts):
    deleted_merchants: int = Field(default=0, alias="deletedMerchants")
    deleted_offers: int = Field(default=0, alias="deletedOffers")
    deleted_products: int = Field(default=0, alias="deletedProducts")
    deleted_brands: int = Field(default=0, alias="deletedBrands")


class ReindexResult(CamelModel):
    indexed: Optional[int] = None
    search_enabled: Optional[bool] = Field(default=None, alias="searchEnabled")
