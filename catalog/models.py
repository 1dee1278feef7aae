"""Pydantic schemas for products, options and variants

These mirror the admin product form. Validation runs client side and
blocks a submission before any network call.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(populate_by_name=True)


class ProductOption(WireModel):
    """A product option such as Size, with its ordered values"""
    title: str = ""
    values: List[str] = Field(default_factory=list)

    @field_validator("values")
    @classmethod
    def dedupe_values(cls, values: List[str]) -> List[str]:
        seen = []
        for value in values:
            if value not in seen:
                seen.append(value)
        return seen


class VariantPrice(WireModel):
    amount: float = 0
    currency_code: str = Field(default="USD", alias="currencyCode", min_length=3, max_length=3)
    region_id: Optional[str] = Field(default=None, alias="regionId")


class ProductVariant(WireModel):
    id: Optional[str] = None
    title: str
    sku: str = ""
    inventory_quantity: int = Field(default=0, alias="inventoryQuantity")
    manage_inventory: bool = Field(default=True, alias="manageInventory")
    allow_backorder: bool = Field(default=False, alias="allowBackorder")
    prices: List[VariantPrice] = Field(default_factory=lambda: [VariantPrice()])
    options: Dict[str, str] = Field(default_factory=dict)


class SubmittedOption(ProductOption):
    """Option as submitted with a product: title and values required"""
    title: str = Field(min_length=1)
    values: List[str] = Field(min_length=1)

    @field_validator("values")
    @classmethod
    def values_not_blank(cls, values: List[str]) -> List[str]:
        if any(not value for value in values):
            raise ValueError("Option values must not be empty")
        return values


class SubmittedVariant(ProductVariant):
    """Variant as submitted with a product: title and one price required"""
    title: str = Field(min_length=1)
    prices: List[VariantPrice] = Field(min_length=1)


class CreateProductInput(WireModel):
    title: str = Field(min_length=1)
    handle: str = Field(min_length=1)
    description: Optional[str] = None
    status: ProductStatus = ProductStatus.DRAFT
    shipping_profile_id: Optional[str] = Field(default=None, alias="shippingProfileId")
    images: Optional[List[str]] = None
    thumbnail: Optional[str] = None
    options: Optional[List[SubmittedOption]] = None
    variants: Optional[List[SubmittedVariant]] = None
    category_ids: Optional[List[str]] = Field(default=None, alias="categoryIds")
    sales_channel_ids: Optional[List[str]] = Field(default=None, alias="salesChannelIds")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UpdateProductInput(CreateProductInput):
    pass
