"""Variant generation from product options

The variant list is the cartesian product of the option values, built
as a left fold over the options in order. Any option without values,
or no options at all, yields no variants.

Regeneration replaces the whole list. Edits made to generated variants
(price, SKU, inventory) and manually added variants are lost whenever an
option changes.
"""

import logging
from typing import Any, Dict, List, Sequence

from .models import ProductOption, ProductVariant, VariantPrice

logger = logging.getLogger(__name__)

TITLE_SEPARATOR = " / "


def option_combinations(options: Sequence[ProductOption]) -> List[List[str]]:
    """Cartesian product of option values, first option varying slowest"""
    if not options or any(not option.values for option in options):
        return []

    combinations: List[List[str]] = [[]]
    for option in options:
        combinations = [combo + [value] for combo in combinations for value in option.values]
    return combinations


def default_variant(title: str, options=None) -> ProductVariant:
    return ProductVariant(
        title=title,
        sku="",
        inventory_quantity=0,
        manage_inventory=True,
        allow_backorder=False,
        prices=[VariantPrice(amount=0, currency_code="USD", region_id=None)],
        options=dict(options or {}),
    )


def variant_from_payload(raw: Dict[str, Any]) -> ProductVariant:
    """Normalize a stored variant, filling the fields the backend may leave out

    Only the first price is kept; a variant without prices gets 0 USD.
    """
    prices = raw.get("prices") or []
    if prices:
        first = prices[0]
        price = VariantPrice(
            amount=first.get("amount") or 0,
            currency_code=first.get("currencyCode") or "USD",
            region_id=first.get("regionId") or None,
        )
    else:
        price = VariantPrice(amount=0, currency_code="USD", region_id=None)

    def or_default(key: str, default: Any) -> Any:
        value = raw.get(key)
        return default if value is None else value

    return ProductVariant(
        id=None if raw.get("id") is None else str(raw["id"]),
        title=raw.get("title") or "",
        sku=raw.get("sku") or "",
        inventory_quantity=or_default("inventoryQuantity", 0),
        manage_inventory=or_default("manageInventory", True),
        allow_backorder=or_default("allowBackorder", False),
        prices=[price],
        options=raw.get("options") or {},
    )


def generate_variants(options: Sequence[ProductOption]) -> List[ProductVariant]:
    """Expand options into one default variant per value combination"""
    variants = []
    for combo in option_combinations(options):
        selected = {option.title: value for option, value in zip(options, combo)}
        variants.append(default_variant(TITLE_SEPARATOR.join(combo), selected))
    return variants


class VariantEditor:
    """Options and variants of a product being edited

    Every option edit regenerates the variant list.
    """

    def __init__(self, options: Sequence[ProductOption] = (), variants: Sequence[ProductVariant] = ()):
        self.options: List[ProductOption] = [option.model_copy(deep=True) for option in options]
        self.variants: List[ProductVariant] = [variant.model_copy(deep=True) for variant in variants]

    def regenerate(self) -> List[ProductVariant]:
        self.variants = generate_variants(self.options)
        logger.debug(f"Regenerated {len(self.variants)} variants from {len(self.options)} options")
        return self.variants

    def add_option(self, title: str = "") -> ProductOption:
        # A new option has no values yet, so the variant list is left alone
        option = ProductOption(title=title, values=[])
        self.options.append(option)
        return option

    def update_option_title(self, index: int, title: str) -> None:
        self.options[index].title = title
        self.regenerate()

    def remove_option(self, index: int) -> None:
        del self.options[index]
        self.regenerate()

    def add_option_value(self, index: int, value: str) -> bool:
        """Append a value to an option

        Returns:
            False when the value is blank or already present
        """
        value = value.strip()
        option = self.options[index]
        if not value or value in option.values:
            return False
        option.values.append(value)
        self.regenerate()
        return True

    def remove_option_value(self, index: int, value_index: int) -> None:
        del self.options[index].values[value_index]
        self.regenerate()

    def add_manual_variant(self) -> ProductVariant:
        variant = default_variant(f"Variant {len(self.variants) + 1}")
        self.variants.append(variant)
        return variant

    def remove_variant(self, index: int) -> None:
        del self.variants[index]

    def update_variant_field(self, index: int, field: str, value: Any) -> ProductVariant:
        variant = self.variants[index]
        if field not in ProductVariant.model_fields:
            raise AttributeError(f"Unknown variant field: {field}")
        setattr(variant, field, value)
        return variant

    def update_variant_price(self, index: int, amount: float) -> ProductVariant:
        variant = self.variants[index]
        variant.prices[0].amount = amount
        return variant

    def update_variant_currency(self, index: int, currency: str) -> ProductVariant:
        variant = self.variants[index]
        variant.prices[0].currency_code = currency.upper()
        return variant

    @classmethod
    def from_product(cls, product: Dict[str, Any]) -> "VariantEditor":
        """Editor for an existing product, holding its stored variants

        Options start empty, so the first option edit replaces the loaded
        variants with generated ones.
        """
        return cls(variants=[variant_from_payload(raw) for raw in product.get("variants") or []])
