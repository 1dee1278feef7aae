"""Product catalog: schemas, variant generation and validated writes"""

from .models import (
    CreateProductInput,
    ProductOption,
    ProductStatus,
    ProductVariant,
    UpdateProductInput,
    VariantPrice,
)
from .products import ProductCatalog
from .variants import VariantEditor, generate_variants, option_combinations, variant_from_payload

__all__ = [
    "CreateProductInput",
    "UpdateProductInput",
    "ProductOption",
    "ProductStatus",
    "ProductVariant",
    "VariantPrice",
    "ProductCatalog",
    "VariantEditor",
    "generate_variants",
    "option_combinations",
    "variant_from_payload",
]
