"""Validated product create/update on top of the generic data provider"""

import logging
from typing import Any, Dict, Optional

from providers.data_provider import DataProvider
from providers.pagination import ListResult
from .models import CreateProductInput, UpdateProductInput
from .variants import VariantEditor

logger = logging.getLogger(__name__)

PRODUCTS_RESOURCE = "products"
VARIANTS_RESOURCE = "variants"
COLLECTIONS_RESOURCE = "collections"


class ProductCatalog:
    """Products, variants and collections of the storefront"""

    def __init__(self, data_provider: DataProvider):
        self.data = data_provider

    async def list_products(self, page: int = 1, **kwargs) -> ListResult:
        return await self.data.get_list(PRODUCTS_RESOURCE, page=page, **kwargs)

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        return await self.data.get_one(PRODUCTS_RESOURCE, product_id)

    async def edit_product(self, product_id: str) -> VariantEditor:
        """Load a product and return an editor holding its variants"""
        return VariantEditor.from_product(await self.get_product(product_id) or {})

    async def create_product(self, product: Dict[str, Any], editor: Optional[VariantEditor] = None) -> Dict[str, Any]:
        """Validate and create a product

        Args:
            product: Product fields in wire (camelCase) or Python naming
            editor: Optional editor whose options/variants are submitted

        Raises:
            pydantic.ValidationError: The product is invalid; nothing is sent
        """
        payload = self._with_editor(product, editor)
        validated = CreateProductInput.model_validate(payload)
        logger.info(f"Creating product {validated.handle}")
        return await self.data.create(PRODUCTS_RESOURCE, validated.to_payload())

    async def update_product(
        self,
        product_id: str,
        product: Dict[str, Any],
        editor: Optional[VariantEditor] = None,
    ) -> Dict[str, Any]:
        payload = self._with_editor(product, editor)
        validated = UpdateProductInput.model_validate(payload)
        logger.info(f"Updating product {product_id}")
        return await self.data.update(PRODUCTS_RESOURCE, product_id, validated.to_payload())

    async def delete_product(self, product_id: str) -> Any:
        return await self.data.delete_one(PRODUCTS_RESOURCE, product_id)

    async def list_variants(self, page: int = 1, **kwargs) -> ListResult:
        return await self.data.get_list(VARIANTS_RESOURCE, page=page, **kwargs)

    async def update_variant(self, variant_id: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        return await self.data.update(VARIANTS_RESOURCE, variant_id, variables)

    async def list_collections(self, page: int = 1, **kwargs) -> ListResult:
        return await self.data.get_list(COLLECTIONS_RESOURCE, page=page, **kwargs)

    @staticmethod
    def _with_editor(product: Dict[str, Any], editor: Optional[VariantEditor]) -> Dict[str, Any]:
        payload = dict(product)
        if editor is not None:
            payload["options"] = [option.model_dump(by_alias=True) for option in editor.options] or None
            payload["variants"] = [variant.model_dump(by_alias=True) for variant in editor.variants] or None
        return payload
