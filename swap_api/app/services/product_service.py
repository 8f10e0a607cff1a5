"""
Business logic for products.

Mirrors ``UserService``: schemas in, read models out, deletions routed
through :class:`IntegrityService` so that swap orders naming a deleted
product disappear with it.
"""

import logging
from typing import List, Tuple

from swap_api.app.core.errors import NotFoundError
from swap_api.app.repositories.base import PRODUCTS, DocumentStore
from swap_api.app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from swap_api.app.services.integrity_service import BulkCascadeResult, IntegrityService

logger = logging.getLogger(__name__)


class ProductService:
    """Service for managing products."""

    def __init__(self, store: DocumentStore, integrity: IntegrityService):
        self.store = store
        self.integrity = integrity

    async def create_product(self, data: ProductCreate) -> ProductRead:
        document = await self.store.products.create(data.to_document())
        logger.info("Created product %s", document["_id"])
        return ProductRead.model_validate(document)

    async def list_products(self) -> List[ProductRead]:
        return [ProductRead.model_validate(doc) for doc in await self.store.products.find_all()]

    async def get_product(self, product_id: str) -> ProductRead:
        document = await self.store.products.find_by_id(product_id)
        if document is None:
            raise NotFoundError("Product", product_id)
        return ProductRead.model_validate(document)

    async def update_product(self, product_id: str, data: ProductUpdate) -> ProductRead:
        """Apply a partial update.  A new ``image`` list replaces the old one."""
        document = await self.store.products.update_by_id(product_id, data.to_document(partial=True))
        if document is None:
            raise NotFoundError("Product", product_id)
        logger.info("Updated product %s", product_id)
        return ProductRead.model_validate(document)

    async def delete_product(self, product_id: str) -> Tuple[ProductRead, int]:
        result = await self.integrity.cascade_delete(PRODUCTS, product_id)
        return ProductRead.model_validate(result.record), result.swap_orders_deleted

    async def delete_all_products(self) -> BulkCascadeResult:
        return await self.integrity.cascade_delete_all(PRODUCTS)
