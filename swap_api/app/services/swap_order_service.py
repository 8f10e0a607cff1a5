"""
Business logic for swap orders.

A swap order is created from two user identities and at least two
product identities; the schema has already checked sizes and
duplicates, ``IntegrityService.check_references`` checks the
identities themselves.  ``insertionDate`` is stamped here in UTC.

Reads return :class:`SwapOrderDetail` with users and products
expanded; writes return :class:`SwapOrderRead` with the identity lists
as stored.
"""

import logging
from datetime import datetime, timezone
from typing import List

from swap_api.app.core.errors import NotFoundError
from swap_api.app.repositories.base import DocumentStore
from swap_api.app.schemas.swap_order import (
    SwapOrderCreate,
    SwapOrderDetail,
    SwapOrderRead,
    SwapOrderUpdate,
)
from swap_api.app.services.integrity_service import IntegrityService

logger = logging.getLogger(__name__)


class SwapOrderService:
    """Service for creating, reading and removing swap orders."""

    def __init__(self, store: DocumentStore, integrity: IntegrityService):
        self.store = store
        self.integrity = integrity

    async def create_swap_order(self, data: SwapOrderCreate) -> SwapOrderRead:
        await self.integrity.check_references(products=data.products, users=data.users)
        document = data.to_document()
        document["insertionDate"] = datetime.now(timezone.utc)
        stored = await self.store.swap_orders.create(document)
        logger.info("Created swap order %s between users %s", stored["_id"], ", ".join(data.users))
        return SwapOrderRead.model_validate(stored)

    async def list_swap_orders(self) -> List[SwapOrderDetail]:
        return await self.integrity.expand_many(await self.store.swap_orders.find_all())

    async def get_swap_order(self, swap_order_id: str) -> SwapOrderDetail:
        document = await self.store.swap_orders.find_by_id(swap_order_id)
        if document is None:
            raise NotFoundError("Swap order", swap_order_id)
        return await self.integrity.expand(document)

    async def list_by_user(self, user_id: str) -> List[SwapOrderDetail]:
        return await self.integrity.find_by_user(user_id)

    async def list_by_product(self, product_id: str) -> List[SwapOrderDetail]:
        return await self.integrity.find_by_product(product_id)

    async def update_swap_order(self, swap_order_id: str, data: SwapOrderUpdate) -> SwapOrderRead:
        """Replace the ``products`` and/or ``users`` lists of a swap order.

        The order must exist before its new references are checked, so
        an unknown identity yields ``NotFoundError`` even when the new
        references are malformed.
        """
        if await self.store.swap_orders.find_by_id(swap_order_id) is None:
            raise NotFoundError("Swap order", swap_order_id)
        changes = data.to_document(partial=True)
        await self.integrity.check_references(products=changes.get("products"), users=changes.get("users"))
        document = await self.store.swap_orders.update_by_id(swap_order_id, changes)
        if document is None:
            # deleted between the existence check and the write
            raise NotFoundError("Swap order", swap_order_id)
        logger.info("Updated swap order %s", swap_order_id)
        return SwapOrderRead.model_validate(document)

    async def delete_swap_order(self, swap_order_id: str) -> SwapOrderRead:
        document = await self.store.swap_orders.delete_by_id(swap_order_id)
        if document is None:
            raise NotFoundError("Swap order", swap_order_id)
        logger.info("Deleted swap order %s", swap_order_id)
        return SwapOrderRead.model_validate(document)

    async def delete_all_swap_orders(self) -> int:
        removed = await self.store.swap_orders.delete_all()
        logger.info("Deleted all swap orders (%d)", removed)
        return removed
