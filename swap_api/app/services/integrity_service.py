"""
Referential integrity between swap orders, users and products.

Swap orders hold non-owning references to two users and to two or
more products.  This module keeps those references consistent with
the user and product collections:

* ``check_references`` rejects malformed identities and, when
  ``verify_references`` is enabled, identities that do not exist.
  With the check disabled (the default) a swap order may be written
  with references to records that were never created.
* ``cascade_delete`` removes a user or product and then every swap
  order that references it.  The two steps are not atomic: if the
  second step fails the entity is already gone and its swap orders
  are left dangling.  That case is logged and surfaced as
  ``CascadeDeleteError`` carrying the deleted record.
* ``cascade_delete_all`` empties a user or product collection and then
  removes every swap order, referenced or not.
* ``find_by_user``/``find_by_product`` return the swap orders holding
  an identity, with references expanded to full records.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from swap_api.app.core.errors import CascadeDeleteError, NotFoundError, ValidationError
from swap_api.app.repositories.base import PRODUCTS, USERS, DocumentStore
from swap_api.app.schemas.product import ProductRead
from swap_api.app.schemas.swap_order import SwapOrderDetail
from swap_api.app.schemas.user import UserRead

logger = logging.getLogger(__name__)

# Entity collection -> (field of a swap order that references it, label)
REFERENCE_FIELDS = {
    USERS: ("users", "User"),
    PRODUCTS: ("products", "Product"),
}


@dataclass
class CascadeResult:
    """Outcome of deleting a single user or product."""

    record: Dict[str, Any]
    swap_orders_deleted: int


@dataclass
class BulkCascadeResult:
    """Outcome of emptying the user or product collection."""

    deleted: int
    swap_orders_deleted: int


class IntegrityService:
    """Enforce the links between swap orders and the records they name."""

    def __init__(self, store: DocumentStore, verify_references: bool = False):
        self.store = store
        self.verify_references = verify_references

    @staticmethod
    def _reference(entity: str):
        try:
            return REFERENCE_FIELDS[entity]
        except KeyError:
            raise ValueError(f"Swap orders do not reference {entity!r}") from None

    async def check_references(
        self,
        products: Optional[Sequence[str]] = None,
        users: Optional[Sequence[str]] = None,
    ) -> None:
        """Validate the identities a swap order is about to reference.

        ``None`` means the field is not being written.  Raises
        ``ValidationError`` listing every offending entry.
        """
        errors: List[Dict[str, Any]] = []
        lists = [(PRODUCTS, products), (USERS, users)]
        for entity, identities in lists:
            field, label = self._reference(entity)
            for index, identity in enumerate(identities or ()):
                if not self.store.is_valid_id(identity):
                    errors.append({"field": f"{field}.{index}", "msg": f"Invalid {label} ID", "value": identity})
        if errors:
            raise ValidationError(errors)
        if not self.verify_references:
            return
        for entity, identities in lists:
            if not identities:
                continue
            field, label = self._reference(entity)
            found = await self.store.collection(entity).find_by_ids(identities)
            existing = {document["_id"] for document in found}
            for index, identity in enumerate(identities):
                if identity not in existing:
                    errors.append({"field": f"{field}.{index}", "msg": f"{label} {identity} does not exist", "value": identity})
        if errors:
            raise ValidationError(errors)

    async def cascade_delete(self, entity: str, identity: str) -> CascadeResult:
        """Delete one user or product, then the swap orders naming it."""
        field, label = self._reference(entity)
        record = await self.store.collection(entity).delete_by_id(identity)
        if record is None:
            raise NotFoundError(label, identity)
        try:
            removed = await self.store.swap_orders.delete_all({field: record["_id"]})
        except Exception as exc:
            logger.error(
                "%s %s was deleted but its swap orders were not; they now hold a dangling reference",
                label,
                record["_id"],
                exc_info=True,
            )
            raise CascadeDeleteError(label, record, exc) from exc
        logger.info("Deleted %s %s and %d swap order(s) referencing it", label.lower(), record["_id"], removed)
        return CascadeResult(record=record, swap_orders_deleted=removed)

    async def cascade_delete_all(self, entity: str) -> BulkCascadeResult:
        """Empty a user or product collection and every swap order."""
        _, label = self._reference(entity)
        deleted = await self.store.collection(entity).delete_all()
        removed = await self.store.swap_orders.delete_all()
        logger.info("Deleted all %ss (%d) and all swap orders (%d)", label.lower(), deleted, removed)
        return BulkCascadeResult(deleted=deleted, swap_orders_deleted=removed)

    async def expand_many(self, orders: Sequence[Dict[str, Any]]) -> List[SwapOrderDetail]:
        """Resolve the references of ``orders`` to full records.

        Users and products are fetched once for the whole batch.
        References that no longer resolve are left out of the expanded
        lists; the order of the remaining ones is preserved.
        """
        user_ids = {identity for order in orders for identity in order.get("users", [])}
        product_ids = {identity for order in orders for identity in order.get("products", [])}
        users = {u["_id"]: UserRead.model_validate(u) for u in await self.store.users.find_by_ids(user_ids)}
        products = {p["_id"]: ProductRead.model_validate(p) for p in await self.store.products.find_by_ids(product_ids)}
        return [
            SwapOrderDetail(
                _id=order["_id"],
                products=[products[i] for i in order.get("products", []) if i in products],
                users=[users[i] for i in order.get("users", []) if i in users],
                insertion_date=order["insertionDate"],
            )
            for order in orders
        ]

    async def expand(self, order: Dict[str, Any]) -> SwapOrderDetail:
        return (await self.expand_many([order]))[0]

    async def find_by_user(self, user_id: str) -> List[SwapOrderDetail]:
        return await self.expand_many(await self.store.swap_orders.find_all({"users": user_id}))

    async def find_by_product(self, product_id: str) -> List[SwapOrderDetail]:
        return await self.expand_many(await self.store.swap_orders.find_all({"products": product_id}))
