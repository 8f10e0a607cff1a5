"""
Backend-neutral interface of the entity store.

A ``DocumentStore`` holds one ``EntityCollection`` per entity type.
Documents travel as plain dictionaries: the identity lives under
``_id`` as a 24 character hex string and the remaining keys are the
camelCase field names used by the API.  Every method is a coroutine
so that a request waiting on the database never blocks the others.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bson import ObjectId

USERS = "users"
PRODUCTS = "products"
SWAP_ORDERS = "swap_orders"
COLLECTIONS: Tuple[str, ...] = (USERS, PRODUCTS, SWAP_ORDERS)

# Fields whose values must be unique within their collection.
UNIQUE_FIELDS: Dict[str, Tuple[str, ...]] = {USERS: ("email",)}

# Fields holding arrays of identities that point into other collections.
REFERENCE_LIST_FIELDS: Dict[str, Tuple[str, ...]] = {SWAP_ORDERS: ("products", "users")}


def is_valid_id(value: Any) -> bool:
    """Return ``True`` if ``value`` is a well formed identity string."""
    return isinstance(value, str) and ObjectId.is_valid(value)


class EntityCollection(ABC):
    """CRUD operations over the documents of one entity type."""

    name: str

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert ``data`` and return the stored document with its ``_id``."""

    @abstractmethod
    async def find_by_id(self, identity: str) -> Optional[Dict[str, Any]]:
        """Return the document or ``None``; malformed identities count as missing."""

    @abstractmethod
    async def find_by_ids(self, identities: Iterable[str]) -> List[Dict[str, Any]]:
        """Return the documents that exist, in the order of ``identities``."""

    @abstractmethod
    async def find_all(self, filter: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Return documents matching ``filter`` in insertion order.

        ``filter`` maps field names to values.  A field holding an array
        matches when the array contains the value.
        """

    @abstractmethod
    async def update_by_id(self, identity: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge ``fields`` into the document and return the updated version."""

    @abstractmethod
    async def delete_by_id(self, identity: str) -> Optional[Dict[str, Any]]:
        """Remove the document and return it, or ``None`` if it did not exist."""

    @abstractmethod
    async def delete_all(self, filter: Optional[Dict[str, Any]] = None) -> int:
        """Remove every document matching ``filter`` and return how many went."""


class DocumentStore(ABC):
    """The three collections plus connection level operations."""

    users: EntityCollection
    products: EntityCollection
    swap_orders: EntityCollection

    def collection(self, name: str) -> EntityCollection:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection {name!r}")
        return getattr(self, name)

    def is_valid_id(self, value: Any) -> bool:
        return is_valid_id(value)

    async def init(self) -> None:
        """Prepare the backend (indexes, schema).  No-op by default."""

    @abstractmethod
    async def ping(self) -> bool:
        """Return ``True`` if the backend is reachable."""

    async def close(self) -> None:
        """Release connections held by the backend."""
