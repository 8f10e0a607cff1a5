"""
MongoDB implementation of the entity store.

Uses PyMongo's native asyncio client.  Identities are stored as
``ObjectId`` and converted to strings on the way out.  References
between collections (``users`` and ``products`` inside a swap order)
are stored as ``ObjectId`` arrays too, the layout the ``swaporders``
collection has always had.  They are converted on write, in filters
and on read, so callers only ever see identity strings.

Unique constraints are backed by unique indexes created in
:meth:`MongoStore.init`.  ``DuplicateKeyError`` is translated into
:class:`~swap_api.app.core.errors.UniqueConstraintViolation` so that
callers do not depend on PyMongo exceptions.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from bson import ObjectId
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from swap_api.app.core.errors import UniqueConstraintViolation
from swap_api.app.repositories.base import (
    PRODUCTS,
    REFERENCE_LIST_FIELDS,
    SWAP_ORDERS,
    UNIQUE_FIELDS,
    USERS,
    DocumentStore,
    EntityCollection,
    is_valid_id,
)

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "swap_orders"

# Collection names on the server.
COLLECTION_NAMES = {USERS: "users", PRODUCTS: "products", SWAP_ORDERS: "swaporders"}


def _to_object_id(value: Any) -> Any:
    return ObjectId(value) if is_valid_id(value) else value


def _to_string(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


class MongoCollection(EntityCollection):
    def __init__(
        self,
        name: str,
        collection,
        unique_fields: Sequence[str] = (),
        reference_fields: Sequence[str] = (),
    ):
        self.name = name
        self.collection = collection
        self.unique_fields = tuple(unique_fields)
        self.reference_fields = tuple(reference_fields)

    def _to_document(self, raw: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if raw is None:
            return None
        document = dict(raw)
        document["_id"] = str(document["_id"])
        for field in self.reference_fields:
            if isinstance(document.get(field), list):
                document[field] = [_to_string(value) for value in document[field]]
        return document

    def _to_storage(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        stored = {key: value for key, value in fields.items() if key != "_id"}
        for field in self.reference_fields:
            if isinstance(stored.get(field), list):
                stored[field] = [_to_object_id(value) for value in stored[field]]
        return stored

    def _to_query(self, filter: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        # An array field matches when one of its members equals the value.
        query = dict(filter or {})
        for field in self.reference_fields:
            if field in query:
                query[field] = _to_object_id(query[field])
        return query

    def _unique_violation(self, exc: DuplicateKeyError) -> UniqueConstraintViolation:
        key_value = (exc.details or {}).get("keyValue") or {}
        if key_value:
            field, value = next(iter(key_value.items()))
        else:
            field, value = (self.unique_fields or ("_id",))[0], None
        return UniqueConstraintViolation(field, value)

    async def ensure_indexes(self) -> None:
        for field in self.unique_fields:
            await self.collection.create_index(field, unique=True)

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        document = self._to_storage(data)
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as exc:
            raise self._unique_violation(exc) from exc
        document["_id"] = result.inserted_id
        return self._to_document(document)

    async def find_by_id(self, identity: str) -> Optional[Dict[str, Any]]:
        if not is_valid_id(identity):
            return None
        return self._to_document(await self.collection.find_one({"_id": ObjectId(identity)}))

    async def find_by_ids(self, identities: Iterable[str]) -> List[Dict[str, Any]]:
        wanted = [identity for identity in identities if is_valid_id(identity)]
        if not wanted:
            return []
        query = {"_id": {"$in": [ObjectId(identity) for identity in set(wanted)]}}
        found = {}
        async for raw in self.collection.find(query):
            document = self._to_document(raw)
            found[document["_id"]] = document
        return [found[identity] for identity in wanted if identity in found]

    async def find_all(self, filter: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        cursor = self.collection.find(self._to_query(filter)).sort("_id", 1)
        return [self._to_document(raw) async for raw in cursor]

    async def update_by_id(self, identity: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if not is_valid_id(identity):
            return None
        changes = self._to_storage(fields)
        if not changes:
            # ``$set`` refuses an empty document
            return await self.find_by_id(identity)
        try:
            raw = await self.collection.find_one_and_update(
                {"_id": ObjectId(identity)},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise self._unique_violation(exc) from exc
        return self._to_document(raw)

    async def delete_by_id(self, identity: str) -> Optional[Dict[str, Any]]:
        if not is_valid_id(identity):
            return None
        return self._to_document(await self.collection.find_one_and_delete({"_id": ObjectId(identity)}))

    async def delete_all(self, filter: Optional[Dict[str, Any]] = None) -> int:
        result = await self.collection.delete_many(self._to_query(filter))
        return result.deleted_count


class MongoStore(DocumentStore):
    """Entity store backed by a MongoDB database.

    Parameters
    ----------
    uri : str
        MongoDB connection string.
    database : Optional[str]
        Database name.  Defaults to the database named in ``uri`` and
        falls back to ``swap_orders``.
    timeout_ms : int
        Server selection timeout; the client's defaults apply to
        everything else.
    client : Optional[AsyncMongoClient]
        Pre-built client, mainly for tests.
    """

    def __init__(
        self,
        uri: str,
        database: Optional[str] = None,
        timeout_ms: int = 5000,
        client: Optional[AsyncMongoClient] = None,
    ) -> None:
        self.client = client or AsyncMongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
        if database:
            self.database = self.client[database]
        else:
            self.database = self.client.get_default_database(default=DEFAULT_DATABASE)
        for name, collection_name in COLLECTION_NAMES.items():
            collection = MongoCollection(
                name,
                self.database[collection_name],
                unique_fields=UNIQUE_FIELDS.get(name, ()),
                reference_fields=REFERENCE_LIST_FIELDS.get(name, ()),
            )
            setattr(self, name, collection)

    async def init(self) -> None:
        for name in COLLECTION_NAMES:
            await self.collection(name).ensure_indexes()

    async def ping(self) -> bool:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    async def close(self) -> None:
        await self.client.close()
        logger.info("MongoDB connection closed")
