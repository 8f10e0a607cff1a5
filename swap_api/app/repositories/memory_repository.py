"""
In-memory implementation of the entity store.

Documents live in insertion-ordered dictionaries keyed by identity.
Identities are generated with ``bson.ObjectId`` so that they look and
validate exactly like the ones MongoDB hands out.  Copies are returned
from every call; callers can never mutate stored state by accident.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional, Sequence

from bson import ObjectId

from swap_api.app.core.errors import UniqueConstraintViolation
from swap_api.app.repositories.base import (
    COLLECTIONS,
    UNIQUE_FIELDS,
    DocumentStore,
    EntityCollection,
    is_valid_id,
)


def _matches(document: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    for key, expected in filter.items():
        actual = document.get(key)
        if isinstance(actual, list) and not isinstance(expected, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


class MemoryCollection(EntityCollection):
    def __init__(self, name: str, unique_fields: Sequence[str] = ()):
        self.name = name
        self.unique_fields = tuple(unique_fields)
        self._documents: Dict[str, Dict[str, Any]] = {}

    def _check_unique(self, document: Dict[str, Any], exclude: Optional[str] = None) -> None:
        for field in self.unique_fields:
            if field not in document:
                continue
            for identity, other in self._documents.items():
                if identity != exclude and other.get(field) == document[field]:
                    raise UniqueConstraintViolation(field, document[field])

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        document = copy.deepcopy(data)
        document.pop("_id", None)
        self._check_unique(document)
        document["_id"] = str(ObjectId())
        self._documents[document["_id"]] = document
        return copy.deepcopy(document)

    async def find_by_id(self, identity: str) -> Optional[Dict[str, Any]]:
        if not is_valid_id(identity) or identity not in self._documents:
            return None
        return copy.deepcopy(self._documents[identity])

    async def find_by_ids(self, identities: Iterable[str]) -> List[Dict[str, Any]]:
        return [
            copy.deepcopy(self._documents[identity])
            for identity in identities
            if is_valid_id(identity) and identity in self._documents
        ]

    async def find_all(self, filter: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return [
            copy.deepcopy(document)
            for document in self._documents.values()
            if _matches(document, filter or {})
        ]

    async def update_by_id(self, identity: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if not is_valid_id(identity) or identity not in self._documents:
            return None
        changes = {key: copy.deepcopy(value) for key, value in fields.items() if key != "_id"}
        self._check_unique(changes, exclude=identity)
        self._documents[identity].update(changes)
        return copy.deepcopy(self._documents[identity])

    async def delete_by_id(self, identity: str) -> Optional[Dict[str, Any]]:
        if not is_valid_id(identity):
            return None
        return copy.deepcopy(self._documents.pop(identity, None))

    async def delete_all(self, filter: Optional[Dict[str, Any]] = None) -> int:
        doomed = [identity for identity, document in self._documents.items() if _matches(document, filter or {})]
        for identity in doomed:
            del self._documents[identity]
        return len(doomed)


class MemoryStore(DocumentStore):
    """Process-local store used by tests and local experiments."""

    def __init__(self) -> None:
        for name in COLLECTIONS:
            setattr(self, name, MemoryCollection(name, UNIQUE_FIELDS.get(name, ())))

    async def ping(self) -> bool:
        return True
