"""
Persistence adapters.

Services depend on the ``DocumentStore`` interface from ``base`` rather
than on a particular database.  ``MongoStore`` talks to MongoDB through
PyMongo's asyncio client; ``MemoryStore`` keeps documents in process
and backs the test-suite.
"""

from .base import COLLECTIONS, DocumentStore, EntityCollection  # noqa: F401
from .memory_repository import MemoryStore  # noqa: F401
from .mongo_repository import MongoStore  # noqa: F401
