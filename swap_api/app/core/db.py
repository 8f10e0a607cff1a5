"""
Database bootstrap.

``connect_store`` builds the MongoDB backed store from the settings and
prepares its indexes; it is called once by the application lifespan.
The resulting store is kept on ``app.state`` and handed to services
through FastAPI dependencies, so nothing in the request path reaches
for a global connection.
"""

import logging

from pymongo.errors import PyMongoError

from swap_api.app.core.config import Settings
from swap_api.app.repositories.mongo_repository import MongoStore

logger = logging.getLogger(__name__)


async def connect_store(settings: Settings) -> MongoStore:
    """Create the MongoDB store and ensure its indexes exist.

    Raises the underlying ``PyMongoError`` if the server cannot be
    reached, which aborts application startup.
    """
    store = MongoStore(
        settings.mongodb_uri,
        database=settings.mongodb_database or None,
        timeout_ms=settings.mongodb_timeout_ms,
    )
    try:
        await store.init()
    except PyMongoError as exc:
        logger.error("Error connecting to MongoDB: %s", exc)
        await store.close()
        raise
    logger.info("MongoDB connected, database '%s'", store.database.name)
    return store
