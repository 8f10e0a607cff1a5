"""
Business logic for users.

``UserService`` validates nothing itself; request bodies arrive as
already validated schemas.  It converts between schemas and stored
documents, raises ``NotFoundError`` for unknown identities and hands
deletions to :class:`IntegrityService` so that swap orders follow.
"""

import logging
from typing import List, Tuple

from swap_api.app.core.errors import NotFoundError
from swap_api.app.repositories.base import USERS, DocumentStore
from swap_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from swap_api.app.services.integrity_service import BulkCascadeResult, IntegrityService

logger = logging.getLogger(__name__)


class UserService:
    """Registration and maintenance of users; deletes cascade to swap orders."""

    def __init__(self, store: DocumentStore, integrity: IntegrityService):
        self.store = store
        self.integrity = integrity

    async def create_user(self, data: UserCreate) -> UserRead:
        """Store a new user.

        Raises ``UniqueConstraintViolation`` if the e‑mail is taken.
        """
        logger.info("Registering user %s", data.email)
        document = await self.store.users.create(data.to_document())
        return UserRead.model_validate(document)

    async def list_users(self) -> List[UserRead]:
        return [UserRead.model_validate(doc) for doc in await self.store.users.find_all()]

    async def get_user(self, user_id: str) -> UserRead:
        document = await self.store.users.find_by_id(user_id)
        if document is None:
            raise NotFoundError("User", user_id)
        return UserRead.model_validate(document)

    async def update_user(self, user_id: str, data: UserUpdate) -> UserRead:
        """Apply a partial update; only the fields sent are changed."""
        changes = data.to_document(partial=True)
        document = await self.store.users.update_by_id(user_id, changes)
        if document is None:
            raise NotFoundError("User", user_id)
        logger.info("Updated user %s (%s)", user_id, ", ".join(changes) or "no changes")
        return UserRead.model_validate(document)

    async def delete_user(self, user_id: str) -> Tuple[UserRead, int]:
        """Delete a user and the swap orders it takes part in.

        Returns the deleted user and the number of swap orders removed.
        """
        result = await self.integrity.cascade_delete(USERS, user_id)
        return UserRead.model_validate(result.record), result.swap_orders_deleted

    async def delete_all_users(self) -> BulkCascadeResult:
        """Delete every user.  All swap orders are deleted with them."""
        return await self.integrity.cascade_delete_all(USERS)
