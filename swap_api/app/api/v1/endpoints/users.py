"""
User endpoints for API v1.

Registration, listing, partial updates and deletion of users.
Deleting a user also deletes every swap order the user takes part in;
deleting all users deletes all swap orders.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from swap_api.app.api.deps import get_user_service
from swap_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from swap_api.app.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """List every registered user."""
    return await service.list_users()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserRead:
    """Retrieve a single user.  Unknown or malformed identities give 404."""
    return await service.get_user(user_id)


@router.post("", response_model=UserRead)
async def create_user(user: UserCreate, service: UserService = Depends(get_user_service)) -> UserRead:
    """Register a user.

    Responds with 200 and the stored user.  An e‑mail that is already
    registered yields a 500 error.
    """
    return await service.create_user(user)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    updates: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserRead:
    """Update ``firstName``, ``lastName`` and/or ``email`` of a user."""
    return await service.update_user(user_id, updates)


@router.delete("")
async def delete_all_users(service: UserService = Depends(get_user_service)) -> Dict[str, Any]:
    result = await service.delete_all_users()
    return {
        "message": "All users deleted",
        "usersDeleted": result.deleted,
        "deletedSwapOrders": result.swap_orders_deleted,
    }


@router.delete("/{user_id}")
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> List[Any]:
    """Delete a user and the swap orders that name them.

    Returns the deleted user followed by a summary of the swap orders
    removed with it.
    """
    user, removed = await service.delete_user(user_id)
    return [user, {"acknowledged": True, "deletedCount": removed}]
