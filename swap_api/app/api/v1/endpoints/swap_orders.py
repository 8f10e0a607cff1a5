"""
Swap order endpoints for API v1.

Reads return swap orders with their users and products expanded to
full records; writes return the stored identity lists.  Lookups by
user or product return an empty list when nothing matches.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from swap_api.app.api.deps import get_swap_order_service
from swap_api.app.schemas.swap_order import (
    SwapOrderCreate,
    SwapOrderDetail,
    SwapOrderRead,
    SwapOrderUpdate,
)
from swap_api.app.services.swap_order_service import SwapOrderService

router = APIRouter()


@router.get("", response_model=List[SwapOrderDetail])
async def list_swap_orders(service: SwapOrderService = Depends(get_swap_order_service)) -> List[SwapOrderDetail]:
    return await service.list_swap_orders()


@router.get("/user/{user_id}", response_model=List[SwapOrderDetail])
async def list_swap_orders_by_user(
    user_id: str,
    service: SwapOrderService = Depends(get_swap_order_service),
) -> List[SwapOrderDetail]:
    """All swap orders the given user takes part in."""
    return await service.list_by_user(user_id)


@router.get("/product/{product_id}", response_model=List[SwapOrderDetail])
async def list_swap_orders_by_product(
    product_id: str,
    service: SwapOrderService = Depends(get_swap_order_service),
) -> List[SwapOrderDetail]:
    """All swap orders that include the given product."""
    return await service.list_by_product(product_id)


@router.get("/{swap_order_id}", response_model=SwapOrderDetail)
async def get_swap_order(
    swap_order_id: str,
    service: SwapOrderService = Depends(get_swap_order_service),
) -> SwapOrderDetail:
    return await service.get_swap_order(swap_order_id)


@router.post("", response_model=SwapOrderRead)
async def create_swap_order(
    swap_order: SwapOrderCreate,
    service: SwapOrderService = Depends(get_swap_order_service),
) -> SwapOrderRead:
    """Create a swap order between exactly two users.

    ``products`` needs at least two distinct identities and ``users``
    exactly two distinct identities; anything else is a 400.
    """
    return await service.create_swap_order(swap_order)


@router.put("/{swap_order_id}", response_model=SwapOrderRead)
async def update_swap_order(
    swap_order_id: str,
    updates: SwapOrderUpdate,
    service: SwapOrderService = Depends(get_swap_order_service),
) -> SwapOrderRead:
    return await service.update_swap_order(swap_order_id, updates)


@router.delete("")
async def delete_all_swap_orders(service: SwapOrderService = Depends(get_swap_order_service)) -> Dict[str, Any]:
    removed = await service.delete_all_swap_orders()
    return {"message": "All swap orders deleted", "deletedSwapOrders": removed}


@router.delete("/{swap_order_id}", response_model=SwapOrderRead)
async def delete_swap_order(
    swap_order_id: str,
    service: SwapOrderService = Depends(get_swap_order_service),
) -> SwapOrderRead:
    return await service.delete_swap_order(swap_order_id)
