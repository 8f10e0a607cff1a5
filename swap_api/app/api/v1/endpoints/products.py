"""
Product endpoints for API v1.

CRUD operations for products.  Deleting a product cascades to the swap
orders that include it.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from swap_api.app.api.deps import get_product_service
from swap_api.app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from swap_api.app.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=List[ProductRead])
async def list_products(service: ProductService = Depends(get_product_service)) -> List[ProductRead]:
    return await service.list_products()


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)) -> ProductRead:
    return await service.get_product(product_id)


@router.post("", response_model=ProductRead)
async def create_product(
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Create a product from a name and one or more image URLs."""
    return await service.create_product(product)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    updates: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    return await service.update_product(product_id, updates)


@router.delete("")
async def delete_all_products(service: ProductService = Depends(get_product_service)) -> Dict[str, Any]:
    result = await service.delete_all_products()
    return {
        "message": "All products deleted",
        "deletedProducts": result.deleted,
        "deletedSwapOrders": result.swap_orders_deleted,
    }


@router.delete("/{product_id}")
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)) -> List[Any]:
    """Delete a product and every swap order that includes it."""
    product, removed = await service.delete_product(product_id)
    return [product, {"acknowledged": True, "deletedCount": removed}]
