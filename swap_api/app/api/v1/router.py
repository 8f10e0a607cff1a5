"""
Top‑level router for version 1 of the API.

Aggregates the domain routers under their path prefixes.  When a new
domain is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import health, products, swap_orders, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(swap_orders.router, prefix="/swap-orders", tags=["swap-orders"])
# The health router defines its own "/health" path.
router.include_router(health.router, tags=["health"])
