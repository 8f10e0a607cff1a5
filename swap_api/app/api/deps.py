"""
FastAPI dependencies.

The store is created by the application lifespan (or passed to
``create_app``) and kept on ``app.state``.  Services are built per
request around it.
"""

from fastapi import Depends, Request

from swap_api.app.repositories.base import DocumentStore
from swap_api.app.services.integrity_service import IntegrityService
from swap_api.app.services.product_service import ProductService
from swap_api.app.services.swap_order_service import SwapOrderService
from swap_api.app.services.user_service import UserService


def get_store(request: Request) -> DocumentStore:
    store = request.app.state.store
    if store is None:
        raise RuntimeError("Document store is not initialised")
    return store


def get_integrity_service(request: Request, store: DocumentStore = Depends(get_store)) -> IntegrityService:
    return IntegrityService(store, verify_references=request.app.state.verify_references)


def get_user_service(
    store: DocumentStore = Depends(get_store),
    integrity: IntegrityService = Depends(get_integrity_service),
) -> UserService:
    return UserService(store, integrity)


def get_product_service(
    store: DocumentStore = Depends(get_store),
    integrity: IntegrityService = Depends(get_integrity_service),
) -> ProductService:
    return ProductService(store, integrity)


def get_swap_order_service(
    store: DocumentStore = Depends(get_store),
    integrity: IntegrityService = Depends(get_integrity_service),
) -> SwapOrderService:
    return SwapOrderService(store, integrity)
