"""Liveness endpoint reporting whether the document store answers."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from swap_api.app.api.deps import get_store
from swap_api.app.repositories.base import DocumentStore

router = APIRouter()


@router.get("/health")
async def health(store: DocumentStore = Depends(get_store)) -> JSONResponse:
    healthy = await store.ping()
    body: Dict[str, Any] = {"status": "ok" if healthy else "degraded", "database": "up" if healthy else "down"}
    code = status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=body)
