"""Versioned API route modules."""

from fastapi import APIRouter

from combat_balance.api.routes.combat import router as combat_router
from combat_balance.api.routes.metadata import router as metadata_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(combat_router, tags=["Combat"])
api_router.include_router(metadata_router)

__all__ = ["api_router"]
