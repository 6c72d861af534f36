"""
API v1 router - aggregates item endpoint modules.
"""

from fastapi import APIRouter

from item_api.api.v1.endpoints import health, items

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(items.router, prefix="/items", tags=["items"])
