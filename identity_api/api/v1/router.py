"""
API v1 router - aggregates identity endpoint modules.
"""

from fastapi import APIRouter

from identity_api.api.v1.endpoints import health, identity

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(identity.router, prefix="/identity", tags=["identity"])
