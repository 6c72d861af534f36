"""
Health checks - for load balancers, Kubernetes, and monitoring.
"""

from fastapi import APIRouter

from item_api.config import get_settings

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready():
    """Readiness: can accept traffic?"""
    return {"status": "ready"}
