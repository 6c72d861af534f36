"""
FastAPI application entry point for the identity service.
Mounts routes, Prometheus metrics and the error translation layer.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from sqlalchemy.exc import SQLAlchemyError

from identity_api import __version__
from identity_api.api.v1.router import api_router
from identity_api.config import get_settings
from identity_api.core.exceptions import ServiceError, TransientStoreError, UnauthorizedError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: nothing to warm up. Shutdown: release pooled connections."""
    logger.info("identity service starting version=%s", __version__)
    yield
    from identity_api.db.session import engine

    await engine.dispose()
    logger.info("identity service stopped")


async def service_error_handler(request: Request, exc: ServiceError):
    """Render typed business errors. Infrastructure failures stay opaque to the client."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        detail = "storage unavailable" if isinstance(exc, TransientStoreError) else "internal error"
        return JSONResponse(status_code=exc.status_code, content={"detail": detail})
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    """Database errors raised outside the repositories' store_errors wrapping."""
    logger.error("%s %s storage error: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "storage unavailable"})


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="User registration, authentication and token validation.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
