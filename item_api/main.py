"""
FastAPI application entry point for the item service.
Mounts routes, Prometheus metrics and the error translation layer.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from sqlalchemy.exc import SQLAlchemyError

from item_api import __version__
from item_api.api.v1.router import api_router
from item_api.config import get_settings
from item_api.core.dependencies import close_token_validator
from item_api.core.exceptions import ServiceError, TransientStoreError, UnauthorizedError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Shutdown: close the identity client pool and the database engine."""
    logger.info("item service starting version=%s identity=%s", __version__, get_settings().identity_url)
    yield
    await close_token_validator()
    from item_api.db.session import engine

    await engine.dispose()
    logger.info("item service stopped")


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
        description="Owner-scoped item CRUD, authorized by the identity service.",
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
