"""
LinkedIn Clone API - Main Application
Builds the HTTP gateway: CORS admission, body ceiling, versioned route
groups and, in production, the frontend bundle
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkedin_api import __version__
from linkedin_api.config import Settings, get_settings
from linkedin_api.db import Database
from linkedin_api.frontend import mount_frontend
from linkedin_api.middleware import BodySizeLimitMiddleware, RequestLoggingMiddleware, configure_cors
from linkedin_api.routes import ROUTE_GROUPS, health
from linkedin_api.services.exceptions import ServiceError
from linkedin_api.utils.logger import setup_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Connect to the database before accepting connections"""
    settings: Settings = app.state.settings
    logger.info(
        "Starting LinkedIn API",
        port=settings.port,
        environment=settings.node_env,
        allowed_origins=list(settings.allowed_origins),
    )

    # A failed connect propagates and aborts startup
    await app.state.db.connect()
    logger.info("Server ready", port=settings.port)

    yield

    await app.state.db.close()
    logger.info("LinkedIn API shutdown complete")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Custom HTTP exception handler"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
        },
        headers=exc.headers,
    )


async def service_error_handler(request: Request, exc: ServiceError):
    """Map domain errors raised by services to their status codes"""
    logger.info(
        "Request rejected by service",
        error=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.message,
            "status_code": exc.status_code,
        },
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        method=request.method,
        path=request.url.path,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred",
        },
    )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Process settings; read from the environment when omitted
        database: Database handle; built from settings when omitted

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="Social network API and single-page-application host",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.db = database if database is not None else Database(settings)

    # Last added runs first: CORS admission, CORS headers, request log, body ceiling, routes
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_size)
    app.add_middleware(RequestLoggingMiddleware)
    configure_cors(app, settings.allowed_origins)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(health.router, tags=["Health"])
    for prefix, router, tag in ROUTE_GROUPS:
        app.include_router(router, prefix=prefix, tags=[tag])

    if settings.is_production:
        mount_frontend(app, settings.static_root)

    return app
