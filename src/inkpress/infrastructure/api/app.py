"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inkpress.core.config import get_settings
from inkpress.core.errors import AuthError, BadRequestError, ErrorKind
from inkpress.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from inkpress.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

_HTTP_LABELS = {
    400: "Bad request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not found",
    405: "Method not allowed",
    409: "Conflict",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and initializes the database on startup; closes the
    database on shutdown.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting Inkpress",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Inkpress")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Authentication core for the Inkpress blogging backend",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check; does not touch the database."""
        return {
            "status": "healthy",
            "service": get_settings().app_name,
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check including database connectivity."""
        settings = get_settings()
        if await get_db_manager().check_connection():
            return {
                "status": "ready",
                "service": settings.app_name,
                "version": settings.app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": settings.app_name,
                "database": "disconnected",
            },
        )

    @app.get("/live", tags=["health"])
    async def liveness_check():
        """Liveness check."""
        return {
            "status": "alive",
            "service": get_settings().app_name,
            "version": get_settings().app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from inkpress.infrastructure.api.routes import auth_router, users_router

    settings = get_settings()

    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
    app.include_router(users_router, prefix=f"{settings.api_prefix}/users", tags=["users"])

    @app.get(settings.api_prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def error_body(kind: ErrorKind, message: str, detail: object | None = None) -> dict:
    """Build the JSON body shared by every error response.

    Diagnostic ``detail`` is only included outside production.
    """
    body: dict = {"error": kind.label, "message": message}
    if detail is not None and not get_settings().is_production:
        body["detail"] = detail
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        """Render a taxonomy error with its kind's status code."""
        body = error_body(exc.kind, exc.message, exc.detail)
        if isinstance(exc, BadRequestError) and exc.errors:
            body["details"] = exc.errors
        headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHORIZED else None
        return JSONResponse(status_code=exc.kind.status_code, content=body, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Render request-shape failures as a 400 with per-field details."""
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
                "code": error["type"],
            }
            for error in exc.errors()
        ]
        body = error_body(ErrorKind.BAD_REQUEST, "Validation error")
        body["details"] = details
        return JSONResponse(status_code=400, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render framework HTTP errors (403, 404, 405) in the common shape."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": _HTTP_LABELS.get(exc.status_code, "Error"),
                "message": str(exc.detail),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.exception(
            "Unhandled exception",
            path=str(request.url.path),
            method=request.method,
            exc_type=type(exc).__name__,
            exc_info=exc,
        )
        message = (
            "An unexpected error occurred" if get_settings().is_production else str(exc)
        )
        return JSONResponse(
            status_code=500,
            content=error_body(ErrorKind.INTERNAL, message),
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and tag it with a correlation ID."""
        correlation_id = request.headers.get(CORRELATION_HEADER) or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            clear_context()
