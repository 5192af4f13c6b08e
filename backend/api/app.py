"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings, validate_settings
from shared.exceptions import ExternalServiceError
from shared.logging_config import configure_logging
from .middleware.gate import GateMiddleware
from .models.errors import ErrorResponse
from .routes import health, users
from modules.profiles.routes import router as profiles_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Refuses to start without a session secret: serving with an
    unconfigured verifier would treat every visitor as signed out.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings)
    validate_settings(settings)
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(profile check: {settings.profile_check_mode})"
    )
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


async def external_service_error_handler(request: Request, exc: ExternalServiceError) -> JSONResponse:
    """Map dependency failures to a 500 with the standard error body."""
    logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    body = ErrorResponse(
        error="Internal server error",
        detail=exc.message,
        code=exc.code,
        details=exc.details,
    )
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="ZoškaGram session and profile-completion gate",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    app.add_exception_handler(ExternalServiceError, external_service_error_handler)

    # Middleware added last runs first: CORS wraps the gate
    app.add_middleware(GateMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(profiles_router, prefix="/api/profiles", tags=["profiles"])

    return app


# Application instance for uvicorn
app = create_app()
