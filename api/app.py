"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import NotoriteError
from .models.errors import ErrorResponse, ValidationErrorResponse
from .routes import health, users
from modules.auth.routes import router as auth_router

logger = logging.getLogger(__name__)


def configure_logging(level: str, debug: bool = False) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if debug else level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )
    for noisy in ("httpcore", "httpx", "hpack", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; signup and login will fail")
    yield
    logger.info("Shutting down %s", settings.app_name)


async def notorite_error_handler(request: Request, exc: NotoriteError) -> JSONResponse:
    """Render a classified error with its own status code."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed or missing input as a 400."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    body = ValidationErrorResponse(details={"errors": errors})
    return JSONResponse(status_code=400, content=body.model_dump())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and return a stable 500 without internal details."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = ErrorResponse(error="INTERNAL_ERROR", message="An unexpected error occurred")
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.debug)

    app = FastAPI(
        title=settings.app_name,
        description="Account signup, login, password reset and email verification",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Error handlers
    app.add_exception_handler(NotoriteError, notorite_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])

    return app


# Application instance for uvicorn
app = create_app()
