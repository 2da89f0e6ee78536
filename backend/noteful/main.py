"""
Noteful Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (uvicorn noteful.main:app), `python -m noteful.main`, tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │  Middleware:  Request ID → Logging → GZip → CORS         │
    │  Routes:      {prefix}/folders  {prefix}/tags            │
    │               {prefix}/notes    /health                  │
    │  Exceptions:  ValidationError→400  NotFound→404  *→500   │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration (logged, non-fatal)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from noteful import __version__
from noteful.config import settings
from noteful.database import dispose_engine
from noteful.exceptions import NotFoundError, ValidationError
from noteful.middleware.logging import RequestLoggingMiddleware
from noteful.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from noteful.routes import folders, health, notes, tags

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: <ISO time> [LEVEL] [request id] logger.name: message, to stdout.
    Called once from the lifespan, before anything else logs.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Third-party loggers that log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Noteful backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health reports the database as disconnected
        logger.error("Configuration error: %s", str(e))

    logger.info(
        "Cascades: tag delete=%s, folder delete=%s",
        settings.cascade_tag_delete,
        settings.cascade_folder_delete,
    )
    logger.info(
        "Serving %s on http://%s:%d",
        settings.api_prefix or "/",
        settings.backend_host,
        settings.backend_port,
    )

    yield

    logger.info("Noteful backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, message: str, details=None) -> JSONResponse:
    content = {
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError (and subclasses) → 400 with the rule that was broken
        RequestValidationError           → 400 (malformed JSON / wrong types)
        NotFoundError, unknown route     → 404 {"message": "Not Found"}
        Exception (fallback)             → 500, no internals in the body

    Store errors are not caught anywhere before the fallback; the stack trace
    goes to the log only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("%s: %s", exc.error_code, exc.message)
        return _error_response(400, exc.error_code, exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        # json_invalid reports a character offset as its location, not a field
        if first.get("type") == "json_invalid" or not location:
            message = "Malformed request body"
        else:
            message = f"Invalid `{location}`: {first.get('msg', 'malformed request')}"
        return _error_response(
            400,
            "validation_error",
            message,
            {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error_response(404, "not_found", "Not Found")
        return _error_response(exc.status_code, "http_error", str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "Unexpected error: %s",
            str(exc),
            exc_info=exc,
        )
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Noteful API",
        description="Notes organized into folders and labelled with tags.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(folders.router, prefix=settings.api_prefix)
    app.include_router(tags.router, prefix=settings.api_prefix)
    app.include_router(notes.router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Runs the app under uvicorn with the configured host and port."""
    import uvicorn

    uvicorn.run(
        "noteful.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
