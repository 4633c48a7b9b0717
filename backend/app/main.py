"""
Elite Logistic Backend — FastAPI Application Factory
======================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware, exception handlers, routes, the shipment store
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn app.main:app) and by tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Req ID → Logging → GZip → CORS        │
    │                                                     │
    │  Routes:                                            │
    │    /api/shipments[/{trackingNumber}]  CRUD          │
    │    /api/health, /api/test             liveness      │
    │    /  (optional built web client)                   │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400  NotFound→404  Database→500  │
    └─────────────────────────────────────────────────────┘

Store ownership:
    create_app(store=...) attaches a ready store to app.state. Without one,
    the lifespan handler builds it from settings on startup and disposes its
    engine on shutdown.
"""

import logging
import platform
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import (
    DatabaseError,
    EliteLogisticError,
    NotFoundError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import health, shipments
from app.services.shipment_store import ShipmentStore

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Build the shipment store unless one was injected
        3. Optionally create tables (AUTO_CREATE_SCHEMA)
        4. Log the startup banner
    Shutdown:
        Dispose the store's engine if this lifespan created it.
    """
    setup_logging()

    owns_store = app.state.store is None
    if owns_store:
        app.state.store = ShipmentStore.from_settings(settings)
    store: ShipmentStore = app.state.store

    if settings.auto_create_schema:
        await store.create_schema()
        logger.info("Shipment tables ensured")

    logger.info("%s running on port %d", settings.server_name, settings.port)
    logger.info("Python version: %s", platform.python_version())
    logger.info("Environment: %s", settings.environment)
    if app.state.frontend_dir is not None:
        logger.info("Serving frontend from: %s", app.state.frontend_dir)

    yield

    logger.info("%s shutting down...", settings.server_name)
    if owns_store:
        await store.dispose()
        app.state.store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, **extra) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    body.update(extra)
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        ValidationError          → 400
        RequestValidationError   → 400 (FastAPI's default would be 422)
        NotFoundError            → 404
        DatabaseError            → 500 with the underlying message
        EliteLogisticError       → 500
        HTTPException            → its own status (404 "API endpoint not found" for
                                   unmatched /api paths and methods)
        Exception                → 500, traceback logged

    Every body carries a `message` key.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, details=exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        parts = []
        for err in exc.errors():
            # Drop the leading "body"/"path" segment; keep the JSON field name
            loc = [str(part) for part in err.get("loc", ())][1:]
            parts.append(f"{'.'.join(loc)}: {err['msg']}" if loc else err["msg"])
        message = "Shipment validation failed: " + ", ".join(parts)
        logger.warning("[%s] Request validation error: %s", request_id_var.get(""), message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", message),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""), exc.message, exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(EliteLogisticError)
    async def handle_app_error(request: Request, exc: EliteLogisticError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        path = request.url.path
        is_api = path == API_PREFIX or path.startswith(API_PREFIX + "/")

        if exc.status_code == 404 and not is_api and request.method == "GET":
            # Client-side routes of the single-page app resolve to index.html
            frontend_dir: Optional[Path] = request.app.state.frontend_dir
            if frontend_dir is not None:
                return FileResponse(frontend_dir / "index.html")

        status_code = exc.status_code
        headers = getattr(exc, "headers", None)
        # No route for this path and method, including StaticFiles rejecting non-GET
        if is_api and status_code in (404, 405):
            status_code = 404
            message = "API endpoint not found"
            headers = None
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=status_code,
            content=_error_body("http_error", message),
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("internal_server_error", str(exc)),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def _resolve_frontend_dir(frontend_dist: Optional[str]) -> Optional[Path]:
    if not frontend_dist:
        return None
    path = Path(frontend_dist).resolve()
    if not (path / "index.html").is_file():
        logger.warning("FRONTEND_DIST %s has no index.html; serving API only", path)
        return None
    return path


def create_app(
    store: Optional[ShipmentStore] = None,
    frontend_dist: Optional[str] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Ready-made ShipmentStore. When omitted, the lifespan handler
               builds one from settings at startup.
        frontend_dist: Directory of the built web client; defaults to
               settings.frontend_dist. Unset or missing = API only.
    """
    app = FastAPI(
        title="Elite Logistic API",
        description="Register shipments and track their status and estimated delivery.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.store = store
    app.state.frontend_dir = _resolve_frontend_dir(frontend_dist or settings.frontend_dist)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(shipments.router)
    app.include_router(health.router)

    # Mounted last so /api routes win
    if app.state.frontend_dir is not None:
        app.mount(
            "/",
            StaticFiles(directory=str(app.state.frontend_dir), html=True),
            name="frontend",
        )

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `app.main:app` to be importable
app = create_app()
