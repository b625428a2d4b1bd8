"""
Relay Hub Backend: FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, error mapping and
       lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn app.main:app) or by run() below.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌───────┐ ┌──────┐ ┌──────┐ ┌────────┐  │
    │  │ Req ID │→│Logging│→│ GZip │→│ CORS │→│ Errors │  │
    │  └────────┘ └───────┘ └──────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌─────────────┐ ┌────────────┐  │
    │  │ POST /api/face │ │ GET weather │ │ POST chat  │  │
    │  └────────────────┘ └─────────────┘ └────────────┘  │
    │  GET /health        /  → static client bundle       │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ MissingInput→400 │ Upstream→500 │ other→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Report missing upstream credentials (server still starts)
    3. Create the shared outbound HTTP client

    Shutdown:
    1. Close the outbound HTTP client
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app import __version__
from app.config import settings
from app.exceptions import MissingInputError, RelayError
from app.middleware.errors import UnhandledErrorMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import chat, face, health, weather
from app.services.http_client import create_http_client, dispose_http_client

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] app.services.chat_service: message
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # httpx logs every request line at INFO, including the weather URL with its key
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Runs initialization on startup and cleanup on shutdown."""
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Relay Hub Backend %s starting up...", __version__)

    missing = settings.missing_credentials()
    if missing:
        # Don't exit: the other relays and /health still work
        logger.error("Missing upstream credentials: %s", ", ".join(missing))

    app.state.http_client = create_http_client(settings)

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Relay Hub Backend shutting down...")
    await dispose_http_client(app.state.http_client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": <message>}` responses.

    Handler hierarchy:
        MissingInputError       → 400, endpoint-specific message
        UpstreamError           → 500, "server error"
        RequestValidationError  → 400, "invalid request" (malformed body)
        Exception (fallback)    → 500, "server error", answered by
                                  UnhandledErrorMiddleware so that the
                                  response keeps its X-Request-ID and CORS
                                  headers

    Only RelayError.message reaches the client. Context, upstream exception
    text and stack traces are logged server-side.
    """

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError):
        rid = request_id_var.get("")
        if isinstance(exc, MissingInputError):
            logger.warning("[%s] Missing input: %s", rid, exc.message)
        else:
            logger.error("[%s] %s | Context: %s", rid, type(exc).__name__, exc.context)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"error": "invalid request"},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Relay Hub API",
        description=(
            "Backend relay for the browser client: face detection (Face++), "
            "current weather (OpenWeatherMap) and chat completion (Llama API). "
            "Keeps third-party credentials on the server."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(face.router)
    app.include_router(weather.router)
    app.include_router(chat.router)
    app.include_router(health.router)

    # ── Static Client Bundle ──────────────────────────────────────────────
    # Mounted last so /api and /health win over same-named files
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.debug("Static directory %s not found; client bundle not served", static_dir)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
