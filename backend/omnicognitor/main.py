"""
OmniCognitor Gateway: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app(settings, data_api)` wires the explicit configuration and
       the upstream client into `app.state`, registers middleware, exception
       handlers and the single catch-all route.
Who:   uvicorn (`uvicorn omnicognitor.main:app`) and the test suite, which
       builds its own app with a mock upstream transport.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ Static CORS  │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Route: /{path} → RouteTable.resolve → handler      │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ Auth→401 │ NotFound→404     │   │
    │  │ Upstream→passthrough │ Unhandled→500         │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log configuration warnings
    Shutdown: close the pooled upstream HTTP client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from omnicognitor import __version__
from omnicognitor.config import Settings
from omnicognitor.exceptions import (
    AuthorizationError,
    GatewayError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from omnicognitor.middleware.cors import CORS_HEADERS, StaticCORSMiddleware
from omnicognitor.middleware.logging import RequestLoggingMiddleware
from omnicognitor.middleware.request_id import RequestIDMiddleware, request_id_var
from omnicognitor.routes import build_route_table, gateway
from omnicognitor.schemas.responses import ErrorResponse
from omnicognitor.services.data_api import DataAPIClient

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container log collectors read it)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-connection chatter from the HTTP stack
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("%s v%s starting up...", settings.service_name, __version__)
    logger.info("Upstream data API: %s", settings.rest_base_url)
    for warning in settings.warn_on_risky_config():
        logger.warning("Configuration: %s", warning)
    logger.info("Routes registered: %d", len(app.state.route_table))
    logger.info("=" * 60)

    yield

    logger.info("Shutting down...")
    await app.state.data_api.aclose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(exc: GatewayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.payload).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto `{success: false, error}` responses.

        ValidationError     → 400
        AuthorizationError  → 401
        NotFoundError       → 404
        UpstreamError       → upstream status, upstream body as `error`
        GatewayError (base) → its status (UnhandledError: 500, message kept)
        Exception           → 500 (last resort; runs outside the middleware
                              stack, so CORS headers are added here)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Fields: %s", rid, exc.message, exc.fields)
        return error_response(exc)

    @app.exception_handler(AuthorizationError)
    async def handle_authorization_error(request: Request, exc: AuthorizationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Write rejected: %s", rid, exc.message)
        return error_response(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(exc)

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        rid = request_id_var.get("")
        logger.warning("[%s] %s | Context: %s", rid, exc.message, exc.context)
        return error_response(exc)

    @app.exception_handler(GatewayError)
    async def handle_gateway_error(request: Request, exc: GatewayError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(exc) or type(exc).__name__).model_dump(),
            headers=CORS_HEADERS,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    data_api: Optional[DataAPIClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration; read from the environment when omitted
        data_api: Upstream client; built from `settings` when omitted

    The interactive docs are disabled: every path belongs to the gateway's
    own route table and an unknown path must answer 404.
    """
    settings = settings or Settings()
    data_api = data_api or DataAPIClient(settings)

    app = FastAPI(
        title="OmniCognitor Gateway",
        description="JSON gateway over a hosted PostgREST data API.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.data_api = data_api
    app.state.route_table = build_route_table()

    # Last added runs first: CORS → RequestID → Logging → route
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(StaticCORSMiddleware)

    register_exception_handlers(app)

    app.include_router(gateway.router)

    return app


# uvicorn expects `omnicognitor.main:app`
app = create_app()
