"""FastAPI application factory."""

import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from .. import __version__
from ..backend.listen_guard import ListenGuard
from ..config import Settings, settings as default_settings
from ..errors import ShareServiceError, UpstreamError
from ..rendering.pages import render_error_page
from ..utils.logging import bind_request_context, setup_logging
from .dependencies import diagnostics_enabled
from .routers import embed, health, listens, og, share, site

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle.

    Opens the shared outbound HTTP client on startup and closes it on shutdown.
    """
    settings: Settings = app.state.settings

    # Setup logging
    setup_logging(settings.log_level, json_output=settings.log_json)

    app.state.http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    logger.info("app_started", environment=settings.environment, config=settings.config_status())

    yield

    # Cleanup
    await app.state.http.aclose()
    app.state.http = None


def _error_response(request: Request, error: ShareServiceError, cause: BaseException) -> Response:
    """Render an error as an HTML page, or JSON for API and diagnostic requests."""
    if isinstance(error, UpstreamError) and diagnostics_enabled(request):
        return JSONResponse(
            status_code=error.status_code,
            content={
                "error": error.title,
                "message": error.message,
                "stack": "".join(traceback.format_exception(cause)),
            },
        )

    if request.url.path.startswith("/api/"):
        return JSONResponse(
            status_code=error.status_code,
            content={"error": error.title, "message": error.message},
        )

    heading = error.message if error.status_code != 500 else "Something went wrong"
    message = error.detail if error.status_code != 500 else "Please try again later."
    return HTMLResponse(
        render_error_page(error.title, message or error.message, heading=heading),
        status_code=error.status_code,
    )


async def share_service_error_handler(request: Request, exc: ShareServiceError) -> Response:
    logger.error(
        "request_failed",
        status=exc.status_code,
        error=exc.message,
        detail=exc.detail,
    )
    return _error_response(request, exc, exc)


async def unexpected_error_handler(request: Request, exc: Exception) -> Response:
    """Last resort for failures outside the service error hierarchy."""
    logger.exception("request_crashed", error=str(exc))
    return _error_response(request, UpstreamError("Unexpected server error", detail=str(exc)), exc)


async def bind_request_logging(request: Request, call_next) -> Response:
    bind_request_context(method=request.method, path=request.url.path)
    return await call_next(request)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the environment-loaded defaults

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Gistvox Share Service",
        description="Share pages, embeddable player and preview images for Gistvox audio",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.http = None
    app.state.listen_guard = ListenGuard(window_seconds=settings.listen_window_seconds)

    # Pages and images are fetched cross-origin by embeds and link unfurlers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "HEAD"],
        allow_headers=["*"],
    )

    app.middleware("http")(bind_request_logging)

    app.add_exception_handler(ShareServiceError, share_service_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(share.router, tags=["Share"])
    app.include_router(embed.router, tags=["Embed"])
    app.include_router(og.router, tags=["Preview Images"])
    app.include_router(listens.router, prefix="/api", tags=["Listens"])
    app.include_router(site.router, tags=["Site"])

    return app
