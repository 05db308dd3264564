"""Embeddable audio player."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from ...backend.client import BackendClient
from ...config import Settings
from ...errors import BadRequestError, NotFoundError
from ...rendering.pages import render_embed_player
from ...rendering.themes import get_theme
from ..dependencies import get_backend, get_base_url, get_settings

logger = structlog.get_logger()

router = APIRouter()

EMBED_HEADERS = {"Cache-Control": "max-age=3600", "X-Frame-Options": "ALLOWALL"}


async def _render(
    post_id: str,
    theme_name: str | None,
    backend: BackendClient,
    base_url: str,
    settings: Settings,
) -> HTMLResponse:
    found = await backend.get_post_with_creator(post_id)
    if found is None:
        raise NotFoundError("Post Not Found", detail="This post may be private or doesn't exist.")

    post, creator = found
    theme = get_theme(theme_name, default=settings.embed_theme)
    logger.info("embed_rendered", post_id=post_id, theme=theme.name)

    html = render_embed_player(post, creator, base_url=base_url, settings=settings, theme=theme)
    return HTMLResponse(html, headers=EMBED_HEADERS)


@router.get("/embed", response_class=HTMLResponse)
async def embed_by_query(
    id: Annotated[str | None, Query(description="Post identifier")] = None,
    theme: Annotated[str | None, Query(description="Player theme")] = None,
    backend: BackendClient = Depends(get_backend),
    base_url: str = Depends(get_base_url),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the player for a post given as `?id=`."""
    if not id:
        raise BadRequestError("Invalid Request", detail="A post ID is required.")
    return await _render(id, theme, backend, base_url, settings)


@router.get("/embed/{post_id}", response_class=HTMLResponse)
async def embed_player(
    post_id: str,
    theme: Annotated[str | None, Query(description="Player theme")] = None,
    backend: BackendClient = Depends(get_backend),
    base_url: str = Depends(get_base_url),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the iframe-embeddable player for a public post.

    Args:
        post_id: Post identifier
        theme: Theme preset name, unknown names use the default
        backend: Injected backend client
        base_url: Absolute base URL of this service
        settings: Application settings

    Returns:
        Standalone player HTML that may be framed by any site
    """
    return await _render(post_id, theme, backend, base_url, settings)
