"""Share landing pages for posts and series."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Header
from fastapi.responses import HTMLResponse

from ...backend.client import BackendClient
from ...config import Settings
from ...errors import NotFoundError
from ...rendering.bots import BotDetector
from ...rendering.pages import render_post_page, render_series_page
from ..dependencies import get_backend, get_base_url, get_bot_detector, get_settings

logger = structlog.get_logger()

router = APIRouter()

PAGE_CACHE_CONTROL = "s-maxage=3600, stale-while-revalidate"


@router.get("/p/{post_id}", response_class=HTMLResponse)
async def post_page(
    post_id: str,
    user_agent: Annotated[str | None, Header()] = None,
    backend: BackendClient = Depends(get_backend),
    detector: BotDetector = Depends(get_bot_detector),
    base_url: str = Depends(get_base_url),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the share page for a public post.

    Args:
        post_id: Post identifier
        user_agent: Requesting client's User-Agent
        backend: Injected backend client
        detector: Injected crawler detector
        base_url: Absolute base URL of this service
        settings: Application settings

    Returns:
        HTML page with Open Graph and Twitter Card metadata
    """
    found = await backend.get_post_with_creator(post_id)
    if found is None:
        raise NotFoundError("Post Not Found", detail="This post may be private or doesn't exist.")

    post, creator = found
    is_bot = detector.is_bot(user_agent)
    logger.info("post_page_rendered", post_id=post_id, is_bot=is_bot)

    html = render_post_page(post, creator, base_url=base_url, settings=settings, is_bot=is_bot)
    return HTMLResponse(html, headers={"Cache-Control": PAGE_CACHE_CONTROL})


@router.get("/series/{series_id}", response_class=HTMLResponse)
async def series_page(
    series_id: str,
    user_agent: Annotated[str | None, Header()] = None,
    backend: BackendClient = Depends(get_backend),
    detector: BotDetector = Depends(get_bot_detector),
    base_url: str = Depends(get_base_url),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Render the share page for a public series with its chapter list."""
    listing = await backend.get_series_listing(series_id)
    if listing is None:
        raise NotFoundError("Series Not Found", detail="This series may be private or doesn't exist.")

    is_bot = detector.is_bot(user_agent)
    logger.info(
        "series_page_rendered",
        series_id=series_id,
        chapters=listing.chapter_count,
        is_bot=is_bot,
    )

    html = render_series_page(listing, base_url=base_url, settings=settings, is_bot=is_bot)
    return HTMLResponse(
        html,
        headers={"Cache-Control": PAGE_CACHE_CONTROL, "X-Frame-Options": "ALLOWALL"},
    )
