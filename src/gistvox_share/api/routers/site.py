"""Root information page and favicon."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from ...config import Settings
from ...rendering.pages import render_index_page
from ..dependencies import get_base_url, get_settings

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(
    base_url: str = Depends(get_base_url),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Explain the service and redirect to the main site."""
    return HTMLResponse(render_index_page(settings, base_url))


@router.get("/favicon.ico", include_in_schema=False)
async def favicon(settings: Settings = Depends(get_settings)) -> RedirectResponse:
    return RedirectResponse(settings.favicon_url, status_code=301)
