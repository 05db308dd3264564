"""Open Graph preview image redirects."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from ...errors import ConfigurationError
from ...imaging.og import ImageRedirect, OgImageService
from ..dependencies import debug_requested, get_og_service

router = APIRouter(prefix="/og")


def _respond(request: Request, result: ImageRedirect) -> Response:
    if isinstance(result.error, ConfigurationError) and debug_requested(request):
        return JSONResponse(
            {
                "error": result.error.message,
                "message": result.error.detail,
                "fallback": result.url,
            }
        )
    return RedirectResponse(
        result.url,
        status_code=result.status_code,
        headers={"Cache-Control": result.cache_control},
    )


@router.get("/series/{series_id}.png")
async def series_image(
    series_id: str,
    request: Request,
    service: OgImageService = Depends(get_og_service),
) -> Response:
    """Redirect to the preview image for a series."""
    return _respond(request, await service.series_image(series_id))


@router.get("/{post_id}.png")
async def post_image(
    post_id: str,
    request: Request,
    service: OgImageService = Depends(get_og_service),
) -> Response:
    """Redirect to the preview image for a post.

    Never fails: any error falls back to a static image.
    """
    return _respond(request, await service.post_image(post_id))
