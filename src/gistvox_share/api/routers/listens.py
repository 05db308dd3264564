"""Listen tracking endpoint used by the player scripts."""

import secrets

import structlog
from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from ...backend.client import BackendClient
from ...backend.listen_guard import ListenGuard
from ...config import Settings
from ...errors import NotFoundError
from ..dependencies import get_backend, get_listen_guard, get_settings

logger = structlog.get_logger()

router = APIRouter()


class ListenResponse(BaseModel):
    """Result of a listen tracking request."""

    post_id: str
    tracked: bool
    count: int | None = None


def _session_id(request: Request, response: Response, settings: Settings) -> str:
    """Read the session cookie, issuing a new one when absent."""
    session_id = request.cookies.get(settings.session_cookie_name)
    if session_id:
        return session_id

    session_id = secrets.token_urlsafe(16)
    # Third-party frames only send SameSite=None cookies
    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="none" if settings.session_cookie_secure else "lax",
        path="/api/listens",
    )
    return session_id


@router.post("/listens/{post_id}", response_model=ListenResponse)
async def track_listen(
    post_id: str,
    request: Request,
    response: Response,
    backend: BackendClient = Depends(get_backend),
    guard: ListenGuard = Depends(get_listen_guard),
    settings: Settings = Depends(get_settings),
) -> ListenResponse:
    """Record one listen per browser session for a public post.

    Args:
        post_id: Post identifier
        request: Incoming request carrying the session cookie
        response: Outgoing response the session cookie is set on
        backend: Injected backend client
        guard: Per-session de-duplication guard
        settings: Application settings

    Returns:
        ListenResponse with whether the listen was recorded and the new count
    """
    session_id = _session_id(request, response, settings)

    post = await backend.get_public_post(post_id)
    if post is None:
        raise NotFoundError("Post Not Found", detail="This post may be private or doesn't exist.")

    if not await guard.claim(session_id, post_id):
        return ListenResponse(post_id=post_id, tracked=False)

    try:
        count = await backend.track_listen(post_id)
    except Exception:
        # Failed calls must not use up the session's one listen
        await guard.release(session_id, post_id)
        raise

    return ListenResponse(post_id=post_id, tracked=True, count=count)
