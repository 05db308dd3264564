"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...config import Settings
from ..dependencies import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    environment: str
    config: dict[str, str]


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Check service health and report which settings are present.

    Pages cannot be served without the backend, so its absence reports `degraded`.
    """
    from ... import __version__

    return HealthResponse(
        status="healthy" if settings.has_backend else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
        config=settings.config_status(),
    )
