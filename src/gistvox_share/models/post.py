"""Post model matching the backend `posts` table."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

PUBLIC_AUDIENCE = "public"


class Post(BaseModel):
    """Audio story post."""

    model_config = ConfigDict(extra="allow")

    # Identifiers
    id: str
    user_id: str | None = None

    # Content fields
    title: str | None = None
    description: str | None = None

    # Media
    audio_url: str | None = None
    audio_duration: float | None = None

    # Dates
    created_at: datetime | None = None

    # Audience
    audience_type: str | None = None

    # Engagement metrics
    listens_count: int = 0
    likes_count: int = 0
    saves_count: int = 0
    shares_count: int = 0

    # Series membership
    series_id: str | None = None
    chapter_number: int | None = None
    chapter_title: str | None = None

    @field_validator("listens_count", "likes_count", "saves_count", "shares_count", mode="before")
    @classmethod
    def null_count_as_zero(cls, v):
        """Backend counters are nullable; treat missing as zero."""
        return 0 if v is None else v

    @property
    def is_public(self) -> bool:
        return (self.audience_type or "").lower() == PUBLIC_AUDIENCE

    @property
    def display_title(self) -> str:
        return self.title or "Untitled"

    @property
    def display_chapter_title(self) -> str:
        return self.chapter_title or self.title or "Untitled Chapter"
