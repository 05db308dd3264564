"""Series model and its chapter listing."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .post import PUBLIC_AUDIENCE, Post
from .user import User


class Series(BaseModel):
    """Audio series made of ordered chapters."""

    model_config = ConfigDict(extra="allow")

    id: str
    user_id: str | None = None
    title: str | None = None
    description: str | None = None
    cover_image_url: str | None = None
    total_duration: float | None = None
    created_at: datetime | None = None
    audience_type: str | None = None

    @property
    def is_public(self) -> bool:
        # The series table may carry no audience column at all.
        if self.audience_type is None:
            return True
        return self.audience_type.lower() == PUBLIC_AUDIENCE

    @property
    def display_title(self) -> str:
        return self.title or "Untitled Series"


class SeriesListing(BaseModel):
    """A series together with its creator and public chapters."""

    series: Series
    creator: User
    chapters: list[Post] = Field(default_factory=list)

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    @property
    def duration_seconds(self) -> float:
        if self.series.total_duration:
            return self.series.total_duration
        return sum(chapter.audio_duration or 0 for chapter in self.chapters)

    @property
    def total_listens(self) -> int:
        return sum(chapter.listens_count for chapter in self.chapters)
