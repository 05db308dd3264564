"""User model for post and series creators."""

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Creator profile."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    handle: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None

    @property
    def display_handle(self) -> str:
        return self.handle or "anonymous"

    @property
    def name(self) -> str:
        return self.display_name or self.handle or "Anonymous"


ANONYMOUS = User()
