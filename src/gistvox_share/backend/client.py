"""Read-only client for the Gistvox backend (Supabase PostgREST)."""

from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from ..config import Settings
from ..errors import ConfigurationError, UpstreamError
from ..models.post import PUBLIC_AUDIENCE, Post
from ..models.series import Series, SeriesListing
from ..models.user import ANONYMOUS, User

logger = structlog.get_logger()

# PostgREST error code for "invalid input syntax", e.g. a malformed uuid
INVALID_INPUT_CODE = "22P02"


class BackendClient:
    """Fetches posts, users and series, and records listens."""

    POST_COLUMNS = (
        "id,title,description,audio_url,audio_duration,created_at,user_id,"
        "audience_type,listens_count,likes_count,saves_count,shares_count,"
        "series_id,chapter_number,chapter_title"
    )
    USER_COLUMNS = "id,handle,display_name,avatar_url"
    SERIES_COLUMNS = "*"
    LISTEN_RPC = "track_embed_listen"

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        """Initialize backend client.

        Args:
            http: Shared async HTTP client
            settings: Application settings with backend URL and key
        """
        self.http = http
        self.settings = settings

    def _rest_url(self, path: str) -> str:
        if not self.settings.has_backend:
            raise ConfigurationError(
                "Backend is not configured",
                detail="SUPABASE_URL and SUPABASE_ANON_KEY must be set",
            )
        return f"{self.settings.supabase_url.rstrip('/')}/rest/v1/{path}"

    def _headers(self) -> dict[str, str]:
        key = self.settings.supabase_anon_key or ""
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": "application/json",
        }

    async def _select(
        self,
        table: str,
        filters: dict[str, str],
        columns: str,
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Run a PostgREST select with equality filters.

        Args:
            table: Table name
            filters: Column to value mapping, each applied as `eq`
            columns: PostgREST select list
            order: Optional order clause (e.g. `chapter_number.asc`)
            limit: Optional row limit

        Returns:
            List of row dictionaries
        """
        url = self._rest_url(table)
        params: dict[str, str] = {"select": columns}
        for column, value in filters.items():
            params[column] = f"eq.{value}"
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)

        logger.debug("backend_select", table=table, filters=filters)

        try:
            response = await self.http.get(url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error("backend_request_failed", table=table, error=str(e))
            raise UpstreamError(f"Failed to fetch {table}", detail=str(e)) from e

        if response.status_code == 400 and self._is_invalid_input(response):
            logger.info("backend_invalid_identifier", table=table, filters=filters)
            return []

        if response.is_error:
            logger.error(
                "backend_error_response",
                table=table,
                status=response.status_code,
                body=response.text[:200],
            )
            raise UpstreamError(
                f"Backend returned {response.status_code} for {table}",
                detail=response.text[:500],
            )

        try:
            rows = response.json()
        except ValueError as e:
            raise UpstreamError(f"Unreadable payload for {table}") from e
        if not isinstance(rows, list):
            raise UpstreamError(f"Unexpected payload for {table}")
        return rows

    @staticmethod
    def _parse(model: type[BaseModel], row: dict[str, Any], table: str) -> Any:
        try:
            return model(**row)
        except ValidationError as e:
            logger.error("backend_row_invalid", table=table, error=str(e))
            raise UpstreamError(f"Unexpected {table} row", detail=str(e)) from e

    @staticmethod
    def _is_invalid_input(response: httpx.Response) -> bool:
        try:
            payload = response.json()
        except ValueError:
            return False
        return isinstance(payload, dict) and payload.get("code") == INVALID_INPUT_CODE

    async def get_public_post(self, post_id: str) -> Post | None:
        """Fetch a post only if it is public.

        Args:
            post_id: Post identifier

        Returns:
            Post, or None when missing or not public
        """
        rows = await self._select(
            "posts",
            {"id": post_id, "audience_type": PUBLIC_AUDIENCE},
            self.POST_COLUMNS,
            limit=1,
        )
        if not rows:
            return None
        post = self._parse(Post, rows[0], "posts")
        return post if post.is_public else None

    async def get_user(self, user_id: str | None) -> User:
        """Fetch a creator profile, degrading to an anonymous user.

        Args:
            user_id: User identifier

        Returns:
            User record, or the anonymous placeholder
        """
        if not user_id:
            return ANONYMOUS

        try:
            rows = await self._select("users", {"id": user_id}, self.USER_COLUMNS, limit=1)
        except UpstreamError as e:
            logger.warning("user_lookup_failed", user_id=user_id, error=e.message)
            return ANONYMOUS

        return self._parse(User, rows[0], "users") if rows else ANONYMOUS

    async def get_post_with_creator(self, post_id: str) -> tuple[Post, User] | None:
        post = await self.get_public_post(post_id)
        if post is None:
            return None
        creator = await self.get_user(post.user_id)
        return post, creator

    async def get_series(self, series_id: str) -> Series | None:
        rows = await self._select("series", {"id": series_id}, self.SERIES_COLUMNS, limit=1)
        if not rows:
            return None
        series = self._parse(Series, rows[0], "series")
        return series if series.is_public else None

    async def get_series_chapters(self, series_id: str) -> list[Post]:
        """Fetch the public chapters of a series ordered by chapter number."""
        rows = await self._select(
            "posts",
            {"series_id": series_id, "audience_type": PUBLIC_AUDIENCE},
            self.POST_COLUMNS,
            order="chapter_number.asc",
        )
        return [self._parse(Post, row, "posts") for row in rows]

    async def get_series_listing(self, series_id: str) -> SeriesListing | None:
        """Fetch a public series with its creator and chapters.

        Args:
            series_id: Series identifier

        Returns:
            SeriesListing, or None when missing or not public
        """
        series = await self.get_series(series_id)
        if series is None:
            return None

        creator = await self.get_user(series.user_id)
        chapters = await self.get_series_chapters(series_id)
        return SeriesListing(series=series, creator=creator, chapters=chapters)

    async def track_listen(self, post_id: str) -> int | None:
        """Record a listen through the backend RPC.

        Args:
            post_id: Post identifier

        Returns:
            Updated listen count when the backend reports one
        """
        url = self._rest_url(f"rpc/{self.LISTEN_RPC}")
        headers = {**self._headers(), "Content-Type": "application/json"}

        try:
            response = await self.http.post(url, json={"p_post_id": post_id}, headers=headers)
        except httpx.HTTPError as e:
            logger.error("track_listen_failed", post_id=post_id, error=str(e))
            raise UpstreamError("Failed to track listen", detail=str(e)) from e

        if response.is_error:
            logger.error("track_listen_rejected", post_id=post_id, status=response.status_code)
            raise UpstreamError(
                f"Listen tracking returned {response.status_code}",
                detail=response.text[:500],
            )

        try:
            payload = response.json() if response.content else None
        except ValueError as e:
            logger.error("track_listen_unreadable", post_id=post_id, body=response.text[:200])
            raise UpstreamError(
                "Listen tracking returned an unreadable body",
                detail=response.text[:500],
            ) from e

        count = parse_listen_count(payload)
        logger.info("listen_tracked", post_id=post_id, count=count)
        return count


def parse_listen_count(payload: Any) -> int | None:
    """Extract the listen count from an RPC result.

    Accepts `{"count": n}`, a bare number, or a one-element list of either.
    """
    if isinstance(payload, list):
        payload = payload[0] if len(payload) == 1 else None
    if isinstance(payload, dict):
        payload = payload.get("count")
    if isinstance(payload, bool):
        return None
    if isinstance(payload, (int, float)):
        return int(payload)
    return None
