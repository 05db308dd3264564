"""Pytest fixtures for Gistvox share service tests."""

import pytest
from fastapi.testclient import TestClient

from gistvox_share.config import Settings
from gistvox_share.errors import UpstreamError
from gistvox_share.models import Post, Series, SeriesListing, User


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        supabase_url="https://db.example.supabase.co",
        supabase_anon_key="anon-test-key",
        hcti_user_id="hcti-user",
        hcti_api_key="hcti-key",
        public_base_url="https://share.gistvox.com",
        environment="production",
    )


@pytest.fixture
def sample_post_data():
    """Sample post row as returned by the backend."""
    return {
        "id": "post-1",
        "title": "The Lighthouse Keeper",
        "description": "A story about a keeper and the sea.",
        "audio_url": "https://cdn.example.com/audio/post-1.mp3",
        "audio_duration": 125,
        "created_at": "2025-01-05T10:00:00Z",
        "user_id": "user-1",
        "audience_type": "public",
        "listens_count": 1234,
        "likes_count": 56,
        "saves_count": 7,
        "shares_count": 3,
    }


@pytest.fixture
def sample_user_data():
    """Sample creator row."""
    return {
        "id": "user-1",
        "handle": "maria",
        "display_name": "Maria Lopez",
        "avatar_url": None,
    }


@pytest.fixture
def sample_series_data():
    """Sample series row without an audience column."""
    return {
        "id": "series-1",
        "user_id": "user-1",
        "title": "Tales of the Coast",
        "description": "Three stories from the harbour town.",
        "created_at": "2024-06-01T09:00:00Z",
    }


@pytest.fixture
def sample_post(sample_post_data):
    return Post(**sample_post_data)


@pytest.fixture
def sample_user(sample_user_data):
    return User(**sample_user_data)


@pytest.fixture
def sample_listing(sample_series_data, sample_user, sample_post_data):
    chapters = [
        Post(**{**sample_post_data, "id": f"chapter-{n}", "series_id": "series-1",
                "chapter_number": n, "chapter_title": f"Chapter {n}", "audio_duration": 60,
                "listens_count": 10})
        for n in (1, 2, 3)
    ]
    return SeriesListing(series=Series(**sample_series_data), creator=sample_user, chapters=chapters)


class FakeBackend:
    """In-memory stand-in for BackendClient used by route tests."""

    def __init__(self, posts=None, users=None, listings=None, listen_count=42):
        self.posts = posts or {}
        self.users = users or {}
        self.listings = listings or {}
        self.listen_count = listen_count
        self.track_calls: list[str] = []
        self.fail_with: Exception | None = None
        self.fail_tracking = False

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def get_public_post(self, post_id):
        self._check()
        return self.posts.get(post_id)

    async def get_user(self, user_id):
        return self.users.get(user_id, User())

    async def get_post_with_creator(self, post_id):
        post = await self.get_public_post(post_id)
        if post is None:
            return None
        return post, await self.get_user(post.user_id)

    async def get_series_listing(self, series_id):
        self._check()
        return self.listings.get(series_id)

    async def track_listen(self, post_id):
        if self.fail_tracking:
            raise UpstreamError("Listen tracking returned 503")
        self.track_calls.append(post_id)
        return self.listen_count


@pytest.fixture
def fake_backend(sample_post, sample_user, sample_listing):
    return FakeBackend(
        posts={sample_post.id: sample_post},
        users={sample_user.id: sample_user},
        listings={sample_listing.series.id: sample_listing},
    )


@pytest.fixture
def app(settings, fake_backend):
    """Application wired to the fake backend."""
    from gistvox_share.api.app import create_app
    from gistvox_share.api.dependencies import get_backend

    application = create_app(settings)
    application.dependency_overrides[get_backend] = lambda: fake_backend
    return application


@pytest.fixture
def client(app):
    # https so the Secure session cookie is sent back
    return TestClient(app, base_url="https://testserver")


@pytest.fixture
def mocked_backend_app(settings):
    """Build an app whose real backend client talks to a MockTransport handler."""
    import httpx

    from gistvox_share.api.app import create_app
    from gistvox_share.api.dependencies import get_http_client

    def build(handler):
        application = create_app(settings)
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        application.dependency_overrides[get_http_client] = lambda: http
        return application

    return build
