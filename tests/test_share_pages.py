"""Tests for the post and series share pages."""

import re

from gistvox_share.errors import UpstreamError

CRAWLER_UA = "facebookexternalhit/1.1"
BROWSER_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/605.1.15 Safari/605.1.15"

META_PATTERN = re.compile(r'<meta (?:property|name)="(?:og|twitter|fb):[^"]*" content="[^"]*" />')


def _meta_block(html):
    return META_PATTERN.findall(html)


def test_post_page_renders_meta(client):
    response = client.get("/p/post-1", headers={"User-Agent": BROWSER_UA})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.headers["cache-control"] == "s-maxage=3600, stale-while-revalidate"
    assert "<title>The Lighthouse Keeper by @maria - Gistvox</title>" in response.text
    assert '<meta property="og:type" content="music.song" />' in response.text
    assert '<meta name="twitter:card" content="player" />' in response.text
    assert 'https://gistvox.app.link/post/post-1' in response.text


def test_bots_and_people_get_identical_meta(client):
    """Crawlers see exactly the tags people see, without the scripting."""
    bot = client.get("/p/post-1", headers={"User-Agent": CRAWLER_UA})
    person = client.get("/p/post-1", headers={"User-Agent": BROWSER_UA})

    assert _meta_block(bot.text)
    assert _meta_block(bot.text) == _meta_block(person.text)
    assert "<script" not in bot.text
    assert "tryOpenApp" in person.text


def test_post_page_never_exposes_backend_key(client):
    response = client.get("/p/post-1", headers={"User-Agent": BROWSER_UA})

    assert "anon-test-key" not in response.text


def test_missing_post_returns_404_page(client):
    response = client.get("/p/unknown")

    assert response.status_code == 404
    assert "Post Not Found" in response.text
    assert "private" in response.text


def test_upstream_failure_returns_500_page(client, fake_backend):
    fake_backend.fail_with = UpstreamError("Backend returned 503 for posts")

    response = client.get("/p/post-1")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/html")
    assert "Something went wrong" in response.text
    assert "Backend returned 503" not in response.text


def test_upstream_failure_diagnostics_with_debug_flag(client, fake_backend):
    fake_backend.fail_with = UpstreamError("Backend returned 503 for posts")

    response = client.get("/p/post-1?debug=1")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Server Error"
    assert body["message"] == "Backend returned 503 for posts"
    assert "UpstreamError" in body["stack"]


def test_series_page(client):
    """Test series page lists chapters and sets framing header."""
    response = client.get("/series/series-1", headers={"User-Agent": BROWSER_UA})

    assert response.status_code == 200
    assert response.headers["x-frame-options"] == "ALLOWALL"
    assert response.headers["cache-control"] == "s-maxage=3600, stale-while-revalidate"
    assert '<meta property="og:type" content="music.album" />' in response.text
    assert '<meta name="twitter:card" content="summary_large_image" />' in response.text
    for n in (1, 2, 3):
        assert f"Chapter {n}" in response.text
    assert "https://gistvox.app.link/series/series-1" in response.text
    assert "/api/listens/chapter-1" in response.text


def test_series_page_for_crawler(client):
    bot = client.get("/series/series-1", headers={"User-Agent": CRAWLER_UA})
    person = client.get("/series/series-1", headers={"User-Agent": BROWSER_UA})

    assert _meta_block(bot.text) == _meta_block(person.text)
    assert "<script" not in bot.text


def test_missing_series_returns_404(client):
    response = client.get("/series/unknown")

    assert response.status_code == 404
    assert "Series Not Found" in response.text


def test_base_url_falls_back_to_request_host(settings, fake_backend):
    from fastapi.testclient import TestClient

    from gistvox_share.api.app import create_app
    from gistvox_share.api.dependencies import get_backend

    app = create_app(settings.model_copy(update={"public_base_url": None}))
    app.dependency_overrides[get_backend] = lambda: fake_backend

    response = TestClient(app).get("/p/post-1", headers={"Host": "links.example.org"})

    assert '<meta property="og:url" content="https://links.example.org/p/post-1" />' in response.text


def test_unexpected_error_renders_error_page(app, fake_backend):
    """Failures outside the service errors still produce the minimal 500 page."""
    from fastapi.testclient import TestClient

    fake_backend.fail_with = RuntimeError("connection pool exhausted")
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/p/post-1")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/html")
    assert "Something went wrong" in response.text
    assert "connection pool exhausted" not in response.text


def test_unexpected_error_diagnostics_with_debug_flag(app, fake_backend):
    from fastapi.testclient import TestClient

    fake_backend.fail_with = RuntimeError("connection pool exhausted")
    client = TestClient(app, raise_server_exceptions=False)

    body = client.get("/series/series-1?debug=true").json()

    assert body["message"] == "Unexpected server error"
    assert "RuntimeError: connection pool exhausted" in body["stack"]


def test_unreadable_backend_reply_is_500_on_every_page(mocked_backend_app):
    import httpx
    from fastapi.testclient import TestClient

    app = mocked_backend_app(lambda request: httpx.Response(200, text="<html>gateway</html>"))
    client = TestClient(app)

    for path in ("/p/post-1", "/embed/post-1", "/series/series-1"):
        response = client.get(path)
        assert response.status_code == 500, path
        assert "Something went wrong" in response.text


def test_null_counts_render(mocked_backend_app, sample_post_data, sample_user_data):
    import httpx
    from fastapi.testclient import TestClient

    row = {**sample_post_data, "listens_count": None, "likes_count": None,
           "saves_count": None, "shares_count": None}

    def handler(request):
        table = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(200, json=[row] if table == "posts" else [sample_user_data])

    client = TestClient(mocked_backend_app(handler))

    assert client.get("/p/post-1").status_code == 200
    embed = client.get("/embed/post-1")
    assert embed.status_code == 200
    assert '<span id="listensCount">0</span>' in embed.text
