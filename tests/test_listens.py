"""Tests for once-per-session listen tracking."""

import httpx
from fastapi.testclient import TestClient


def test_first_listen_is_tracked(client, fake_backend):
    response = client.post("/api/listens/post-1")

    assert response.status_code == 200
    assert response.json() == {"post_id": "post-1", "tracked": True, "count": 42}
    assert fake_backend.track_calls == ["post-1"]


def test_session_cookie_issued(client):
    response = client.post("/api/listens/post-1")

    cookie = response.headers["set-cookie"]
    assert cookie.startswith("gv_sid=")
    assert "HttpOnly" in cookie
    assert "Secure" in cookie
    assert "SameSite=none" in cookie


def test_same_session_tracks_once(client, fake_backend):
    """Repeated plays in one session reach the backend once."""
    first = client.post("/api/listens/post-1")
    second = client.post("/api/listens/post-1")

    assert first.json()["tracked"] is True
    assert second.json() == {"post_id": "post-1", "tracked": False, "count": None}
    assert fake_backend.track_calls == ["post-1"]


def test_new_session_tracks_again(app, client, fake_backend):
    client.post("/api/listens/post-1")
    other = TestClient(app, base_url="https://testserver")

    response = other.post("/api/listens/post-1")

    assert response.json()["tracked"] is True
    assert fake_backend.track_calls == ["post-1", "post-1"]


def test_private_post_not_tracked(client, fake_backend):
    response = client.post("/api/listens/private-post")

    assert response.status_code == 404
    assert response.json()["error"] == "Not Found"
    assert fake_backend.track_calls == []


def test_failed_tracking_can_be_retried(client, fake_backend):
    fake_backend.fail_tracking = True
    failed = client.post("/api/listens/post-1")

    assert failed.status_code == 500
    assert failed.json()["error"] == "Server Error"

    fake_backend.fail_tracking = False
    retried = client.post("/api/listens/post-1")

    assert retried.json()["tracked"] is True


def test_insecure_cookie_uses_lax(settings, fake_backend):
    from gistvox_share.api.app import create_app
    from gistvox_share.api.dependencies import get_backend

    app = create_app(settings.model_copy(update={"session_cookie_secure": False}))
    app.dependency_overrides[get_backend] = lambda: fake_backend

    response = TestClient(app).post("/api/listens/post-1")

    cookie = response.headers["set-cookie"]
    assert "SameSite=lax" in cookie
    assert "Secure" not in cookie


def test_unreadable_rpc_reply_releases_claim(mocked_backend_app, sample_post_data):
    """A garbled backend reply is reported as JSON and the listen can be retried."""
    replies = {"rpc": httpx.Response(200, text="<html>gateway</html>")}

    def handler(request):
        if request.method == "POST":
            return replies["rpc"]
        return httpx.Response(200, json=[sample_post_data])

    app = mocked_backend_app(handler)
    client = TestClient(app, base_url="https://testserver")

    failed = client.post("/api/listens/post-1")

    assert failed.status_code == 500
    assert failed.json()["error"] == "Server Error"
    assert app.state.listen_guard.get_tracked_count() == 0

    replies["rpc"] = httpx.Response(200, json={"count": 8})
    retried = client.post("/api/listens/post-1")

    assert retried.json() == {"post_id": "post-1", "tracked": True, "count": 8}


def test_unexpected_tracking_error_releases_claim(app, fake_backend):
    async def crash(post_id):
        raise RuntimeError("socket closed")

    fake_backend.track_listen = crash
    client = TestClient(app, base_url="https://testserver", raise_server_exceptions=False)

    response = client.post("/api/listens/post-1")

    assert response.status_code == 500
    assert response.json() == {"error": "Server Error", "message": "Unexpected server error"}
    assert app.state.listen_guard.get_tracked_count() == 0
