"""URLs shared between pages, meta tags and players."""

from ..config import Settings


def deep_link(settings: Settings, kind: str, record_id: str) -> str:
    """App-open link on the deep-link domain, e.g. `https://gistvox.app.link/post/{id}`."""
    return f"https://{settings.branch_domain}/{kind}/{record_id}"


def post_share_url(base_url: str, post_id: str) -> str:
    return f"{base_url}/p/{post_id}"


def series_share_url(base_url: str, series_id: str) -> str:
    return f"{base_url}/series/{series_id}"


def embed_url(base_url: str, post_id: str, version: str | None = None) -> str:
    url = f"{base_url}/embed/{post_id}"
    return f"{url}?v={version}" if version else url


def post_image_url(base_url: str, post_id: str) -> str:
    return f"{base_url}/og/{post_id}.png"


def series_image_url(base_url: str, series_id: str) -> str:
    return f"{base_url}/og/series/{series_id}.png"


def listen_url(post_id: str) -> str:
    return f"/api/listens/{post_id}"
