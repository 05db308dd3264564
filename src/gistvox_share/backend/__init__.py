"""Backend access for Gistvox records."""

from .client import BackendClient, parse_listen_count
from .listen_guard import ListenGuard

__all__ = [
    "BackendClient",
    "ListenGuard",
    "parse_listen_count",
]
