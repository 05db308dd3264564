"""Utility modules for the Gistvox share service."""

from .logging import bind_request_context, setup_logging

__all__ = ["bind_request_context", "setup_logging"]
