"""Gistvox share service: share pages, embed players and preview images."""

__version__ = "0.1.0"
