"""Preview image generation."""

from .og import ImageRedirect, OgImageService

__all__ = ["ImageRedirect", "OgImageService"]
