"""HTML rendering for Gistvox share surfaces."""

from .bots import BotDetector
from .formatting import format_duration, format_short_date, format_long_date, format_count, truncate
from .pages import (
    MetaTag,
    build_post_meta,
    build_series_meta,
    render_embed_player,
    render_error_page,
    render_index_page,
    render_og_card,
    render_post_page,
    render_series_page,
)
from .themes import EmbedTheme, THEMES, get_theme

__all__ = [
    "BotDetector",
    "EmbedTheme",
    "MetaTag",
    "THEMES",
    "build_post_meta",
    "build_series_meta",
    "format_count",
    "format_duration",
    "format_long_date",
    "format_short_date",
    "get_theme",
    "render_embed_player",
    "render_error_page",
    "render_index_page",
    "render_og_card",
    "render_post_page",
    "render_series_page",
    "truncate",
]
