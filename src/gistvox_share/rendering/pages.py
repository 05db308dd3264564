"""HTML rendering for share pages, the embed player, preview cards and error pages."""

from dataclasses import dataclass
from pathlib import Path

import jinja2

from ..config import Settings
from ..models.post import Post
from ..models.series import SeriesListing
from ..models.user import User
from . import links
from .formatting import (
    format_count,
    format_duration,
    format_long_date,
    format_short_date,
    format_year,
    join_parts,
    truncate,
)
from .themes import EmbedTheme

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630
PLAYER_WIDTH = 480
PLAYER_HEIGHT = 400


def _create_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=jinja2.select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["duration"] = format_duration
    env.filters["short_date"] = format_short_date
    env.filters["long_date"] = format_long_date
    env.filters["year"] = format_year
    env.filters["count"] = format_count
    env.filters["clip"] = truncate
    return env


environment = _create_environment()


@dataclass(frozen=True)
class MetaTag:
    """A single `<meta>` element keyed by `property` (Open Graph) or `name` (Twitter)."""

    attr: str
    key: str
    content: str


def _og(key: str, content: str) -> MetaTag:
    return MetaTag("property", key, content)


def _twitter(key: str, content: str) -> MetaTag:
    return MetaTag("name", key, content)


def build_post_meta(post: Post, creator: User, base_url: str, settings: Settings) -> list[MetaTag]:
    """Open Graph and Twitter player card tags for a post share page."""
    duration = format_duration(post.audio_duration)
    handle = f"@{creator.display_handle}"
    share_url = links.post_share_url(base_url, post.id)
    image_url = links.post_image_url(base_url, post.id)

    tags = [
        _og("og:type", "music.song"),
        _og("og:title", post.display_title),
        _og("og:description", join_parts(f"By {handle}", duration, "Listen on Gistvox")),
        _og("og:url", share_url),
        _og("og:image", image_url),
        _og("og:image:width", str(OG_IMAGE_WIDTH)),
        _og("og:image:height", str(OG_IMAGE_HEIGHT)),
        _og("og:site_name", "Gistvox"),
    ]
    if post.audio_url:
        tags.append(_og("og:audio", post.audio_url))

    tags += [
        _twitter("twitter:card", "player"),
        _twitter("twitter:site", settings.twitter_site),
        _twitter("twitter:title", post.display_title),
        _twitter("twitter:description", join_parts(f"By {handle}", duration)),
        _twitter("twitter:image", image_url),
        _twitter("twitter:player", links.embed_url(base_url, post.id, version="2")),
        _twitter("twitter:player:width", str(PLAYER_WIDTH)),
        _twitter("twitter:player:height", str(PLAYER_HEIGHT)),
    ]
    return tags


def build_series_meta(listing: SeriesListing, base_url: str, settings: Settings) -> list[MetaTag]:
    """Open Graph and Twitter large-image card tags for a series page."""
    series = listing.series
    creator_name = listing.creator.name
    chapters = f"{listing.chapter_count} chapters"
    image_url = links.series_image_url(base_url, series.id)

    if series.description:
        twitter_description = truncate(series.description, 160)
    else:
        twitter_description = join_parts(f"By {creator_name}", chapters)

    tags = []
    if settings.facebook_app_id:
        tags.append(_og("fb:app_id", settings.facebook_app_id))
    tags += [
        _og("og:url", links.series_share_url(base_url, series.id)),
        _og("og:type", "music.album"),
        _og("og:title", series.display_title),
        _og(
            "og:description",
            join_parts(
                creator_name,
                chapters,
                format_duration(listing.duration_seconds),
                "Audio Series",
                separator=" · ",
            ),
        ),
        _og("og:image", image_url),
        _og("og:image:width", str(OG_IMAGE_WIDTH)),
        _og("og:image:height", str(OG_IMAGE_HEIGHT)),
        _og("og:site_name", "Gistvox"),
        _twitter("twitter:card", "summary_large_image"),
        _twitter("twitter:site", settings.twitter_site),
        _twitter("twitter:title", series.display_title),
        _twitter("twitter:description", twitter_description),
        _twitter("twitter:image", image_url),
        _twitter("twitter:image:width", str(OG_IMAGE_WIDTH)),
        _twitter("twitter:image:height", str(OG_IMAGE_HEIGHT)),
    ]
    return tags


def render_post_page(
    post: Post,
    creator: User,
    *,
    base_url: str,
    settings: Settings,
    is_bot: bool,
) -> str:
    """Render the share landing page for a post.

    Bots and people get the same document head; people also get the
    app-open and share scripting.

    Args:
        post: Public post
        creator: Post author
        base_url: Absolute base URL of this service
        settings: Application settings
        is_bot: Whether the requester looks like a crawler

    Returns:
        HTML document
    """
    template = environment.get_template("post.html")
    return template.render(
        post=post,
        creator=creator,
        meta=build_post_meta(post, creator, base_url, settings),
        page_title=f"{post.display_title} by @{creator.display_handle} - Gistvox",
        byline=join_parts(
            format_duration(post.audio_duration),
            format_long_date(post.created_at),
        ),
        deep_link=links.deep_link(settings, "post", post.id),
        share_url=links.post_share_url(base_url, post.id),
        embed_src=links.embed_url(base_url, post.id),
        settings=settings,
        is_bot=is_bot,
    )


def render_series_page(
    listing: SeriesListing,
    *,
    base_url: str,
    settings: Settings,
    is_bot: bool,
) -> str:
    """Render the share landing page for a series with its chapter list."""
    series = listing.series
    template = environment.get_template("series.html")
    return template.render(
        listing=listing,
        series=series,
        creator=listing.creator,
        chapters=listing.chapters,
        chapter_data=[
            {
                "id": chapter.id,
                "title": chapter.display_chapter_title,
                "audio_url": chapter.audio_url,
                "listen_url": links.listen_url(chapter.id),
            }
            for chapter in listing.chapters
        ],
        meta=build_series_meta(listing, base_url, settings),
        page_title=f"{series.display_title} by {listing.creator.name} - Gistvox Series",
        stats=join_parts(
            format_year(series.created_at),
            f"{listing.chapter_count} chapters",
            format_duration(listing.duration_seconds, empty="0:00"),
            f"{format_count(listing.total_listens)} listens",
            separator=" · ",
        ),
        deep_link=links.deep_link(settings, "series", series.id),
        share_url=links.series_share_url(base_url, series.id),
        logo_url=settings.logo_url,
        settings=settings,
        is_bot=is_bot,
    )


def render_embed_player(
    post: Post,
    creator: User,
    *,
    base_url: str,
    settings: Settings,
    theme: EmbedTheme,
) -> str:
    """Render the iframe-embeddable audio player for a post."""
    template = environment.get_template("embed.html")
    return template.render(
        post=post,
        creator=creator,
        theme=theme,
        duration=format_duration(post.audio_duration, empty="0:00"),
        date_line=join_parts(format_short_date(post.created_at), format_duration(post.audio_duration, empty="0:00")),
        description=truncate(post.description, 150),
        deep_link=links.deep_link(settings, "post", post.id),
        share_url=links.post_share_url(base_url, post.id),
        listen_url=links.listen_url(post.id),
        logo_url=settings.logo_url,
    )


def render_og_card(title: str, creator_name: str, details: str, settings: Settings) -> str:
    """Render the 1200x630 HTML card sent to the image rendering service."""
    template = environment.get_template("og_card.html")
    return template.render(
        title=truncate(title, 90),
        creator_name=creator_name,
        details=details,
        logo_url=settings.logo_url,
        width=OG_IMAGE_WIDTH,
        height=OG_IMAGE_HEIGHT,
    )


def render_error_page(title: str, message: str, heading: str | None = None) -> str:
    """Minimal standalone error page."""
    template = environment.get_template("error.html")
    return template.render(title=title, heading=heading or title, message=message)


def render_index_page(settings: Settings, base_url: str, redirect_seconds: int = 3) -> str:
    template = environment.get_template("index.html")
    return template.render(
        site_url=settings.site_url,
        example_url=f"{base_url}/p/[POST_ID]",
        redirect_seconds=redirect_seconds,
    )
