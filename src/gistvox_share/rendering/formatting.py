"""Text formatting helpers shared by pages, players and preview cards."""

from datetime import datetime


def format_duration(seconds: float | None, empty: str = "") -> str:
    """Format a duration in seconds as `m:ss`.

    Args:
        seconds: Duration in seconds
        empty: Text returned when there is no duration

    Returns:
        Formatted duration, e.g. 125 -> "2:05"
    """
    if not seconds or seconds < 0:
        return empty
    total = int(seconds)
    return f"{total // 60}:{total % 60:02d}"


def format_short_date(value: datetime | None) -> str:
    """Month and day, e.g. "Jan 5"."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}"


def format_long_date(value: datetime | None) -> str:
    """Month, day and year, e.g. "Jan 5, 2025"."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def format_year(value: datetime | None) -> str:
    return str(value.year) if value else ""


def format_count(value: int | None) -> str:
    return f"{value or 0:,}"


def truncate(text: str | None, limit: int) -> str:
    """Cut text to `limit` characters, appending an ellipsis when shortened."""
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def join_parts(*parts: str, separator: str = " • ") -> str:
    """Join the non-empty parts of a byline."""
    return separator.join(part for part in parts if part)
