"""Crawler detection by User-Agent substring match.

Best-effort only: the token list is configurable because crawler identifiers
change over time, and nothing here is a security boundary.
"""

from collections.abc import Iterable

from ..config import DEFAULT_BOT_TOKENS


class BotDetector:
    """Case-insensitive substring matcher over a list of User-Agent tokens."""

    def __init__(self, tokens: Iterable[str] | None = None):
        source = DEFAULT_BOT_TOKENS if tokens is None else tokens
        self.tokens = tuple(token.lower() for token in source if token)

    def is_bot(self, user_agent: str | None) -> bool:
        """Check whether a User-Agent looks like a link-preview crawler.

        Args:
            user_agent: Raw User-Agent header value

        Returns:
            True if any configured token occurs in the header
        """
        if not user_agent:
            return False
        lowered = user_agent.lower()
        return any(token in lowered for token in self.tokens)
