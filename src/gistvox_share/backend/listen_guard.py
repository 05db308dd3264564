"""Session-scoped guard so a listen is tracked once per post per session."""

import asyncio
from datetime import datetime, timedelta, timezone

import structlog

logger = structlog.get_logger()


class ListenGuard:
    """Time-windowed record of (session, post) pairs that were already tracked."""

    def __init__(
        self,
        window_seconds: int = 21600,
        max_entries: int = 50000,
    ):
        """Initialize listen guard.

        Args:
            window_seconds: How long a tracked pair suppresses repeats
            max_entries: Upper bound on remembered pairs; oldest are dropped first
        """
        self.window = timedelta(seconds=window_seconds)
        self.max_entries = max_entries
        self.tracked: dict[tuple[str, str], datetime] = {}
        self._lock = asyncio.Lock()

    def _prune(self, now: datetime) -> None:
        """Remove pairs outside the time window."""
        cutoff = now - self.window
        # Insertion order is claim order, so expired pairs sit at the front.
        for key in list(self.tracked):
            if self.tracked[key] >= cutoff:
                break
            del self.tracked[key]

    async def claim(self, session_id: str, post_id: str) -> bool:
        """Claim the right to track a listen.

        Args:
            session_id: Client session identifier
            post_id: Post being played

        Returns:
            True the first time a pair is seen within the window, False afterwards
        """
        async with self._lock:
            now = datetime.now(timezone.utc)
            self._prune(now)

            key = (session_id, post_id)
            if key in self.tracked:
                logger.debug("listen_already_tracked", post_id=post_id)
                return False

            self.tracked[key] = now

            # Drop the oldest pairs once over the bound
            while len(self.tracked) > self.max_entries:
                del self.tracked[next(iter(self.tracked))]
            return True

    async def release(self, session_id: str, post_id: str) -> None:
        """Forget a claim, e.g. when the tracking call failed."""
        async with self._lock:
            self.tracked.pop((session_id, post_id), None)

    def get_tracked_count(self) -> int:
        """Get the number of pairs currently remembered within the window."""
        cutoff = datetime.now(timezone.utc) - self.window
        return sum(1 for claimed_at in self.tracked.values() if claimed_at >= cutoff)

    def reset(self) -> None:
        """Reset the guard, clearing all tracked pairs."""
        self.tracked.clear()
