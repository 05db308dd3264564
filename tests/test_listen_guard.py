"""Tests for the listen de-duplication guard."""

from datetime import timedelta

import pytest

from gistvox_share.backend import ListenGuard


@pytest.mark.asyncio
async def test_claim_once_per_session_and_post():
    guard = ListenGuard(window_seconds=60)

    assert await guard.claim("s1", "p1") is True
    assert await guard.claim("s1", "p1") is False
    assert await guard.claim("s2", "p1") is True
    assert await guard.claim("s1", "p2") is True
    assert guard.get_tracked_count() == 3


@pytest.mark.asyncio
async def test_claim_expires_after_window():
    guard = ListenGuard(window_seconds=60)
    await guard.claim("s1", "p1")

    # Age the claim past the window
    guard.tracked[("s1", "p1")] -= timedelta(seconds=61)

    assert await guard.claim("s1", "p1") is True


@pytest.mark.asyncio
async def test_release_allows_reclaim():
    guard = ListenGuard()
    await guard.claim("s1", "p1")
    await guard.release("s1", "p1")

    assert await guard.claim("s1", "p1") is True


@pytest.mark.asyncio
async def test_size_bound_drops_oldest():
    guard = ListenGuard(max_entries=2)
    for post_id in ("p1", "p2", "p3"):
        await guard.claim("s", post_id)

    assert list(guard.tracked) == [("s", "p2"), ("s", "p3")]


@pytest.mark.asyncio
async def test_reset():
    guard = ListenGuard()
    await guard.claim("s", "p")

    guard.reset()

    assert guard.tracked == {}
    assert await guard.claim("s", "p") is True
