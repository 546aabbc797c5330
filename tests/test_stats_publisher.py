"""Tests for the stats publisher."""

import asyncio

import pytest

from catalog_cron.domain.entities import STATS_CACHE_KEY, StatsSnapshot
from catalog_cron.domain.exceptions import DataAccessError
from catalog_cron.services.stats_publisher import compute_stats, publish_stats


def test_publish_writes_one_full_snapshot(store, subscribers, cache):
    snapshot = asyncio.run(publish_stats(store, subscribers, cache))

    assert snapshot == StatsSnapshot(tools=3, stars=1200, subscribers=42)
    assert cache.writes == [(STATS_CACHE_KEY, {"tools": 3, "stars": 1200, "subscribers": 42})]


def test_sub_counts_run_concurrently(cache):
    started: list[str] = []
    all_started = asyncio.Event()

    class _Barrier:
        async def _wait(self, name: str, value: int) -> int:
            started.append(name)
            if len(started) == 3:
                all_started.set()
            await asyncio.wait_for(all_started.wait(), timeout=1)
            return value

        async def count_published_entries(self):
            return await self._wait("tools", 1)

        async def sum_repository_stars(self):
            return await self._wait("stars", 2)

        async def count_subscribers(self):
            return await self._wait("subscribers", 3)

    barrier = _Barrier()
    snapshot = asyncio.run(publish_stats(barrier, barrier, cache))

    assert sorted(started) == ["stars", "subscribers", "tools"]
    assert snapshot.as_payload() == {"tools": 1, "stars": 2, "subscribers": 3}


def test_failed_sub_count_writes_nothing(store, subscribers, cache):
    store.fail_on.add("sum_repository_stars")

    with pytest.raises(DataAccessError):
        asyncio.run(publish_stats(store, subscribers, cache))

    assert cache.writes == []


def test_compute_does_not_write(store, subscribers, cache):
    asyncio.run(compute_stats(store, subscribers))
    assert cache.writes == []


def test_snapshot_rejects_negative_counts():
    with pytest.raises(ValueError, match="stars"):
        StatsSnapshot(tools=1, stars=-1, subscribers=0)


@pytest.mark.parametrize("flag", [True, False])
def test_snapshot_rejects_booleans(flag):
    with pytest.raises(ValueError, match="tools"):
        StatsSnapshot(tools=flag, stars=0, subscribers=0)


def test_failed_count_cancels_the_others(cache):
    cancelled: list[str] = []

    class _Store:
        async def count_published_entries(self):
            raise DataAccessError("count failed")

        async def sum_repository_stars(self):
            try:
                await asyncio.sleep(1)
            except asyncio.CancelledError:
                cancelled.append("stars")
                raise
            return 0

    class _Subscribers:
        async def count_subscribers(self):
            try:
                await asyncio.sleep(1)
            except asyncio.CancelledError:
                cancelled.append("subscribers")
                raise
            return 0

    with pytest.raises(DataAccessError, match="count failed"):
        asyncio.run(publish_stats(_Store(), _Subscribers(), cache))

    assert sorted(cancelled) == ["stars", "subscribers"]
    assert cache.writes == []
