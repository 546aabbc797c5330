"""Recompute the homepage counters and cache them."""

from __future__ import annotations

import asyncio
import logging

from catalog_cron.domain.entities import STATS_CACHE_KEY, StatsSnapshot
from catalog_cron.domain.ports.catalog_store import CatalogStore
from catalog_cron.domain.ports.stats_cache import StatsCache
from catalog_cron.domain.ports.subscriber_source import SubscriberSource

logger = logging.getLogger(__name__)


async def compute_stats(
    store: CatalogStore, subscribers: SubscriberSource
) -> StatsSnapshot:
    """Compute the three counts concurrently.

    The first failure cancels the other counts and propagates unwrapped.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tools = tg.create_task(store.count_published_entries())
            stars = tg.create_task(store.sum_repository_stars())
            subscriber_count = tg.create_task(subscribers.count_subscribers())
    except ExceptionGroup as group:
        raise group.exceptions[0]
    return StatsSnapshot(
        tools=tools.result(), stars=stars.result(), subscribers=subscriber_count.result()
    )


async def publish_stats(
    store: CatalogStore,
    subscribers: SubscriberSource,
    cache: StatsCache,
) -> StatsSnapshot:
    """Compute a fresh snapshot and overwrite the cached one in a single write."""
    snapshot = await compute_stats(store, subscribers)
    await cache.set_json(STATS_CACHE_KEY, snapshot.as_payload())
    logger.info(
        "Published stats: %d tools, %d stars, %d subscribers",
        snapshot.tools,
        snapshot.stars,
        snapshot.subscribers,
    )
    return snapshot
