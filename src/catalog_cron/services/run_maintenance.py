"""Run-maintenance use case: the cron orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the ports and the stage modules; the interface layer injects concrete
adapters and configuration values at runtime.

Stages run strictly in order::

    authorize → load entries → publish stats → refresh fan-out
              → taxonomy cleanup → trigger search index

An authorization failure stops the run before any collaborator is touched.
Loading, stats and cleanup failures abort the run; individual refresh
callbacks never do.  An index-trigger failure is reported after every earlier
side effect has already been applied; nothing is rolled back.
"""

from __future__ import annotations

import logging
import time

from catalog_cron.domain.entities import MaintenanceReport
from catalog_cron.domain.ports.catalog_store import CatalogStore
from catalog_cron.domain.ports.refresh_dispatcher import RefreshDispatcher
from catalog_cron.domain.ports.search_indexer import SearchIndexer
from catalog_cron.domain.ports.stats_cache import StatsCache
from catalog_cron.domain.ports.subscriber_source import SubscriberSource
from catalog_cron.services.authorizer import authorize
from catalog_cron.services.refresh_fanout import fan_out_refresh
from catalog_cron.services.stats_publisher import publish_stats
from catalog_cron.services.taxonomy_cleanup import prune_orphaned_taxonomy

logger = logging.getLogger(__name__)


class RunMaintenanceUseCase:
    """Orchestrates one maintenance run.

    Parameters
    ----------
    catalog_store:
        Adapter for the catalog database (entries, counts, taxonomy deletes).
    stats_cache:
        Adapter for the key-value cache the site reads its counters from.
    subscriber_source:
        Adapter reporting the newsletter audience size.
    refresh_dispatcher:
        Adapter that posts fetch-repository callbacks to the site.
    search_indexer:
        Adapter that starts the remote search-index rebuild.
    cron_secret:
        Shared secret the trigger must present as ``Bearer <secret>``.
    """

    def __init__(
        self,
        catalog_store: CatalogStore,
        stats_cache: StatsCache,
        subscriber_source: SubscriberSource,
        refresh_dispatcher: RefreshDispatcher,
        search_indexer: SearchIndexer,
        cron_secret: str,
    ) -> None:
        self._store = catalog_store
        self._cache = stats_cache
        self._subscribers = subscriber_source
        self._dispatcher = refresh_dispatcher
        self._indexer = search_indexer
        self._cron_secret = cron_secret

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, authorization: str | None) -> MaintenanceReport:
        """Run every stage and return what was done."""
        authorize(authorization, self._cron_secret)
        started = time.monotonic()

        # 1. Published entries
        entries = await self._store.load_published_entries()
        logger.info("Loaded %d published entries", len(entries))

        # 2. Homepage stats
        stats = await publish_stats(self._store, self._subscribers, self._cache)

        # 3. One refresh callback per entry with a GitHub repository
        fan_out = await fan_out_refresh(entries, self._dispatcher)

        # 4. Entries may have dropped languages/topics upstream
        cleanup = await prune_orphaned_taxonomy(self._store)

        # 5. Rebuild the search index from the pruned state
        await self._indexer.trigger_rebuild()

        report = MaintenanceReport(
            entries_loaded=len(entries),
            stats=stats,
            fan_out=fan_out,
            cleanup=cleanup,
        )
        logger.info(
            "Maintenance run finished in %.2fs: %d refreshes sent (%d failed), "
            "%d taxonomy rows pruned",
            time.monotonic() - started,
            fan_out.attempted,
            len(fan_out.failed),
            cleanup.total,
        )
        return report
