"""Remove languages and topics that no longer belong to any entry."""

from __future__ import annotations

import asyncio
import logging

from catalog_cron.domain.entities import CleanupReport
from catalog_cron.domain.ports.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


async def prune_orphaned_taxonomy(store: CatalogStore) -> CleanupReport:
    try:
        async with asyncio.TaskGroup() as tg:
            languages_task = tg.create_task(store.delete_orphaned_languages())
            topics_task = tg.create_task(store.delete_orphaned_topics())
    except ExceptionGroup as group:
        raise group.exceptions[0]
    languages, topics = languages_task.result(), topics_task.result()
    report = CleanupReport(languages_deleted=languages, topics_deleted=topics)
    if report.total:
        logger.info("Pruned %d orphaned language(s), %d orphaned topic(s)", languages, topics)
    return report
