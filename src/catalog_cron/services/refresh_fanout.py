"""One fetch-repository callback per published catalog entry.

Callbacks are issued concurrently and each one is isolated: a failure is
recorded as a :class:`RefreshOutcome` and logged, never raised.  The stage
only promises attempted delivery; the site re-syncs repositories on its own.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from catalog_cron.domain.entities import CatalogEntry, FanOutReport, RefreshOutcome
from catalog_cron.domain.ports.refresh_dispatcher import RefreshDispatcher
from catalog_cron.domain.value_objects import RepositoryRef

logger = logging.getLogger(__name__)


async def fan_out_refresh(
    entries: Iterable[CatalogEntry], dispatcher: RefreshDispatcher
) -> FanOutReport:
    """Dispatch a refresh for every entry with a GitHub repository and wait for all."""
    targets: list[tuple[CatalogEntry, RepositoryRef]] = []
    skipped = 0
    for entry in entries:
        ref = entry.repository_ref
        if ref is None:
            skipped += 1
            continue
        targets.append((entry, ref))

    async def _dispatch_one(entry: CatalogEntry, ref: RepositoryRef) -> RefreshOutcome:
        try:
            await dispatcher.dispatch(entry, ref)
        except Exception as exc:
            logger.warning(
                "Refresh callback failed for entry %s (%s): %s",
                entry.id,
                ref.full_name,
                exc,
            )
            return RefreshOutcome(entry_id=entry.id, repository=ref, ok=False, error=str(exc))
        return RefreshOutcome(entry_id=entry.id, repository=ref, ok=True)

    outcomes = await asyncio.gather(*(_dispatch_one(e, r) for e, r in targets))
    report = FanOutReport(outcomes=list(outcomes), skipped=skipped)

    logger.info(
        "Refresh fan-out: %d attempted, %d failed, %d skipped (no GitHub repository)",
        report.attempted,
        len(report.failed),
        report.skipped,
    )
    return report
