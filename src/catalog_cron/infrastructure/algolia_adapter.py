"""Algolia ingestion adapter — implements the SearchIndexer port."""

from __future__ import annotations

import logging

import httpx

from catalog_cron.domain.exceptions import IndexTriggerError

logger = logging.getLogger(__name__)


class AlgoliaTaskRunner:
    """Starts a pre-configured Algolia ingestion task (a full reindex)."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        app_id: str,
        api_key: str,
        task_id: str,
        data_url: str = "https://data.us.algolia.com",
    ) -> None:
        self._client = client
        self._url = f"{data_url.rstrip('/')}/1/tasks/{task_id}/run"
        self._headers = {
            "X-Algolia-API-Key": api_key,
            "X-Algolia-Application-Id": app_id,
        }

    async def trigger_rebuild(self) -> None:
        """POST /1/tasks/{task_id}/run with no body."""
        try:
            resp = await self._client.post(self._url, headers=self._headers)
        except httpx.HTTPError as exc:
            raise IndexTriggerError(f"Network error triggering index task: {exc}") from exc

        if not resp.is_success:
            raise IndexTriggerError(
                f"Algolia returned HTTP {resp.status_code} when starting the index task"
            )
        logger.info("Search index rebuild started")
