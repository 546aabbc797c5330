"""Newsletter adapters — implement the SubscriberSource port."""

from __future__ import annotations

import logging

import httpx

from catalog_cron.domain.exceptions import StatsSourceError

logger = logging.getLogger(__name__)

_BEEHIIV_API = "https://api.beehiiv.com/v2"


class BeehiivSubscriberSource:
    """Reads ``active_subscriptions`` from the Beehiiv publication stats."""

    def __init__(
        self, client: httpx.AsyncClient, api_key: str, publication_id: str
    ) -> None:
        self._client = client
        self._url = f"{_BEEHIIV_API}/publications/{publication_id}"
        self._headers = {"Authorization": f"Bearer {api_key}"}

    async def count_subscribers(self) -> int:
        """GET /publications/{id}?expand[]=stats → active subscriber count."""
        try:
            resp = await self._client.get(
                self._url, headers=self._headers, params={"expand[]": "stats"}
            )
        except httpx.HTTPError as exc:
            raise StatsSourceError(f"Network error fetching subscriber count: {exc}") from exc

        if resp.status_code != 200:
            raise StatsSourceError(f"Beehiiv returned HTTP {resp.status_code}")

        try:
            count = resp.json()["data"]["stats"]["active_subscriptions"]
        except (ValueError, KeyError, TypeError) as exc:
            raise StatsSourceError("Beehiiv response has no subscriber stats") from exc

        if not isinstance(count, int) or count < 0:
            raise StatsSourceError(f"Unexpected subscriber count: {count!r}")
        return count


class StaticSubscriberSource:
    """Fixed subscriber count, used when no newsletter provider is configured."""

    def __init__(self, count: int = 0) -> None:
        self._count = count

    async def count_subscribers(self) -> int:
        return self._count
