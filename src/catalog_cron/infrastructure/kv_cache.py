"""Vercel KV / Upstash Redis REST adapter — implements the StatsCache port."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from catalog_cron.domain.exceptions import CacheWriteError

logger = logging.getLogger(__name__)


class KvRestCache:
    """Concrete ``StatsCache`` speaking the Upstash REST protocol.

    Each command is POSTed to the base URL as a JSON array, e.g.
    ``["SET", "stats", "{...}"]``; the reply is ``{"result": ...}`` or
    ``{"error": "..."}``.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, token: str) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {token}"}

    async def set_json(self, key: str, value: Any) -> None:
        """SET *key* to the JSON encoding of *value*, replacing any prior value."""
        await self._command(["SET", key, json.dumps(value)])

    async def _command(self, command: list[str]) -> Any:
        try:
            resp = await self._client.post(
                self._base_url, headers=self._headers, json=command
            )
        except httpx.HTTPError as exc:
            raise CacheWriteError(f"Network error talking to KV store: {exc}") from exc

        if resp.status_code != 200:
            raise CacheWriteError(
                f"KV store returned HTTP {resp.status_code} for {command[0]}"
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise CacheWriteError("KV store returned a non-JSON reply") from exc

        if isinstance(body, dict) and body.get("error"):
            raise CacheWriteError(f"KV store rejected {command[0]}: {body['error']}")

        return body.get("result") if isinstance(body, dict) else None
