"""Port: stats cache — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Protocol


class StatsCache(Protocol):
    """Abstract contract for the fast-read key-value cache."""

    async def set_json(self, key: str, value: Any) -> None:
        """Overwrite *key* with the JSON-serialisable *value* in one write."""
        ...
