"""Port: search indexer — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class SearchIndexer(Protocol):
    """Abstract contract for the remote search index."""

    async def trigger_rebuild(self) -> None:
        """Start a full index rebuild; raise ``IndexTriggerError`` on failure."""
        ...
