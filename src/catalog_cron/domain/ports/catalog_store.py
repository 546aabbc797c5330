"""Port: catalog store — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from catalog_cron.domain.entities import CatalogEntry


class CatalogStore(Protocol):
    """Abstract contract for the catalog database."""

    async def load_published_entries(self) -> list[CatalogEntry]:
        """Return every entry whose published marker is set."""
        ...

    async def count_published_entries(self) -> int:
        """Return the number of published entries."""
        ...

    async def sum_repository_stars(self) -> int:
        """Return the star total across published entries' repositories."""
        ...

    async def delete_orphaned_languages(self) -> int:
        """Delete languages linked to no entry; return how many were removed."""
        ...

    async def delete_orphaned_topics(self) -> int:
        """Delete topics linked to no entry; return how many were removed."""
        ...
