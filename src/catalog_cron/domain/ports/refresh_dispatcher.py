"""Port: refresh dispatcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from catalog_cron.domain.entities import CatalogEntry
from catalog_cron.domain.value_objects import RepositoryRef


class RefreshDispatcher(Protocol):
    """Abstract contract for asking the site to re-sync one entry's repository."""

    async def dispatch(self, entry: CatalogEntry, repository: RepositoryRef) -> None:
        """Deliver one refresh request; raise ``RefreshDeliveryError`` on failure."""
        ...
