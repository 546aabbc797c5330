"""Site callback adapter — implements the RefreshDispatcher port."""

from __future__ import annotations

import logging

import httpx

from catalog_cron.domain.entities import CatalogEntry
from catalog_cron.domain.exceptions import RefreshDeliveryError
from catalog_cron.domain.value_objects import RepositoryRef
from catalog_cron.services.authorizer import expected_authorization

logger = logging.getLogger(__name__)

FETCH_REPOSITORY_PATH = "/api/fetch-repository"


class SiteRefreshClient:
    """POSTs ``{id, bump, owner, name}`` to the site's fetch-repository endpoint."""

    def __init__(self, client: httpx.AsyncClient, site_url: str, secret: str) -> None:
        self._client = client
        self._endpoint = f"{site_url.rstrip('/')}{FETCH_REPOSITORY_PATH}"
        self._headers = {"Authorization": expected_authorization(secret)}

    async def dispatch(self, entry: CatalogEntry, repository: RepositoryRef) -> None:
        payload = {
            "id": entry.id,
            "bump": entry.bump,
            "owner": repository.owner,
            "name": repository.name,
        }
        try:
            resp = await self._client.post(
                self._endpoint, headers=self._headers, json=payload
            )
        except httpx.HTTPError as exc:
            raise RefreshDeliveryError(
                f"Network error posting refresh for {repository.full_name}: {exc}"
            ) from exc

        if not resp.is_success:
            raise RefreshDeliveryError(
                f"{self._endpoint} returned HTTP {resp.status_code} for {repository.full_name}"
            )
        logger.debug("Refresh queued for %s (%s)", entry.id, repository.full_name)
