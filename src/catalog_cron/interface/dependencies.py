"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging

import httpx

from catalog_cron.domain.ports.subscriber_source import SubscriberSource
from catalog_cron.infrastructure.algolia_adapter import AlgoliaTaskRunner
from catalog_cron.infrastructure.beehiiv_adapter import (
    BeehiivSubscriberSource,
    StaticSubscriberSource,
)
from catalog_cron.infrastructure.config import Settings
from catalog_cron.infrastructure.kv_cache import KvRestCache
from catalog_cron.infrastructure.postgres_catalog import PostgresCatalogStore
from catalog_cron.infrastructure.refresh_client import SiteRefreshClient
from catalog_cron.services.run_maintenance import RunMaintenanceUseCase

logger = logging.getLogger(__name__)

_settings: Settings | None = None
_http_client: httpx.AsyncClient | None = None
_catalog_store: PostgresCatalogStore | None = None


async def startup(settings: Settings) -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _settings, _http_client, _catalog_store  # noqa: PLW0603

    _settings = settings
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))
    _catalog_store = PostgresCatalogStore(
        database_url=settings.database_url.get_secret_value(),
        min_pool_size=settings.db_min_pool_size,
        max_pool_size=settings.db_max_pool_size,
    )
    if not settings.newsletter_configured:
        logger.warning("Beehiiv is not configured; subscriber count will be published as 0")


async def shutdown() -> None:
    """Release shared resources."""
    global _settings, _http_client, _catalog_store  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _catalog_store:
        await _catalog_store.close()
        _catalog_store = None
    _settings = None


def _subscriber_source(settings: Settings, client: httpx.AsyncClient) -> SubscriberSource:
    if settings.beehiiv_api_key and settings.beehiiv_publication_id:
        return BeehiivSubscriberSource(
            client=client,
            api_key=settings.beehiiv_api_key.get_secret_value(),
            publication_id=settings.beehiiv_publication_id,
        )
    return StaticSubscriberSource(0)


def get_use_case() -> RunMaintenanceUseCase:
    """Build the use case with injected adapters."""
    assert _settings is not None, "startup() was not called"
    assert _http_client is not None, "startup() was not called"
    assert _catalog_store is not None, "startup() was not called"

    settings = _settings
    return RunMaintenanceUseCase(
        catalog_store=_catalog_store,
        stats_cache=KvRestCache(
            client=_http_client,
            base_url=settings.kv_rest_api_url,
            token=settings.kv_rest_api_token.get_secret_value(),
        ),
        subscriber_source=_subscriber_source(settings, _http_client),
        refresh_dispatcher=SiteRefreshClient(
            client=_http_client,
            site_url=settings.site_url,
            secret=settings.cron_secret.get_secret_value(),
        ),
        search_indexer=AlgoliaTaskRunner(
            client=_http_client,
            app_id=settings.algolia_app_id,
            api_key=settings.algolia_admin_api_key.get_secret_value(),
            task_id=settings.algolia_index_task_id,
            data_url=settings.algolia_data_url,
        ),
        cron_secret=settings.cron_secret.get_secret_value(),
    )
