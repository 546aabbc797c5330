"""Shared test fixtures: settings and in-memory fakes for every port."""

from __future__ import annotations

from typing import Any

import pytest

from catalog_cron.domain.entities import CatalogEntry
from catalog_cron.domain.exceptions import (
    CacheWriteError,
    DataAccessError,
    IndexTriggerError,
    RefreshDeliveryError,
    StatsSourceError,
)
from catalog_cron.domain.value_objects import RepositoryRef
from catalog_cron.infrastructure.config import Settings
from catalog_cron.services.run_maintenance import RunMaintenanceUseCase


class FakeCatalogStore:
    """Catalog with entries plus language/topic → entry-id links."""

    def __init__(
        self,
        entries: list[CatalogEntry] | None = None,
        stars: int = 0,
        languages: dict[str, set[str]] | None = None,
        topics: dict[str, set[str]] | None = None,
    ) -> None:
        self.entries = list(entries or [])
        self.stars = stars
        self.languages = dict(languages or {})
        self.topics = dict(topics or {})
        self.fail_on: set[str] = set()
        self.calls: dict[str, int] = {}

    def _record(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if name in self.fail_on:
            raise DataAccessError(f"{name} failed")

    async def load_published_entries(self) -> list[CatalogEntry]:
        self._record("load_published_entries")
        return list(self.entries)

    async def count_published_entries(self) -> int:
        self._record("count_published_entries")
        return len(self.entries)

    async def sum_repository_stars(self) -> int:
        self._record("sum_repository_stars")
        return self.stars

    async def delete_orphaned_languages(self) -> int:
        self._record("delete_orphaned_languages")
        return _prune(self.languages)

    async def delete_orphaned_topics(self) -> int:
        self._record("delete_orphaned_topics")
        return _prune(self.topics)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


def _prune(links: dict[str, set[str]]) -> int:
    orphans = [slug for slug, ids in links.items() if not ids]
    for slug in orphans:
        del links[slug]
    return len(orphans)


class FakeStatsCache:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.attempts = 0
        self.writes: list[tuple[str, Any]] = []
        self.store: dict[str, Any] = {}

    async def set_json(self, key: str, value: Any) -> None:
        self.attempts += 1
        if self.fail:
            raise CacheWriteError("KV store rejected SET: WRONGPASS")
        self.writes.append((key, value))
        self.store[key] = value


class FakeSubscriberSource:
    def __init__(self, count: int = 0, fail: bool = False) -> None:
        self.count = count
        self.fail = fail
        self.calls = 0

    async def count_subscribers(self) -> int:
        self.calls += 1
        if self.fail:
            raise StatsSourceError("Beehiiv returned HTTP 503")
        return self.count


class FakeRefreshDispatcher:
    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.fail_for = fail_for or set()
        self.sent: list[dict[str, Any]] = []

    async def dispatch(self, entry: CatalogEntry, repository: RepositoryRef) -> None:
        if entry.id in self.fail_for:
            raise RefreshDeliveryError(f"HTTP 500 for {repository.full_name}")
        self.sent.append(
            {"id": entry.id, "bump": entry.bump, "owner": repository.owner, "name": repository.name}
        )


class FakeSearchIndexer:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls = 0

    async def trigger_rebuild(self) -> None:
        self.calls += 1
        if self.fail:
            raise IndexTriggerError("Algolia returned HTTP 503 when starting the index task")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        cron_secret="abc",
        site_url="https://catalog.example.com/",
        database_url="postgresql://localhost/catalog",
        kv_rest_api_url="https://kv.example.com",
        kv_rest_api_token="kv-token",
        algolia_app_id="APPID",
        algolia_admin_api_key="algolia-key",
        algolia_index_task_id="task-123",
    )


@pytest.fixture
def entries() -> list[CatalogEntry]:
    return [
        CatalogEntry(id="t1", repository="https://github.com/acme/widget", bump=3),
        CatalogEntry(id="t2", repository="n/a", bump=1),
        CatalogEntry(id="t3", repository="https://gitlab.com/x/y", bump=None),
    ]


@pytest.fixture
def store(entries) -> FakeCatalogStore:
    return FakeCatalogStore(
        entries=entries,
        stars=1200,
        languages={"python": {"t1"}, "cobol": set()},
        topics={"cli": {"t1", "t2"}, "legacy": set(), "unused": set()},
    )


@pytest.fixture
def cache() -> FakeStatsCache:
    return FakeStatsCache()


@pytest.fixture
def subscribers() -> FakeSubscriberSource:
    return FakeSubscriberSource(42)


@pytest.fixture
def dispatcher() -> FakeRefreshDispatcher:
    return FakeRefreshDispatcher()


@pytest.fixture
def indexer() -> FakeSearchIndexer:
    return FakeSearchIndexer()


@pytest.fixture
def use_case(store, cache, subscribers, dispatcher, indexer, settings) -> RunMaintenanceUseCase:
    return RunMaintenanceUseCase(
        catalog_store=store,
        stats_cache=cache,
        subscriber_source=subscribers,
        refresh_dispatcher=dispatcher,
        search_indexer=indexer,
        cron_secret=settings.cron_secret.get_secret_value(),
    )
