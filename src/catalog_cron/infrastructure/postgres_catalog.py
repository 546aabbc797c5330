"""Postgres adapter — implements the CatalogStore port.

Reads the Prisma-managed schema of the catalog site: ``"Tool"`` rows joined
to ``"Language"`` / ``"Topic"`` through Prisma's implicit many-to-many tables
(``"_LanguageToTool"``: A = language, B = tool; ``"_ToolToTopic"``:
A = tool, B = topic).
"""

from __future__ import annotations

import asyncio
import logging

import asyncpg  # type: ignore[import-untyped]

from catalog_cron.domain.entities import CatalogEntry
from catalog_cron.domain.exceptions import DataAccessError

logger = logging.getLogger(__name__)

_PUBLISHED_ENTRIES_SQL = """
    select id, repository, website, bump
    from "Tool"
    where "publishedAt" is not null
"""

_PUBLISHED_COUNT_SQL = """
    select count(*) from "Tool" where "publishedAt" is not null
"""

_STAR_SUM_SQL = """
    select coalesce(sum(stars), 0) from "Tool" where "publishedAt" is not null
"""

_DELETE_ORPHANED_LANGUAGES_SQL = """
    delete from "Language" l
    where not exists (select 1 from "_LanguageToTool" lt where lt."A" = l.slug)
"""

_DELETE_ORPHANED_TOPICS_SQL = """
    delete from "Topic" t
    where not exists (select 1 from "_ToolToTopic" tt where tt."B" = t.slug)
"""

_DB_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class PostgresCatalogStore:
    """Concrete ``CatalogStore`` backed by an asyncpg connection pool."""

    def __init__(
        self,
        database_url: str,
        min_pool_size: int = 1,
        max_pool_size: int = 5,
    ) -> None:
        self._database_url = database_url
        self._min_pool_size = min_pool_size
        self._max_pool_size = max_pool_size
        self._pool: asyncpg.Pool | None = None
        self._pool_lock = asyncio.Lock()

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def load_published_entries(self) -> list[CatalogEntry]:
        pool = await self._get_pool()
        try:
            rows = await pool.fetch(_PUBLISHED_ENTRIES_SQL)
        except _DB_ERRORS as exc:
            raise DataAccessError(f"Failed to load published entries: {exc}") from exc
        return [
            CatalogEntry(
                id=row["id"],
                repository=row["repository"],
                website=row["website"],
                bump=row["bump"],
            )
            for row in rows
        ]

    async def count_published_entries(self) -> int:
        return await self._fetch_int(_PUBLISHED_COUNT_SQL, "count published entries")

    async def sum_repository_stars(self) -> int:
        return await self._fetch_int(_STAR_SUM_SQL, "sum repository stars")

    async def delete_orphaned_languages(self) -> int:
        return await self._delete(_DELETE_ORPHANED_LANGUAGES_SQL, "orphaned languages")

    async def delete_orphaned_topics(self) -> int:
        return await self._delete(_DELETE_ORPHANED_TOPICS_SQL, "orphaned topics")

    # ── Internals ───────────────────────────────────────────────────────

    async def _fetch_int(self, sql: str, what: str) -> int:
        pool = await self._get_pool()
        try:
            value = await pool.fetchval(sql)
        except _DB_ERRORS as exc:
            raise DataAccessError(f"Failed to {what}: {exc}") from exc
        return int(value or 0)

    async def _delete(self, sql: str, what: str) -> int:
        pool = await self._get_pool()
        try:
            status = await pool.execute(sql)
        except _DB_ERRORS as exc:
            raise DataAccessError(f"Failed to delete {what}: {exc}") from exc
        deleted = parse_delete_count(status)
        logger.debug("Deleted %d %s", deleted, what)
        return deleted

    async def _get_pool(self) -> asyncpg.Pool:
        if self._pool is not None:
            return self._pool

        # Overlapping runs share one pool.
        async with self._pool_lock:
            if self._pool is None:
                try:
                    self._pool = await asyncpg.create_pool(
                        dsn=self._database_url,
                        min_size=self._min_pool_size,
                        max_size=self._max_pool_size,
                        command_timeout=30,
                    )
                except _DB_ERRORS as exc:
                    raise DataAccessError(f"Database unavailable: {exc}") from exc
        return self._pool


def parse_delete_count(status: str) -> int:
    """Return the row count from an asyncpg command tag such as ``"DELETE 3"``."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return 0
