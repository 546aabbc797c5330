"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from catalog_cron.infrastructure.config import Settings, get_settings
from catalog_cron.interface.dependencies import shutdown, startup
from catalog_cron.interface.error_handlers import register_error_handlers
from catalog_cron.interface.routes import router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and wire the FastAPI application.

    *settings* defaults to the environment-loaded singleton; it is resolved
    when the app starts, not at import time.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage startup / shutdown of shared resources."""
        await startup(settings or get_settings())
        yield
        await shutdown()

    app = FastAPI(
        title="Catalog Cron",
        version="1.0.0",
        description=(
            "Scheduled maintenance for the catalog site: refreshes the homepage "
            "stats, queues repository re-syncs, prunes empty languages and "
            "topics, and rebuilds the search index."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
