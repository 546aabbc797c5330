"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class CatalogCronError(Exception):
    """Base exception for the entire application."""


# ── Authorization ───────────────────────────────────────────────────────────


class AuthorizationError(CatalogCronError):
    """The trigger request did not carry the expected bearer credential."""


# ── Persistence ─────────────────────────────────────────────────────────────


class DataAccessError(CatalogCronError):
    """A read or delete against the catalog database failed."""


# ── Stats ───────────────────────────────────────────────────────────────────


class StatsSourceError(CatalogCronError):
    """An external stats source (e.g. the newsletter provider) failed."""


class CacheWriteError(CatalogCronError):
    """Writing the stats snapshot to the key-value cache failed."""


# ── Fan-out ─────────────────────────────────────────────────────────────────


class RefreshDeliveryError(CatalogCronError):
    """A single fetch-repository callback could not be delivered.

    Never surfaced to the caller: the fan-out stage records it per entry.
    """


# ── Search index ────────────────────────────────────────────────────────────


class IndexTriggerError(CatalogCronError):
    """The search-index rebuild task could not be started."""
