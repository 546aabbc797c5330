"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog_cron.domain.value_objects import RepositoryRef

STATS_CACHE_KEY = "stats"


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """A published catalog entry as read from the persistence layer."""

    id: str
    repository: str | None = None
    website: str | None = None
    bump: int | None = None

    @property
    def repository_ref(self) -> RepositoryRef | None:
        return RepositoryRef.parse(self.repository)


@dataclass(frozen=True, slots=True)
class StatsSnapshot:
    """Aggregate counts published to the cache under :data:`STATS_CACHE_KEY`."""

    tools: int
    stars: int
    subscribers: int

    def __post_init__(self) -> None:
        for name in ("tools", "stars", "subscribers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    def as_payload(self) -> dict[str, int]:
        return {"tools": self.tools, "stars": self.stars, "subscribers": self.subscribers}


@dataclass(frozen=True, slots=True)
class RefreshOutcome:
    """Delivery result of one fetch-repository callback."""

    entry_id: str
    repository: RepositoryRef
    ok: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class FanOutReport:
    """All callback outcomes of one fan-out, plus entries without a repository."""

    outcomes: list[RefreshOutcome] = field(default_factory=list)
    skipped: int = 0

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> list[RefreshOutcome]:
        return [o for o in self.outcomes if not o.ok]


@dataclass(frozen=True, slots=True)
class CleanupReport:
    """Number of orphaned taxonomy rows removed."""

    languages_deleted: int = 0
    topics_deleted: int = 0

    @property
    def total(self) -> int:
        return self.languages_deleted + self.topics_deleted


@dataclass(frozen=True, slots=True)
class MaintenanceReport:
    """What a single successful maintenance run did."""

    entries_loaded: int
    stats: StatsSnapshot
    fan_out: FanOutReport
    cleanup: CleanupReport
