"""Catalog application result models."""

from dataclasses import dataclass, field
from datetime import datetime

from src.modules.catalog.domain.entities import AuthKind, CatalogEntry, ScoredEntry


@dataclass(frozen=True)
class CategoryResult:
    """Entries of one category, possibly found by fuzzy match."""

    requested: str
    category: str
    exact: bool
    total: int
    limit: int
    entries: list[CatalogEntry]


@dataclass(frozen=True)
class FilterResult:
    """First-encountered entries satisfying a filter."""

    description: str
    limit: int
    entries: list[CatalogEntry]


@dataclass(frozen=True)
class CategorySummary:
    name: str
    count: int


@dataclass(frozen=True)
class CountShare:
    label: str
    count: int
    percentage: float


@dataclass(frozen=True)
class CatalogStatistics:
    total_categories: int
    total_entries: int
    auth_distribution: list[CountShare]
    https_count: int
    https_percentage: float
    cors_distribution: list[CountShare]


@dataclass
class AuthKindSummary:
    auth: AuthKind
    count: int = 0
    percentage: float = 0.0
    examples: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RankedResult:
    """Scored entries for a recommendation or alternatives query."""

    query: str
    keywords: list[str]
    items: list[ScoredEntry]


@dataclass(frozen=True)
class RecentEntriesResult:
    """Sample shown for "new APIs"; the upstream source has no added-at dates."""

    days: int
    entries: list[CatalogEntry]
    simulated: bool = True


@dataclass(frozen=True)
class CatalogStatus:
    loaded: bool
    last_synced_at: datetime | None
    categories: int
    entries: int
    age_sec: float | None
    is_fresh: bool


@dataclass(frozen=True)
class IntegrationSnippet:
    entry: CatalogEntry
    language: str
    code: str
    notes: list[str]
