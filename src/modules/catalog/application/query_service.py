"""Catalog query and filter engine."""

from __future__ import annotations

import math
import random
from collections import Counter
from collections.abc import Callable

from src.core.config import settings
from src.core.domain.exceptions import ValidationError
from src.modules.catalog.application.models import (
    AuthKindSummary,
    CatalogStatistics,
    CategoryResult,
    CategorySummary,
    CountShare,
    FilterResult,
    RecentEntriesResult,
)
from src.modules.catalog.domain.entities import (
    AuthKind,
    Catalog,
    CatalogEntry,
)
from src.modules.catalog.domain.exceptions import (
    CatalogEmptyError,
    CatalogEntryNotFoundError,
    CategoryNotFoundError,
    NoMatchesError,
)
from src.modules.catalog.domain.repository import CatalogSnapshotRepository


def _check_limit(limit: int) -> int:
    if limit < 1:
        raise ValidationError(f"limit must be a positive integer, got {limit}")
    return limit


def _percentage(count: int, total: int) -> float:
    return round(count / total * 100, 1)


class CatalogQueryService:
    """Lookups, filters and aggregates over the current catalog snapshot.

    Filters scan categories in insertion order and entries in list order and
    stop as soon as ``limit`` matches are collected, so results are the first
    matches encountered rather than the best ones.
    """

    def __init__(
        self,
        repository: CatalogSnapshotRepository,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.repository = repository
        self._rng = rng or random.Random()

    def _catalog(self) -> Catalog:
        catalog = self.repository.get().catalog
        if catalog.is_empty:
            raise CatalogEmptyError()
        return catalog

    def by_category(self, name: str, limit: int = settings.SEARCH_DEFAULT_LIMIT) -> CategoryResult:
        """Exact category lookup, falling back to the first substring match."""
        _check_limit(limit)
        catalog = self._catalog()

        data = catalog.get(name)
        if data is not None:
            return CategoryResult(
                requested=name,
                category=name,
                exact=True,
                total=data.count,
                limit=limit,
                entries=list(data.entries[:limit]),
            )

        needle = name.lower()
        for category in catalog.category_names():
            if needle in category.lower():
                matched = catalog.categories[category]
                return CategoryResult(
                    requested=name,
                    category=category,
                    exact=False,
                    total=matched.count,
                    limit=limit,
                    entries=list(matched.entries[:limit]),
                )

        raise CategoryNotFoundError(name, available=catalog.category_names())

    def by_keyword(self, keyword: str, limit: int = settings.SEARCH_DEFAULT_LIMIT) -> FilterResult:
        needle = keyword.lower()
        return self._scan(
            lambda entry: needle in entry.name.lower()
            or needle in entry.description.lower(),
            limit=limit,
            description=f'keyword "{keyword}"',
        )

    def by_auth_kind(self, auth: str, limit: int = settings.SEARCH_DEFAULT_LIMIT) -> FilterResult:
        kind = AuthKind.parse(auth)
        description = f'auth type "{auth}"'
        if kind is None:
            _check_limit(limit)
            self._catalog()
            raise NoMatchesError(f"No APIs found with {description}")
        return self._scan(lambda entry: entry.auth is kind, limit=limit, description=description)

    def by_https(self, supports: bool, limit: int = settings.SEARCH_DEFAULT_LIMIT) -> FilterResult:
        description = "HTTPS support" if supports else "no HTTPS support"
        return self._scan(
            lambda entry: entry.https is supports, limit=limit, description=description
        )

    def by_cors(self, status: str, limit: int = settings.SEARCH_DEFAULT_LIMIT) -> FilterResult:
        normalized = status.strip().lower()
        description = f'CORS status "{status}"'
        return self._scan(
            lambda entry: entry.cors.value == normalized,
            limit=limit,
            description=description,
        )

    def _scan(
        self,
        predicate: Callable[[CatalogEntry], bool],
        *,
        limit: int,
        description: str,
    ) -> FilterResult:
        _check_limit(limit)
        catalog = self._catalog()

        results: list[CatalogEntry] = []
        for entry in catalog.iter_entries():
            if predicate(entry):
                results.append(entry)
                if len(results) >= limit:
                    break

        if not results:
            raise NoMatchesError(f"No APIs found with {description}")
        return FilterResult(description=description, limit=limit, entries=results)

    def details(self, name: str) -> CatalogEntry:
        needle = name.lower()
        for entry in self._catalog().iter_entries():
            if entry.name.lower() == needle:
                return entry
        raise CatalogEntryNotFoundError(name)

    def category_list(self) -> list[CategorySummary]:
        catalog = self._catalog()
        return [
            CategorySummary(name=name, count=catalog.categories[name].count)
            for name in sorted(catalog.category_names())
        ]

    def random_entry(self, category: str | None = None) -> CatalogEntry:
        catalog = self._catalog()
        if category:
            data = catalog.get(category)
            if data is None:
                raise CategoryNotFoundError(category, available=catalog.category_names())
            pool = list(data.entries)
        else:
            pool = list(catalog.iter_entries())

        if not pool:
            raise NoMatchesError("No APIs available to choose from")
        return self._rng.choice(pool)

    def statistics(self) -> CatalogStatistics:
        catalog = self._catalog()
        entries = list(catalog.iter_entries())
        total = len(entries)
        if total == 0:
            raise NoMatchesError("No API data available for statistics")

        auth_counts = Counter(entry.auth.value for entry in entries)
        cors_counts = Counter(entry.cors.value for entry in entries)
        https_count = sum(1 for entry in entries if entry.https)

        return CatalogStatistics(
            total_categories=len(catalog),
            total_entries=total,
            auth_distribution=self._shares(auth_counts, total),
            https_count=https_count,
            https_percentage=_percentage(https_count, total),
            cors_distribution=self._shares(cors_counts, total),
        )

    @staticmethod
    def _shares(counts: Counter[str], total: int) -> list[CountShare]:
        # Counter keeps first-seen order, sorted() is stable
        ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [
            CountShare(label=label, count=count, percentage=_percentage(count, total))
            for label, count in ordered
        ]

    def auth_analysis(self) -> list[AuthKindSummary]:
        catalog = self._catalog()
        summaries: dict[AuthKind, AuthKindSummary] = {}
        total = 0
        for entry in catalog.iter_entries():
            total += 1
            summary = summaries.setdefault(entry.auth, AuthKindSummary(auth=entry.auth))
            summary.count += 1
            if len(summary.examples) < settings.AUTH_EXAMPLES_PER_KIND:
                summary.examples.append(entry.name)

        if total == 0:
            raise NoMatchesError("No API data available for auth analysis")

        for summary in summaries.values():
            summary.percentage = _percentage(summary.count, total)
        return sorted(summaries.values(), key=lambda s: s.count, reverse=True)

    def recent_entries(self, days: int = settings.NEW_APIS_DEFAULT_DAYS) -> RecentEntriesResult:
        """Sample of entries presented as recently added.

        The upstream document carries no timestamps, so this is a random sample
        of at most ``NEW_APIS_MAX_ITEMS`` entries (or 5% of the catalog).
        """
        if days < 1:
            raise ValidationError(f"days must be a positive integer, got {days}")
        entries = list(self._catalog().iter_entries())
        size = min(
            settings.NEW_APIS_MAX_ITEMS,
            math.ceil(len(entries) * settings.NEW_APIS_SAMPLE_RATIO),
        )
        if size == 0:
            raise NoMatchesError("No APIs available")
        return RecentEntriesResult(days=days, entries=self._rng.sample(entries, size))


