"""Catalog domain entities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class AuthKind(StrEnum):
    """Authentication required by a catalogued API.

    Values mirror the strings used by the upstream catalog document.
    """

    NONE = "No"
    API_KEY = "apiKey"
    OAUTH = "OAuth"
    PROXY_KEY = "X-Mashape-Key"
    USER_AGENT = "User-Agent"

    @classmethod
    def parse(cls, value: object) -> AuthKind | None:
        """Resolve a raw or user-supplied auth label, case-insensitively."""
        if value is None:
            return cls.NONE
        if not isinstance(value, str):
            return None
        return _AUTH_ALIASES.get(value.strip().lower())


_AUTH_ALIASES: dict[str, AuthKind] = {
    "": AuthKind.NONE,
    "no": AuthKind.NONE,
    "none": AuthKind.NONE,
    "apikey": AuthKind.API_KEY,
    "api_key": AuthKind.API_KEY,
    "oauth": AuthKind.OAUTH,
    "x-mashape-key": AuthKind.PROXY_KEY,
    "proxykey": AuthKind.PROXY_KEY,
    "user-agent": AuthKind.USER_AGENT,
    "useragent": AuthKind.USER_AGENT,
}


class CorsStatus(StrEnum):
    """CORS support reported for a catalogued API."""

    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: object) -> CorsStatus:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class CatalogEntry:
    """One described third-party API."""

    name: str
    description: str
    auth: AuthKind
    https: bool
    cors: CorsStatus
    link: str
    category: str

    @property
    def search_text(self) -> str:
        """Lowercased text the relevance scorer matches keywords against."""
        return f"{self.name} {self.description} {self.category}".lower()


@dataclass(frozen=True)
class CategoryData:
    """Entries of one category as delivered by the upstream source."""

    count: int
    entries: tuple[CatalogEntry, ...]

    @property
    def is_consistent(self) -> bool:
        return self.count == len(self.entries)


@dataclass(frozen=True)
class Catalog:
    """Category name -> category data, in upstream document order."""

    categories: Mapping[str, CategoryData] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.categories)

    def get(self, category: str) -> CategoryData | None:
        return self.categories.get(category)

    @property
    def is_empty(self) -> bool:
        return not self.categories

    def category_names(self) -> list[str]:
        return list(self.categories.keys())

    def iter_entries(self) -> Iterator[CatalogEntry]:
        """Yield every entry, categories in insertion order, entries in list order."""
        for data in self.categories.values():
            yield from data.entries

    @property
    def total_entries(self) -> int:
        return sum(len(data.entries) for data in self.categories.values())

    @property
    def declared_total(self) -> int:
        """Sum of the upstream ``count`` fields."""
        return sum(data.count for data in self.categories.values())


@dataclass(frozen=True)
class CatalogSnapshot:
    """A complete catalog plus the time it was fetched."""

    catalog: Catalog
    last_synced_at: datetime | None = None

    @classmethod
    def empty(cls) -> CatalogSnapshot:
        return cls(catalog=Catalog())

    @property
    def is_loaded(self) -> bool:
        return self.last_synced_at is not None and not self.catalog.is_empty


@dataclass(frozen=True)
class ScoredEntry:
    """An entry together with its relevance score (always >= 1)."""

    entry: CatalogEntry
    score: int
