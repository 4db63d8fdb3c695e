"""Infrastructure provider for the remote API catalog."""

from __future__ import annotations

from ipaddress import ip_address
from typing import Any
from urllib.parse import urlparse

import httpx
from loguru import logger

from src.core.config import settings
from src.modules.catalog.domain.catalog import CatalogProvider
from src.modules.catalog.domain.entities import (
    AuthKind,
    Catalog,
    CatalogEntry,
    CategoryData,
    CorsStatus,
)
from src.modules.catalog.domain.exceptions import CatalogSyncError


class HttpCatalogProvider(CatalogProvider):
    """Load the full catalog document with one HTTP GET."""

    def __init__(
        self,
        *,
        catalog_url: str | None = None,
        timeout_sec: float | None = None,
        enforce_count: bool | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.catalog_url = catalog_url or settings.CATALOG_URL
        self.timeout_sec = timeout_sec or settings.CATALOG_FETCH_TIMEOUT_SEC
        self.enforce_count = (
            settings.CATALOG_ENFORCE_COUNT if enforce_count is None else enforce_count
        )
        self._transport = transport

    @property
    def source_url(self) -> str:
        return self.catalog_url

    async def fetch_catalog(self) -> Catalog:
        """Fetch and parse the catalog, raising CatalogSyncError on any failure."""
        if not self._is_allowed_public_http_url(self.catalog_url):
            raise CatalogSyncError("CATALOG_URL must be a public HTTP(S) URL")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_sec,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self.catalog_url,
                    headers={
                        "User-Agent": settings.CATALOG_USER_AGENT,
                        "Accept": "application/json",
                    },
                )
        except httpx.HTTPError as exc:
            raise CatalogSyncError(
                f"Request to {self.catalog_url} failed: {exc!r}"
            ) from exc

        if response.status_code != 200:
            raise CatalogSyncError(
                f"Request to {self.catalog_url} returned status {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise CatalogSyncError(f"Catalog response is not valid JSON: {exc}") from exc

        try:
            return self.parse_catalog_payload(payload, enforce_count=self.enforce_count)
        except ValueError as exc:
            raise CatalogSyncError(str(exc)) from exc

    @staticmethod
    def parse_catalog_payload(payload: Any, *, enforce_count: bool = False) -> Catalog:
        """Build a Catalog from the upstream JSON document.

        Malformed categories and entries are skipped with a warning; a payload
        that is not an object is rejected.
        """
        if not isinstance(payload, dict):
            raise ValueError("Catalog payload must be a JSON object")

        categories: dict[str, CategoryData] = {}
        for category_name, raw_category in payload.items():
            if not isinstance(category_name, str) or not isinstance(raw_category, dict):
                logger.warning(f"Skipping malformed catalog category: {category_name!r}")
                continue

            raw_entries = raw_category.get("entries")
            if not isinstance(raw_entries, list):
                logger.warning(f"Category {category_name!r} has no entries list")
                continue

            entries: list[CatalogEntry] = []
            for raw_entry in raw_entries:
                entry = HttpCatalogProvider._parse_entry(raw_entry, category_name)
                if entry is not None:
                    entries.append(entry)

            count_value = raw_category.get("count")
            count = count_value if isinstance(count_value, int) else len(entries)
            data = CategoryData(count=count, entries=tuple(entries))
            if not data.is_consistent:
                message = (
                    f"Category {category_name!r} declares count={count} "
                    f"but has {len(entries)} entries"
                )
                if enforce_count:
                    raise ValueError(message)
                logger.warning(message)

            categories[category_name] = data

        return Catalog(categories=categories)

    @staticmethod
    def _parse_entry(raw_entry: Any, category_name: str) -> CatalogEntry | None:
        if not isinstance(raw_entry, dict):
            return None

        name_value = raw_entry.get("API")
        if not isinstance(name_value, str) or not name_value.strip():
            logger.warning(f"Skipping entry without API name in {category_name!r}")
            return None
        name = name_value.strip()

        auth = AuthKind.parse(raw_entry.get("Auth"))
        if auth is None:
            logger.warning(
                f"Skipping {name!r}: unsupported auth kind {raw_entry.get('Auth')!r}"
            )
            return None

        description_value = raw_entry.get("Description")
        link_value = raw_entry.get("Link")
        category_value = raw_entry.get("Category")

        return CatalogEntry(
            name=name,
            description=description_value if isinstance(description_value, str) else "",
            auth=auth,
            https=raw_entry.get("HTTPS") is True,
            cors=CorsStatus.parse(raw_entry.get("Cors")),
            link=link_value if isinstance(link_value, str) else "",
            category=category_value if isinstance(category_value, str) else category_name,
        )

    @staticmethod
    def _is_allowed_public_http_url(url: str) -> bool:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            return False

        host = parsed.hostname
        if not host:
            return False
        if host == "localhost" or host.endswith((".local", ".internal")):
            return False

        try:
            host_ip = ip_address(host)
        except ValueError:
            return True

        if (
            host_ip.is_private
            or host_ip.is_loopback
            or host_ip.is_link_local
            or host_ip.is_reserved
            or host_ip.is_multicast
        ):
            return False
        return True
