"""Tests for the HTTP catalog provider."""

from typing import Any

import httpx
import pytest

from src.modules.catalog.domain.entities import AuthKind, CorsStatus
from src.modules.catalog.domain.exceptions import CatalogSyncError
from src.modules.catalog.infrastructure.catalog_provider import HttpCatalogProvider

pytestmark = pytest.mark.anyio

CATALOG_URL = "https://catalog.example.com/apis.json"


def _provider(handler, **kwargs: Any) -> HttpCatalogProvider:
    return HttpCatalogProvider(
        catalog_url=kwargs.pop("catalog_url", CATALOG_URL),
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


async def test_fetch_catalog_parses_remote_document(
    sample_catalog_payload: dict[str, Any],
) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=sample_catalog_payload)

    catalog = await _provider(handler).fetch_catalog()

    assert len(seen) == 1
    assert str(seen[0].url) == CATALOG_URL
    assert seen[0].headers["Accept"] == "application/json"
    assert catalog.category_names() == ["Animals", "Weather", "Social", "Development"]
    assert catalog.total_entries == 7
    assert catalog.declared_total == 7


async def test_fetch_catalog_non_200_raises_sync_error() -> None:
    provider = _provider(lambda request: httpx.Response(503, text="down"))

    with pytest.raises(CatalogSyncError, match="503"):
        await provider.fetch_catalog()


async def test_fetch_catalog_transport_error_raises_sync_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CatalogSyncError, match="failed"):
        await _provider(handler).fetch_catalog()


async def test_fetch_catalog_invalid_json_raises_sync_error() -> None:
    provider = _provider(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(CatalogSyncError, match="not valid JSON"):
        await provider.fetch_catalog()


async def test_fetch_catalog_undecodable_body_raises_sync_error() -> None:
    provider = _provider(lambda request: httpx.Response(200, content=b'{"A\xff": 1}'))

    with pytest.raises(CatalogSyncError, match="not valid JSON"):
        await provider.fetch_catalog()


async def test_fetch_catalog_non_object_payload_raises_sync_error() -> None:
    provider = _provider(lambda request: httpx.Response(200, json=[1, 2, 3]))

    with pytest.raises(CatalogSyncError, match="must be a JSON object"):
        await provider.fetch_catalog()


async def test_fetch_catalog_does_not_follow_redirects() -> None:
    provider = _provider(
        lambda request: httpx.Response(
            302, headers={"Location": "https://elsewhere.example.com/apis.json"}
        )
    )

    with pytest.raises(CatalogSyncError, match="302"):
        await provider.fetch_catalog()


@pytest.mark.parametrize(
    "url",
    [
        "ftp://catalog.example.com/apis.json",
        "http://localhost/apis.json",
        "http://127.0.0.1/apis.json",
        "http://10.0.0.5/apis.json",
    ],
)
async def test_fetch_catalog_rejects_non_public_urls(url: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with pytest.raises(CatalogSyncError, match="public HTTP"):
        await _provider(handler, catalog_url=url).fetch_catalog()


def test_parse_catalog_payload_normalizes_auth_and_cors(
    sample_catalog_payload: dict[str, Any],
) -> None:
    catalog = HttpCatalogProvider.parse_catalog_payload(sample_catalog_payload)
    entries = {entry.name: entry for entry in catalog.iter_entries()}

    assert entries["Cat Facts"].auth is AuthKind.NONE
    assert entries["GitHub Status"].auth is AuthKind.NONE
    assert entries["Twitter Lite"].auth is AuthKind.PROXY_KEY
    assert entries["Twitter Lite"].https is False
    assert entries["Zoo Animals"].cors is CorsStatus.UNKNOWN
    assert entries["Dog API"].cors is CorsStatus.YES


def test_parse_catalog_payload_skips_malformed_entries() -> None:
    payload = {
        "Books": {
            "count": 4,
            "entries": [
                {"API": "Open Library", "Auth": "", "HTTPS": True, "Cors": "?"},
                {"Description": "entry without a name"},
                "not an object",
                {"API": "Weird Auth", "Auth": "Kerberos"},
            ],
        },
        "Broken": ["not", "a", "category"],
        "NoEntries": {"count": 0},
    }

    catalog = HttpCatalogProvider.parse_catalog_payload(payload)

    assert catalog.category_names() == ["Books"]
    books = catalog.get("Books")
    assert books is not None
    assert [entry.name for entry in books.entries] == ["Open Library"]
    assert books.entries[0].category == "Books"
    assert books.entries[0].cors is CorsStatus.UNKNOWN
    assert books.is_consistent is False


def test_parse_catalog_payload_count_mismatch_tolerated_by_default(
    sample_catalog_payload: dict[str, Any],
) -> None:
    sample_catalog_payload["Weather"]["count"] = 99

    catalog = HttpCatalogProvider.parse_catalog_payload(sample_catalog_payload)

    weather = catalog.get("Weather")
    assert weather is not None
    assert weather.count == 99
    assert len(weather.entries) == 2


def test_parse_catalog_payload_count_mismatch_rejected_when_enforced(
    sample_catalog_payload: dict[str, Any],
) -> None:
    sample_catalog_payload["Weather"]["count"] = 99

    with pytest.raises(ValueError, match="declares count=99"):
        HttpCatalogProvider.parse_catalog_payload(
            sample_catalog_payload, enforce_count=True
        )
