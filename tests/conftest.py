"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不依赖外部服务，远程目录使用 fake provider 或 httpx.MockTransport）

使用方法：
    # 运行所有测试
    uv run pytest

    # 运行带覆盖率
    uv run pytest --cov=src --cov-report=html
"""

import copy
from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.modules.catalog.domain.entities import Catalog, CatalogSnapshot
from src.modules.catalog.domain.exceptions import CatalogSyncError
from src.modules.catalog.infrastructure.catalog_provider import HttpCatalogProvider
from src.modules.catalog.infrastructure.repositories import (
    InMemoryCatalogSnapshotRepository,
)

SAMPLE_CATALOG_PAYLOAD: dict[str, Any] = {
    "Animals": {
        "count": 3,
        "entries": [
            {
                "API": "Cat Facts",
                "Description": "Daily cat facts",
                "Auth": "",
                "HTTPS": True,
                "Cors": "no",
                "Link": "https://alexwohlbruck.github.io/cat-facts/",
                "Category": "Animals",
            },
            {
                "API": "Dog API",
                "Description": "Random pictures of dogs",
                "Auth": "apiKey",
                "HTTPS": True,
                "Cors": "yes",
                "Link": "https://dog.ceo/dog-api/",
                "Category": "Animals",
            },
            {
                "API": "Zoo Animals",
                "Description": "Facts and pictures of zoo animals",
                "Auth": "No",
                "HTTPS": True,
                "Cors": "unknown",
                "Link": "https://zoo-animal-api.herokuapp.com",
                "Category": "Animals",
            },
        ],
    },
    "Weather": {
        "count": 2,
        "entries": [
            {
                "API": "WeatherAPI",
                "Description": "Weather forecast, climate and temperature data",
                "Auth": "apiKey",
                "HTTPS": True,
                "Cors": "yes",
                "Link": "https://www.weatherapi.com/",
                "Category": "Weather",
            },
            {
                "API": "Storm Glass",
                "Description": "Global marine weather from multiple sources",
                "Auth": "apiKey",
                "HTTPS": True,
                "Cors": "yes",
                "Link": "https://stormglass.io/",
                "Category": "Weather",
            },
        ],
    },
    "Social": {
        "count": 1,
        "entries": [
            {
                "API": "Twitter Lite",
                "Description": "Social media posts and timelines",
                "Auth": "X-Mashape-Key",
                "HTTPS": False,
                "Cors": "unknown",
                "Link": "https://rapidapi.com/twitter-lite",
                "Category": "Social",
            },
        ],
    },
    "Development": {
        "count": 1,
        "entries": [
            {
                "API": "GitHub Status",
                "Description": "Status of GitHub services",
                "Auth": None,
                "HTTPS": True,
                "Cors": "no",
                "Link": "https://www.githubstatus.com/api",
                "Category": "Development",
            },
        ],
    },
}


class FakeCatalogProvider:
    """Counts fetches and returns a fixed catalog (or raises a sync error)."""

    def __init__(
        self,
        catalog: Catalog | None = None,
        error: str | None = None,
        source_url: str = "https://catalog.example.com/apis.json",
    ) -> None:
        self.catalog = catalog
        self.error = error
        self._source_url = source_url
        self.calls = 0

    @property
    def source_url(self) -> str:
        return self._source_url

    async def fetch_catalog(self) -> Catalog:
        self.calls += 1
        if self.error is not None:
            raise CatalogSyncError(self.error)
        assert self.catalog is not None
        return self.catalog


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# 目录数据 Fixtures
# ============================================


@pytest.fixture
def sample_catalog_payload() -> dict[str, Any]:
    """示例远程目录文档（深拷贝，测试可自由修改）。"""
    return copy.deepcopy(SAMPLE_CATALOG_PAYLOAD)


@pytest.fixture
def sample_catalog(sample_catalog_payload: dict[str, Any]) -> Catalog:
    return HttpCatalogProvider.parse_catalog_payload(sample_catalog_payload)


@pytest.fixture
def catalog_repository(sample_catalog: Catalog) -> InMemoryCatalogSnapshotRepository:
    """已加载示例目录的快照仓库。"""
    return InMemoryCatalogSnapshotRepository(
        CatalogSnapshot(catalog=sample_catalog, last_synced_at=datetime.now(UTC))
    )


@pytest.fixture
def empty_repository() -> InMemoryCatalogSnapshotRepository:
    return InMemoryCatalogSnapshotRepository()


@pytest.fixture
def fake_provider(sample_catalog: Catalog) -> FakeCatalogProvider:
    return FakeCatalogProvider(catalog=sample_catalog)


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
async def async_client(
    catalog_repository: InMemoryCatalogSnapshotRepository,
    fake_provider: FakeCatalogProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（用于 API 测试）。"""
    from main import app
    from src.modules.catalog.application import dependencies as catalog_app_deps

    # 覆盖依赖
    overrides = dict(app.dependency_overrides)
    app.dependency_overrides[catalog_app_deps.get_catalog_snapshot_repository] = (
        lambda: catalog_repository
    )
    app.dependency_overrides[catalog_app_deps.get_catalog_provider] = (
        lambda: fake_provider
    )

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    # 恢复 main.py 中注册的依赖覆盖
    app.dependency_overrides.clear()
    app.dependency_overrides.update(overrides)
