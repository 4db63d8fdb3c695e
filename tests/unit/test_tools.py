"""Tests for the tool registry."""

from unittest.mock import AsyncMock, patch

import pytest

from src.modules.catalog.application.codegen_service import CodeGenerationService
from src.modules.catalog.application.query_service import CatalogQueryService
from src.modules.catalog.application.recommendation_service import (
    RecommendationService,
)
from src.modules.catalog.application.sync_service import CatalogSyncService
from src.modules.catalog.infrastructure.repositories import (
    InMemoryCatalogSnapshotRepository,
)
from src.modules.tools.application.tools import ToolRegistry, create_default_registry
from src.modules.tools.domain.exceptions import (
    InvalidToolArgumentsError,
    ToolExecutionError,
    UnknownToolError,
)

pytestmark = pytest.mark.anyio

TOOL_NAMES = [
    "search_apis_by_category",
    "search_apis_by_keyword",
    "filter_apis_by_auth",
    "filter_apis_by_https",
    "filter_apis_by_cors",
    "get_api_details",
    "get_category_list",
    "get_random_api",
    "get_api_statistics",
    "analyze_auth_requirements",
    "recommend_apis_for_project",
    "find_alternative_apis",
    "generate_api_integration_code",
    "sync_repository_data",
    "check_new_apis",
]


def _registry(
    repository: InMemoryCatalogSnapshotRepository, provider
) -> ToolRegistry:
    query_service = CatalogQueryService(repository)
    return create_default_registry(
        query_service=query_service,
        recommendation_service=RecommendationService(repository),
        codegen_service=CodeGenerationService(query_service),
        sync_service=CatalogSyncService(repository, provider),
    )


@pytest.fixture
def registry(catalog_repository, fake_provider) -> ToolRegistry:
    return _registry(catalog_repository, fake_provider)


def test_all_tools_registered_with_schemas(registry: ToolRegistry) -> None:
    assert registry.list_tools() == TOOL_NAMES

    definitions = {item["name"]: item for item in registry.definitions()}
    auth_schema = definitions["filter_apis_by_auth"]["inputSchema"]
    assert "authType" in auth_schema["properties"]
    assert auth_schema["required"] == ["authType"]
    https_schema = definitions["filter_apis_by_https"]["inputSchema"]
    assert https_schema["properties"]["httpsOnly"]["default"] is True
    assert https_schema["properties"]["limit"]["default"] == 10
    recommend_schema = definitions["recommend_apis_for_project"]["inputSchema"]
    assert recommend_schema["properties"]["limit"]["default"] == 5


async def test_content_envelope(registry: ToolRegistry) -> None:
    result = await registry.call("search_apis_by_keyword", {"keyword": "weather"})

    payload = result.to_content()
    assert payload["content"][0]["type"] == "text"
    assert "WeatherAPI" in payload["content"][0]["text"]
    assert "isError" not in payload


async def test_camel_case_arguments_and_defaults(registry: ToolRegistry) -> None:
    result = await registry.call("filter_apis_by_https", {})

    assert "APIs with HTTPS support (6 found, limit 10)" in result.text


async def test_limit_is_coerced_from_string(registry: ToolRegistry) -> None:
    result = await registry.call(
        "search_apis_by_category", {"category": "Animals", "limit": "1"}
    )

    assert "Cat Facts" in result.text
    assert "Dog API" not in result.text


async def test_not_found_is_rendered_as_text(registry: ToolRegistry) -> None:
    result = await registry.call("filter_apis_by_auth", {"authType": "OAuth", "limit": 10})

    assert result.is_error is False
    assert result.text == 'No APIs found with auth type "OAuth"'


async def test_unknown_category_lists_available(registry: ToolRegistry) -> None:
    result = await registry.call("search_apis_by_category", {"category": "Crypto"})

    assert result.text.startswith('Category "Crypto" not found.')
    assert "Animals, Weather, Social, Development" in result.text


async def test_unsupported_language_is_rendered_as_text(registry: ToolRegistry) -> None:
    result = await registry.call(
        "generate_api_integration_code", {"apiName": "WeatherAPI", "language": "ruby"}
    )

    assert result.text.startswith("Unsupported language: ruby")


async def test_recommendation_tool(registry: ToolRegistry) -> None:
    result = await registry.call(
        "recommend_apis_for_project", {"projectType": "天气应用"}
    )

    assert result.text.startswith('# API recommendations for "天气应用"')
    assert "### 1. WeatherAPI" in result.text


async def test_unknown_tool(registry: ToolRegistry) -> None:
    with pytest.raises(UnknownToolError) as exc_info:
        await registry.call("delete_everything", {})

    assert exc_info.value.rpc_code == -32601


async def test_invalid_arguments(registry: ToolRegistry) -> None:
    with pytest.raises(InvalidToolArgumentsError) as exc_info:
        await registry.call("search_apis_by_keyword", {"keyword": "x", "limit": 0})

    assert exc_info.value.rpc_code == -32602
    assert "limit" in exc_info.value.message


async def test_missing_required_argument(registry: ToolRegistry) -> None:
    with pytest.raises(InvalidToolArgumentsError, match="apiName"):
        await registry.call("get_api_details", {})


async def test_unexpected_failure_is_wrapped(registry: ToolRegistry) -> None:
    with patch.object(
        CatalogQueryService, "statistics", side_effect=RuntimeError("disk on fire")
    ):
        with pytest.raises(ToolExecutionError) as exc_info:
            await registry.call("get_api_statistics", {})

    assert exc_info.value.rpc_code == -32603
    assert "disk on fire" in exc_info.value.message


async def test_first_call_loads_catalog(
    empty_repository: InMemoryCatalogSnapshotRepository, fake_provider
) -> None:
    registry = _registry(empty_repository, fake_provider)

    result = await registry.call("get_api_details", {"apiName": "Dog API"})

    assert fake_provider.calls == 1
    assert "# Dog API" in result.text


async def test_failed_load_reports_empty_catalog(
    empty_repository: InMemoryCatalogSnapshotRepository, fake_provider
) -> None:
    fake_provider.error = "status 500"
    registry = _registry(empty_repository, fake_provider)

    result = await registry.call("get_category_list", {})

    assert "has not been loaded yet" in result.text


async def test_sync_tool_skips_ensure_fresh(registry: ToolRegistry) -> None:
    sync_service = registry.sync_service
    assert sync_service is not None
    sync_service.ensure_fresh = AsyncMock()

    result = await registry.call("sync_repository_data", {"force": False})

    sync_service.ensure_fresh.assert_not_awaited()
    assert result.text == "Catalog is already fresh; no sync needed"


async def test_failed_sync_is_flagged(registry: ToolRegistry, fake_provider) -> None:
    fake_provider.error = "status 500"

    result = await registry.call("sync_repository_data", {"force": True})

    assert result.is_error is True
    assert result.to_content()["isError"] is True
    assert "Unable to load catalog" in result.text
