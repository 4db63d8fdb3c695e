"""Catalog Tool Registry。

包含：
- 查询工具：按分类/关键词搜索，按认证/HTTPS/CORS 过滤，详情，分类列表，随机推荐
- 分析工具：统计、认证分析、新增 API 检查
- 推荐工具：项目推荐、替代 API、集成代码生成
- 同步工具：sync_repository_data
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from src.core.domain.exceptions import EntityNotFoundError, ValidationError
from src.core.infrastructure.logging import BusinessEvents
from src.modules.catalog.application import formatter
from src.modules.catalog.application.codegen_service import (
    CodeGenerationService,
    UnsupportedLanguageError,
)
from src.modules.catalog.application.query_service import CatalogQueryService
from src.modules.catalog.application.recommendation_service import (
    RecommendationService,
)
from src.modules.catalog.application.sync_service import CatalogSyncService
from src.modules.catalog.domain.exceptions import (
    CatalogEmptyError,
    CatalogEntryNotFoundError,
    CategoryNotFoundError,
    NoMatchesError,
)
from src.modules.tools.application.arguments import (
    AlternativeApisArguments,
    ApiNameArguments,
    AuthFilterArguments,
    CategorySearchArguments,
    CorsFilterArguments,
    HttpsFilterArguments,
    IntegrationCodeArguments,
    KeywordSearchArguments,
    NewApisArguments,
    NoArguments,
    ProjectRecommendationArguments,
    RandomApiArguments,
    SyncArguments,
    ToolArguments,
)
from src.modules.tools.domain.exceptions import (
    InvalidToolArgumentsError,
    ToolExecutionError,
    UnknownToolError,
)


@dataclass
class ToolResult:
    """工具调用结果。"""

    text: str
    is_error: bool = False
    latency_ms: int = 0

    def to_content(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            payload["isError"] = True
        return payload


class BaseTool(ABC):
    """工具基类。"""

    name: str = "base_tool"
    description: str = ""
    args_model: type[ToolArguments] = NoArguments
    requires_catalog: bool = True  # 调用前是否需要确保目录已加载

    @abstractmethod
    async def execute(self, args: Any) -> ToolResult:
        """执行工具。"""

    def definition(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.args_model.model_json_schema(by_alias=True),
        }


def render_not_found(exc: Exception) -> str:
    """Text shown to the caller when a lookup comes back empty."""
    if isinstance(exc, CategoryNotFoundError):
        text = f'Category "{exc.category}" not found.'
        if exc.available:
            text += f" Available categories: {', '.join(exc.available)}"
        return text
    if isinstance(exc, CatalogEntryNotFoundError):
        return f'No API named "{exc.name}" found'
    if isinstance(exc, CatalogEmptyError):
        return f"{exc.message}. Run sync_repository_data to load it."
    return str(exc)


class ToolRegistry:
    """工具注册表。

    管理所有可用工具，并提供统一的调用接口：
    参数校验 -> 确保目录已加载 -> 执行 -> 记录业务事件。
    """

    def __init__(self, sync_service: CatalogSyncService | None = None):
        self._tools: dict[str, BaseTool] = {}
        self.sync_service = sync_service

    def register(self, tool: BaseTool) -> None:
        """注册工具。"""
        self._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    def get(self, name: str) -> BaseTool | None:
        """获取工具。"""
        return self._tools.get(name)

    def list_tools(self) -> list[str]:
        """列出所有工具名称。"""
        return list(self._tools.keys())

    def definitions(self) -> list[dict[str, Any]]:
        return [tool.definition() for tool in self._tools.values()]

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Validate arguments, run the tool and render lookup misses as text.

        Raises:
            UnknownToolError: no tool with that name.
            InvalidToolArgumentsError: arguments fail validation.
            ToolExecutionError: the tool failed unexpectedly.
        """
        tool = self.get(name)
        if not tool:
            raise UnknownToolError(name)

        try:
            args = tool.args_model.model_validate(arguments or {})
        except PydanticValidationError as e:
            raise InvalidToolArgumentsError(name, _describe_errors(e)) from e

        start_time = time.time()
        try:
            if tool.requires_catalog and self.sync_service is not None:
                await self.sync_service.ensure_fresh()
            result = await tool.execute(args)
        except (
            EntityNotFoundError,
            NoMatchesError,
            CatalogEmptyError,
            UnsupportedLanguageError,
        ) as e:
            result = ToolResult(text=render_not_found(e))
        except ValidationError as e:
            self._record(name, start_time, success=False)
            raise InvalidToolArgumentsError(name, e.message) from e
        except Exception as e:
            self._record(name, start_time, success=False)
            logger.exception(f"Tool {name} failed: {e}")
            raise ToolExecutionError(name, str(e)) from e

        result.latency_ms = self._record(name, start_time, success=not result.is_error)
        return result

    @staticmethod
    def _record(name: str, start_time: float, *, success: bool) -> int:
        latency_ms = int((time.time() - start_time) * 1000)
        BusinessEvents.tool_called(tool_name=name, latency_ms=latency_ms, success=success)
        return latency_ms


def _describe_errors(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "arguments"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


# ============================================
# 具体工具实现
# ============================================


class SearchByCategoryTool(BaseTool):
    name = "search_apis_by_category"
    description = "按分类搜索API"
    args_model = CategorySearchArguments

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: CategorySearchArguments) -> ToolResult:
        result = self.query_service.by_category(args.category, args.limit)
        return ToolResult(text=formatter.format_category_result(result))


class SearchByKeywordTool(BaseTool):
    name = "search_apis_by_keyword"
    description = "根据关键词搜索API（名称或描述）"
    args_model = KeywordSearchArguments

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: KeywordSearchArguments) -> ToolResult:
        result = self.query_service.by_keyword(args.keyword, args.limit)
        return ToolResult(text=formatter.format_filter_result(result))


class FilterByAuthTool(BaseTool):
    name = "filter_apis_by_auth"
    description = "根据认证方式过滤API"
    args_model = AuthFilterArguments

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: AuthFilterArguments) -> ToolResult:
        result = self.query_service.by_auth_kind(args.auth_type, args.limit)
        return ToolResult(text=formatter.format_filter_result(result))


class FilterByHttpsTool(BaseTool):
    name = "filter_apis_by_https"
    description = "过滤支持HTTPS的API"
    args_model = HttpsFilterArguments

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: HttpsFilterArguments) -> ToolResult:
        result = self.query_service.by_https(args.https_only, args.limit)
        return ToolResult(text=formatter.format_filter_result(result))


class FilterByCorsTool(BaseTool):
    name = "filter_apis_by_cors"
    description = "根据CORS支持情况过滤API"
    args_model = CorsFilterArguments

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: CorsFilterArguments) -> ToolResult:
        result = self.query_service.by_cors(args.cors_support, args.limit)
        return ToolResult(text=formatter.format_filter_result(result))


class GetApiDetailsTool(BaseTool):
    name = "get_api_details"
    description = "获取特定API的详细信息"
    args_model = ApiNameArguments

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: ApiNameArguments) -> ToolResult:
        entry = self.query_service.details(args.api_name)
        return ToolResult(text=formatter.format_details(entry))


class GetCategoryListTool(BaseTool):
    name = "get_category_list"
    description = "获取所有可用的API分类列表"

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: NoArguments) -> ToolResult:
        return ToolResult(text=formatter.format_category_list(self.query_service.category_list()))


class GetRandomApiTool(BaseTool):
    name = "get_random_api"
    description = "随机推荐一个API"
    args_model = RandomApiArguments

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: RandomApiArguments) -> ToolResult:
        entry = self.query_service.random_entry(args.category)
        return ToolResult(text=formatter.format_random_entry(entry))


class GetStatisticsTool(BaseTool):
    name = "get_api_statistics"
    description = "获取API统计信息"

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: NoArguments) -> ToolResult:
        return ToolResult(text=formatter.format_statistics(self.query_service.statistics()))


class AnalyzeAuthTool(BaseTool):
    name = "analyze_auth_requirements"
    description = "分析不同认证方式的API分布"

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: NoArguments) -> ToolResult:
        summaries = self.query_service.auth_analysis()
        return ToolResult(text=formatter.format_auth_analysis(summaries))


class RecommendForProjectTool(BaseTool):
    name = "recommend_apis_for_project"
    description = "根据项目需求推荐合适的API"
    args_model = ProjectRecommendationArguments

    def __init__(self, recommendation_service: RecommendationService):
        self.recommendation_service = recommendation_service

    async def execute(self, args: ProjectRecommendationArguments) -> ToolResult:
        result = self.recommendation_service.recommend_for_project(
            args.project_type, args.requirements, args.limit
        )
        heading = f'# API recommendations for "{args.project_type}"'
        return ToolResult(text=formatter.format_ranked_result(result, heading=heading))


class FindAlternativesTool(BaseTool):
    name = "find_alternative_apis"
    description = "查找具有相似功能的替代API"
    args_model = AlternativeApisArguments

    def __init__(self, recommendation_service: RecommendationService):
        self.recommendation_service = recommendation_service

    async def execute(self, args: AlternativeApisArguments) -> ToolResult:
        result = self.recommendation_service.find_alternatives(args.functionality, args.limit)
        heading = f'# Alternative APIs for "{args.functionality}"'
        return ToolResult(text=formatter.format_ranked_result(result, heading=heading))


class GenerateIntegrationCodeTool(BaseTool):
    name = "generate_api_integration_code"
    description = "为选定的API生成集成代码示例"
    args_model = IntegrationCodeArguments

    def __init__(self, codegen_service: CodeGenerationService):
        self.codegen_service = codegen_service

    async def execute(self, args: IntegrationCodeArguments) -> ToolResult:
        snippet = self.codegen_service.generate(args.api_name, args.language)
        return ToolResult(text=formatter.format_snippet(snippet))


class SyncRepositoryDataTool(BaseTool):
    name = "sync_repository_data"
    description = "从远程数据源同步最新的API列表"
    args_model = SyncArguments
    requires_catalog = False

    def __init__(self, sync_service: CatalogSyncService):
        self.sync_service = sync_service

    async def execute(self, args: SyncArguments) -> ToolResult:
        outcome = await self.sync_service.sync(force=args.force)
        return ToolResult(text=outcome.message, is_error=not outcome.success)


class CheckNewApisTool(BaseTool):
    name = "check_new_apis"
    description = "检查最近添加的新API"
    args_model = NewApisArguments

    def __init__(self, query_service: CatalogQueryService):
        self.query_service = query_service

    async def execute(self, args: NewApisArguments) -> ToolResult:
        result = self.query_service.recent_entries(args.days)
        return ToolResult(text=formatter.format_recent_entries(result))


def create_default_registry(
    query_service: CatalogQueryService,
    recommendation_service: RecommendationService,
    codegen_service: CodeGenerationService,
    sync_service: CatalogSyncService,
) -> ToolRegistry:
    """创建默认工具注册表。"""
    registry = ToolRegistry(sync_service)

    registry.register(SearchByCategoryTool(query_service))
    registry.register(SearchByKeywordTool(query_service))
    registry.register(FilterByAuthTool(query_service))
    registry.register(FilterByHttpsTool(query_service))
    registry.register(FilterByCorsTool(query_service))
    registry.register(GetApiDetailsTool(query_service))
    registry.register(GetCategoryListTool(query_service))
    registry.register(GetRandomApiTool(query_service))
    registry.register(GetStatisticsTool(query_service))
    registry.register(AnalyzeAuthTool(query_service))
    registry.register(RecommendForProjectTool(recommendation_service))
    registry.register(FindAlternativesTool(recommendation_service))
    registry.register(GenerateIntegrationCodeTool(codegen_service))
    registry.register(SyncRepositoryDataTool(sync_service))
    registry.register(CheckNewApisTool(query_service))

    return registry
