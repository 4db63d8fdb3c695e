"""Tool API routes."""

from fastapi import APIRouter, Depends

from src.core.interfaces.http.response import ApiResponse
from src.modules.tools.application.dependencies import get_tool_registry
from src.modules.tools.application.tools import ToolRegistry
from src.modules.tools.interfaces.schemas import (
    TextContent,
    ToolCallRequest,
    ToolCallResponse,
    ToolDefinitionResponse,
)

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get(
    "",
    response_model=ApiResponse[list[ToolDefinitionResponse]],
    summary="获取工具列表",
    description="返回所有可调用工具的名称、说明和参数 JSON Schema",
)
async def list_tools(
    registry: ToolRegistry = Depends(get_tool_registry),
) -> ApiResponse[list[ToolDefinitionResponse]]:
    definitions = [
        ToolDefinitionResponse.model_validate(item) for item in registry.definitions()
    ]
    return ApiResponse.success(data=definitions, meta={"total": len(definitions)})


@router.post(
    "/call",
    response_model=ToolCallResponse,
    response_model_by_alias=True,
    summary="调用工具",
    description="按名称调用工具；查询无结果时以文本形式返回说明",
)
async def call_tool(
    request: ToolCallRequest,
    registry: ToolRegistry = Depends(get_tool_registry),
) -> ToolCallResponse:
    result = await registry.call(request.name, request.arguments)
    return ToolCallResponse(
        content=[TextContent(text=result.text)],
        is_error=result.is_error,
        latency_ms=result.latency_ms,
    )
