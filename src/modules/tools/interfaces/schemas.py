"""Tool API schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolDefinitionResponse(BaseModel):
    """Tool definition."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="工具名称")
    description: str = Field(..., description="工具说明")
    input_schema: dict[str, Any] = Field(
        ..., alias="inputSchema", description="参数 JSON Schema"
    )


class ToolCallRequest(BaseModel):
    """Tool call request."""

    name: str = Field(..., min_length=1, description="工具名称")
    arguments: dict[str, Any] = Field(default_factory=dict, description="工具参数")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "search_apis_by_keyword",
                "arguments": {"keyword": "weather", "limit": 5},
            }
        }
    )


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolCallResponse(BaseModel):
    """Tool call response."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(False, alias="isError")
    latency_ms: int = Field(0, description="执行耗时（毫秒）")
