"""Tool-call boundary exceptions.

rpc_code 使用 JSON-RPC 2.0 的标准错误码。
"""

from fastapi import status

from src.core.domain.exceptions import DomainException


class UnknownToolError(DomainException):
    """Raised when a call names a tool that is not registered."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "METHOD_NOT_FOUND"
    rpc_code = -32601

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class InvalidToolArgumentsError(DomainException):
    """Raised when the argument bag does not fit the tool's schema."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_PARAMS"
    rpc_code = -32602

    def __init__(self, tool_name: str, detail: str):
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"Invalid arguments for {tool_name}: {detail}")


class ToolExecutionError(DomainException):
    """Wraps an unexpected failure raised while a tool was running."""

    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"
    rpc_code = -32603

    def __init__(self, tool_name: str, detail: str):
        self.tool_name = tool_name
        self.detail = detail
        super().__init__(f"Error while running {tool_name}: {detail}")
