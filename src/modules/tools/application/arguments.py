"""Tool argument models.

每个工具对应一个参数模型；字段别名沿用外部调用方使用的 camelCase 名称。
"""

from pydantic import BaseModel, ConfigDict, Field

from src.core.config import settings


class ToolArguments(BaseModel):
    """Base model for tool arguments."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class NoArguments(ToolArguments):
    pass


class CategorySearchArguments(ToolArguments):
    category: str = Field(..., description="API分类名称（如：Animals, Anime, Business等）")
    limit: int = Field(settings.SEARCH_DEFAULT_LIMIT, ge=1, description="返回结果数量限制")


class KeywordSearchArguments(ToolArguments):
    keyword: str = Field(..., description="搜索关键词")
    limit: int = Field(settings.SEARCH_DEFAULT_LIMIT, ge=1, description="返回结果数量限制")


class AuthFilterArguments(ToolArguments):
    auth_type: str = Field(
        ...,
        alias="authType",
        description="认证类型: No, apiKey, OAuth, X-Mashape-Key, User-Agent",
    )
    limit: int = Field(settings.SEARCH_DEFAULT_LIMIT, ge=1, description="返回结果数量限制")


class HttpsFilterArguments(ToolArguments):
    https_only: bool = Field(True, alias="httpsOnly", description="是否只返回支持HTTPS的API")
    limit: int = Field(settings.SEARCH_DEFAULT_LIMIT, ge=1, description="返回结果数量限制")


class CorsFilterArguments(ToolArguments):
    cors_support: str = Field(
        ..., alias="corsSupport", description="CORS支持状态: yes, no, unknown"
    )
    limit: int = Field(settings.SEARCH_DEFAULT_LIMIT, ge=1, description="返回结果数量限制")


class ApiNameArguments(ToolArguments):
    api_name: str = Field(..., alias="apiName", description="API名称")


class RandomApiArguments(ToolArguments):
    category: str | None = Field(None, description="可选：限制在特定分类内随机选择")


class ProjectRecommendationArguments(ToolArguments):
    project_type: str = Field(
        ..., alias="projectType", description="项目类型描述（如：天气应用、社交媒体、电商等）"
    )
    requirements: list[str] = Field(default_factory=list, description="项目需求列表")
    limit: int = Field(settings.RECOMMEND_DEFAULT_LIMIT, ge=1, description="返回结果数量限制")


class AlternativeApisArguments(ToolArguments):
    functionality: str = Field(..., description="所需功能描述")
    limit: int = Field(settings.RECOMMEND_DEFAULT_LIMIT, ge=1, description="返回结果数量限制")


class IntegrationCodeArguments(ToolArguments):
    api_name: str = Field(..., alias="apiName", description="API名称")
    language: str = Field("javascript", description="编程语言: javascript, python, curl")


class SyncArguments(ToolArguments):
    force: bool = Field(False, description="是否强制重新同步")


class NewApisArguments(ToolArguments):
    days: int = Field(
        settings.NEW_APIS_DEFAULT_DAYS, ge=1, description="检查最近几天的新增API"
    )
