"""Application configuration."""

from typing import Annotated, Any, Literal, Self

from pydantic import AnyUrl, BeforeValidator, HttpUrl, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "apiScout"
    VERSION: str = "0.1.0"
    SERVER_PORT: int = 8000
    ROOTPATH: str = ""
    API_V1_STR: str = "/api/v1"
    FRONTEND_HOST: str = "http://localhost:3000"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    @computed_field
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    # Sentry
    SENTRY_DSN: HttpUrl | None = None

    # Catalog source
    CATALOG_URL: str = "https://weilei.site/apis.json"
    CATALOG_FETCH_TIMEOUT_SEC: float = 15.0
    CATALOG_USER_AGENT: str = "apiScout/0.1 (+catalog-sync)"
    CATALOG_FRESHNESS_SEC: int = 3600  # 1 hour
    # 为 True 时拒绝 count 与 entries 数量不一致的快照
    CATALOG_ENFORCE_COUNT: bool = False

    # Query defaults
    SEARCH_DEFAULT_LIMIT: int = 10
    RECOMMEND_DEFAULT_LIMIT: int = 5
    AUTH_EXAMPLES_PER_KIND: int = 5
    NEW_APIS_DEFAULT_DAYS: int = 7
    NEW_APIS_MAX_ITEMS: int = 10
    NEW_APIS_SAMPLE_RATIO: float = 0.05

    @model_validator(mode="after")
    def _check_catalog_settings(self) -> Self:
        if self.CATALOG_FRESHNESS_SEC < 0:
            raise ValueError("CATALOG_FRESHNESS_SEC must not be negative")
        if self.CATALOG_FETCH_TIMEOUT_SEC <= 0:
            raise ValueError("CATALOG_FETCH_TIMEOUT_SEC must be positive")
        return self


settings = Settings()
