"""apiScout - 公共 API 目录查询与推荐服务入口。"""

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.routing import APIRoute
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.logging import setup_logging
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
)
from src.core.interfaces.http.routers import api_router
from src.modules.catalog.application import dependencies as catalog_app_deps
from src.modules.catalog.application.sync_service import CatalogSyncService
from src.modules.catalog.infrastructure import dependencies as catalog_infra_deps


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        traces_sample_rate=1.0,
        environment=settings.ENVIRONMENT,
    )


def _build_sync_service() -> CatalogSyncService:
    return CatalogSyncService(
        catalog_infra_deps.get_catalog_snapshot_repository(),
        catalog_infra_deps.get_catalog_provider(),
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting apiScout...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # 启动时尝试加载一次目录；失败不阻止启动，首次工具调用会再次尝试
    outcome = await _build_sync_service().sync(force=False)
    if outcome.success:
        logger.info(outcome.message)
    else:
        logger.warning(f"Initial catalog load failed: {outcome.message}")

    yield

    logger.info("Shutting down apiScout...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "公共 API 目录查询与推荐服务\n\n"
        "## 工具调用\n\n"
        "- `GET /tools` 列出可用工具及参数 Schema\n"
        "- `POST /tools/call` 按名称调用工具，返回文本内容"
    ),
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[catalog_app_deps.get_catalog_snapshot_repository] = (
    catalog_infra_deps.get_catalog_snapshot_repository
)
app.dependency_overrides[catalog_app_deps.get_catalog_provider] = (
    catalog_infra_deps.get_catalog_provider
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# CORS middleware
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint.

    服务本身无外部强依赖：
    - healthy: 目录已加载且在新鲜窗口内
    - degraded: 目录已加载但已过期，或尚未加载成功
    """
    status = _build_sync_service().status()
    overall_status = "healthy" if status.loaded and status.is_fresh else "degraded"

    return {
        "status": overall_status,
        "environment": settings.ENVIRONMENT,
        "version": settings.VERSION,
        "components": {
            "catalog": {
                "loaded": status.loaded,
                "categories": status.categories,
                "entries": status.entries,
                "last_synced_at": (
                    status.last_synced_at.isoformat() if status.last_synced_at else None
                ),
                "is_fresh": status.is_fresh,
            },
        },
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to apiScout API",
        "docs": f"{settings.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
