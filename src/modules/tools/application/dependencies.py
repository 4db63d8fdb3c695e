"""Tools module application dependencies."""

from fastapi import Depends

from src.modules.catalog.application.codegen_service import CodeGenerationService
from src.modules.catalog.application.dependencies import (
    get_catalog_query_service,
    get_catalog_sync_service,
    get_codegen_service,
    get_recommendation_service,
)
from src.modules.catalog.application.query_service import CatalogQueryService
from src.modules.catalog.application.recommendation_service import (
    RecommendationService,
)
from src.modules.catalog.application.sync_service import CatalogSyncService
from src.modules.tools.application.tools import ToolRegistry, create_default_registry


async def get_tool_registry(
    query_service: CatalogQueryService = Depends(get_catalog_query_service),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
    codegen_service: CodeGenerationService = Depends(get_codegen_service),
    sync_service: CatalogSyncService = Depends(get_catalog_sync_service),
) -> ToolRegistry:
    return create_default_registry(
        query_service, recommendation_service, codegen_service, sync_service
    )
