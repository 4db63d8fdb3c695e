"""Catalog module application dependencies."""

from typing import NoReturn

from fastapi import Depends

from src.modules.catalog.application.codegen_service import CodeGenerationService
from src.modules.catalog.application.query_service import CatalogQueryService
from src.modules.catalog.application.recommendation_service import (
    RecommendationService,
)
from src.modules.catalog.application.sync_service import CatalogSyncService
from src.modules.catalog.domain.catalog import CatalogProvider
from src.modules.catalog.domain.repository import CatalogSnapshotRepository


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_catalog_snapshot_repository() -> CatalogSnapshotRepository:
    _missing_dependency("CatalogSnapshotRepository")


async def get_catalog_provider() -> CatalogProvider:
    _missing_dependency("CatalogProvider")


async def get_catalog_sync_service(
    repository: CatalogSnapshotRepository = Depends(get_catalog_snapshot_repository),
    provider: CatalogProvider = Depends(get_catalog_provider),
) -> CatalogSyncService:
    return CatalogSyncService(repository, provider)


async def get_catalog_query_service(
    repository: CatalogSnapshotRepository = Depends(get_catalog_snapshot_repository),
) -> CatalogQueryService:
    return CatalogQueryService(repository)


async def get_recommendation_service(
    repository: CatalogSnapshotRepository = Depends(get_catalog_snapshot_repository),
) -> RecommendationService:
    return RecommendationService(repository)


async def get_codegen_service(
    query_service: CatalogQueryService = Depends(get_catalog_query_service),
) -> CodeGenerationService:
    return CodeGenerationService(query_service)
