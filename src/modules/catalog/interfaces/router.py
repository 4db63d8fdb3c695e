"""Catalog API routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from src.core.interfaces.http.response import ApiResponse
from src.modules.catalog.application.dependencies import get_catalog_sync_service
from src.modules.catalog.application.sync_service import CatalogSyncService
from src.modules.catalog.interfaces.schemas import (
    CatalogStatusResponse,
    SyncOutcomeResponse,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get(
    "/status",
    response_model=ApiResponse[CatalogStatusResponse],
    summary="获取目录状态",
    description="返回当前快照的加载状态、规模和新鲜度",
)
async def get_catalog_status(
    service: CatalogSyncService = Depends(get_catalog_sync_service),
) -> ApiResponse[CatalogStatusResponse]:
    status = service.status()
    return ApiResponse.success(data=CatalogStatusResponse(**asdict(status)))


@router.post(
    "/sync",
    response_model=ApiResponse[SyncOutcomeResponse],
    summary="同步目录",
    description="从远程数据源拉取目录；新鲜窗口内且未强制时跳过",
)
async def sync_catalog(
    force: bool = Query(False, description="是否强制重新同步"),
    service: CatalogSyncService = Depends(get_catalog_sync_service),
) -> ApiResponse[SyncOutcomeResponse]:
    outcome = await service.sync(force=force)
    return ApiResponse(
        code=200 if outcome.success else 502,
        message=outcome.message,
        data=SyncOutcomeResponse(**asdict(outcome)),
    )
