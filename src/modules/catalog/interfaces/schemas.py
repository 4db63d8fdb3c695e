"""Catalog API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class CatalogStatusResponse(BaseModel):
    """Catalog snapshot status."""

    loaded: bool = Field(..., description="是否已加载目录数据")
    last_synced_at: datetime | None = Field(None, description="最近一次同步时间")
    categories: int = Field(..., description="分类数量")
    entries: int = Field(..., description="API 数量")
    age_sec: float | None = Field(None, description="快照已存在的秒数")
    is_fresh: bool = Field(..., description="是否仍在新鲜窗口内")


class SyncOutcomeResponse(BaseModel):
    """Catalog sync result."""

    success: bool
    message: str
    skipped: bool = False
    categories: int = 0
    entries: int = 0
    synced_at: datetime | None = None
