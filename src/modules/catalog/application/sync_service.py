"""Synchronize the in-memory catalog snapshot with the remote source."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from loguru import logger

from src.core.config import settings
from src.core.infrastructure.logging import BusinessEvents
from src.modules.catalog.application.models import CatalogStatus
from src.modules.catalog.domain.catalog import CatalogProvider
from src.modules.catalog.domain.entities import CatalogSnapshot
from src.modules.catalog.domain.exceptions import CatalogSyncError
from src.modules.catalog.domain.repository import CatalogSnapshotRepository


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class SyncOutcome:
    success: bool
    message: str
    skipped: bool = False
    categories: int = 0
    entries: int = 0
    synced_at: datetime | None = None


class CatalogSyncService:
    """Time-boxed, all-or-nothing catalog synchronization.

    职责：
    - 数据在新鲜窗口内时跳过远程请求
    - 每次调用最多请求一次远程数据，不重试
    - 成功时整体替换快照；失败时保留旧快照并返回失败结果
    """

    def __init__(
        self,
        repository: CatalogSnapshotRepository,
        provider: CatalogProvider,
        *,
        freshness_sec: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.repository = repository
        self.provider = provider
        self.freshness_sec = (
            settings.CATALOG_FRESHNESS_SEC if freshness_sec is None else freshness_sec
        )
        self._clock = clock

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self.repository.get()

    def status(self) -> CatalogStatus:
        snapshot = self.repository.get()
        age_sec = None
        if snapshot.last_synced_at is not None:
            age_sec = (self._clock() - snapshot.last_synced_at).total_seconds()
        return CatalogStatus(
            loaded=snapshot.is_loaded,
            last_synced_at=snapshot.last_synced_at,
            categories=len(snapshot.catalog),
            entries=snapshot.catalog.total_entries,
            age_sec=age_sec,
            is_fresh=age_sec is not None and age_sec < self.freshness_sec,
        )

    async def ensure_fresh(self) -> None:
        """Load the catalog if it was never loaded or is empty."""
        snapshot = self.repository.get()
        if snapshot.last_synced_at is None or snapshot.catalog.is_empty:
            await self.sync(force=False)

    async def sync(self, force: bool = False) -> SyncOutcome:
        """Fetch a replacement snapshot unless the current one is still fresh."""
        current = self.repository.get()
        now = self._clock()

        if not force and current.last_synced_at is not None:
            age_sec = (now - current.last_synced_at).total_seconds()
            if age_sec < self.freshness_sec:
                BusinessEvents.catalog_sync_skipped(
                    age_sec=age_sec, freshness_sec=self.freshness_sec
                )
                return SyncOutcome(
                    success=True,
                    skipped=True,
                    message="Catalog is already fresh; no sync needed",
                    categories=len(current.catalog),
                    entries=current.catalog.total_entries,
                    synced_at=current.last_synced_at,
                )

        try:
            catalog = await self.provider.fetch_catalog()
        except CatalogSyncError as exc:
            BusinessEvents.catalog_sync_failed(url=self.provider.source_url, error=exc.message)
            logger.warning(f"Catalog sync failed: {exc.message}")
            return SyncOutcome(
                success=False,
                message=f"Unable to load catalog from {self.provider.source_url}: {exc.message}",
            )

        synced_at = self._clock()
        self.repository.replace(CatalogSnapshot(catalog=catalog, last_synced_at=synced_at))

        categories = len(catalog)
        entries = catalog.total_entries
        BusinessEvents.catalog_sync_completed(
            categories=categories, entries=entries, forced=force
        )
        logger.info(f"Catalog synced: categories={categories}, entries={entries}")
        return SyncOutcome(
            success=True,
            message=(
                f"Catalog loaded from remote source: {categories} categories, "
                f"{entries} APIs"
            ),
            categories=categories,
            entries=entries,
            synced_at=synced_at,
        )
