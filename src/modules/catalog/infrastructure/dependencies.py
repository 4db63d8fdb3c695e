"""Catalog module infrastructure dependencies."""

from src.modules.catalog.infrastructure.catalog_provider import HttpCatalogProvider
from src.modules.catalog.infrastructure.repositories import (
    InMemoryCatalogSnapshotRepository,
)

# 进程内唯一的快照持有者，所有请求共享
_snapshot_repository = InMemoryCatalogSnapshotRepository()


def get_catalog_snapshot_repository() -> InMemoryCatalogSnapshotRepository:
    return _snapshot_repository


def get_catalog_provider() -> HttpCatalogProvider:
    return HttpCatalogProvider()
