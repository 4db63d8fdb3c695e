"""Catalog snapshot repository interface."""

from abc import ABC, abstractmethod

from src.modules.catalog.domain.entities import CatalogSnapshot


class CatalogSnapshotRepository(ABC):
    """Holds the single current catalog snapshot.

    The snapshot is only ever replaced as a whole; readers always see either
    the previous or the new snapshot, never a mix.
    """

    @abstractmethod
    def get(self) -> CatalogSnapshot:
        """返回当前快照（未同步时为空快照）"""
        pass

    @abstractmethod
    def replace(self, snapshot: CatalogSnapshot) -> None:
        """整体替换当前快照"""
        pass
