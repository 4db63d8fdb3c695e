"""In-memory catalog snapshot repository."""

from src.modules.catalog.domain.entities import CatalogSnapshot
from src.modules.catalog.domain.repository import CatalogSnapshotRepository


class InMemoryCatalogSnapshotRepository(CatalogSnapshotRepository):
    """Process-local snapshot holder; replacement is a single reference swap."""

    def __init__(self, snapshot: CatalogSnapshot | None = None) -> None:
        self._snapshot = snapshot or CatalogSnapshot.empty()

    def get(self) -> CatalogSnapshot:
        return self._snapshot

    def replace(self, snapshot: CatalogSnapshot) -> None:
        self._snapshot = snapshot
