"""Catalog source port."""

from typing import Protocol

from src.modules.catalog.domain.entities import Catalog


class CatalogProvider(Protocol):
    """Port for fetching a full catalog document from the upstream source."""

    @property
    def source_url(self) -> str: ...

    async def fetch_catalog(self) -> Catalog:
        """Fetch and parse the whole catalog.

        Raises:
            CatalogSyncError: transport failure, non-200 status or a payload
                that is not a catalog document.
        """
        ...
