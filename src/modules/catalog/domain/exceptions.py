"""Catalog domain exceptions."""

from fastapi import status

from src.core.domain.exceptions import DomainException, EntityNotFoundError


class CatalogSyncError(DomainException):
    """Raised when the upstream catalog cannot be fetched or parsed."""

    http_status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "CATALOG_SYNC_FAILED"


class CatalogEmptyError(DomainException):
    """Raised when a query runs before any catalog data is available."""

    http_status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "CATALOG_EMPTY"

    def __init__(self, message: str = "The API catalog has not been loaded yet"):
        super().__init__(message)


class CatalogEntryNotFoundError(EntityNotFoundError):
    """Raised when no entry has the requested name."""

    def __init__(self, name: str):
        super().__init__("API", name)
        self.name = name


class CategoryNotFoundError(EntityNotFoundError):
    """Raised when neither an exact nor a fuzzy category match exists."""

    def __init__(self, category: str, available: list[str] | None = None):
        super().__init__("Category", category)
        self.category = category
        self.available = available or []


class NoMatchesError(DomainException):
    """Raised when a search, filter or ranking yields nothing."""

    http_status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
