"""API router configuration."""

from fastapi import APIRouter

from src.modules.catalog.interfaces.router import router as catalog_router
from src.modules.tools.interfaces.router import router as tools_router

api_router = APIRouter()

# Catalog snapshot
api_router.include_router(catalog_router)

# Tool-call boundary
api_router.include_router(tools_router)
