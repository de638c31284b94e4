"""Master API router. Mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from bentogrid.api import export, generate, grid, health, subgrid

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(grid.router)
api_router.include_router(subgrid.router)
api_router.include_router(export.router)
api_router.include_router(generate.router)
