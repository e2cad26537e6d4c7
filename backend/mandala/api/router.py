"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from mandala.api import extract, health, rings

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(rings.router)
api_router.include_router(extract.router)
