"""Health check."""

from __future__ import annotations

from fastapi import APIRouter

from mandala.models.responses import HealthResponse
from mandala.rings.registry import get_registry

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        rings_registered=get_registry().count,
    )
