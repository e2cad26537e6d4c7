"""GET /api/rings, POST /api/rings/{ring_id} — render one ring."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter

from mandala.api.errors import to_http
from mandala.config import settings
from mandala.dependencies import get_default_payload
from mandala.models.requests import RingRequest
from mandala.models.responses import RingInfo, RingListResponse, RingRenderResponse
from mandala.rings.registry import get_registry
from mandala.rings.renderer import render_ring

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/rings", response_model=RingListResponse)
async def list_rings() -> RingListResponse:
    return RingListResponse(
        rings=[
            RingInfo(
                id=spec.id,
                unit=spec.unit.value,
                units=spec.unit.count,
                sub_bands=spec.sub_bands,
                order=spec.order,
                sources=list(spec.sources),
                description=spec.description,
            )
            for spec in get_registry().all()
        ]
    )


@router.post("/rings/{ring_id}", response_model=RingRenderResponse)
async def render(ring_id: str, req: RingRequest) -> RingRenderResponse:
    start = time.perf_counter()
    try:
        sequence = req.sequence.to_configuration(settings.default_preset)
        output = render_ring(
            ring_id,
            sequence,
            req.geometry,
            req.payload or get_default_payload(),
            position_offset=req.position_offset if req.position_offset is not None else settings.position_offset,
            registry=get_registry(),
        )
        svg = output.to_svg()
    except ValueError as e:
        logger.warning("Render %s rejected: %s", ring_id, e)
        raise to_http(e) from e

    return RingRenderResponse(
        ring_id=ring_id,
        sequence=sequence.name,
        svg=svg,
        element_count=output.element_count,
        processing_time_ms=(time.perf_counter() - start) * 1000,
    )
