"""POST /api/extract — audit a reference diagram and read its constants."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter

from mandala.api.errors import to_http
from mandala.config import settings
from mandala.extraction.extractor import extract_constants
from mandala.models.requests import ExtractRequest
from mandala.models.responses import ExtractResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/extract", response_model=ExtractResponse)
async def extract(req: ExtractRequest) -> ExtractResponse:
    start = time.perf_counter()
    try:
        config = req.sequence.to_configuration(settings.default_preset) if req.sequence else None
        report = extract_constants(req.svg, req.classes, config)
    except ValueError as e:
        logger.warning("Extraction rejected: %s", e)
        raise to_http(e) from e

    return ExtractResponse(report=report, processing_time_ms=(time.perf_counter() - start) * 1000)
