"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mandala.models.extraction import ExtractionReport


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    rings_registered: int = 0


class RingInfo(BaseModel):
    id: str
    unit: str
    units: int
    sub_bands: int
    order: int
    sources: list[str] = Field(default_factory=list)
    description: str = ""


class RingListResponse(BaseModel):
    rings: list[RingInfo] = Field(default_factory=list)


class RingRenderResponse(BaseModel):
    ring_id: str
    sequence: str
    svg: str
    element_count: int = 0
    processing_time_ms: float = 0.0


class ExtractResponse(BaseModel):
    report: ExtractionReport
    processing_time_ms: float = 0.0
