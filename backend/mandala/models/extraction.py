"""Extraction report models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mandala.errors import ExtractionCompletenessFailure
from mandala.models.ring import RingGeometry


class ExtractedItem(BaseModel):
    pattern_class: str
    key: str
    element_id: str
    tag: str
    attributes: dict[str, str] = Field(default_factory=dict)
    ancestors: list[str] = Field(default_factory=list)
    # (xmin, ymin, xmax, ymax) in the element's own coordinates
    bbox: tuple[float, float, float, float] | None = None


class Discrepancy(BaseModel):
    pattern_class: str
    expected: int
    found: int
    missing: list[str] = Field(default_factory=list)
    duplicated: list[str] = Field(default_factory=list)
    unexpected: list[str] = Field(default_factory=list)


class AuditReport(BaseModel):
    counts: dict[str, int] = Field(default_factory=dict)
    discrepancies: list[Discrepancy] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.discrepancies

    def raise_for_discrepancies(self) -> None:
        if self.discrepancies:
            raise ExtractionCompletenessFailure(self.discrepancies)


class OffsetCalibration(BaseModel):
    """Canvas position offset measured from the hexagram group rotations."""

    mean: float
    std: float
    samples: int


class ExtractionReport(BaseModel):
    counts: dict[str, int] = Field(default_factory=dict)
    ring_geometry: RingGeometry | None = None
    position_offset: OffsetCalibration | None = None
    view_box: tuple[float, float, float, float] | None = None
    items: dict[str, list[ExtractedItem]] = Field(default_factory=dict)
    audit: AuditReport = Field(default_factory=AuditReport)
