"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mandala.core.sequence import PRESETS, SequenceConfiguration
from mandala.models.knowledge import KnowledgePayload
from mandala.models.ring import RingGeometry


class SequenceRequest(BaseModel):
    preset: str | None = Field(default=None, description="Named ordering preset (e.g. rave-wheel)")
    ordering: list[int] | None = Field(default=None, description="Explicit ordering of the 64 gates")
    direction: str | None = Field(default=None, description="clockwise or counter-clockwise")
    rotation_offset_degrees: float | None = Field(default=None, description="Rotation added to every gate angle")
    name: str | None = None

    def to_configuration(self, default_preset: str) -> SequenceConfiguration:
        """Validated configuration; direction and offset are never filled in."""
        if self.ordering is not None:
            ordering = self.ordering
            name = self.name or "custom"
        else:
            preset = self.preset or default_preset
            if preset not in PRESETS:
                raise ValueError(f"Unknown sequence preset: {preset}")
            ordering = list(PRESETS[preset])
            name = self.name or preset
        return SequenceConfiguration.from_mapping(
            {
                "ordering": ordering,
                "direction": self.direction,
                "rotation_offset_degrees": self.rotation_offset_degrees,
            },
            name=name,
        )


class RingRequest(BaseModel):
    sequence: SequenceRequest
    geometry: RingGeometry | None = Field(default=None, description="Band geometry; master geometry if omitted")
    payload: KnowledgePayload | None = Field(default=None, description="Knowledge the ring draws its text from")
    position_offset: float | None = Field(default=None, description="Canvas calibration override")


class ExtractRequest(BaseModel):
    svg: str = Field(..., description="Raw reference SVG")
    classes: list[str] | None = Field(default=None, description="Pattern classes to extract; all if omitted")
    sequence: SequenceRequest | None = Field(default=None, description="Sequence for offset calibration")
