"""Run one ring generator and package its output."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from mandala.core.geometry import POSITION_OFFSET
from mandala.core.sequence import SequenceConfiguration, validate
from mandala.errors import MandalaError
from mandala.models.knowledge import KnowledgePayload
from mandala.models.ring import MASTER_GEOMETRY, RingGeometry
from mandala.rings.config import RenderConfig
from mandala.rings.context import GeneratedElement, RenderContext
from mandala.rings.registry import RingRegistry, load_rings
from mandala.rings.structure import structure_group
from mandala.svg.document import build_document, canvas_size, ring_group

logger = logging.getLogger(__name__)


@dataclass
class RingOutput:
    ring_id: str
    geometry: RingGeometry
    elements: list[GeneratedElement]
    structure: dict[str, Any]
    sequence_name: str = ""

    @property
    def element_count(self) -> int:
        return len(self.elements)

    def group(self, transform: str | None = None) -> dict[str, Any]:
        return ring_group(self.ring_id, self.elements, self.structure, transform)

    def to_svg(self) -> str:
        width, height = canvas_size(self.geometry)
        return build_document(
            [self.group()],
            width,
            height,
            title=f"{self.ring_id} ring",
            description=f"sequence {self.sequence_name}" if self.sequence_name else "",
        )


def render_ring(
    ring_id: str,
    sequence: SequenceConfiguration,
    geometry: RingGeometry | None = None,
    payload: KnowledgePayload | None = None,
    *,
    position_offset: float = POSITION_OFFSET,
    config: RenderConfig | None = None,
    registry: RingRegistry | None = None,
) -> RingOutput:
    """Render `ring_id` under `sequence`. Elements come back ascending by (gate, sub-index)."""
    registry = registry or load_rings()
    spec = registry.get(ring_id)
    validate(sequence)
    geometry = geometry or MASTER_GEOMETRY.get(ring_id)
    if geometry is None:
        raise MandalaError(f"Ring '{ring_id}' has no master geometry; pass one explicitly")

    ctx = RenderContext(
        ring_id=ring_id,
        sequence=sequence,
        geometry=geometry,
        payload=payload or KnowledgePayload(),
        position_offset=position_offset,
        config=config or RenderConfig(),
    )

    start = time.perf_counter()
    elements = sorted(spec.fn(ctx), key=lambda e: e.sort_key)
    if len(elements) != spec.unit.count:
        raise MandalaError(
            f"Ring '{ring_id}' produced {len(elements)} units, expected {spec.unit.count}"
        )

    output = RingOutput(
        ring_id=ring_id,
        geometry=geometry,
        elements=elements,
        structure=structure_group(ctx),
        sequence_name=sequence.name,
    )
    logger.info(
        "Rendered ring %s: %d elements in %.0fms",
        ring_id,
        output.element_count,
        (time.perf_counter() - start) * 1000,
    )
    return output
