"""Ring assembler — snap independently rendered rings into one concentric wheel.

Each ring is rendered at its own geometry, then scaled and translated so its
inner edge lands on the previous ring's outer edge plus padding:

    transform = translate(target - source * scale) scale(scale)

Scaling is uniform, so every ratio-derived size inside a ring scales with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mandala.core.geometry import POSITION_OFFSET, scaled_geometry
from mandala.core.sequence import SequenceConfiguration
from mandala.models.knowledge import KnowledgePayload
from mandala.models.ring import RingGeometry
from mandala.rings.config import RenderConfig
from mandala.rings.registry import RingRegistry, load_rings
from mandala.rings.renderer import RingOutput, render_ring
from mandala.svg.document import CANVAS_MARGIN, build_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    ring_id: str
    scale: float
    inner_radius: float
    outer_radius: float
    translate: tuple[float, float]

    def transform(self, fmt) -> str:
        return (
            f"translate({fmt(self.translate[0])}, {fmt(self.translate[1])}) "
            f"scale({self.scale:.6f})"
        )


@dataclass
class AssembledWheel:
    placements: list[Placement]
    outputs: list[RingOutput]
    svg: str

    @property
    def element_count(self) -> int:
        return sum(o.element_count for o in self.outputs)


def snap_placements(
    geometries: list[tuple[str, RingGeometry]],
    center: tuple[float, float],
    start_radius: float,
    padding: float = 0.0,
) -> list[Placement]:
    """Scale each ring so its inner edge meets the previous outer edge plus padding."""
    if start_radius <= 0:
        raise ValueError("start_radius must be positive")
    placements: list[Placement] = []
    edge = start_radius
    for i, (ring_id, geometry) in enumerate(geometries):
        target_inner = edge if i == 0 else edge + padding
        if geometry.inner_radius <= 0:
            raise ValueError(f"Ring {ring_id} has no inner edge to snap")
        scale = target_inner / geometry.inner_radius
        scaled = scaled_geometry(geometry, scale)
        outer = scaled.outer_radius
        placements.append(
            Placement(
                ring_id=ring_id,
                scale=scale,
                inner_radius=target_inner,
                outer_radius=outer,
                translate=(center[0] - scaled.center[0], center[1] - scaled.center[1]),
            )
        )
        edge = outer
    return placements


def assemble(
    rings: list[str],
    sequence: SequenceConfiguration,
    center: tuple[float, float],
    start_radius: float,
    padding: float = 0.0,
    *,
    geometries: dict[str, RingGeometry] | None = None,
    payload: KnowledgePayload | None = None,
    position_offset: float = POSITION_OFFSET,
    config: RenderConfig | None = None,
    registry: RingRegistry | None = None,
) -> AssembledWheel:
    """Render and merge `rings` into one document, innermost first in registry order."""
    registry = registry or load_rings()
    config = config or RenderConfig()
    geometries = geometries or {}
    for ring_id in rings:
        registry.get(ring_id)
    wanted = set(rings)
    ordered = [spec.id for spec in registry.all() if spec.id in wanted]

    outputs = [
        render_ring(
            ring_id,
            sequence,
            geometries.get(ring_id),
            payload,
            position_offset=position_offset,
            config=config,
            registry=registry,
        )
        for ring_id in ordered
    ]
    placements = snap_placements(
        [(o.ring_id, o.geometry) for o in outputs], center, start_radius, padding
    )

    groups = [_scoped(o.group(p.transform(config.fmt))) for o, p in zip(outputs, placements)]
    outer = placements[-1].outer_radius if placements else start_radius
    size = round(max(2 * center[0], 2 * center[1], center[0] + outer + CANVAS_MARGIN), 4)
    svg = build_document(groups, size, size, title="Mandala wheel", description=f"sequence {sequence.name}")

    logger.info(
        "Assembled %d rings (%s), outer radius %.2f",
        len(outputs),
        ", ".join(ordered),
        outer,
    )
    return AssembledWheel(placements=placements, outputs=outputs, svg=svg)


def _scoped(group: dict) -> dict:
    """Prefix ids inside a ring group with the ring id so merged ids stay unique."""
    prefix = group["id"].upper()

    def walk(node: dict) -> dict:
        out = dict(node)
        if "id" in out:
            out["id"] = f"{prefix}_-_{out['id']}"
        if "children" in out:
            out["children"] = [walk(c) for c in out["children"]]
        return out

    scoped = dict(group)
    scoped["children"] = [walk(c) for c in group["children"]]
    return scoped
