"""Numbers ring — the gate number, upright across the band."""

from __future__ import annotations

import logging

from mandala.core.geometry import to_outward_rotation
from mandala.models.ring import MASTER_GEOMETRY
from mandala.rings.context import GeneratedElement, RenderContext
from mandala.rings.registry import Unit, ring

logger = logging.getLogger(__name__)

RING_ID = "numbers"

# 117.1932px Herculanum in the master's 109.96px band
FONT_RATIO = 117.1932 / MASTER_GEOMETRY[RING_ID].band_width


@ring(id=RING_ID, unit=Unit.GATE, sub_bands=1, order=50, sources=("gate",))
def numbers_ring(ctx: RenderContext) -> list[GeneratedElement]:
    """Gate number per gate."""
    font_size = ctx.geometry.band_width * FONT_RATIO
    elements = []
    for d in ctx.dockings():
        canvas = ctx.canvas_angle(d.angle_degrees)
        anchor = ctx.point(canvas, ctx.geometry.mid_radius)
        attrs = d.data_attributes()
        attrs.update(
            {
                "transform": ctx.transform(anchor, to_outward_rotation(canvas)),
                "font-size": ctx.fmt(font_size),
                "font-family": ctx.config.font_family,
                "fill": ctx.config.text_colour,
                "text-anchor": "middle",
                "dominant-baseline": "central",
                "stroke": "none",
            }
        )
        elements.append(
            GeneratedElement(
                ring=RING_ID,
                gate=d.gate,
                source_field="gate",
                tag="text",
                attributes=attrs,
                text=str(d.gate),
            )
        )
    logger.info("Numbers ring: %d labels", len(elements))
    return elements
