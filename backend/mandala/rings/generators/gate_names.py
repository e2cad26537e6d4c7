"""Gate-names ring — each gate's name, fitted into its sector of the band.

Names read along the arc (outward rotation), broken into as many lines as the
band's leading allows. A name that cannot fit aborts the run.
"""

from __future__ import annotations

import logging

from mandala.core.geometry import arc_length, to_outward_rotation
from mandala.core.positioning import DEGREES_PER_GATE
from mandala.core.text_fit import fit_text
from mandala.errors import MissingKnowledge, OverflowUnresolved
from mandala.rings.context import GeneratedElement, RenderContext
from mandala.rings.registry import Unit, ring
from mandala.rings.text import text_block

logger = logging.getLogger(__name__)

RING_ID = "gate-names"


@ring(id=RING_ID, unit=Unit.GATE, sub_bands=1, order=40, sources=("name",))
def gate_names_ring(ctx: RenderContext) -> list[GeneratedElement]:
    """Fitted gate name per gate."""
    band = ctx.geometry.band_width
    run = arc_length(ctx.geometry.mid_radius, DEGREES_PER_GATE)

    elements = []
    compressed = 0
    for d in ctx.dockings():
        knowledge = ctx.payload.gate(d.gate)
        if knowledge is None or not knowledge.name:
            raise MissingKnowledge(RING_ID, f"gate {d.gate}", "name")
        try:
            fit = fit_text(knowledge.name, band, ctx.ratios, available_width=run)
        except OverflowUnresolved as e:
            raise e.for_gate(d.gate) from None
        if fit.compression < 1.0:
            compressed += 1

        canvas = ctx.canvas_angle(d.angle_degrees)
        anchor = ctx.point(canvas, ctx.geometry.mid_radius)
        node = text_block(ctx, fit, "name", ctx.transform(anchor, to_outward_rotation(canvas)))
        node.pop("tag")
        children = tuple(node.pop("children"))
        attrs = d.data_attributes()
        attrs.update(node)
        attrs["data-gate-name"] = knowledge.name
        elements.append(
            GeneratedElement(
                ring=RING_ID,
                gate=d.gate,
                source_field="name",
                tag="text",
                attributes=attrs,
                children=children,
            )
        )

    logger.info("Gate-names ring: %d names (%d compressed)", len(elements), compressed)
    return elements
