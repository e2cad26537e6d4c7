"""Trigrams ring — upper trigram in the outer sub-band, lower trigram in the inner.

Labels read along the radius. The sector width at each sub-band sets the font
size; the sub-band height is the room each label has to run.
"""

from __future__ import annotations

import logging

from mandala.core.geometry import arc_length, sub_band_radius, to_radial_rotation
from mandala.core.positioning import DEGREES_PER_GATE
from mandala.core.text_fit import fit_text
from mandala.errors import OverflowUnresolved
from mandala.rings.context import GeneratedElement, RenderContext, SvgNode
from mandala.rings.registry import Unit, ring
from mandala.rings.text import text_block

logger = logging.getLogger(__name__)

RING_ID = "trigrams"
SUB_BANDS = 2

# Sub-band 0 is outermost; the upper trigram holds the volatile lines
_BANDS = (("upper", "trigrams.upper"), ("lower", "trigrams.lower"))


@ring(id=RING_ID, unit=Unit.GATE, sub_bands=SUB_BANDS, order=20, sources=("trigrams.upper", "trigrams.lower"))
def trigrams_ring(ctx: RenderContext) -> list[GeneratedElement]:
    """Upper and lower trigram labels per gate."""
    height = ctx.geometry.band_width / SUB_BANDS
    radii = [sub_band_radius(ctx.geometry, i, SUB_BANDS) for i in range(SUB_BANDS)]

    elements = []
    for d in ctx.dockings():
        canvas = ctx.canvas_angle(d.angle_degrees)
        rotation = to_radial_rotation(canvas)
        labels: list[SvgNode] = []
        for index, (which, source) in enumerate(_BANDS):
            trigram = getattr(d.trigrams, which)
            try:
                fit = fit_text(
                    trigram.value,
                    arc_length(radii[index], DEGREES_PER_GATE),
                    ctx.ratios,
                    available_width=height,
                )
            except OverflowUnresolved as e:
                raise e.for_gate(d.gate) from None
            anchor = ctx.point(canvas, radii[index])
            labels.append(
                text_block(
                    ctx,
                    fit,
                    source,
                    ctx.transform(anchor, rotation),
                    **{"data-sub-index": str(index), "data-trigram": trigram.value},
                )
            )

        attrs = d.data_attributes()
        attrs["id"] = f"trigrams-{d.gate}"
        elements.append(
            GeneratedElement(
                ring=RING_ID,
                gate=d.gate,
                source_field="trigrams",
                tag="g",
                attributes=attrs,
                children=tuple(labels),
            )
        )

    logger.info("Trigrams ring: %d gates, %d labels", len(elements), len(elements) * SUB_BANDS)
    return elements
