"""Quarters and faces ring.

Each gate carries its quarter (bottom bigram) in the outer sub-band and its
face (bottom and middle bigrams) with the face's codon letters in the inner.
Labels read along the radius like the trigram labels, so sixteen neighbouring
gates repeat a quarter and four repeat a face.
"""

from __future__ import annotations

import logging

from mandala.core.geometry import arc_length, sub_band_radius, to_radial_rotation
from mandala.core.positioning import DEGREES_PER_GATE, GateDocking
from mandala.core.text_fit import fit_text
from mandala.errors import OverflowUnresolved
from mandala.rings.context import GeneratedElement, RenderContext, SvgNode
from mandala.rings.registry import Unit, ring
from mandala.rings.text import text_block

logger = logging.getLogger(__name__)

RING_ID = "quarters-faces"
SUB_BANDS = 2


def face_label(d: GateDocking) -> str:
    return f"{d.face.label} ({d.face.codons})"


def _labels(d: GateDocking) -> tuple[tuple[str, str, dict[str, str]], ...]:
    """(text, data-source, extra attributes) per sub-band, outermost first."""
    return (
        (d.quarter.value, "quarter", {"data-quarter": d.quarter.value}),
        (face_label(d), "face", {"data-face": d.face.label, "data-face-codons": d.face.codons}),
    )


@ring(id=RING_ID, unit=Unit.GATE, sub_bands=SUB_BANDS, order=25, sources=("quarter", "face"))
def quarters_faces_ring(ctx: RenderContext) -> list[GeneratedElement]:
    """Quarter and face labels per gate."""
    height = ctx.geometry.band_width / SUB_BANDS
    radii = [sub_band_radius(ctx.geometry, i, SUB_BANDS) for i in range(SUB_BANDS)]

    elements = []
    for d in ctx.dockings():
        canvas = ctx.canvas_angle(d.angle_degrees)
        rotation = to_radial_rotation(canvas)
        labels: list[SvgNode] = []
        for index, (text, source, extra) in enumerate(_labels(d)):
            try:
                fit = fit_text(
                    text,
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
                    **{"data-sub-index": str(index), **extra},
                )
            )

        attrs = d.data_attributes()
        attrs["id"] = f"quarters-faces-{d.gate}"
        elements.append(
            GeneratedElement(
                ring=RING_ID,
                gate=d.gate,
                source_field="classification",
                tag="g",
                attributes=attrs,
                children=tuple(labels),
            )
        )

    logger.info("Quarters and faces ring: %d gates", len(elements))
    return elements
