"""Hexagrams ring — the six-line glyph of each gate, volatile line facing outward."""

from __future__ import annotations

import logging

from mandala.core.geometry import scaled_sizes, to_outward_rotation
from mandala.core.gates import LINES_PER_GATE
from mandala.models.ring import MASTER_GEOMETRY
from mandala.rings.context import GeneratedElement, RenderContext, SvgNode
from mandala.rings.registry import Unit, ring

logger = logging.getLogger(__name__)

RING_ID = "hexagrams"

_MASTER_BAND = MASTER_GEOMETRY[RING_ID].band_width

# Glyph measurements from the master diagram, as ratios of its band width
SYMBOL_RATIOS = {
    "line_width": 80.7558 / _MASTER_BAND,
    "line_height": 9.9549 / _MASTER_BAND,
    "line_spacing": 16.91 / _MASTER_BAND,
    "gap_width": 7.34 / _MASTER_BAND,
}


def _line_node(ctx: RenderContext, line: int, yang: bool, sizes: dict[str, float]) -> SvgNode:
    # Line 1 gets the largest y so it sits nearest the centre once rotated
    y = (LINES_PER_GATE - line) * sizes["line_spacing"]
    height = ctx.fmt(sizes["line_height"])
    if yang:
        return {
            "tag": "rect",
            "data-line": str(line),
            "data-type": "yang",
            "x": "0",
            "y": ctx.fmt(y),
            "width": ctx.fmt(sizes["line_width"]),
            "height": height,
        }
    segment = (sizes["line_width"] - sizes["gap_width"]) / 2
    return {
        "tag": "g",
        "data-line": str(line),
        "data-type": "yin",
        "children": [
            {"tag": "rect", "x": "0", "y": ctx.fmt(y), "width": ctx.fmt(segment), "height": height},
            {
                "tag": "rect",
                "x": ctx.fmt(segment + sizes["gap_width"]),
                "y": ctx.fmt(y),
                "width": ctx.fmt(segment),
                "height": height,
            },
        ],
    }


@ring(id=RING_ID, unit=Unit.GATE, sub_bands=1, order=30, sources=("binary",))
def hexagrams_ring(ctx: RenderContext) -> list[GeneratedElement]:
    """Six-line hexagram glyph per gate."""
    sizes = scaled_sizes(ctx.geometry, SYMBOL_RATIOS)
    # Centre the glyph on its anchor point
    offset_x = -sizes["line_width"] / 2
    offset_y = -(sizes["line_spacing"] * 5 + sizes["line_height"]) / 2

    elements: list[GeneratedElement] = []
    for d in ctx.dockings():
        canvas = ctx.canvas_angle(d.angle_degrees)
        anchor = ctx.point(canvas, ctx.geometry.mid_radius)
        lines = [_line_node(ctx, i + 1, bit == 1, sizes) for i, bit in enumerate(d.pattern)]
        attrs = d.data_attributes()
        attrs["id"] = f"_GROUP_-_GATE_-_{d.gate}_-_{d.codon}"
        attrs["fill"] = ctx.config.fill_colour
        attrs["transform"] = (
            f"{ctx.transform(anchor, to_outward_rotation(canvas))} "
            f"translate({ctx.fmt(offset_x)}, {ctx.fmt(offset_y)})"
        )
        elements.append(
            GeneratedElement(
                ring=RING_ID,
                gate=d.gate,
                source_field="binary",
                tag="g",
                attributes=attrs,
                children=tuple(lines),
            )
        )
    logger.info("Hexagrams ring: %d glyphs", len(elements))
    return elements
