"""STRUCTURE group shared by every ring: the two band circles and 64 dividers."""

from __future__ import annotations

import numpy as np

from mandala.core.geometry import divider_angle, to_cartesian_many
from mandala.core.gates import TOTAL_GATES
from mandala.core.positioning import all_positions
from mandala.core.sequence import gate_at
from mandala.rings.context import RenderContext, SvgNode


def ring_circles(ctx: RenderContext) -> list[SvgNode]:
    g = ctx.geometry
    cfg = ctx.config
    return [
        {
            "tag": "circle",
            "id": f"RING_-_{name}",
            "cx": ctx.fmt(g.center[0]),
            "cy": ctx.fmt(g.center[1]),
            "r": ctx.fmt(radius),
            "fill": "none",
            "stroke": cfg.stroke_colour,
            "stroke-miterlimit": "10",
            "stroke-width": ctx.fmt(cfg.stroke_width / 2),
        }
        for name, radius in (("INNER", g.inner_radius), ("OUTER", g.outer_radius))
    ]


def dividers(ctx: RenderContext) -> list[SvgNode]:
    """One radial line between each pair of sequence neighbours, in sequence order."""
    angles = {p.gate: p.angle_degrees for p in all_positions(ctx.sequence)}
    pairs = [(gate_at(i, ctx.sequence), gate_at(i + 1, ctx.sequence)) for i in range(TOTAL_GATES)]
    canvas = np.array([ctx.canvas_angle(divider_angle(angles[a], angles[b])) for a, b in pairs])
    outer = to_cartesian_many(canvas, ctx.geometry.outer_radius - ctx.config.divider_inset, ctx.geometry.center)
    inner = to_cartesian_many(canvas, ctx.geometry.inner_radius + ctx.config.divider_inset, ctx.geometry.center)

    nodes: list[SvgNode] = []
    for (gate_a, gate_b), p1, p2 in zip(pairs, outer, inner):
        nodes.append(
            {
                "tag": "line",
                "id": f"LINE_-_{gate_a}_{gate_b}",
                "x1": ctx.fmt(p1[0]),
                "y1": ctx.fmt(p1[1]),
                "x2": ctx.fmt(p2[0]),
                "y2": ctx.fmt(p2[1]),
                "fill": "none",
                "stroke": ctx.config.stroke_colour,
                "stroke-miterlimit": "10",
                "data-gates": f"{gate_a},{gate_b}",
            }
        )
    return nodes


def structure_group(ctx: RenderContext) -> SvgNode:
    return {
        "tag": "g",
        "id": "STRUCTURE",
        "children": [
            {"tag": "g", "id": "RINGS", "children": ring_circles(ctx)},
            {"tag": "g", "id": "DIVIDERS", "children": dividers(ctx)},
        ],
    }
