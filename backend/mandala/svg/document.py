"""SVG documents built from ring output."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from mandala.svg.serializer import serialize_svg

if TYPE_CHECKING:
    from mandala.models.ring import RingGeometry
    from mandala.rings.context import GeneratedElement

# Margin kept around the outer ring when sizing a canvas
CANVAS_MARGIN = 5.0


def canvas_size(geometry: RingGeometry) -> tuple[float, float]:
    """Canvas that holds the whole ring with the centre where the geometry puts it."""
    cx, cy = geometry.center
    reach = geometry.outer_radius + CANVAS_MARGIN
    return (round(max(2 * cx, cx + reach), 4), round(max(2 * cy, cy + reach), 4))


def ring_group(
    ring_id: str,
    elements: Iterable[GeneratedElement],
    structure: dict[str, Any] | None = None,
    transform: str | None = None,
) -> dict[str, Any]:
    """<g id=ring_id> holding the STRUCTURE group and the ring's elements, in sort order."""
    ordered = sorted(elements, key=lambda e: e.sort_key)
    content = {"tag": "g", "id": "CONTENT", "children": [e.to_node() for e in ordered]}
    children = [structure, content] if structure is not None else [content]
    group: dict[str, Any] = {"tag": "g", "id": ring_id, "data-ring": ring_id, "children": children}
    if transform:
        group["transform"] = transform
    return group


def build_document(
    groups: list[dict[str, Any]],
    width: float,
    height: float,
    title: str = "",
    description: str = "",
) -> str:
    return serialize_svg(
        groups,
        canvas_w=width,
        canvas_h=height,
        title=title,
        description=description,
        styles={"text": "isolation: isolate"},
    )
