"""SVG element reader — every element that carries an id, with its raw attributes."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from mandala.errors import InvalidDiagram

logger = logging.getLogger(__name__)

_VIEWBOX_RE = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class DiagramElement:
    id: str
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    # Ids of enclosing elements, outermost first
    ancestors: tuple[str, ...] = ()
    # Document order among id-bearing elements
    index: int = 0


@dataclass
class Diagram:
    elements: list[DiagramElement] = field(default_factory=list)
    view_box: tuple[float, float, float, float] | None = None

    def by_id(self, element_id: str) -> list[DiagramElement]:
        return [e for e in self.elements if e.id == element_id]

    def __len__(self) -> int:
        return len(self.elements)


def _strip_ns(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def _attrs(element: ET.Element) -> dict[str, str]:
    return {_strip_ns(k): v for k, v in element.attrib.items()}


def read_diagram(svg_text: str) -> Diagram:
    """Parse an SVG document into its id-bearing elements, in document order."""
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise InvalidDiagram(str(e)) from None
    if _strip_ns(root.tag) != "svg":
        raise InvalidDiagram("no <svg> root element")

    diagram = Diagram(view_box=_view_box(root.get("viewBox")))

    def walk(element: ET.Element, ancestors: tuple[str, ...]) -> None:
        element_id = element.get("id")
        if element_id:
            diagram.elements.append(
                DiagramElement(
                    id=element_id,
                    tag=_strip_ns(element.tag),
                    attributes=_attrs(element),
                    ancestors=ancestors,
                    index=len(diagram.elements),
                )
            )
            ancestors = ancestors + (element_id,)
        for child in element:
            walk(child, ancestors)

    walk(root, ())
    logger.info("Read diagram: %d id-bearing elements", len(diagram))
    return diagram


def _view_box(value: str | None) -> tuple[float, float, float, float] | None:
    if not value:
        return None
    parts = [p for p in _VIEWBOX_RE.split(value.strip()) if p]
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    return (x, y, w, h)
