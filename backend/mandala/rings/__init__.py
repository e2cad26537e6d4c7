"""Ring generators and the machinery that renders and assembles them."""

from mandala.rings.registry import ring, Unit, get_registry, load_rings
from mandala.rings.context import GeneratedElement, RenderContext
from mandala.rings.renderer import RingOutput, render_ring
from mandala.rings.assembler import assemble

__all__ = [
    "ring",
    "Unit",
    "get_registry",
    "load_rings",
    "GeneratedElement",
    "RenderContext",
    "RingOutput",
    "render_ring",
    "assemble",
]
