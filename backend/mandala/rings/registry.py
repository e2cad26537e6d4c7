"""Ring registry — every ring generator is a standalone function registered via decorator.

Usage:
    @ring(id="numbers", unit=Unit.GATE, sub_bands=1, order=40, sources=("gate",))
    def numbers_ring(ctx: RenderContext) -> list[GeneratedElement]:
        ...

Adding a new ring = creating one module under mandala.rings.generators.
"""

from __future__ import annotations

import enum
import importlib
import logging
import pkgutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from mandala.core.gates import CHANNEL_PAIRS, TOTAL_GATES, TOTAL_LINES
from mandala.errors import UnknownRing

if TYPE_CHECKING:
    from mandala.rings.context import GeneratedElement, RenderContext

logger = logging.getLogger(__name__)

GENERATORS_PACKAGE = "mandala.rings.generators"


class Unit(str, enum.Enum):
    GATE = "gate"
    PAIR = "pair"
    GATE_LINE = "gate_line"

    @property
    def count(self) -> int:
        """Number of units a complete ring of this kind emits."""
        if self is Unit.GATE:
            return TOTAL_GATES
        if self is Unit.PAIR:
            return 2 * len(CHANNEL_PAIRS)
        return TOTAL_LINES


@dataclass
class RingSpec:
    id: str
    fn: Callable[["RenderContext"], list["GeneratedElement"]]
    unit: Unit
    sub_bands: int = 1
    # Position in the assembled wheel, innermost first
    order: int = 0
    sources: tuple[str, ...] = field(default_factory=tuple)
    description: str = ""


class RingRegistry:
    def __init__(self) -> None:
        self._rings: dict[str, RingSpec] = {}

    def register(self, spec: RingSpec) -> None:
        if spec.id in self._rings:
            raise ValueError(f"Duplicate ring ID: {spec.id}")
        if spec.sub_bands < 1:
            raise ValueError(f"Ring {spec.id} needs at least one sub-band")
        self._rings[spec.id] = spec
        logger.debug("Registered ring %s (%s, %d sub-bands)", spec.id, spec.unit.value, spec.sub_bands)

    def get(self, ring_id: str) -> RingSpec:
        try:
            return self._rings[ring_id]
        except KeyError:
            raise UnknownRing(ring_id) from None

    def all(self) -> list[RingSpec]:
        return sorted(self._rings.values(), key=lambda s: (s.order, s.id))

    def ids(self) -> list[str]:
        return [s.id for s in self.all()]

    def __contains__(self, ring_id: object) -> bool:
        return ring_id in self._rings

    @property
    def count(self) -> int:
        return len(self._rings)


# Module-level singleton
_registry = RingRegistry()


def get_registry() -> RingRegistry:
    return _registry


def ring(
    *,
    id: str,
    unit: Unit,
    sub_bands: int = 1,
    order: int = 0,
    sources: tuple[str, ...] = (),
    description: str = "",
):
    """Decorator to register a ring generator."""

    def decorator(fn: Callable[["RenderContext"], list["GeneratedElement"]]):
        _registry.register(
            RingSpec(
                id=id,
                fn=fn,
                unit=unit,
                sub_bands=sub_bands,
                order=order,
                sources=sources,
                description=description or (fn.__doc__ or "").strip().split("\n")[0],
            )
        )
        return fn

    return decorator


def load_rings() -> RingRegistry:
    """Import every generator module so @ring decorators fire."""
    package = importlib.import_module(GENERATORS_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{GENERATORS_PACKAGE}.{module_name}")
    return _registry
